from offline_ocr.artifacts.cache import ArtifactCache
from offline_ocr.config.settings import Settings
from offline_ocr.formats.resolver import FormatResolver
from offline_ocr.jobs.models import JobError
from offline_ocr.jobs.repository import JobRepository
from offline_ocr.logging.logger import Log
from offline_ocr.processor.pipeline import PipelineContext, PipelineStep
from offline_ocr.processor.steps import (
    CheckContentStep,
    EnsureArtifactsStep,
    MarkCompletedStep,
    MarkFailedStep,
    RecognizePagesStep,
    ResolveDocumentStep,
)
from offline_ocr.recognition.gateway import RecognitionGateway


class Processor:
    """Drives one job through its pipeline.

    Pipeline: ensure artifacts -> resolve document -> check content ->
    recognize pages -> mark completed. Any exception runs the failed step
    and is re-raised.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, context: PipelineContext) -> PipelineContext:
        Log.info(f"Processing job {context.job_id}")
        try:
            for step in self._steps:
                context.check_cancelled()
                context = step.run(context)
        except Exception as exc:
            context.error = JobError.from_exception(exc)
            self._failed_step.run(context)
            raise
        return context


def build_processor(
    settings: Settings,
    *,
    job_repo: JobRepository,
    cache: ArtifactCache,
    resolver: FormatResolver,
    gateway: RecognitionGateway,
) -> Processor:
    """Build a Processor with all required steps."""
    steps: list[PipelineStep] = [
        EnsureArtifactsStep(registry=cache.registry, cache=cache),
        ResolveDocumentStep(resolver=resolver, job_repo=job_repo),
        CheckContentStep(),
        RecognizePagesStep(
            gateway=gateway,
            slow_page_threshold_seconds=settings.slow_page_threshold_seconds,
        ),
        MarkCompletedStep(job_repo=job_repo),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(job_repo))
