from offline_ocr.artifacts.cache import ArtifactCache
from offline_ocr.artifacts.exceptions import ArtifactFetchError
from offline_ocr.artifacts.registry import LanguageRegistry
from offline_ocr.formats.resolver import FormatResolver
from offline_ocr.jobs.models import Segment
from offline_ocr.jobs.repository import JobRepository
from offline_ocr.logging.logger import Log
from offline_ocr.processor.pipeline import PipelineContext, PipelineStep
from offline_ocr.recognition.exceptions import PageRecognitionError
from offline_ocr.recognition.gateway import RecognitionGateway

EMPTY_CONTENT_WARNING = "No visual content found for OCR."


def slow_page_warning(page_number: int, seconds: float) -> str:
    return (
        f"Page {page_number} took {seconds:.1f}s to process. "
        "Consider splitting large documents."
    )


def failed_page_warning(page_number: int, reason: object) -> str:
    return f"Page {page_number} could not be recognized: {reason}"


class EnsureArtifactsStep(PipelineStep):
    def __init__(self, registry: LanguageRegistry, cache: ArtifactCache) -> None:
        self._registry = registry
        self._cache = cache

    def run(self, context: PipelineContext) -> PipelineContext:
        for code in context.languages:
            artifact = self._registry.get(code)
            if artifact is None:
                raise ArtifactFetchError(f"Language '{code}' is not registered")
            self._cache.ensure_cached(artifact)
        Log.info(f"Job {context.job_id}: languages ready ({'+'.join(context.languages)})")
        return context


class ResolveDocumentStep(PipelineStep):
    def __init__(self, resolver: FormatResolver, job_repo: JobRepository) -> None:
        self._resolver = resolver
        self._job_repo = job_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        resolved = self._resolver.resolve(context.raw_bytes, context.content_class)
        context.resolved = resolved
        context.raw_bytes = b""
        self._job_repo.set_extracted_text(context.job_id, resolved.extracted_text)
        context.aggregator.start(len(resolved.pages))
        for warning in resolved.warnings:
            context.aggregator.warn(warning)
        Log.info(
            f"Job {context.job_id}: resolved {len(resolved.pages)} pages, "
            f"{len(resolved.extracted_text)} chars of extracted text"
        )
        return context


class CheckContentStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.resolved is None:
            raise ValueError("PipelineContext.resolved must be set before content check")
        if context.resolved.is_empty:
            context.aggregator.warn(EMPTY_CONTENT_WARNING)
            Log.warning(f"Job {context.job_id}: no content to recognize")
        return context


class RecognizePagesStep(PipelineStep):
    def __init__(self, gateway: RecognitionGateway, slow_page_threshold_seconds: float) -> None:
        self._gateway = gateway
        self._slow_page_threshold = slow_page_threshold_seconds

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.resolved is None:
            raise ValueError("PipelineContext.resolved must be set before recognition")
        pages = context.resolved.pages
        aggregator = context.aggregator

        for page in pages:
            context.check_cancelled()
            outcome = self._gateway.recognize(
                page, context.languages, aggregator.sink(page.index)
            )
            page_number = page.index + 1
            if outcome.duration_seconds > self._slow_page_threshold:
                aggregator.warn(slow_page_warning(page_number, outcome.duration_seconds))
            if not outcome.ok:
                context.failed_pages += 1
                aggregator.page_failed(
                    page.index, failed_page_warning(page_number, outcome.error)
                )
                continue

            context.recognized_pages += 1
            aggregator.page_succeeded(
                Segment(
                    page_index=page.index,
                    text=outcome.result.text,
                    confidence=outcome.result.confidence,
                )
            )

        if pages and context.recognized_pages == 0 and not context.resolved.extracted_text:
            raise PageRecognitionError(f"All {len(pages)} page(s) failed recognition")
        Log.info(
            f"Job {context.job_id}: recognized {context.recognized_pages}/{len(pages)} pages"
        )
        return context


class MarkCompletedStep(PipelineStep):
    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        context.aggregator.finish()
        self._job_repo.mark_completed(context.job_id)
        Log.info(f"Job {context.job_id} marked as completed")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.error is None:
            raise ValueError("PipelineContext.error must be set before marking failed")
        self._job_repo.mark_failed(context.job_id, context.error)
        Log.error(f"Job {context.job_id} marked as failed: {context.error.message}")
        return context
