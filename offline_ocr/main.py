import argparse
import mimetypes
import sys
import threading
from pathlib import Path

from offline_ocr.artifacts.cache import ArtifactCache
from offline_ocr.artifacts.exceptions import InvalidArtifactError
from offline_ocr.artifacts.fetcher import BaseArtifactFetcher, HttpArtifactFetcher
from offline_ocr.artifacts.models import ArtifactOrigin
from offline_ocr.artifacts.registry import LanguageRegistry
from offline_ocr.artifacts.store import FileSystemBlobStore
from offline_ocr.config.settings import Settings
from offline_ocr.export.models import ExportFormat
from offline_ocr.formats.content_class import ContentClass
from offline_ocr.formats.resolver import build_format_resolver
from offline_ocr.jobs.exceptions import InvalidInputError
from offline_ocr.jobs.models import JobStatus
from offline_ocr.jobs.orchestrator import JobOrchestrator
from offline_ocr.jobs.repository import JobRepository
from offline_ocr.logging.logger import Log
from offline_ocr.processor.processor import build_processor
from offline_ocr.recognition.base import BaseRecognitionEngine
from offline_ocr.recognition.factory import RecognitionEngineFactory
from offline_ocr.recognition.gateway import RecognitionGateway
from offline_ocr.worker.job_runner import JobRunner


def build_orchestrator(
    settings: Settings,
    *,
    registry: LanguageRegistry | None = None,
    fetcher: BaseArtifactFetcher | None = None,
    engine: BaseRecognitionEngine | None = None,
) -> JobOrchestrator:
    """Composition root: registry -> cache -> pipeline -> orchestrator."""
    registry = registry if registry is not None else LanguageRegistry.with_builtins()
    fetcher = fetcher or HttpArtifactFetcher(
        base_url=settings.artifact_base_url,
        path_prefix=settings.artifact_path_prefix,
        timeout_seconds=settings.artifact_fetch_timeout_seconds,
    )
    cache = ArtifactCache(registry, FileSystemBlobStore(settings.cache_dir), fetcher)
    job_repo = JobRepository()
    processor = build_processor(
        settings,
        job_repo=job_repo,
        cache=cache,
        resolver=build_format_resolver(settings),
        gateway=RecognitionGateway(engine or RecognitionEngineFactory.create(settings)),
    )
    orchestrator = JobOrchestrator(
        job_repo=job_repo,
        cache=cache,
        job_runner=JobRunner(processor, job_repo),
        settings=settings,
    )
    if settings.prefetch_builtin_languages:
        threading.Thread(
            target=cache.warm,
            args=(registry.codes(ArtifactOrigin.BUILTIN),),
            name="ocr-cache-warmup",
            daemon=True,
        ).start()
    return orchestrator


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="offline-ocr",
        description="Recognize text in images, PDFs and Word documents.",
    )
    p.add_argument("files", nargs="+", type=Path, help="Documents to recognize.")
    p.add_argument(
        "--lang",
        action="append",
        dest="languages",
        metavar="CODE",
        help="Language code present in the documents (repeatable). Default: eng.",
    )
    p.add_argument(
        "--format",
        choices=[f.value for f in ExportFormat],
        default=ExportFormat.TXT.value,
        help="Export format for completed jobs.",
    )
    p.add_argument("--out-dir", type=Path, default=Path("."), help="Export directory.")
    p.add_argument(
        "--import-language",
        action="append",
        default=[],
        metavar="CODE=PATH",
        help="Import a .traineddata(.gz) file before processing (repeatable).",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    """Entry point: build dependencies -> submit files -> run until idle -> export."""
    args = build_arg_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    orchestrator = build_orchestrator(settings)

    for item in args.import_language:
        code, _, path = item.partition("=")
        try:
            orchestrator.import_language(code, Path(path).read_bytes())
        except (InvalidArtifactError, OSError) as exc:
            print(f"Could not import language '{code}': {exc}", file=sys.stderr)
            return 2

    languages = args.languages or ["eng"]
    failures = 0
    job_ids: list[str] = []
    for path in args.files:
        content_class = ContentClass.sniff(mimetypes.guess_type(path.name)[0], path.name)
        if content_class is None:
            print(f"{path.name}: unsupported file type", file=sys.stderr)
            failures += 1
            continue
        try:
            job_ids.append(
                orchestrator.submit(path.read_bytes(), content_class, languages, name=path.name)
            )
        except (InvalidInputError, OSError) as exc:
            print(f"{path.name}: {exc}", file=sys.stderr)
            failures += 1

    orchestrator.run_until_idle()

    args.out_dir.mkdir(parents=True, exist_ok=True)
    for job_id in job_ids:
        job = orchestrator.get_snapshot(job_id)
        for warning in job.warnings:
            print(f"{job.name}: warning: {warning}", file=sys.stderr)
        if job.status != JobStatus.COMPLETED:
            message = job.error.message if job.error else job.status.value
            print(f"{job.name}: error: {message}", file=sys.stderr)
            failures += 1
            continue
        exported = orchestrator.export(job_id, args.format)
        target = args.out_dir / exported.filename
        target.write_bytes(exported.data)
        duration = job.duration_seconds() or 0.0
        print(
            f"{job.name}: completed, {len(job.segments)}/{job.page_count} pages "
            f"in {duration:.1f}s -> {target}"
        )

    return 0 if failures == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
