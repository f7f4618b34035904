from pathlib import PurePath

from offline_ocr.jobs.models import Job, Segment


def combine_segments(segments: list[Segment]) -> str:
    """Render segments in page order with a header per page."""
    return "\n".join(
        f"--- Page {segment.page_index + 1} (Confidence: {segment.confidence:.2f}%) ---\n"
        f"{segment.text.strip()}\n"
        for segment in sorted(segments, key=lambda s: s.page_index)
    )


def aggregate_text(job: Job) -> str:
    """Extracted text first, then the recognized pages."""
    extracted = job.extracted_text.strip()
    prefix = f"{extracted}\n\n" if extracted else ""
    return prefix + combine_segments(job.ordered_segments())


def export_filename(name: str, suffix: str) -> str:
    stem = PurePath(name).stem or "document"
    return f"{stem}.{suffix}"
