from dataclasses import dataclass, field

from PIL import Image


@dataclass
class RenderedPage:
    """One renderable surface handed to the recognition engine."""

    index: int
    image: Image.Image

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


@dataclass
class ResolvedDocument:
    """Uniform result of format resolution.

    Pages and extracted text are carried independently; they are only
    concatenated at export time.
    """

    pages: list[RenderedPage] = field(default_factory=list)
    extracted_text: str = ""
    warnings: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.pages and not self.extracted_text.strip()
