from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class BackgroundKind(Enum):
    IMAGE = "image"
    VIDEO = "video"


class TextAlignment(Enum):
    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    MIDDLE_LEFT = "middle-left"
    MIDDLE_CENTER = "middle-center"
    MIDDLE_RIGHT = "middle-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"


@dataclass(frozen=True)
class Background:
    """A validated media file shown behind slide text.

    Build these with :func:`lumina.background.resolve_background` rather than
    directly; the resolver checks the extension (and existence for strings).
    """

    path: Path
    kind: BackgroundKind


@dataclass
class Song:
    """A song as stored in the library or written in a presentation file.

    ``lyrics`` is the whole unsplit lyric text with section labels on their
    own lines ("Verse 1", "Chorus 1", ...).  ``verse_order`` holds the tokens
    ("V1", "C1", ...) choosing which sections play, in order; repeats allowed.
    """

    title: str
    id: int = 0
    lyrics: str | None = None
    author: str | None = None
    ccli: str | None = None
    audio: Path | None = None
    verse_order: list[str] | None = None
    background: Background | None = None
    text_alignment: TextAlignment | None = None
    font: str | None = None
    font_size: int | None = None


@dataclass
class Slide:
    """One renderable unit: background, text and display attributes.

    Always produced by :class:`lumina.builder.SlideBuilder`.  ``id`` is the
    slide's position in the whole service and is reassigned whenever the
    service changes.
    """

    background: Background | None
    text: str
    font: str
    font_size: int
    text_alignment: TextAlignment
    video_loop: bool
    video_start_time: float
    video_end_time: float
    audio: Path | None = None
    id: int = 0


@dataclass
class Image:
    title: str
    path: Path
    id: int = 0


@dataclass
class Video:
    title: str
    path: Path
    id: int = 0
    start_time: float | None = None
    end_time: float | None = None
    looping: bool = False


class PresKind(Enum):
    HTML = "html"
    PDF = "pdf"
    GENERIC = "generic"


@dataclass
class Presentation:
    title: str
    path: Path
    id: int = 0
    kind: PresKind = PresKind.GENERIC
