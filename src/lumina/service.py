"""Service items and the ordered service they make up.

A :class:`ServiceItem` wraps one library record (song, image, video,
presentation) or a literal slide, and knows how to turn it into slides.
A :class:`Service` concatenates its items' slides and numbers them.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Union

from .background import expand_home, resolve_background
from .builder import SlideBuilder
from .config import Settings
from .context import ParseContext
from .exceptions import (
    LuminaError,
    MissingFieldError,
    UnknownItemKindError,
    UnrecognizedFormError,
)
from .lisp.forms import find_keyword_value_or_default
from .lisp.values import Value, head_name, value_to_bool, value_to_float, value_to_str
from .lisp.vocabulary import Head, MediaKeyword
from .models import Image, Presentation, PresKind, Slide, Song, Video
from .slides import lisp_to_slide
from .songs import lisp_to_song, song_slides

logger = logging.getLogger(__name__)


class ServiceItemKind(Enum):
    SONG = "song"
    VIDEO = "video"
    IMAGE = "image"
    PRESENTATION = "presentation"
    CONTENT = "content"


ItemRecord = Union[Song, Video, Image, Presentation, Slide]

_IMAGE_ITEM_EXTENSIONS = frozenset({"png", "jpg", "jpeg"})
_VIDEO_ITEM_EXTENSIONS = frozenset({"mp4", "mkv", "webm"})
_PRES_KINDS = {".html": PresKind.HTML, ".pdf": PresKind.PDF}


def kind_for_path(path: Path) -> ServiceItemKind:
    """Classify a dropped-in file as an image or video item.

    Raises:
        UnknownItemKindError: no extension, or one that is neither.
    """
    extension = path.suffix.lstrip(".").lower()
    if extension in _IMAGE_ITEM_EXTENSIONS:
        return ServiceItemKind.IMAGE
    if extension in _VIDEO_ITEM_EXTENSIONS:
        return ServiceItemKind.VIDEO
    raise UnknownItemKindError(path)


# ---------------------------------------------------------------------------
# Record → slides
# ---------------------------------------------------------------------------


def _media_slide(
    path: Path, settings: Settings, loop: bool = False, start: float = 0.0, end: float = 0.0
) -> Slide:
    background = resolve_background(path, home_dir=settings.home_dir)
    return (
        SlideBuilder()
        .background(background)
        .text("")
        .font(settings.default_font)
        .font_size(settings.default_font_size)
        .text_alignment(settings.text_alignment)
        .video_loop(loop)
        .video_start_time(start)
        .video_end_time(end)
        .build()
    )


def image_slides(image: Image, settings: Settings) -> list[Slide]:
    return [_media_slide(Path(image.path), settings)]


def video_slides(video: Video, settings: Settings) -> list[Slide]:
    return [
        _media_slide(
            Path(video.path),
            settings,
            loop=video.looping,
            start=video.start_time or 0.0,
            end=video.end_time or 0.0,
        )
    ]


def presentation_slides(presentation: Presentation, settings: Settings) -> list[Slide]:
    # PDF page rendering is not done here; a PDF path fails classification.
    return [_media_slide(Path(presentation.path), settings)]


# ---------------------------------------------------------------------------
# Service items
# ---------------------------------------------------------------------------


@dataclass
class ServiceItem:
    title: str
    kind: ServiceItemKind
    item: ItemRecord
    database_id: int = 0
    id: int = 0

    @classmethod
    def from_song(cls, song: Song) -> "ServiceItem":
        return cls(title=song.title, kind=ServiceItemKind.SONG, item=song, database_id=song.id)

    @classmethod
    def from_image(cls, image: Image) -> "ServiceItem":
        return cls(title=image.title, kind=ServiceItemKind.IMAGE, item=image, database_id=image.id)

    @classmethod
    def from_video(cls, video: Video) -> "ServiceItem":
        return cls(title=video.title, kind=ServiceItemKind.VIDEO, item=video, database_id=video.id)

    @classmethod
    def from_presentation(cls, presentation: Presentation) -> "ServiceItem":
        return cls(
            title=presentation.title,
            kind=ServiceItemKind.PRESENTATION,
            item=presentation,
            database_id=presentation.id,
        )

    @classmethod
    def from_slide(cls, slide: Slide, title: str = "") -> "ServiceItem":
        return cls(title=title or slide.text.split("\n", 1)[0], kind=ServiceItemKind.CONTENT, item=slide)

    def to_slides(self, settings: Settings | None = None) -> list[Slide]:
        """Slides for this item.

        Raises:
            LuminaError: the item's media or lyrics cannot become slides.
        """
        settings = settings or Settings()
        if self.kind is ServiceItemKind.SONG:
            return song_slides(self.item, settings)
        if self.kind is ServiceItemKind.IMAGE:
            return image_slides(self.item, settings)
        if self.kind is ServiceItemKind.VIDEO:
            return video_slides(self.item, settings)
        if self.kind is ServiceItemKind.PRESENTATION:
            return presentation_slides(self.item, settings)
        return [self.item]


def _media_record_path(form: tuple, context: ParseContext) -> Path:
    source = find_keyword_value_or_default(form, MediaKeyword.SOURCE.value)
    if not isinstance(source, str):
        raise MissingFieldError(MediaKeyword.SOURCE.value)
    path = Path(expand_home(source, context.settings.home_dir))
    if not path.is_absolute():
        path = context.base_dir / path
    return path


def service_item_from_lisp(form: Value, context: ParseContext | None = None) -> ServiceItem:
    """Wrap a top-level form as a service item without expanding it to slides.

    ``song`` forms become song items, ``image``/``video``/``presentation``
    forms become library records and ``slide`` forms become content items.

    Raises:
        UnrecognizedFormError: any other form, including ``load``.
        BackgroundError: a slide form's background cannot be resolved.
    """
    context = context or ParseContext()
    head = head_name(form)

    if head == Head.SONG.value:
        return ServiceItem.from_song(lisp_to_song(form, context))
    if head == Head.SLIDE.value:
        return ServiceItem.from_slide(lisp_to_slide(form, context))
    if head == Head.IMAGE.value:
        path = _media_record_path(form, context)
        return ServiceItem.from_image(Image(title=path.name, path=path))
    if head == Head.VIDEO.value:
        path = _media_record_path(form, context)
        start = value_to_float(find_keyword_value_or_default(form, MediaKeyword.START_TIME.value))
        end = value_to_float(find_keyword_value_or_default(form, MediaKeyword.END_TIME.value))
        looping = value_to_bool(find_keyword_value_or_default(form, MediaKeyword.LOOP.value))
        return ServiceItem.from_video(
            Video(title=path.name, path=path, start_time=start, end_time=end, looping=looping)
        )
    if head == Head.PRESENTATION.value:
        path = _media_record_path(form, context)
        kind = _PRES_KINDS.get(path.suffix.lower(), PresKind.GENERIC)
        return ServiceItem.from_presentation(Presentation(title=path.name, path=path, kind=kind))

    raise UnrecognizedFormError(head or value_to_str(form))


class Service:
    """An ordered list of service items."""

    def __init__(self, items: list[ServiceItem] | None = None):
        self.items: list[ServiceItem] = []
        for item in items or []:
            self.add_item(item)

    def add_item(self, item: ServiceItem) -> None:
        self.items.append(item)
        self._renumber()

    def insert_item(self, index: int, item: ServiceItem) -> None:
        self.items.insert(index, item)
        self._renumber()

    def remove_item(self, index: int) -> ServiceItem:
        item = self.items.pop(index)
        self._renumber()
        return item

    def move_item(self, source: int, destination: int) -> None:
        item = self.items.pop(source)
        self.items.insert(destination, item)
        self._renumber()

    def _renumber(self) -> None:
        for index, item in enumerate(self.items):
            item.id = index

    def to_slides(self, settings: Settings | None = None) -> list[Slide]:
        """Every item's slides, concatenated and numbered from zero.

        Items that fail to produce slides are logged and left out.
        """
        slides: list[Slide] = []
        for item in self.items:
            try:
                slides.extend(item.to_slides(settings))
            except LuminaError as exc:
                logger.error("Skipping service item %r: %s", item.title, exc)
        return [replace(slide, id=index) for index, slide in enumerate(slides)]
