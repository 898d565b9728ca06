"""Fluent, validated construction of :class:`~lumina.models.Slide` values.

Every display field has to be set explicitly before :meth:`SlideBuilder.build`
succeeds; nothing falls back to a type default.  Usage::

    slide = (
        SlideBuilder()
        .background(background)
        .text("Amazing grace")
        .font("Quicksand")
        .font_size(70)
        .text_alignment(TextAlignment.MIDDLE_CENTER)
        .video_loop(False)
        .video_start_time(0.0)
        .video_end_time(0.0)
        .build()
    )
"""

from pathlib import Path

from .exceptions import MissingFieldError
from .models import Background, Slide, TextAlignment

# Marks a field that was never set.  A background explicitly set to None is
# a text-only slide, which is different from forgetting the background.
_UNSET = object()

# Checked in this order, so the error names the first missing one.
REQUIRED_FIELDS = (
    "background",
    "text",
    "font",
    "font_size",
    "text_alignment",
    "video_loop",
    "video_start_time",
    "video_end_time",
)


class SlideBuilder:
    def __init__(self) -> None:
        self._values: dict[str, object] = {name: _UNSET for name in REQUIRED_FIELDS}
        self._audio: Path | None = None

    def background(self, background: Background | None) -> "SlideBuilder":
        self._values["background"] = background
        return self

    def text(self, text: str) -> "SlideBuilder":
        self._values["text"] = text
        return self

    def font(self, font: str) -> "SlideBuilder":
        self._values["font"] = font
        return self

    def font_size(self, font_size: int) -> "SlideBuilder":
        self._values["font_size"] = font_size
        return self

    def text_alignment(self, text_alignment: TextAlignment) -> "SlideBuilder":
        self._values["text_alignment"] = text_alignment
        return self

    def video_loop(self, video_loop: bool) -> "SlideBuilder":
        self._values["video_loop"] = video_loop
        return self

    def video_start_time(self, video_start_time: float) -> "SlideBuilder":
        self._values["video_start_time"] = video_start_time
        return self

    def video_end_time(self, video_end_time: float) -> "SlideBuilder":
        self._values["video_end_time"] = video_end_time
        return self

    def audio(self, audio: Path | None) -> "SlideBuilder":
        """Optional: audio to play while the slide is shown."""
        self._audio = audio
        return self

    def build(self) -> Slide:
        """Return the finished slide.

        Raises:
            MissingFieldError: naming the first required field never set.
        """
        for name in REQUIRED_FIELDS:
            if self._values[name] is _UNSET:
                raise MissingFieldError(name)
        return Slide(audio=self._audio, **self._values)
