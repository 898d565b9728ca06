from pathlib import Path

import pytest

from lumina.builder import REQUIRED_FIELDS, SlideBuilder
from lumina.exceptions import MissingFieldError
from lumina.models import Background, BackgroundKind, Slide, TextAlignment

BACKGROUND = Background(path=Path("/srv/bg.png"), kind=BackgroundKind.IMAGE)

FIELD_VALUES = {
    "background": BACKGROUND,
    "text": "Amazing grace",
    "font": "Quicksand",
    "font_size": 70,
    "text_alignment": TextAlignment.MIDDLE_CENTER,
    "video_loop": False,
    "video_start_time": 0.0,
    "video_end_time": 0.0,
}


def _builder(skip=()):
    builder = SlideBuilder()
    for name, value in FIELD_VALUES.items():
        if name not in skip:
            getattr(builder, name)(value)
    return builder


# ---------------------------------------------------------------------------
# build
# ---------------------------------------------------------------------------


def test_all_fields_set_builds_slide():
    slide = _builder().build()
    assert slide == Slide(**FIELD_VALUES)
    assert slide.audio is None
    assert slide.id == 0


def test_setters_chain():
    builder = SlideBuilder()
    assert builder.text("x") is builder
    assert builder.audio(None) is builder


@pytest.mark.parametrize("missing", REQUIRED_FIELDS)
def test_each_missing_field_is_named(missing):
    with pytest.raises(MissingFieldError) as exc_info:
        _builder(skip={missing}).build()
    assert exc_info.value.field == missing
    assert str(exc_info.value) == f"No {missing}"


def test_first_missing_field_is_reported():
    with pytest.raises(MissingFieldError) as exc_info:
        SlideBuilder().text("only text").build()
    assert exc_info.value.field == "background"


def test_background_may_be_explicitly_none():
    slide = _builder(skip={"background"}).background(None).build()
    assert slide.background is None


def test_falsy_values_count_as_set():
    slide = _builder().text("").font_size(0).video_loop(False).build()
    assert slide.text == ""
    assert slide.font_size == 0


def test_audio_is_carried():
    slide = _builder().audio(Path("/srv/track.mp3")).build()
    assert slide.audio == Path("/srv/track.mp3")
