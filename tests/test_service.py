import logging
from pathlib import Path

import pytest

from lumina.config import Settings
from lumina.context import ParseContext
from lumina.exceptions import MissingFieldError, UnknownItemKindError, UnrecognizedFormError
from lumina.lisp.reader import read
from lumina.models import BackgroundKind, Image, Presentation, PresKind, Song, Video
from lumina.service import (
    Service,
    ServiceItem,
    ServiceItemKind,
    kind_for_path,
    service_item_from_lisp,
)

SONG = Song(title="Chorus Only", id=7, lyrics="Chorus 1\nsing\n\nagain", verse_order=["C1"])


@pytest.fixture
def context(tmp_path):
    return ParseContext(settings=Settings(home_dir=tmp_path), base_dir=tmp_path)


# ---------------------------------------------------------------------------
# kind_for_path
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("name", ["a.png", "a.jpg", "a.JPEG"])
def test_image_items(name):
    assert kind_for_path(Path(name)) is ServiceItemKind.IMAGE


@pytest.mark.parametrize("name", ["a.mp4", "a.mkv", "a.webm"])
def test_video_items(name):
    assert kind_for_path(Path(name)) is ServiceItemKind.VIDEO


@pytest.mark.parametrize("name", ["a.webp", "a.pdf", "README"])
def test_unknown_items(name):
    with pytest.raises(UnknownItemKindError) as exc_info:
        kind_for_path(Path(name))
    assert str(exc_info.value) == f"Unknown item: {name}"


# ---------------------------------------------------------------------------
# ServiceItem
# ---------------------------------------------------------------------------


def test_song_item():
    item = ServiceItem.from_song(SONG)
    assert (item.title, item.kind, item.database_id) == ("Chorus Only", ServiceItemKind.SONG, 7)
    assert [slide.text for slide in item.to_slides()] == ["sing", "again\n"]


def test_image_item_skips_existence_check():
    item = ServiceItem.from_image(Image(title="Frodo", path=Path("/nowhere/frodo.png"), id=3))
    (slide,) = item.to_slides()
    assert slide.background.path == Path("/nowhere/frodo.png")
    assert slide.background.kind is BackgroundKind.IMAGE
    assert slide.text == ""
    assert item.database_id == 3


def test_video_item_carries_timing():
    video = Video(title="Ocean", path=Path("/v/ocean.mp4"), start_time=1.0, end_time=8.0, looping=True)
    (slide,) = ServiceItem.from_video(video).to_slides()
    assert slide.video_loop is True
    assert (slide.video_start_time, slide.video_end_time) == (1.0, 8.0)


def test_html_presentation_item():
    presentation = Presentation(title="Deck", path=Path("/p/deck.html"), kind=PresKind.HTML)
    (slide,) = ServiceItem.from_presentation(presentation).to_slides()
    assert slide.background.kind is BackgroundKind.IMAGE


def test_content_item_title_is_first_line(context):
    item = service_item_from_lisp(read('(slide (text "Welcome\\nfriends"))'), context)
    assert item.kind is ServiceItemKind.CONTENT
    assert item.title == "Welcome"
    assert item.to_slides()[0].text == "Welcome\nfriends"


# ---------------------------------------------------------------------------
# service_item_from_lisp
# ---------------------------------------------------------------------------


def test_song_form_item(context):
    form = read('(song :title "Here" :verse-order (v1) (v1 "la"))')
    item = service_item_from_lisp(form, context)
    assert item.kind is ServiceItemKind.SONG
    assert item.title == "Here"


def test_media_form_items(context, tmp_path):
    image = service_item_from_lisp(read('(image :source "pics/a.png")'), context)
    assert image.kind is ServiceItemKind.IMAGE
    assert image.item.path == tmp_path / "pics/a.png"
    assert image.title == "a.png"

    video = service_item_from_lisp(
        read('(video :source "/v/ocean.mp4" :loop #t :start-time 2 :end-time 5)'), context
    )
    assert video.item.looping is True
    assert (video.item.start_time, video.item.end_time) == (2.0, 5.0)

    pdf = service_item_from_lisp(read('(presentation :source "/p/talk.pdf")'), context)
    assert pdf.item.kind is PresKind.PDF


def test_media_form_without_source(context):
    with pytest.raises(MissingFieldError):
        service_item_from_lisp(read("(image :fit crop)"), context)


def test_load_is_not_a_service_item(context):
    with pytest.raises(UnrecognizedFormError):
        service_item_from_lisp(read('(load "x.lisp")'), context)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


def _content(context, text):
    return service_item_from_lisp(read(f'(slide (text "{text}"))'), context)


def test_item_ids_follow_position(context):
    service = Service([_content(context, "a"), _content(context, "b")])
    service.insert_item(0, _content(context, "first"))
    assert [(item.id, item.title) for item in service.items] == [(0, "first"), (1, "a"), (2, "b")]

    service.move_item(0, 2)
    assert [item.title for item in service.items] == ["a", "b", "first"]
    assert [item.id for item in service.items] == [0, 1, 2]

    removed = service.remove_item(1)
    assert removed.title == "b"
    assert [item.id for item in service.items] == [0, 1]


def test_service_slides_are_numbered(context):
    service = Service([ServiceItem.from_song(SONG), _content(context, "notice")])
    slides = service.to_slides()
    assert [slide.text for slide in slides] == ["sing", "again\n", "notice"]
    assert [slide.id for slide in slides] == [0, 1, 2]


def test_failing_items_are_skipped(context, caplog):
    broken = ServiceItem.from_presentation(Presentation(title="Talk", path=Path("/p/talk.pdf")))
    no_order = ServiceItem.from_song(Song(title="Unordered", lyrics="Verse 1\nla"))
    service = Service([broken, _content(context, "kept"), no_order])
    with caplog.at_level(logging.ERROR, logger="lumina.service"):
        slides = service.to_slides()
    assert [slide.text for slide in slides] == ["kept"]
    assert slides[0].id == 0
    assert "Talk" in caplog.text
    assert "Unordered" in caplog.text


def test_to_slides_does_not_renumber_source_slides(context):
    item = _content(context, "x")
    Service([_content(context, "y"), item]).to_slides()
    assert item.item.id == 0
