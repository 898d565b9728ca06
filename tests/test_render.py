import json
from pathlib import Path

from lumina.lisp.reader import read_all
from lumina.models import Background, BackgroundKind, Slide, TextAlignment
from lumina.render import SlideTextFormatter, render_json, render_lisp, slide_to_dict


def _slide(**kwargs) -> Slide:
    values = {
        "background": None,
        "text": "Oh, Your grace so free,\nWashes over me\n",
        "font": "Quicksand",
        "font_size": 50,
        "text_alignment": TextAlignment.MIDDLE_CENTER,
        "video_loop": False,
        "video_start_time": 0.0,
        "video_end_time": 0.0,
    }
    values.update(kwargs)
    return Slide(**values)


VIDEO = Background(path=Path("/vids/ocean.mp4"), kind=BackgroundKind.VIDEO)
IMAGE = Background(path=Path("/pics/frodo.jpg"), kind=BackgroundKind.IMAGE)

# ---------------------------------------------------------------------------
# SlideTextFormatter
# ---------------------------------------------------------------------------


def test_text_only_slide():
    text = SlideTextFormatter().render([_slide()])
    assert text == (
        "--- Slide 0 [no background] Quicksand 50 middle-center ---\n"
        "Oh, Your grace so free,\n"
        "Washes over me\n"
    )


def test_video_slide_header():
    slide = _slide(background=VIDEO, video_loop=True, video_end_time=12.5, font_size=80, id=3)
    header = SlideTextFormatter().render([slide]).splitlines()[0]
    assert header == "--- Slide 3 [video: /vids/ocean.mp4] loop 0-12.5s Quicksand 80 middle-center ---"


def test_image_slide_without_text():
    text = SlideTextFormatter().render([_slide(background=IMAGE, text="")])
    assert text == "--- Slide 0 [image: /pics/frodo.jpg] Quicksand 50 middle-center ---\n"


def test_slides_separated_by_blank_line():
    text = SlideTextFormatter().render([_slide(text="a"), _slide(text="b", id=1)])
    assert "a\n\n--- Slide 1" in text


def test_no_slides():
    assert SlideTextFormatter().render([]) == "(no slides)\n"


# ---------------------------------------------------------------------------
# JSON / lisp
# ---------------------------------------------------------------------------


def test_slide_to_dict():
    data = slide_to_dict(_slide(background=IMAGE, audio=Path("/a/x.mp3")))
    assert data["background"] == {"path": "/pics/frodo.jpg", "kind": "image"}
    assert data["text_alignment"] == "middle-center"
    assert data["audio"] == "/a/x.mp3"


def test_render_json():
    data = json.loads(render_json([_slide(), _slide(background=VIDEO)]))
    assert len(data) == 2
    assert data[0]["background"] is None
    assert data[1]["background"]["kind"] == "video"


def test_render_lisp_one_form_per_slide():
    forms = read_all(render_lisp([_slide(), _slide(background=VIDEO, video_loop=True)]))
    assert len(forms) == 2
    assert forms[1][1][0].name == "video"
