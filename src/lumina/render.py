"""Plain-text, JSON and lisp renderings of a slide list.

Text layout
-----------

Each slide is a header line followed by its text::

    --- Slide 0 [video: /home/chris/vids/ocean.mp4] Quicksand 80 middle-center ---
    Oh, Your grace so free,
    Washes over me

+------------------------+----------------------------------------------+
| Header part            | Shown when                                   |
+========================+==============================================+
| ``[image: <path>]``    | the background is an image                   |
+------------------------+----------------------------------------------+
| ``[video: <path>]``    | the background is a video; ``loop`` and      |
|                        | ``<start>-<end>s`` follow when set           |
+------------------------+----------------------------------------------+
| ``[no background]``    | text-only slides                             |
+------------------------+----------------------------------------------+

Usage::

    from lumina.render import SlideTextFormatter
    text = SlideTextFormatter().render(result.slides)
"""

import json

from .lisp.values import to_source
from .models import BackgroundKind, Slide
from .slides import slide_to_lisp


class SlideTextFormatter:
    """Render slides as readable text."""

    def render(self, slides: list[Slide]) -> str:
        """Return the text for *slides*, ending in a single newline.

        Slides are separated by a blank line.  An empty list renders as
        ``"(no slides)\\n"``.
        """
        if not slides:
            return "(no slides)\n"
        blocks = ["\n".join(_render_slide(slide)) for slide in slides]
        return "\n\n".join(blocks) + "\n"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _background_label(slide: Slide) -> str:
    background = slide.background
    if background is None:
        return "[no background]"
    label = f"[{background.kind.value}: {background.path}]"
    if background.kind is BackgroundKind.VIDEO:
        if slide.video_loop:
            label += " loop"
        if slide.video_start_time or slide.video_end_time:
            label += f" {slide.video_start_time:g}-{slide.video_end_time:g}s"
    return label


def _render_slide(slide: Slide) -> list[str]:
    header = (
        f"--- Slide {slide.id} {_background_label(slide)} "
        f"{slide.font} {slide.font_size} {slide.text_alignment.value} ---"
    )
    body = slide.text.rstrip("\n")
    return [header, body] if body else [header]


# ---------------------------------------------------------------------------
# Machine-readable output
# ---------------------------------------------------------------------------


def slide_to_dict(slide: Slide) -> dict:
    background = slide.background
    return {
        "id": slide.id,
        "background": (
            {"path": str(background.path), "kind": background.kind.value} if background else None
        ),
        "text": slide.text,
        "font": slide.font,
        "font_size": slide.font_size,
        "text_alignment": slide.text_alignment.value,
        "video_loop": slide.video_loop,
        "video_start_time": slide.video_start_time,
        "video_end_time": slide.video_end_time,
        "audio": str(slide.audio) if slide.audio else None,
    }


def render_json(slides: list[Slide]) -> str:
    return json.dumps([slide_to_dict(slide) for slide in slides], indent=2) + "\n"


def render_lisp(slides: list[Slide]) -> str:
    """One ``(slide ...)`` form per line, carrying each slide's display fields."""
    return "".join(to_source(slide_to_lisp(slide)) + "\n" for slide in slides)
