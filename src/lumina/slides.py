"""Slide forms and media forms → :class:`~lumina.models.Slide`.

Form shapes handled here::

    (slide (image :source "~/pics/frodo.jpg" :fit crop)
           (text "This is frodo" :font-size 70))

    (slide :background (video :source "./intro.mp4" :loop #t :end-time 12.5)
           (text "Welcome"))

    (image :source "~/pics/announcements.png")   ; top-level media
"""

import logging

from .builder import SlideBuilder
from .context import ParseContext
from .lisp.forms import SLIDE_BACKGROUND_FALLBACK_INDEX, find_keyword_value_or_default
from .lisp.values import (
    Keyword,
    Symbol,
    Value,
    head_name,
    value_to_bool,
    value_to_float,
    value_to_int,
    value_to_str,
)
from .lisp.vocabulary import MEDIA_HEADS, Head, MediaKeyword
from .models import Background, BackgroundKind, Slide, TextAlignment

logger = logging.getLogger(__name__)


def text_alignment_from_value(value: Value) -> TextAlignment:
    """``center`` or a full alignment name (``bottom-left``); anything else is top-center."""
    name = value_to_str(value).lower()
    if name == "center":
        return TextAlignment.MIDDLE_CENTER
    try:
        return TextAlignment(name)
    except ValueError:
        return TextAlignment.TOP_CENTER


# ---------------------------------------------------------------------------
# Backgrounds
# ---------------------------------------------------------------------------


def lisp_to_background(value: Value, context: ParseContext) -> Background | None:
    """Resolve a background value: a path string or an ``(image :source ...)`` form.

    Returns None for values that do not describe media at all.

    Raises:
        BackgroundError: the media path is missing or not an image/video.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return context.resolve_background(value)
    if Head.lookup(head_name(value)) in MEDIA_HEADS:
        source = find_keyword_value_or_default(value, MediaKeyword.SOURCE.value)
        if not isinstance(source, str):
            logger.warning("Media form has no :source string: %s", value_to_str(value))
            return None
        return context.resolve_background(source)
    logger.debug("Not a background: %s", value_to_str(value))
    return None


def video_timing(value: Value) -> tuple[bool, float, float]:
    """``(loop, start, end)`` from a video form's keywords; defaults off/0/0."""
    if head_name(value) != Head.VIDEO.value:
        return False, 0.0, 0.0
    loop = find_keyword_value_or_default(value, MediaKeyword.LOOP.value)
    start = value_to_float(find_keyword_value_or_default(value, MediaKeyword.START_TIME.value))
    end = value_to_float(find_keyword_value_or_default(value, MediaKeyword.END_TIME.value))
    return value_to_bool(loop), start or 0.0, end or 0.0


# ---------------------------------------------------------------------------
# Slide forms
# ---------------------------------------------------------------------------


def _text_form(form: tuple) -> tuple | None:
    for item in form[1:]:
        if isinstance(item, tuple) and item and head_name(item) == Head.TEXT.value:
            return item
    return None


def _keyword_in(forms: list[tuple], keyword: str) -> Value:
    """Value of *keyword* from the first form that has it."""
    for form in forms:
        value = find_keyword_value_or_default(form, keyword)
        if value is not None:
            return value
    return None


def lisp_to_slide(form: tuple, context: ParseContext) -> Slide:
    """Build a slide from a ``(slide ...)`` form.

    The background comes from ``:background`` or, failing that, whatever
    element follows the head.  Text comes from the first ``(text ...)``
    sublist.  Font size is read from that sublist (default from settings);
    a slide with no text sublist gets font size 0.
    """
    settings = context.settings
    background_value = find_keyword_value_or_default(
        form, "background", SLIDE_BACKGROUND_FALLBACK_INDEX
    )
    background = lisp_to_background(background_value, context)
    loop, start, end = video_timing(background_value)

    text_form = _text_form(form)
    if text_form is not None:
        text = value_to_str(text_form[1]) if len(text_form) > 1 else ""
        size = value_to_int(find_keyword_value_or_default(text_form, "font-size"))
        font_size = size if size is not None else settings.default_font_size
        scopes = [text_form, form]
    else:
        text = ""
        font_size = 0
        scopes = [form]

    font = _keyword_in(scopes, "font")
    alignment = _keyword_in(scopes, "text-alignment")

    return (
        SlideBuilder()
        .background(background)
        .text(text)
        .font(value_to_str(font) if font is not None else settings.default_font)
        .font_size(font_size)
        .text_alignment(
            text_alignment_from_value(alignment) if alignment is not None else settings.text_alignment
        )
        .video_loop(loop)
        .video_start_time(start)
        .video_end_time(end)
        .build()
    )


def media_to_slide(form: tuple, context: ParseContext) -> Slide:
    """One text-less slide showing a top-level ``image``/``video``/``presentation`` form."""
    settings = context.settings
    background = lisp_to_background(form, context)
    loop, start, end = video_timing(form)
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


def slide_to_lisp(slide: Slide) -> tuple:
    """Inverse of :func:`lisp_to_slide` for the fields a slide form can carry."""
    form: list[Value] = [Symbol("slide")]
    if slide.background is not None:
        media = Head.VIDEO if slide.background.kind is BackgroundKind.VIDEO else Head.IMAGE
        media_form: list[Value] = [Symbol(media.value), Keyword("source"), str(slide.background.path)]
        if media is Head.VIDEO:
            media_form += [
                Keyword("loop"), slide.video_loop,
                Keyword("start-time"), slide.video_start_time,
                Keyword("end-time"), slide.video_end_time,
            ]
        form.append(tuple(media_form))
    form.append((Symbol("text"), slide.text, Keyword("font-size"), slide.font_size))
    form += [Keyword("font"), slide.font, Keyword("text-alignment"), Symbol(slide.text_alignment.value)]
    return tuple(form)
