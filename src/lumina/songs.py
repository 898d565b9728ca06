"""Song forms → :class:`~lumina.models.Song` → slides.

A song form mixes keyword metadata with trailing lyric sections::

    (song :title "Death Was Arrested"
          :author "North Point Worship"
          :verse-order (i1 v1 v2 c1)
          (v1 "Alone in my sorrow\\nAnd dead in my sin")
          (c1 "Oh, Your grace so free,\\nWashes over me")
          (i1 "Death Was Arrested\\nNorth Point Worship"))

The extractor rebuilds the raw lyric block the library stores ("Verse 1" on
its own line, then the text) so that file songs and library songs go through
the same sequencer.
"""

import logging
from pathlib import Path

from .background import expand_home
from .builder import SlideBuilder
from .config import Settings
from .context import ParseContext
from .lisp.forms import SONG_TITLE_FALLBACK_INDEX, find_keyword_value_or_default
from .lisp.values import Symbol, Value, value_to_int, value_to_str
from .lisp.vocabulary import FIRST_LYRIC_MARKERS, SongKeyword, label_for_tag
from .lyrics import get_lyrics, parse_verse_order
from .models import Slide, Song
from .slides import lisp_to_background, text_alignment_from_value

logger = logging.getLogger(__name__)

DEFAULT_SONG_ID = 0
DEFAULT_SONG_TITLE = "song"


def _field(form: tuple, keyword: SongKeyword, default_index: int | None = None) -> Value:
    return find_keyword_value_or_default(form, keyword.value, default_index)


def _verse_order(value: Value) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [token.upper() for token in parse_verse_order(value)]
    if isinstance(value, tuple):
        return [value_to_str(token).upper() for token in value]
    return []


def _ccli(value: Value) -> str | None:
    if value is None:
        return None
    number = value_to_int(value)
    return str(number) if number is not None else value_to_str(value)


# ---------------------------------------------------------------------------
# Lyric sections
# ---------------------------------------------------------------------------


def _is_lyric_section(item: Value) -> bool:
    if not (isinstance(item, tuple) and len(item) > 1 and isinstance(item[0], Symbol)):
        return False
    tag = item[0].name.lower()
    return any(marker in tag for marker in FIRST_LYRIC_MARKERS) and isinstance(item[1], str)


def first_lyric_position(form: tuple) -> int:
    """Index where metadata ends and lyric sections begin (1 if none is found)."""
    for index, item in enumerate(form):
        if _is_lyric_section(item):
            return index
    return 1


def lyric_sections(form: tuple, verse_order: list[str] | None) -> list[tuple[str, str]]:
    """``(label, text)`` pairs for the song's lyric sublists.

    Without a verse order sections keep source order.  With one, they are
    ordered by the first slot their tag takes in the verse order; sections
    whose tag is not in the order are logged and left out.
    """
    sections: list[tuple[int, str, str]] = []
    for item in form[first_lyric_position(form) :]:
        # (tag "text"); keyword values such as :verse-order lists don't qualify
        if not (
            isinstance(item, tuple)
            and len(item) > 1
            and isinstance(item[0], Symbol)
            and isinstance(item[1], str)
        ):
            continue
        tag = item[0].name
        label = label_for_tag(tag)
        if label is None:
            logger.warning("Skipping lyric section with unknown tag %r", tag)
            continue
        text = item[1]

        if verse_order is None:
            slot = len(sections)
        elif tag.upper() in verse_order:
            slot = verse_order.index(tag.upper())
        else:
            logger.error("Lyric section %r is not in the verse order %s", tag, verse_order)
            continue
        sections.append((slot, label, text))

    sections.sort(key=lambda section: section[0])
    return [(label, text) for _, label, text in sections]


def build_raw_lyrics(sections: list[tuple[str, str]]) -> str:
    """Join sections into the stored lyric format: label line, text, blank line."""
    return "\n\n".join(f"{label}\n{text}" for label, text in sections)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


def lisp_to_song(form: tuple, context: ParseContext) -> Song:
    """Extract a :class:`Song` from a ``(song ...)`` form.

    Each field is the element following its keyword.  Fields whose keyword
    is missing are None, except the title, which falls back to the head
    symbol and so reads ``"song"``.

    Raises:
        BackgroundError: ``:background`` names a missing or non-media file.
    """
    title = _field(form, SongKeyword.TITLE, SONG_TITLE_FALLBACK_INDEX)
    song_id = value_to_int(_field(form, SongKeyword.ID))
    author = _field(form, SongKeyword.AUTHOR)
    audio = _field(form, SongKeyword.AUDIO)
    font = _field(form, SongKeyword.FONT)
    alignment = _field(form, SongKeyword.TEXT_ALIGNMENT)
    verse_order = _verse_order(_field(form, SongKeyword.VERSE_ORDER))

    sections = lyric_sections(form, verse_order)

    return Song(
        id=song_id if song_id is not None else DEFAULT_SONG_ID,
        title=value_to_str(title) if title is not None else DEFAULT_SONG_TITLE,
        lyrics=build_raw_lyrics(sections) if sections else None,
        author=value_to_str(author) if author is not None else None,
        ccli=_ccli(_field(form, SongKeyword.CCLI)),
        audio=(
            Path(expand_home(value_to_str(audio), context.settings.home_dir))
            if audio is not None
            else None
        ),
        verse_order=verse_order,
        background=lisp_to_background(_field(form, SongKeyword.BACKGROUND), context),
        text_alignment=text_alignment_from_value(alignment) if alignment is not None else None,
        font=value_to_str(font) if font is not None else None,
        font_size=value_to_int(_field(form, SongKeyword.FONT_SIZE)),
    )


def song_slides(song: Song, settings: Settings | None = None) -> list[Slide]:
    """One slide per sequenced lyric text of *song*.

    Raises:
        LyricError: the song has no lyrics or no verse order.
    """
    settings = settings or Settings()
    slides = []
    for text in get_lyrics(song):
        slides.append(
            SlideBuilder()
            .background(song.background)
            .text(text)
            .font(song.font or settings.default_font)
            .font_size(song.font_size if song.font_size is not None else settings.default_font_size)
            .text_alignment(song.text_alignment or settings.text_alignment)
            .video_loop(True)
            .video_start_time(0.0)
            .video_end_time(0.0)
            .audio(song.audio)
            .build()
        )
    return slides
