"""Lyric sequencing: raw lyric text + verse order → ordered slide texts.

Raw lyrics are stored as one block of text in which section labels sit on
their own lines::

    Verse 1
    Alone in my sorrow
    And dead in my sin

    Chorus 1
    Oh, Your grace so free,
    Washes over me

The verse order is a list of compact tokens (``V1``, ``C1``, ...) choosing
which sections play and in what order.  The pipeline:

  1. split_sections()       : label line → accumulated section text
  2. resolve_verse_label()  : verse token → section label
  3. split_paragraphs()     : one section → one or more slide texts
  4. get_lyrics()           : full pipeline over the verse order

Song libraries depend on the exact output of this module, quirks included.
"""

import logging

from .exceptions import EmptyVerseOrderError, NoLyricsError, NoVerseOrderError
from .lisp.vocabulary import VERSE_LABELS
from .models import Song

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK = "\n\n"


# ---------------------------------------------------------------------------
# Section splitting
# ---------------------------------------------------------------------------


def split_sections(raw_lyrics: str) -> dict[str, str]:
    """Split a raw lyric block into ``{label: text}``.

    A line exactly equal to one of :data:`VERSE_LABELS` starts a new
    section.  Every other line is appended to the current section followed
    by ``"\\n"``, so section text always ends in a newline and blank lines
    survive as paragraph breaks.

    Text before the first label is stored under the empty label.  The first
    line never flushes a section, even when it is a label.  A label that
    appears twice keeps only its last text.
    """
    sections: dict[str, str] = {}
    label = ""
    lines: list[str] = []

    for index, line in enumerate(raw_lyrics.split("\n")):
        if line in VERSE_LABELS:
            if index != 0:
                sections[label] = "".join(lines)
                lines = []
            label = line
        else:
            lines.append(line + "\n")

    sections[label] = "".join(lines)
    return sections


# ---------------------------------------------------------------------------
# Verse token resolution
# ---------------------------------------------------------------------------


def resolve_verse_label(token: str) -> str | None:
    """Resolve a verse-order token such as ``C2`` to a label (``Chorus 2``).

    A label matches when it starts with the token's first character and
    ends with its second character.  The whole table is scanned and the
    *last* match wins rather than the first.  With the current table the
    two agree for every well-formed token, but a short token diverges:
    ``""`` resolves to ``Other 4`` and ``"V"`` to ``Verse 8``.  Saved songs
    were sequenced this way, so the scan is kept as is.

    Returns None when no label matches.
    """
    first = token[0:1]
    last = token[1:2]
    resolved = None
    for label in VERSE_LABELS:
        if label.startswith(first) and label.endswith(last):
            resolved = label
    return resolved


# ---------------------------------------------------------------------------
# Paragraph splitting
# ---------------------------------------------------------------------------


def split_paragraphs(text: str) -> list[str]:
    """Turn one section's text into slide texts.

    Text containing a blank line is split on ``"\\n\\n"`` and empty chunks
    are dropped; anything else is a single slide, trailing newline included.
    """
    if PARAGRAPH_BREAK not in text:
        return [text]
    return [chunk for chunk in text.split(PARAGRAPH_BREAK) if chunk != ""]


# ---------------------------------------------------------------------------
# Full sequencer
# ---------------------------------------------------------------------------


def get_lyrics(song: Song) -> list[str]:
    """Return the slide texts for *song* in verse-order sequence.

    Algorithm
    ---------
    1. Split ``song.lyrics`` into labelled sections.
    2. For each verse-order token, resolve its label.
    3. Look the label up; split its text into paragraphs and append each.
       Repeated tokens are rendered again every time they appear.
    4. Tokens that resolve to nothing, or to a label with no section, are
       logged and skipped; the rest of the order still plays.

    Raises:
        NoLyricsError: ``song.lyrics`` is None.
        NoVerseOrderError: ``song.verse_order`` is None.
        EmptyVerseOrderError: ``song.verse_order`` is empty.
    """
    if song.lyrics is None:
        raise NoLyricsError(song.title)
    if song.verse_order is None:
        raise NoVerseOrderError(song.title)
    if not song.verse_order:
        raise EmptyVerseOrderError(song.title)

    sections = split_sections(song.lyrics)
    logger.debug("Sections for %r: %s", song.title, list(sections))

    texts: list[str] = []
    for token in song.verse_order:
        label = resolve_verse_label(token)
        if label is None:
            logger.error("Verse %r in %r matches no verse label", token, song.title)
            continue
        if label not in sections:
            logger.error("Verse %r (%s) has no lyrics in %r", token, label, song.title)
            continue
        texts.extend(split_paragraphs(sections[label]))

    return texts


def parse_verse_order(text: str | None) -> list[str] | None:
    """Split a stored verse-order string (``"V1 C1 V2 C1"``) into tokens.

    The split is on single spaces, so doubled spaces leave empty tokens,
    which resolve to ``Other 4`` like any other empty token.
    """
    if text is None:
        return None
    return text.split(" ")
