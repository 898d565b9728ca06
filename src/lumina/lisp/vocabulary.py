"""The closed set of names presentation files are written with.

Head symbols and keywords are matched case-insensitively so files written by
older releases keep loading.
"""

from enum import Enum


class Head(Enum):
    """Symbols that may start a form."""

    SLIDE = "slide"
    SONG = "song"
    LOAD = "load"
    IMAGE = "image"
    VIDEO = "video"
    PRESENTATION = "presentation"
    TEXT = "text"

    @classmethod
    def lookup(cls, name: str | None) -> "Head | None":
        if name is None:
            return None
        try:
            return cls(name.lower())
        except ValueError:
            return None


# Heads that describe a piece of media usable as a background.
MEDIA_HEADS = frozenset({Head.IMAGE, Head.VIDEO, Head.PRESENTATION})


class SongKeyword(Enum):
    ID = "id"
    TITLE = "title"
    AUTHOR = "author"
    CCLI = "ccli"
    AUDIO = "audio"
    FONT = "font"
    FONT_SIZE = "font-size"
    BACKGROUND = "background"
    TEXT_ALIGNMENT = "text-alignment"
    VERSE_ORDER = "verse-order"


class MediaKeyword(Enum):
    SOURCE = "source"
    FIT = "fit"
    LOOP = "loop"
    START_TIME = "start-time"
    END_TIME = "end-time"


class VerseToken(Enum):
    """Two-character verse tokens, in the same order as :data:`VERSE_LABELS`."""

    V1 = "Verse 1"
    V2 = "Verse 2"
    V3 = "Verse 3"
    V4 = "Verse 4"
    V5 = "Verse 5"
    V6 = "Verse 6"
    V7 = "Verse 7"
    V8 = "Verse 8"
    C1 = "Chorus 1"
    C2 = "Chorus 2"
    C3 = "Chorus 3"
    C4 = "Chorus 4"
    B1 = "Bridge 1"
    B2 = "Bridge 2"
    B3 = "Bridge 3"
    B4 = "Bridge 4"
    I1 = "Intro 1"
    I2 = "Intro 2"
    E1 = "Ending 1"
    E2 = "Ending 2"
    O1 = "Other 1"
    O2 = "Other 2"
    O3 = "Other 3"
    O4 = "Other 4"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def lookup(cls, token: str) -> "VerseToken | None":
        return cls.__members__.get(token.strip().upper())


# Section labels recognized as header lines in raw lyric text.  Table order
# matters: verse-order resolution scans it front to back.
VERSE_LABELS: tuple[str, ...] = tuple(token.label for token in VerseToken)


def label_for_tag(tag: str) -> str | None:
    """Map a lyric tag such as ``v1`` or ``C2`` to its label (``Verse 1``)."""
    token = VerseToken.lookup(tag)
    return token.label if token else None


# Substrings that mark the first lyric section of a song form.
FIRST_LYRIC_MARKERS = ("v1", "text", "c1", "i1")
