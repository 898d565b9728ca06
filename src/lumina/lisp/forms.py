"""Helpers for pulling fields out of parsed list forms."""

from .values import Value, is_keyword

# When a song omits :title the lookup lands on the head symbol, so the
# title reads "song".
SONG_TITLE_FALLBACK_INDEX = 0

# A slide without :background takes whatever sits right after its head.
SLIDE_BACKGROUND_FALLBACK_INDEX = 1


def keyword_position(form: tuple, keyword: str) -> int | None:
    """Index of the first ``:keyword`` atom in *form*, or None."""
    for index, item in enumerate(form):
        if is_keyword(item, keyword):
            return index
    return None


def find_keyword_value_or_default(
    form: tuple, keyword: str, default_index: int | None = None
) -> Value:
    """Return the element following ``:keyword`` in *form*.

    If the keyword is present but is the last element, the result is None.
    If the keyword is absent the element at *default_index* is returned
    instead, which means a form that leaves the keyword out can pick up an
    unrelated positional element.  Files in the wild rely on this, so callers
    opt in with an explicit index; ``default_index=None`` yields None.
    """
    position = keyword_position(form, keyword)
    if position is not None:
        index = position + 1
    elif default_index is not None:
        index = default_index
    else:
        return None
    if index < len(form):
        return form[index]
    return None
