"""Value types produced by the s-expression reader.

A parsed value is one of:

    None                 nil
    bool                 #t / #f
    int | float          numbers
    str                  "quoted strings"
    Symbol               bare identifiers: slide, v1, center
    Keyword              :title, :font-size
    Cons                 dotted pairs: (a . b)
    tuple                proper lists: (slide :background ...)

Everything is immutable, so a tree can be shared between extractors freely.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Symbol:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Keyword:
    name: str  # without the leading colon

    def __str__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True)
class Cons:
    car: "Value"
    cdr: "Value"


Value = Union[None, bool, int, float, str, Symbol, Keyword, Cons, tuple]


def is_symbol(value: Value, name: str) -> bool:
    """True if *value* is the symbol *name*, ignoring case."""
    return isinstance(value, Symbol) and value.name.lower() == name.lower()


def is_keyword(value: Value, name: str) -> bool:
    """True if *value* is the keyword ``:name``, ignoring case."""
    return isinstance(value, Keyword) and value.name.lower() == name.lower()


def head_name(form: Value) -> str | None:
    """Lowercased name of a list's head symbol, or None when there is none."""
    if isinstance(form, tuple) and form and isinstance(form[0], Symbol):
        return form[0].name.lower()
    return None


# ---------------------------------------------------------------------------
# Coercions
# ---------------------------------------------------------------------------


def value_to_str(value: Value) -> str:
    """Render an atom as plain text.

    Strings come back unchanged, symbols and keywords as their bare name,
    numbers in their usual decimal form and nil as the empty string.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (Symbol, Keyword)):
        return value.name
    if isinstance(value, bool):
        return "#t" if value else "#f"
    if isinstance(value, (int, float)):
        return str(value)
    return to_source(value)


def value_to_int(value: Value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def value_to_float(value: Value) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def value_to_bool(value: Value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, Symbol):
        return value.name.lower() not in ("nil", "false", "f")
    return True


def to_source(value: Value) -> str:
    """Print *value* back as s-expression text."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "#t" if value else "#f"
    if isinstance(value, str):
        escaped = (
            value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\t", "\\t")
        )
        return f'"{escaped}"'
    if isinstance(value, Cons):
        return f"({to_source(value.car)} . {to_source(value.cdr)})"
    if isinstance(value, tuple):
        return "(" + " ".join(to_source(v) for v in value) + ")"
    return str(value)
