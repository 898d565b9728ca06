"""Parser settings.

Defaults applied to slides whose source leaves a display attribute out.
Settings can be loaded from a TOML file with a ``[slides]`` table::

    [slides]
    default_font = "Quicksand"
    default_font_size = 50
    text_alignment = "middle-center"
    home_dir = "/home/chris"
"""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path

from .exceptions import ConfigError
from .models import TextAlignment


@dataclass(frozen=True)
class Settings:
    """Display defaults and path expansion settings.

    Attributes:
        default_font: Font used when a slide or song names none
        default_font_size: Font size used when a song names none
        text_alignment: Alignment used when a slide or song names none
        home_dir: Directory a leading ``~`` in media paths expands to
    """

    default_font: str = "Quicksand"
    default_font_size: int = 50
    text_alignment: TextAlignment = TextAlignment.MIDDLE_CENTER
    home_dir: Path = field(default_factory=Path.home)


def load_settings(path: Path) -> Settings:
    """Read settings from the ``[slides]`` table of a TOML file.

    Keys left out keep their defaults.

    Raises:
        ConfigError: if the file cannot be read or holds unknown keys or
            values of the wrong type.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as exc:
        raise ConfigError(path, str(exc)) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(path, f"invalid TOML: {exc}") from exc

    table = data.get("slides", {})
    if not isinstance(table, dict):
        raise ConfigError(path, "[slides] must be a table")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ConfigError(path, f"unknown keys: {', '.join(unknown)}")

    kwargs = {}
    if "default_font" in table:
        if not isinstance(table["default_font"], str):
            raise ConfigError(path, "default_font must be a string")
        kwargs["default_font"] = table["default_font"]
    if "default_font_size" in table:
        size = table["default_font_size"]
        if isinstance(size, bool) or not isinstance(size, int):
            raise ConfigError(path, "default_font_size must be an integer")
        kwargs["default_font_size"] = size
    if "text_alignment" in table:
        try:
            kwargs["text_alignment"] = TextAlignment(table["text_alignment"])
        except ValueError as exc:
            raise ConfigError(path, f"unknown text_alignment {table['text_alignment']!r}") from exc
    if "home_dir" in table:
        kwargs["home_dir"] = Path(table["home_dir"]).expanduser()

    return Settings(**kwargs)
