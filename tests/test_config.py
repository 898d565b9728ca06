from pathlib import Path

import pytest

from lumina.config import Settings, load_settings
from lumina.exceptions import ConfigError
from lumina.models import TextAlignment


def _write(tmp_path, text):
    path = tmp_path / "lumina.toml"
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


def test_defaults():
    settings = Settings()
    assert settings.default_font == "Quicksand"
    assert settings.default_font_size == 50
    assert settings.text_alignment is TextAlignment.MIDDLE_CENTER
    assert settings.home_dir == Path.home()


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


def test_load_all_keys(tmp_path):
    path = _write(
        tmp_path,
        '[slides]\ndefault_font = "Lato"\ndefault_font_size = 64\n'
        'text_alignment = "bottom-center"\nhome_dir = "/home/chris"\n',
    )
    settings = load_settings(path)
    assert settings == Settings(
        default_font="Lato",
        default_font_size=64,
        text_alignment=TextAlignment.BOTTOM_CENTER,
        home_dir=Path("/home/chris"),
    )


def test_missing_keys_keep_defaults(tmp_path):
    settings = load_settings(_write(tmp_path, '[slides]\ndefault_font = "Lato"\n'))
    assert settings.default_font == "Lato"
    assert settings.default_font_size == 50


def test_missing_table_gives_defaults(tmp_path):
    assert load_settings(_write(tmp_path, '[other]\nx = 1\n')).default_font == "Quicksand"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "absent.toml")


def test_invalid_toml(tmp_path):
    with pytest.raises(ConfigError, match="invalid TOML"):
        load_settings(_write(tmp_path, "[slides\n"))


def test_unknown_keys(tmp_path):
    with pytest.raises(ConfigError, match="unknown keys: colour, size"):
        load_settings(_write(tmp_path, '[slides]\nsize = 1\ncolour = "red"\n'))


@pytest.mark.parametrize(
    "line",
    [
        "default_font = 12",
        'default_font_size = "big"',
        "default_font_size = true",
        'text_alignment = "sideways"',
    ],
)
def test_bad_values(tmp_path, line):
    with pytest.raises(ConfigError):
        load_settings(_write(tmp_path, f"[slides]\n{line}\n"))


def test_slides_must_be_a_table(tmp_path):
    with pytest.raises(ConfigError, match="must be a table"):
        load_settings(_write(tmp_path, 'slides = "yes"\n'))
