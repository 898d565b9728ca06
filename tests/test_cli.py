import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from lumina.builder import SlideBuilder
from lumina.cli import main
from lumina.dispatch import ParseResult
from lumina.exceptions import IncludeError
from lumina.models import Slide, TextAlignment

FIXTURES = Path(__file__).parent / "fixtures"
SERVICE = str(FIXTURES / "service.lisp")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _slide(text: str) -> Slide:
    return (
        SlideBuilder()
        .background(None)
        .text(text)
        .font("Quicksand")
        .font_size(50)
        .text_alignment(TextAlignment.MIDDLE_CENTER)
        .video_loop(False)
        .video_start_time(0.0)
        .video_end_time(0.0)
        .build()
    )


# ---------------------------------------------------------------------------
# --help
# ---------------------------------------------------------------------------


def test_help_output():
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Parse a presentation file" in result.output
    assert "(load" in result.output


# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------


def test_prints_numbered_slides():
    result = CliRunner().invoke(main, [SERVICE])
    assert result.exit_code == 0
    assert "--- Slide 0 [image: " in result.output
    assert "This is frodo" in result.output
    assert "--- Slide 6 [no background] Quicksand 50 middle-center ---" in result.output
    assert "Washes over me" in result.output


def test_missing_path_is_a_usage_error(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "nope.lisp")])
    assert result.exit_code == 2


# ---------------------------------------------------------------------------
# Other formats
# ---------------------------------------------------------------------------


def test_json_flag():
    result = CliRunner().invoke(main, ["--json", str(FIXTURES / "death_was_arrested.lisp")])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert [slide["id"] for slide in data] == [0, 1, 2, 3]
    assert data[0]["text"] == "Death Was Arrested\nNorth Point Worship"


def test_lisp_format():
    result = CliRunner().invoke(main, ["--format", "lisp", str(FIXTURES / "death_was_arrested.lisp")])
    assert result.exit_code == 0
    assert result.output.count("(slide ") == 4


# ---------------------------------------------------------------------------
# File output
# ---------------------------------------------------------------------------


def test_output_file_written(tmp_path):
    out_file = tmp_path / "slides.txt"
    result = CliRunner().invoke(main, ["-o", str(out_file), SERVICE])
    assert result.exit_code == 0
    assert f"Written to {out_file}" in result.output
    assert "This is frodo" in out_file.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# --config
# ---------------------------------------------------------------------------


def test_config_changes_defaults(tmp_path):
    config = tmp_path / "lumina.toml"
    config.write_text('[slides]\ndefault_font = "Lato"\ndefault_font_size = 64\n', encoding="utf-8")
    result = CliRunner().invoke(main, ["--config", str(config), str(FIXTURES / "death_was_arrested.lisp")])
    assert result.exit_code == 0
    assert "Lato 64" in result.output


def test_bad_config_exits_nonzero(tmp_path):
    config = tmp_path / "lumina.toml"
    config.write_text("[slides]\nwhat = 1\n", encoding="utf-8")
    result = CliRunner().invoke(main, ["--config", str(config), SERVICE])
    assert result.exit_code == 1
    assert "Error: Bad config" in result.output


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


def test_syntax_error_exits_nonzero(tmp_path):
    source = tmp_path / "broken.lisp"
    source.write_text('(slide (text "unfinished"', encoding="utf-8")
    result = CliRunner().invoke(main, [str(source)])
    assert result.exit_code == 1
    assert "Error: Syntax error at line 1" in result.output


def test_failed_forms_reported_after_slides():
    result = CliRunner().invoke(main, [str(FIXTURES / "partial.lisp")])
    assert result.exit_code == 1
    assert "first" in result.output
    assert "last" in result.output
    assert "Error: Unrecognized form: wiggle" in result.output


def test_non_utf8_file_exits_nonzero(tmp_path):
    source = tmp_path / "bad.lisp"
    source.write_bytes(b'(slide (text "\xff\xfe"))')
    result = CliRunner().invoke(main, [str(source)])
    assert result.exit_code == 1
    assert "Error: Cannot load" in result.output


def test_unreadable_file_exits_nonzero():
    with patch("lumina.cli.parse_file", side_effect=IncludeError("x.lisp", "permission denied")):
        result = CliRunner().invoke(main, [SERVICE])
    assert result.exit_code == 1
    assert "permission denied" in result.output


def test_numbering_leaves_parsed_slides_untouched():
    slides = [_slide("first"), _slide("second")]
    with patch("lumina.cli.parse_file", return_value=ParseResult(slides=slides)):
        result = CliRunner().invoke(main, [SERVICE])
    assert result.exit_code == 0
    assert "--- Slide 1 [no background]" in result.output
    assert [slide.id for slide in slides] == [0, 0]


def test_empty_result():
    with patch("lumina.cli.parse_file", return_value=ParseResult()):
        result = CliRunner().invoke(main, [SERVICE])
    assert result.exit_code == 0
    assert result.output == "(no slides)\n"
