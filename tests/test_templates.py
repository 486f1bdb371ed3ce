"""Tests for hs_templates.py - the header block."""

from hs_templates import DEFAULT_SUBTITLE, DEFAULT_TITLE, main, template_header


def test_header_defaults():
    header = template_header()
    assert DEFAULT_TITLE in header
    assert DEFAULT_SUBTITLE in header
    assert "HAPPYSTACK" in header
    assert "A Bash script" in header


def test_header_override():
    header = template_header("X", "Y")
    assert "X" in header
    assert "Y" in header
    assert DEFAULT_TITLE not in header
    assert DEFAULT_SUBTITLE not in header


def test_wrong_argument_count_keeps_defaults():
    assert template_header("only title") == template_header()
    assert template_header("a", "b", "c") == template_header()


def test_header_is_pure():
    assert template_header("T", "S") == template_header("T", "S")


def test_header_draws_logo():
    header = template_header()
    assert "/\\═════════\\™" in header
    assert "╰────┴─────────╯" in header


def test_header_command(capsys):
    assert main(["Tasks", "Running"]) == 0
    out = capsys.readouterr().out
    assert "Tasks" in out
    assert "Running" in out
