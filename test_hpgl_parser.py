"""Tests for parsing the plotter command language."""
import pytest

from execution.errors import CommandParseError
from execution.hpgl_parser import ParsedCommand, parse_commands, strokes


def test_parses_engine_output():
    commands = parse_commands("VS50;!ST1,0;PU0,4800;PD;PD0,5000;PU;PG;")
    assert commands == [
        ParsedCommand("VS", (50,)),
        ParsedCommand("!ST", (1, 0)),
        ParsedCommand("PU", (0, 4800)),
        ParsedCommand("PD", ()),
        ParsedCommand("PD", (0, 5000)),
        ParsedCommand("PU", ()),
        ParsedCommand("PG", ()),
    ]
    assert commands[2].position == (0, 4800)
    assert commands[3].position is None


def test_empty_text_has_no_commands():
    assert parse_commands("") == []


@pytest.mark.parametrize("text", ["XX1,2;", "PD1,a;", "PU1;", "PG3,4;"])
def test_rejects_malformed_commands(text):
    with pytest.raises(CommandParseError):
        parse_commands(text)


def test_strokes_group_pen_down_travel():
    commands = parse_commands(
        "VS50;!ST1,0;PU0,0;PD;PD10,0;PD10,10;PU;PU20,20;PD;PD30,20;PU;PG;"
    )
    assert strokes(commands) == [
        [(0, 0), (10, 0), (10, 10)],
        [(20, 20), (30, 20)],
    ]


def test_pen_down_without_travel_is_not_a_stroke():
    assert strokes(parse_commands("PU5,5;PD;PU;PG;")) == []
