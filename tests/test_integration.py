"""End-to-end integration tests."""

import pytest

from mini_core import (
    ArrayValue,
    BoolValue,
    ErrorKind,
    FloatValue,
    IntValue,
    MiniError,
    StringValue,
    ValueKind,
    dump,
    dumps,
    load,
    loads,
)


GAME = """\
# Main game configuration
[game]
name = "Space \\"Rocks\\""
year = 1_999
completionPercentage = 99.5f
is_completed = false

[game.window]
# width, height
dimensions = [1280, 720]
close_flags = 0F0Fh
hex_test = "0F0Fh"

  # platform targets
  [ game.window.platform ]
  targets = ["win64", "linux", "web, wasm"]
  points = [[1.0f, 2.0f], [3.5f, -4.0f]]
"""


def test_game_file_values():
    doc = loads(GAME)
    game = doc.get_subsection("game")
    assert game.get_value("name", StringValue).value == 'Space "Rocks"'
    assert game.get_value("year", IntValue).value == 1999
    assert game.get_value("completionPercentage", FloatValue).value == 99.5
    assert game.get_value("is_completed", BoolValue).value is False

    window = game.get_subsection("window")
    assert [v.value for v in window.get_value("dimensions", ArrayValue)] == [1280, 720]
    assert window.get_value("close_flags", IntValue).value == 0x0F0F
    assert window.get_value("hex_test", StringValue).value == "0F0Fh"
    assert window.get_value("dimensions").comments == ["# width, height"]


def test_game_file_nested_arrays():
    doc = loads(GAME)
    points = doc.get_value("game.window.platform.points", ArrayValue)
    assert [p.kind for p in points] == [ValueKind.Array, ValueKind.Array]
    assert [v.value for v in points[1]] == [3.5, -4.0]
    targets = doc.get_value("game.window.platform.targets", ArrayValue)
    assert targets.get(2).value == "web, wasm"


def test_game_file_paths():
    doc = loads(GAME)
    platform = doc.get_subsection("game.window.platform")
    assert platform is doc.get_subsection("game").get_subsection("window.platform")
    assert platform.comments == ["# platform targets"]


def test_game_file_write():
    text = dumps(loads(GAME))
    assert text.splitlines() == [
        "# Main game configuration",
        "[game]",
        'name = "Space \\"Rocks\\""',
        "year = 1999",
        "completionPercentage = 99.5f",
        "is_completed = false",
        "",
        "[game.window]",
        "# width, height",
        "dimensions = [1280, 720]",
        "close_flags = f0fh",
        'hex_test = "0F0Fh"',
        "",
        "# platform targets",
        "[game.window.platform]",
        'targets = ["win64", "linux", "web, wasm"]',
        "points = [[1.0f, 2.0f], [3.5f, -4.0f]]",
        "",
    ]


def test_write_is_stable(tmp_path):
    first = dumps(loads(GAME))
    path = tmp_path / "game.mini"
    dump(loads(first), path)
    assert dumps(load(path)) == first


def test_default_accessor_with_fallbacks():
    doc = loads(GAME)
    root = doc.root
    assert root.get_value_or_default("game.year", IntValue, 1999) == 1999
    assert root.get_value_or_default("game.month", IntValue, 1) == 1
    assert root.get_value_or_default("game.window.dimensions", StringValue, "n/a") == "n/a"


@pytest.mark.parametrize(
    "text, kind, line",
    [
        ("[game\n", ErrorKind.SECTION_EXPECTED_CLOSING_BRACKET, 1),
        ("[]\n", ErrorKind.EMPTY_SECTION_NAME, 1),
        ("[a]\nx = [1, \"a\"]\n", ErrorKind.ARRAY_DATA_TYPE_INCONSISTENCY, 2),
        ("[a]\nx = \"a\\qb\"\n", ErrorKind.UNKNOWN_ESCAPE_SEQUENCE, 2),
        ("[a]\nx = [[1, 2]\n", ErrorKind.ARRAY_BRACKETS_UNBALANCED, 2),
        ("[a]\nx = True\n", ErrorKind.INTEGER_VALUE_INVALID, 2),
        ("[a]\n\n\nx = 1.2.3f\n", ErrorKind.FLOAT_VALUE_INVALID, 4),
        ("[a]\nx = 99999999999999999999\n", ErrorKind.INTEGER_VALUE_OUT_OF_RANGE, 2),
    ],
)
def test_parse_errors(text, kind, line):
    with pytest.raises(MiniError) as e:
        loads(text)
    assert e.value.kind is kind
    assert e.value.line == line
