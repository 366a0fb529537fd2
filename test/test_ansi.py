from __future__ import annotations
from typing import Any
import pytest
from promptr.ansi import (
    ANSIStyler,
    BashStyler,
    Numbered,
    Rgb,
    bg_params,
    dump_color,
    fg_params,
    parse_color,
)


@pytest.mark.parametrize(
    "color,fg,bg",
    [
        (Numbered(0), "38;5;0", "48;5;0"),
        (Numbered(161), "38;5;161", "48;5;161"),
        (Rgb(255, 80, 95), "38;2;255;80;95", "48;2;255;80;95"),
    ],
)
def test_color_params(color: Numbered | Rgb, fg: str, bg: str) -> None:
    assert fg_params(color) == fg
    assert bg_params(color) == bg


def test_stylers() -> None:
    assert BashStyler()("38;5;1") == "\\[\\e[38;5;1m\\]"
    assert ANSIStyler()("0") == "\x1B[0m"


@pytest.mark.parametrize(
    "value,color",
    [
        (42, Numbered(42)),
        ({"r": 1, "g": 2, "b": 3}, Rgb(1, 2, 3)),
        (Numbered(7), Numbered(7)),
    ],
)
def test_parse_color(value: Any, color: Numbered | Rgb) -> None:
    assert parse_color(value) == color


@pytest.mark.parametrize(
    "value",
    [
        pytest.param(256, id="index-too-big"),
        pytest.param(-1, id="negative-index"),
        pytest.param(True, id="bool"),
        pytest.param("red", id="string"),
        pytest.param({"r": 1, "g": 2}, id="missing-channel"),
        pytest.param({"r": 1, "g": 2, "b": 3, "a": 4}, id="extra-channel"),
        pytest.param({"r": 1, "g": 2, "b": 300}, id="channel-too-big"),
        pytest.param({"r": 1, "g": 2, "b": "3"}, id="string-channel"),
    ],
)
def test_parse_color_invalid(value: Any) -> None:
    with pytest.raises(ValueError):
        parse_color(value)


def test_dump_color() -> None:
    assert dump_color(Numbered(31)) == 31
    assert dump_color(Rgb(10, 20, 30)) == {"r": 10, "g": 20, "b": 30}
