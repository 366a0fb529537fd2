from __future__ import annotations
from promptr.ansi import ANSIStyler, Numbered, Separator
from promptr.render import render
from promptr.segments import Segment

THIN = Separator.THIN.value
THICK = Separator.THICK.value


def seg(text: str, bg: int, fg: int = 15, separator: Separator = Separator.THICK) -> Segment:
    return Segment(
        bg=Numbered(bg),
        fg=Numbered(fg),
        text=text,
        separator=separator,
        source="Test",
    )


def test_render_empty() -> None:
    assert render([], styler=ANSIStyler()) == "\x1B[0m "


def test_render_single() -> None:
    assert render([seg("foo", 240, 250)], styler=ANSIStyler()) == (
        "\x1B[38;5;250m\x1B[48;5;240m foo "
        "\x1B[0m\x1B[38;5;240m" + THICK + "\x1B[0m "
    )


def test_render_pair() -> None:
    assert render([seg("a", 1, 2), seg("b", 3, 4)], styler=ANSIStyler()) == (
        "\x1B[38;5;2m\x1B[48;5;1m a "
        "\x1B[48;5;3m\x1B[38;5;1m" + THICK + "\x1B[38;5;4m\x1B[48;5;3m b "
        "\x1B[0m\x1B[38;5;3m" + THICK + "\x1B[0m "
    )


def test_render_same_bg_uses_thin() -> None:
    s = render([seg("a", 237), seg("b", 237), seg("c", 31)], styler=ANSIStyler())
    assert s.count(THIN) == 1
    assert s.count(THICK) == 2
    assert s.index(THIN) < s.index(" b ")


def test_render_thin_is_kept() -> None:
    s = render(
        [seg("a", 237, separator=Separator.THIN), seg("b", 31)],
        styler=ANSIStyler(),
    )
    assert s.count(THIN) == 1
    assert s.count(THICK) == 1


def test_render_thin_separator_fg() -> None:
    s = render(
        [seg("a", 237), seg("b", 237)],
        styler=ANSIStyler(),
        thin_separator_fg=Numbered(244),
    )
    assert "\x1B[48;5;237m\x1B[38;5;244m" + THIN in s
    # Thick separators are unaffected
    assert "\x1B[0m\x1B[38;5;237m" + THICK in s


def test_render_bash_default() -> None:
    s = render([seg("foo", 240, 250)])
    assert s.startswith("\\[\\e[38;5;250m\\]\\[\\e[48;5;240m\\] foo ")
    assert s.endswith("\\[\\e[0m\\] ")
