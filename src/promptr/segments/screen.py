"""
The ``screen`` segment indicates that the shell is running inside a GNU
Screen session, optionally with the window number and session name.

Versions of GNU Screen before 4.2.0 do not display emoji properly; if you're
using one, pick a different ``screen_symbol``.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
from . import Provider, Segment, SegmentError
from ..ansi import Color, Numbered, Separator
from ..models import StrictModel

if TYPE_CHECKING:
    from ..state import ApplicationState


class Args(StrictModel):
    show_screen_icon: bool = True
    show_screen_name: bool = True
    show_screen_pid: bool = False
    show_window_number: bool = True


class Theme(StrictModel):
    fg: Color = Numbered(250)
    bg: Color = Numbered(238)

    #: Shown when inside a Screen session
    screen_symbol: str = "\U0001f4fa"


class Screen(Provider):
    name = "screen"
    Args = Args

    @classmethod
    def to_segments(cls, args: Args | None, state: ApplicationState) -> list[Segment]:
        args = args or Args()
        theme = state.theme.screen
        # $STY doesn't survive sudo, but there's nothing better to go on
        sty = state.env.get("STY")
        window = state.env.get("WINDOW")
        if sty is None or window is None:
            return []
        pid, dot, session = sty.partition(".")
        if not dot:
            raise SegmentError(f"Could not parse $STY: {sty!r}")
        label = ""
        if args.show_screen_pid:
            label += f"{pid}."
        if args.show_screen_name:
            label += session
        text = ""
        if args.show_window_number:
            text += window
            if args.show_screen_pid or args.show_screen_name:
                label = f"[{label}]"
        text += label
        if args.show_screen_icon:
            text += f" {theme.screen_symbol}"
        return [
            Segment(
                bg=theme.bg,
                fg=theme.fg,
                text=text,
                separator=Separator.THICK,
                source="Screen",
            )
        ]
