"""
The ``command_status`` segment shows the privilege indicator, colored by the
exit status of the last command
"""

from __future__ import annotations
from typing import TYPE_CHECKING
from . import Provider, Segment
from ..ansi import Color, Numbered, Separator
from ..models import StrictModel

if TYPE_CHECKING:
    from ..state import ApplicationState


class Theme(StrictModel):
    #: Colors used when the last command succeeded
    success_fg: Color = Numbered(15)
    success_bg: Color = Numbered(236)

    #: Colors used when the last command failed
    failure_fg: Color = Numbered(15)
    failure_bg: Color = Numbered(161)

    #: Shown when the user is root.  On Bash this is typically ``#``.
    root_indicator: str = "#"

    #: Shown for everyone else.  On Bash this is typically ``$``.
    user_indicator: str = "\\$"


class CommandStatus(Provider):
    name = "command_status"

    @classmethod
    def to_segments(cls, args: None, state: ApplicationState) -> list[Segment]:
        theme = state.theme.command_status
        # A missing or unparsable status counts as success
        if parse_int(state.env.get("code")) in (None, 0):
            fg, bg = theme.success_fg, theme.success_bg
        else:
            fg, bg = theme.failure_fg, theme.failure_bg
        if parse_int(state.env.get("uid")) == 0:
            text = theme.root_indicator
        else:
            text = theme.user_indicator
        return [
            Segment(
                bg=bg,
                fg=fg,
                text=text,
                separator=Separator.THICK,
                source="CommandStatus",
            )
        ]


def parse_int(s: str | None) -> int | None:
    if s is None:
        return None
    try:
        return int(s.strip())
    except ValueError:
        return None
