"""The ``username`` segment shows the name of the current user"""

from __future__ import annotations
from typing import TYPE_CHECKING
from . import Provider, Segment
from ..ansi import Color, Numbered, Separator
from ..models import StrictModel

if TYPE_CHECKING:
    from ..state import ApplicationState


class Theme(StrictModel):
    fg: Color = Numbered(250)
    bg: Color = Numbered(240)


class Username(Provider):
    name = "username"

    @classmethod
    def to_segments(cls, args: None, state: ApplicationState) -> list[Segment]:
        theme = state.theme.username
        return [
            Segment(
                bg=theme.bg,
                fg=theme.fg,
                text=state.require("USER"),
                separator=Separator.THICK,
                source="Username",
            )
        ]
