"""
The ``paths`` segment shows breadcrumbs leading to the current working
directory, one segment per path component
"""

from __future__ import annotations
from pathlib import PurePosixPath
from typing import TYPE_CHECKING
from . import Provider, Segment
from ..ansi import Color, Numbered, Separator
from ..models import StrictModel

if TYPE_CHECKING:
    from ..state import ApplicationState


class Args(StrictModel):
    #: Show a segment for the root directory
    show_root: bool = False

    #: Show the depth of Bash's directory stack (from ``$dirs``) when it
    #: holds more than one directory
    show_dir_stack: bool = True


class Theme(StrictModel):
    fg: Color = Numbered(250)
    bg: Color = Numbered(237)

    home_fg: Color = Numbered(15)
    home_bg: Color = Numbered(31)

    last_fg: Color = Numbered(254)
    last_bg: Color = Numbered(237)

    # 📚
    dir_stack_indicator: str = "\U0001f4da"

    #: Shown in place of the home directory
    home_dir_replacement: str = "~"


class Paths(Provider):
    name = "paths"
    Args = Args

    @classmethod
    def to_segments(cls, args: Args | None, state: ApplicationState) -> list[Segment]:
        args = args or Args()
        theme = state.theme.paths
        cwd = PurePosixPath(state.require("PWD"))
        home = PurePosixPath(state.require("HOME"))
        segments: list[Segment] = []
        try:
            names = list(cwd.relative_to(home).parts)
        except ValueError:
            names = list(cwd.parts[1:] if cwd.is_absolute() else cwd.parts)
            if args.show_root or not names:
                segments.append(
                    Segment(
                        bg=theme.bg,
                        fg=theme.fg,
                        text="/",
                        separator=Separator.THIN if names else Separator.THICK,
                        source="Paths::Root",
                    )
                )
        else:
            segments.append(
                Segment(
                    bg=theme.home_bg,
                    fg=theme.home_fg,
                    text=theme.home_dir_replacement,
                    separator=Separator.THICK,
                    source="Paths::Home",
                )
            )
        for i, name in enumerate(names):
            if i < len(names) - 1:
                segments.append(
                    Segment(
                        bg=theme.bg,
                        fg=theme.fg,
                        text=name,
                        separator=Separator.THIN,
                        source="Paths::Middle",
                    )
                )
            elif segments:
                segments.append(
                    Segment(
                        bg=theme.last_bg,
                        fg=theme.last_fg,
                        text=name,
                        separator=Separator.THICK,
                        source="Paths::Last",
                    )
                )
            else:
                segments.append(
                    Segment(
                        bg=theme.bg,
                        fg=theme.fg,
                        text=name,
                        separator=Separator.THICK,
                        source="Paths::Only",
                    )
                )
        if args.show_dir_stack and (dirs := state.env.get("dirs")) is not None:
            depth = len(dirs.splitlines())
            if depth > 1:
                segments.insert(
                    0,
                    Segment(
                        bg=theme.bg,
                        fg=theme.fg,
                        text=f"{depth} {theme.dir_stack_indicator}",
                        separator=Separator.THICK,
                        source="Paths::DirStack",
                    ),
                )
        return segments
