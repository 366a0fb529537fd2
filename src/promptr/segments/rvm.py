"""
The ``rvm`` segment shows the active RVM rubie when inside a Ruby project.

RVM does its work with a pile of shell functions, so this is a rough
reimplementation of its logic rather than a query:

- Bail out unless ``$rvm_version`` is set (i.e., RVM is loaded)
- Unless ``force_show`` is set, only show anything if a ``Gemfile`` exists in
  the current directory or one of its ancestors
- The active rubie is ``$GEM_HOME`` relative to ``$rvm_path/gems``
- If a ``.ruby-version`` file exists in the current directory or an ancestor,
  compare the rubie it requests against the active one, and append
  `Theme.mismatch_symbol` if they differ (in which case RVM has most likely
  already complained about a missing ruby)

``$HOME`` and the RVM gem directory are never consulted when searching for
``Gemfile`` and ``.ruby-version``.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import re
from typing import TYPE_CHECKING
from . import Provider, Segment, SegmentError
from ..ansi import Color, Numbered, Separator
from ..models import StrictModel
from ..util import cat, find_upwards

if TYPE_CHECKING:
    from ..state import ApplicationState

RUBIE_RGX = re.compile(r"(?:(\w+)-)?(\d+(?:\.\d+){0,2})(?:@(\w+))?")


class Args(StrictModel):
    #: Show the segment even outside of projects with a ``Gemfile``
    force_show: bool = False


class Theme(StrictModel):
    fg: Color = Numbered(15)
    bg: Color = Numbered(124)

    # ≠
    mismatch_symbol: str = " ≠"


@dataclass
class Rubie:
    """
    A Ruby environment as named by RVM: ``[interpreter-]version[@gemset]``.
    The interpreter defaults to ``ruby``.
    """

    interp: str
    version: tuple[int, ...]
    gemset: str | None

    @classmethod
    def parse(cls, s: str) -> Rubie:
        m = RUBIE_RGX.search(s)
        if m is None:
            raise ValueError(f"Invalid rubie: {s!r}")
        return cls(
            interp=m[1] or "ruby",
            version=tuple(map(int, m[2].split("."))),
            gemset=m[3],
        )

    @property
    def version_str(self) -> str:
        return ".".join(map(str, pad_version(self.version)))

    def satisfies(self, requested: Rubie) -> bool:
        """
        Returns `True` iff this rubie has the same interpreter as
        ``requested`` and a version compatible with the requested one
        """
        return self.interp == requested.interp and caret_match(
            requested.version, pad_version(self.version)
        )


def pad_version(v: tuple[int, ...]) -> tuple[int, ...]:
    return (v + (0, 0, 0))[:3]


def caret_match(req: tuple[int, ...], version: tuple[int, ...]) -> bool:
    """
    Test whether ``version`` satisfies the requirement ``^req``: at least
    ``req`` and without a change in the leftmost nonzero component that
    ``req`` specifies
    """
    if version < pad_version(req):
        return False
    for i, n in enumerate(req):
        if version[i] != n:
            return False
        if n != 0:
            return True
    return True


class Rvm(Provider):
    name = "rvm"
    Args = Args

    @classmethod
    def to_segments(cls, args: Args | None, state: ApplicationState) -> list[Segment]:
        args = args or Args()
        theme = state.theme.rvm
        # We don't care about the version, only whether RVM is loaded
        state.require("rvm_version")
        pwd = Path(state.require("PWD"))
        home = Path(state.require("HOME"))
        gems_dir = Path(state.require("rvm_path"), "gems")
        skip = {home, gems_dir}
        if not args.force_show and find_upwards("Gemfile", pwd, skip) is None:
            return []
        gem_home = Path(state.require("GEM_HOME"))
        try:
            current = Rubie.parse(str(gem_home.relative_to(gems_dir)))
        except ValueError as e:
            raise SegmentError(f"Could not parse the current ruby version: {e}")
        mismatch = False
        if (rvpath := find_upwards(".ruby-version", pwd, skip)) is not None:
            requested_str = cat(rvpath) or ""
            try:
                requested = Rubie.parse(requested_str)
            except ValueError as e:
                raise SegmentError(f"Could not parse the desired ruby version: {e}")
            mismatch = not current.satisfies(requested)
        if current.gemset is not None:
            text = f"{current.gemset} (v{current.version_str})"
        else:
            text = current.version_str
        if mismatch:
            text += theme.mismatch_symbol
        return [
            Segment(
                bg=theme.bg,
                fg=theme.fg,
                text=text,
                separator=Separator.THICK,
                source="Rvm",
            )
        ]
