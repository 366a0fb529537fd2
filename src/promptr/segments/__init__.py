"""
Prompt segments

Each segment type lives in its own module and consists of a `Provider`
subclass plus two configuration models: ``Args``, the segment's arguments
from the ``segments`` list of the configuration file, and ``Theme``, its
colors & symbols under the ``theme`` key.  Every field of both models has a
default, and unknown fields are rejected.

A new segment type is made available by adding it to `PROVIDERS` at the
bottom of this module.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar
from ..ansi import Numbered, Rgb, Separator
from ..models import StrictModel

if TYPE_CHECKING:
    from ..state import ApplicationState


class SegmentError(Exception):
    """Raised when a segment cannot be evaluated"""


@dataclass(frozen=True)
class Segment:
    """A single colored unit of the prompt"""

    #: Background color
    bg: Numbered | Rgb

    #: Foreground color
    fg: Numbered | Rgb

    #: Text to display; may be empty
    text: str

    #: The separator to show after the segment.  The renderer may replace a
    #: `Separator.THICK` with a `Separator.THIN`, but never the reverse.
    separator: Separator

    #: Where the segment came from, e.g. ``"Git::Branch"``; only used for
    #: debugging output
    source: str


class NoArgs(StrictModel):
    """Arguments for segments that don't take any"""


class Provider(ABC):
    """
    Base class for segment providers.  Providers are never instantiated; all
    of their methods are classmethods.
    """

    #: The name by which the segment is referred to in the configuration file
    name: ClassVar[str]

    #: The model that the segment's ``args`` are decoded into
    Args: ClassVar[type[StrictModel]] = NoArgs

    @classmethod
    def decode_args(cls, raw: Any | None) -> Any | None:
        """
        Decode an untyped ``args`` value from the configuration into an
        instance of `Args`.  `None` (no ``args`` given) is passed through.

        :raises pydantic.ValidationError: if ``raw`` is not a valid ``Args``
        """
        if raw is None:
            return None
        return cls.Args.model_validate(raw)

    @classmethod
    @abstractmethod
    def to_segments(cls, args: Any | None, state: ApplicationState) -> list[Segment]:
        """
        Compute the segment's output.  ``args`` is `None` if no arguments were
        configured, in which case the defaults apply.  An empty list means
        the segment has nothing to show.

        :raises SegmentError: if the segment cannot be evaluated
        """
        ...

    @classmethod
    def to_segments_generic(
        cls, raw: Any | None, state: ApplicationState
    ) -> list[Segment]:
        return cls.to_segments(cls.decode_args(raw), state)


# Imported down here as the segment modules need the definitions above
from .battery import Battery  # noqa: E402
from .command_status import CommandStatus  # noqa: E402
from .git import Git  # noqa: E402
from .hostname import Hostname  # noqa: E402
from .paths import Paths  # noqa: E402
from .rvm import Rvm  # noqa: E402
from .screen import Screen  # noqa: E402
from .username import Username  # noqa: E402

PROVIDERS: dict[str, type[Provider]] = {
    p.name: p
    for p in [Battery, CommandStatus, Git, Hostname, Paths, Rvm, Screen, Username]
}

__all__ = ["PROVIDERS", "NoArgs", "Provider", "Segment", "SegmentError"]
