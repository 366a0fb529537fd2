"""Colors, separators, and the escape sequences used to paint them"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ClassVar, Protocol, Union
from pydantic import PlainSerializer, PlainValidator

#: SGR parameter that introduces a foreground color
SET_FG = 38

#: SGR parameter that introduces a background color
SET_BG = 48

#: SGR parameter that resets all colors & styles
RESET = 0


@dataclass(frozen=True)
class Numbered:
    """A color from the 256-color xterm palette"""

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index <= 255:
            raise ValueError(f"palette index out of range: {self.index}")

    def sgr(self) -> str:
        """Return the SGR color selector for use after `SET_FG` or `SET_BG`"""
        return f"5;{self.index}"


@dataclass(frozen=True)
class Rgb:
    """A 24-bit "true" color"""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"color channel out of range: {channel}")

    def sgr(self) -> str:
        return f"2;{self.r};{self.g};{self.b}"


def parse_color(value: Any) -> Numbered | Rgb:
    """
    Convert a configuration value to a color.  An integer is a palette index;
    an object with exactly the keys ``r``, ``g``, and ``b`` is a 24-bit color.
    """
    if isinstance(value, (Numbered, Rgb)):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Numbered(value)
    if isinstance(value, dict):
        if set(value) != {"r", "g", "b"}:
            raise ValueError(
                f"RGB color must have exactly the keys r, g, b; got {sorted(value)}"
            )
        channels = [value["r"], value["g"], value["b"]]
        if not all(isinstance(c, int) and not isinstance(c, bool) for c in channels):
            raise ValueError("RGB color channels must be integers")
        return Rgb(*channels)
    raise ValueError(f"not a color: {value!r}")


def dump_color(color: Numbered | Rgb) -> int | dict[str, int]:
    if isinstance(color, Numbered):
        return color.index
    else:
        return {"r": color.r, "g": color.g, "b": color.b}


#: Type for color fields in configuration models
Color = Annotated[
    Union[Numbered, Rgb],
    PlainValidator(parse_color),
    PlainSerializer(dump_color),
]


class Separator(Enum):
    """
    The glyph shown after a segment.  Each separator's value is its
    (Powerline private-use) glyph.
    """

    THIN = "\ue0b1"
    THICK = "\ue0b0"


def fg_params(color: Numbered | Rgb) -> str:
    return f"{SET_FG};{color.sgr()}"


def bg_params(color: Numbered | Rgb) -> str:
    return f"{SET_BG};{color.sgr()}"


class Styler(Protocol):
    name: ClassVar[str]

    def __call__(self, params: str) -> str: ...


class BashStyler:
    """Class for producing escape sequences for use in Bash's PS1 variable"""

    name: ClassVar[str] = "bash"

    def __call__(self, params: str) -> str:
        r"""
        Return the SGR escape sequence for ``params`` wrapped in ``\[ ... \]``
        so that Bash does not count it towards the prompt's width
        """
        return rf"\[\e[{params}m\]"


class ANSIStyler:
    """Class for producing escape sequences for display immediately in the terminal"""

    name: ClassVar[str] = "ansi"

    def __call__(self, params: str) -> str:
        return f"\x1B[{params}m"


STYLERS: dict[str, type[Styler]] = {
    BashStyler.name: BashStyler,
    ANSIStyler.name: ANSIStyler,
}
