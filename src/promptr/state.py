from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING
from .segments import SegmentError

if TYPE_CHECKING:
    from .theme import Theme


@dataclass(frozen=True)
class ApplicationState:
    """
    Everything the segments get to know about the world: the active theme
    and a read-only snapshot of the environment variables passed in by the
    shell
    """

    theme: Theme
    env: Mapping[str, str]

    @classmethod
    def build(cls, theme: Theme, env: Mapping[str, str]) -> ApplicationState:
        return cls(theme=theme, env=MappingProxyType(dict(env)))

    def require(self, key: str) -> str:
        """
        Return the value of the environment variable ``key``, raising a
        `SegmentError` if it is not set
        """
        try:
            return self.env[key]
        except KeyError:
            raise SegmentError(f"${key} not set") from None
