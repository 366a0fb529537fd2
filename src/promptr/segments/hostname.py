"""The ``hostname`` segment shows the name of the local machine"""

from __future__ import annotations
import logging
import subprocess
import sys
from typing import TYPE_CHECKING
from . import Provider, Segment
from ..ansi import Color, Numbered, Separator
from ..models import StrictModel

if TYPE_CHECKING:
    from ..state import ApplicationState

log = logging.getLogger(__name__)


class Args(StrictModel):
    #: Show the fully-qualified name instead of just the first label
    show_domain: bool = False

    #: Append `Theme.jail_indicator` when running inside a FreeBSD jail
    show_jail_indicator: bool = True

    #: Append an emoji for the current operating system
    show_os_indicator: bool = False


class Theme(StrictModel):
    fg: Color = Numbered(250)
    bg: Color = Numbered(238)

    # 🔐
    jail_indicator: str = "\U0001f510"
    # 🍎
    os_macos: str = "\U0001f34e"
    # 👺
    os_freebsd: str = "\U0001f47a"
    # 🐡
    os_openbsd: str = "\U0001f421"
    # 🐧
    os_linux: str = "\U0001f427"


class Hostname(Provider):
    name = "hostname"
    Args = Args

    @classmethod
    def to_segments(cls, args: Args | None, state: ApplicationState) -> list[Segment]:
        args = args or Args()
        theme = state.theme.hostname
        hostname = state.require("hostname")
        if not args.show_domain:
            hostname = hostname.split(".")[0]
        text = hostname
        if args.show_os_indicator:
            text += os_indicator(theme, sys.platform)
        if args.show_jail_indicator and in_jail(sys.platform):
            text += theme.jail_indicator
        return [
            Segment(
                bg=theme.bg,
                fg=theme.fg,
                text=text,
                separator=Separator.THICK,
                source="Hostname",
            )
        ]


def os_indicator(theme: Theme, platform: str) -> str:
    if platform == "darwin":
        return theme.os_macos
    elif platform.startswith("freebsd"):
        return theme.os_freebsd
    elif platform.startswith("openbsd"):
        return theme.os_openbsd
    elif platform.startswith("linux"):
        return theme.os_linux
    else:
        return ""


def in_jail(platform: str) -> bool:
    """Return `True` iff we are running inside a FreeBSD jail"""
    if not platform.startswith("freebsd"):
        return False
    try:
        r = subprocess.run(
            ["sysctl", "-n", "security.jail.jailed"],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        log.debug("Could not query security.jail.jailed: %s", e)
        return False
    return r.stdout.strip() == "1"
