"""
The theme: colors & symbols for every segment type.

Each segment module defines its own ``Theme`` model; the configuration file's
``theme`` object has one key per segment type, and only the values being
changed need to be given.  For instance, to change only the background color
of the ``hostname`` segment:

.. code:: json

    {
        "hostname": { "bg": 128 }
    }

Colors are written either as an index into the 256-color palette (``128``)
or as a 24-bit color (``{"r": 255, "g": 80, "b": 95}``).
"""

from __future__ import annotations
from .ansi import Color
from .models import StrictModel
from .segments.battery import Theme as BatteryTheme
from .segments.command_status import Theme as CommandStatusTheme
from .segments.git import Theme as VcsTheme
from .segments.hostname import Theme as HostnameTheme
from .segments.paths import Theme as PathsTheme
from .segments.rvm import Theme as RvmTheme
from .segments.screen import Theme as ScreenTheme
from .segments.username import Theme as UsernameTheme


class Theme(StrictModel):
    battery: BatteryTheme = BatteryTheme()
    command_status: CommandStatusTheme = CommandStatusTheme()
    hostname: HostnameTheme = HostnameTheme()
    #: Theme for the version control segments
    vcs: VcsTheme = VcsTheme()
    username: UsernameTheme = UsernameTheme()
    paths: PathsTheme = PathsTheme()
    rvm: RvmTheme = RvmTheme()
    screen: ScreenTheme = ScreenTheme()

    #: If set, thin separators are drawn in this color instead of in the
    #: background color of the segment they follow
    thin_separator_fg: Color | None = None
