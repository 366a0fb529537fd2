"""
The configuration file.

The file lives at ``$XDG_CONFIG_HOME/promptr/promptr.json`` (by default,
``~/.config/promptr/promptr.json``) and looks like this:

.. code:: json

    {
        "promptr_config": 12,
        "segments": [
            {"name": "username"},
            {"name": "paths", "args": {"show_root": true}},
            {"name": "git"},
            {"name": "command_status"}
        ],
        "theme": {
            "paths": {"home_bg": 24}
        }
    }

Segments are rendered in the order listed.  ``args`` are specific to each
segment type; see the modules in `promptr.segments` for what's available.
If the file is missing or invalid, the defaults are used.
"""

from __future__ import annotations
from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any
from pydantic import Field, ValidationError, field_validator
from .models import StrictModel
from .theme import Theme

log = logging.getLogger(__name__)

#: The only value of ``promptr_config`` that this version understands
CONFIG_VERSION = 12

CONFIG_FILENAME = "promptr.json"


class SegmentConfig(StrictModel):
    """An entry in the configuration's list of segments to render"""

    name: str

    #: Arguments for the segment; their structure depends on the segment type
    args: Any = None


def default_segments() -> list[SegmentConfig]:
    return [
        SegmentConfig(name="username"),
        SegmentConfig(name="paths"),
        SegmentConfig(name="command_status"),
    ]


class PromptrConfig(StrictModel):
    #: Configuration format version; must equal `CONFIG_VERSION`
    promptr_config: int = CONFIG_VERSION

    segments: list[SegmentConfig] = Field(default_factory=default_segments)

    theme: Theme = Theme()

    @field_validator("promptr_config")
    @classmethod
    def _check_version(cls, v: int) -> int:
        if v != CONFIG_VERSION:
            raise ValueError(
                f"unsupported configuration version {v}; expected {CONFIG_VERSION}"
            )
        return v

    def dump(self, full: bool = False) -> dict[str, Any]:
        """
        Convert the configuration to a JSON-compatible `dict`.  Unless
        ``full`` is true, theme values that equal their defaults are left
        out.
        """
        data = self.model_dump(mode="json", exclude={"theme"})
        for seg in data["segments"]:
            if seg["args"] is None:
                del seg["args"]
        data["theme"] = self.theme.model_dump(mode="json", exclude_defaults=not full)
        return data


def config_dir(env: Mapping[str, str]) -> Path:
    """
    Return the directory in which the configuration file is kept, based on
    the environment variables in ``env``
    """
    if xdg := env.get("XDG_CONFIG_HOME"):
        base = Path(xdg)
    elif home := env.get("HOME"):
        base = Path(home, ".config")
    else:
        base = Path.home() / ".config"
    return base / "promptr"


def load_config(path: Path, quiet: bool = False) -> PromptrConfig:
    """
    Load the configuration file at ``path``.  If it does not exist, or if it
    cannot be parsed (in which case a warning is logged unless ``quiet`` is
    true), the default configuration is returned.
    """
    try:
        src = path.read_bytes()
    except FileNotFoundError:
        log.debug("No configuration file at %s; using defaults", path)
        return PromptrConfig()
    except OSError as e:
        if not quiet:
            log.warning("Could not read %s, using default config: %s", path, e)
        return PromptrConfig()
    try:
        return PromptrConfig.model_validate_json(src)
    except ValidationError as e:
        if not quiet:
            log.warning("Invalid configuration in %s, using default config:\n%s", path, e)
        return PromptrConfig()
