from __future__ import annotations
from collections.abc import Mapping
from promptr.state import ApplicationState
from promptr.theme import Theme


def make_state(env: Mapping[str, str], theme: Theme | None = None) -> ApplicationState:
    return ApplicationState.build(theme or Theme(), env)
