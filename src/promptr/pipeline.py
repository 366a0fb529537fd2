from __future__ import annotations
from collections.abc import Iterable
import logging
from pydantic import ValidationError
from .config import SegmentConfig
from .segments import PROVIDERS, Provider, Segment
from .state import ApplicationState

log = logging.getLogger(__name__)


def load_segments(
    configs: Iterable[SegmentConfig],
    state: ApplicationState,
    providers: dict[str, type[Provider]] = PROVIDERS,
) -> list[Segment]:
    """
    Evaluate each configured segment in turn and return all of the resulting
    segments in order.

    A segment with an unknown name, invalid arguments, or that fails to
    evaluate is logged and skipped; the remaining segments are still
    rendered.
    """
    segments: list[Segment] = []
    for cfg in configs:
        try:
            provider = providers[cfg.name]
        except KeyError:
            log.warning("Unknown segment: %s", cfg.name)
            continue
        try:
            args = provider.decode_args(cfg.args)
        except ValidationError as e:
            log.warning("Invalid arguments for %s segment: %s", cfg.name, e)
            continue
        try:
            segments.extend(provider.to_segments(args, state))
        except Exception as e:
            log.warning("Error in %s segment: %s", cfg.name, e)
            log.debug("Traceback for %s segment:", cfg.name, exc_info=True)
    return segments
