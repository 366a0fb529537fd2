"""
The ``battery`` segment shows the battery's state of charge and whether it is
charging
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
import psutil
from . import Provider, Segment, SegmentError
from ..ansi import Color, Numbered, Separator
from ..models import StrictModel

if TYPE_CHECKING:
    from ..state import ApplicationState


class Args(StrictModel):
    #: Below this percentage, a discharging battery is shown in the "low"
    #: colors
    low_battery_threshold: float = 50.0


class Theme(StrictModel):
    normal_fg: Color = Numbered(7)
    normal_bg: Color = Numbered(22)

    low_fg: Color = Numbered(7)
    low_bg: Color = Numbered(197)

    # 🔌
    charging_symbol: str = "\U0001f50c"
    # ⚡
    discharging_symbol: str = "⚡"
    # ❗
    empty_symbol: str = "❗"
    # 🔋
    full_symbol: str = "\U0001f50b"


class ChargeState(Enum):
    CHARGING = "Charging"
    DISCHARGING = "Discharging"
    FULL = "Full"
    EMPTY = "Empty"


@dataclass
class BatteryReading:
    #: State of charge as a percentage
    percent: float

    state: ChargeState

    @classmethod
    def get(cls) -> BatteryReading:
        """
        Read the first battery's status

        :raises SegmentError: if there is no battery
        """
        try:
            battery = psutil.sensors_battery()
        except AttributeError:
            # sensors_battery() is not available on every platform
            battery = None
        if battery is None:
            raise SegmentError("No battery found")
        percent = float(battery.percent)
        if battery.power_plugged:
            state = ChargeState.FULL if percent >= 100 else ChargeState.CHARGING
        elif percent <= 0:
            state = ChargeState.EMPTY
        else:
            state = ChargeState.DISCHARGING
        return cls(percent=percent, state=state)


class Battery(Provider):
    name = "battery"
    Args = Args

    @classmethod
    def to_segments(cls, args: Args | None, state: ApplicationState) -> list[Segment]:
        return [
            battery_segment(
                BatteryReading.get(), args or Args(), state.theme.battery
            )
        ]


def battery_segment(reading: BatteryReading, args: Args, theme: Theme) -> Segment:
    low = False
    if reading.state is ChargeState.CHARGING:
        text = f"{reading.percent:.0f}% {theme.charging_symbol}"
    elif reading.state is ChargeState.FULL:
        text = f"100% {theme.full_symbol}"
    elif reading.state is ChargeState.EMPTY:
        text = f"{reading.percent:.0f}% {theme.empty_symbol}"
        low = True
    else:
        text = f"{reading.percent:.0f}% {theme.discharging_symbol}"
        low = reading.percent < args.low_battery_threshold
    return Segment(
        bg=theme.low_bg if low else theme.normal_bg,
        fg=theme.low_fg if low else theme.normal_fg,
        text=text,
        separator=Separator.THICK,
        source=f"Battery::{reading.state.value}",
    )
