from __future__ import annotations
from pathlib import Path
import pytest
from promptr.ansi import Numbered, Separator
from promptr.segments import SegmentError
from promptr.segments.battery import (
    Args as BatteryArgs,
    BatteryReading,
    ChargeState,
    Theme as BatteryTheme,
    battery_segment,
)
from promptr.segments.command_status import CommandStatus
from promptr.segments.hostname import Args as HostnameArgs
from promptr.segments.hostname import Hostname, Theme as HostnameTheme, os_indicator
from promptr.segments.paths import Args as PathsArgs
from promptr.segments.paths import Paths
from promptr.segments.rvm import Rubie, Rvm, caret_match
from promptr.segments.screen import Args as ScreenArgs
from promptr.segments.screen import Screen
from promptr.segments.username import Username
from conftest import make_state


def test_username() -> None:
    (seg,) = Username.to_segments(None, make_state({"USER": "jdoe"}))
    assert seg.text == "jdoe"
    assert seg.fg == Numbered(250)
    assert seg.bg == Numbered(240)
    assert seg.separator is Separator.THICK


def test_username_unset() -> None:
    with pytest.raises(SegmentError):
        Username.to_segments(None, make_state({}))


@pytest.mark.parametrize(
    "env,text,bg",
    [
        pytest.param({"code": "0", "uid": "1000"}, "\\$", 236, id="success"),
        pytest.param({"code": "1", "uid": "1000"}, "\\$", 161, id="failure"),
        pytest.param({"code": "130", "uid": "0"}, "#", 161, id="root-failure"),
        pytest.param({"uid": "0"}, "#", 236, id="no-code"),
        pytest.param({"code": "wat"}, "\\$", 236, id="bad-code"),
    ],
)
def test_command_status(env: dict[str, str], text: str, bg: int) -> None:
    (seg,) = CommandStatus.to_segments(None, make_state(env))
    assert seg.text == text
    assert seg.bg == Numbered(bg)
    assert seg.fg == Numbered(15)


@pytest.mark.parametrize(
    "args,text",
    [
        (None, "firefly"),
        (HostnameArgs(show_domain=True), "firefly.example.com"),
    ],
)
def test_hostname(args: HostnameArgs | None, text: str) -> None:
    state = make_state({"hostname": "firefly.example.com"})
    (seg,) = Hostname.to_segments(args, state)
    assert seg.text == text


def test_hostname_unset() -> None:
    with pytest.raises(SegmentError):
        Hostname.to_segments(None, make_state({}))


@pytest.mark.parametrize(
    "platform,indicator",
    [
        ("darwin", "\U0001f34e"),
        ("freebsd13", "\U0001f47a"),
        ("openbsd7", "\U0001f421"),
        ("linux", "\U0001f427"),
        ("win32", ""),
    ],
)
def test_os_indicator(platform: str, indicator: str) -> None:
    assert os_indicator(HostnameTheme(), platform) == indicator


def paths(
    pwd: str, args: PathsArgs | None = None, **env: str
) -> list[tuple[str, str, Separator]]:
    state = make_state({"PWD": pwd, "HOME": "/home/jdoe", **env})
    return [(s.source, s.text, s.separator) for s in Paths.to_segments(args, state)]


def test_paths_home() -> None:
    assert paths("/home/jdoe") == [("Paths::Home", "~", Separator.THICK)]


def test_paths_under_home() -> None:
    assert paths("/home/jdoe/src/promptr") == [
        ("Paths::Home", "~", Separator.THICK),
        ("Paths::Middle", "src", Separator.THIN),
        ("Paths::Last", "promptr", Separator.THICK),
    ]


def test_paths_outside_home() -> None:
    assert paths("/usr/local/bin") == [
        ("Paths::Middle", "usr", Separator.THIN),
        ("Paths::Middle", "local", Separator.THIN),
        ("Paths::Last", "bin", Separator.THICK),
    ]


def test_paths_similar_to_home() -> None:
    assert paths("/home/jdoe2") == [
        ("Paths::Middle", "home", Separator.THIN),
        ("Paths::Last", "jdoe2", Separator.THICK),
    ]


def test_paths_single() -> None:
    assert paths("/tmp") == [("Paths::Only", "tmp", Separator.THICK)]


def test_paths_root() -> None:
    assert paths("/") == [("Paths::Root", "/", Separator.THICK)]


def test_paths_show_root() -> None:
    assert paths("/tmp", PathsArgs(show_root=True)) == [
        ("Paths::Root", "/", Separator.THIN),
        ("Paths::Last", "tmp", Separator.THICK),
    ]


def test_paths_dir_stack() -> None:
    assert paths("/home/jdoe", dirs="~\n/tmp\n/usr") == [
        ("Paths::DirStack", "3 \U0001f4da", Separator.THICK),
        ("Paths::Home", "~", Separator.THICK),
    ]
    assert paths("/home/jdoe", dirs="~") == [("Paths::Home", "~", Separator.THICK)]
    assert paths("/home/jdoe", PathsArgs(show_dir_stack=False), dirs="~\n/tmp") == [
        ("Paths::Home", "~", Separator.THICK)
    ]


def test_paths_colors() -> None:
    state = make_state({"PWD": "/home/jdoe/src", "HOME": "/home/jdoe"})
    home, last = Paths.to_segments(None, state)
    assert (home.fg, home.bg) == (Numbered(15), Numbered(31))
    assert (last.fg, last.bg) == (Numbered(254), Numbered(237))


@pytest.mark.parametrize(
    "args,text",
    [
        (None, "2[work] \U0001f4fa"),
        (ScreenArgs(show_screen_pid=True), "2[12345.work] \U0001f4fa"),
        (ScreenArgs(show_screen_icon=False, show_screen_name=False), "2"),
        (ScreenArgs(show_window_number=False, show_screen_icon=False), "work"),
    ],
)
def test_screen(args: ScreenArgs | None, text: str) -> None:
    state = make_state({"STY": "12345.work", "WINDOW": "2"})
    (seg,) = Screen.to_segments(args, state)
    assert seg.text == text


def test_screen_outside_session() -> None:
    assert Screen.to_segments(None, make_state({"WINDOW": "2"})) == []
    assert Screen.to_segments(None, make_state({"STY": "12345.work"})) == []


def test_screen_bad_sty() -> None:
    with pytest.raises(SegmentError):
        Screen.to_segments(None, make_state({"STY": "work", "WINDOW": "2"}))


@pytest.mark.parametrize(
    "reading,text,low",
    [
        (BatteryReading(80.0, ChargeState.DISCHARGING), "80% ⚡", False),
        (BatteryReading(30.4, ChargeState.DISCHARGING), "30% ⚡", True),
        (BatteryReading(30.0, ChargeState.CHARGING), "30% \U0001f50c", False),
        (BatteryReading(100.0, ChargeState.FULL), "100% \U0001f50b", False),
        (BatteryReading(0.0, ChargeState.EMPTY), "0% ❗", True),
    ],
)
def test_battery_segment(reading: BatteryReading, text: str, low: bool) -> None:
    theme = BatteryTheme()
    seg = battery_segment(reading, BatteryArgs(), theme)
    assert seg.text == text
    if low:
        assert (seg.fg, seg.bg) == (theme.low_fg, theme.low_bg)
    else:
        assert (seg.fg, seg.bg) == (theme.normal_fg, theme.normal_bg)
    assert seg.source == f"Battery::{reading.state.value}"


def test_battery_threshold() -> None:
    theme = BatteryTheme()
    reading = BatteryReading(30.0, ChargeState.DISCHARGING)
    seg = battery_segment(reading, BatteryArgs(low_battery_threshold=20), theme)
    assert seg.bg == theme.normal_bg


@pytest.mark.parametrize(
    "s,rubie",
    [
        ("2.7.1", Rubie("ruby", (2, 7, 1), None)),
        ("ruby-2.7.1@rails", Rubie("ruby", (2, 7, 1), "rails")),
        ("jruby-9.3", Rubie("jruby", (9, 3), None)),
        ("ruby-3.1.2\n", Rubie("ruby", (3, 1, 2), None)),
    ],
)
def test_parse_rubie(s: str, rubie: Rubie) -> None:
    assert Rubie.parse(s) == rubie


def test_parse_rubie_invalid() -> None:
    with pytest.raises(ValueError):
        Rubie.parse("system")


@pytest.mark.parametrize(
    "req,version,ok",
    [
        ((2, 7), (2, 7, 1), True),
        ((2, 7), (2, 8, 0), True),
        ((2, 7), (3, 0, 0), False),
        ((2, 7, 2), (2, 7, 1), False),
        ((0, 3), (0, 3, 5), True),
        ((0, 3), (0, 4, 0), False),
        ((0, 0, 3), (0, 0, 3), True),
        ((0, 0, 3), (0, 0, 4), False),
    ],
)
def test_caret_match(req: tuple[int, ...], version: tuple[int, ...], ok: bool) -> None:
    assert caret_match(req, version) is ok


def rvm_env(tmp_path: Path, rubie: str) -> dict[str, str]:
    rvm_path = tmp_path / "rvm"
    return {
        "rvm_version": "1.29.12",
        "rvm_path": str(rvm_path),
        "GEM_HOME": str(rvm_path / "gems" / rubie),
        "HOME": str(tmp_path / "home"),
        "PWD": str(tmp_path / "home" / "project" / "lib"),
    }


def test_rvm(tmp_path: Path) -> None:
    project = tmp_path / "home" / "project"
    (project / "lib").mkdir(parents=True)
    (project / "Gemfile").touch()
    (project / ".ruby-version").write_text("ruby-2.7\n", encoding="utf-8")
    env = rvm_env(tmp_path, "ruby-2.7.1@rails")
    (seg,) = Rvm.to_segments(None, make_state(env))
    assert seg.text == "rails (v2.7.1)"


def test_rvm_mismatch(tmp_path: Path) -> None:
    project = tmp_path / "home" / "project"
    (project / "lib").mkdir(parents=True)
    (project / "Gemfile").touch()
    (project / ".ruby-version").write_text("3.1\n", encoding="utf-8")
    env = rvm_env(tmp_path, "ruby-2.7.1")
    (seg,) = Rvm.to_segments(None, make_state(env))
    assert seg.text == "2.7.1 ≠"


def test_rvm_no_gemfile(tmp_path: Path) -> None:
    (tmp_path / "home" / "project" / "lib").mkdir(parents=True)
    # Gemfiles in $HOME are ignored
    (tmp_path / "home" / "Gemfile").touch()
    env = rvm_env(tmp_path, "ruby-2.7.1")
    assert Rvm.to_segments(None, make_state(env)) == []


def test_rvm_not_loaded(tmp_path: Path) -> None:
    env = rvm_env(tmp_path, "ruby-2.7.1")
    del env["rvm_version"]
    with pytest.raises(SegmentError):
        Rvm.to_segments(None, make_state(env))
