from __future__ import annotations
import argparse
import json
import logging
import os
from pathlib import Path
import socket
import sys
from . import __url__, __version__
from .ansi import STYLERS
from .config import CONFIG_FILENAME, PromptrConfig, config_dir, load_config
from .pipeline import load_segments
from .render import render
from .shell import Shell
from .state import ApplicationState


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="promptr",
        description=(
            "Colorful command prompt generator."
            f"  Visit <{__url__}> for more information."
        ),
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        metavar="FILE",
        help="Read configuration from FILE instead of the default location",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report errors, not warnings",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report debugging information",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = parser.add_subparsers(title="commands", dest="command", required=True)
    p_prompt = sub.add_parser(
        "prompt",
        help="Generate the prompt string (called by the shell, not by you)",
    )
    p_prompt.add_argument(
        "--styler",
        choices=list(STYLERS.keys()),
        default="bash",
        help=(
            'Format escape sequences for Bash\'s PS1 ("bash") or for direct'
            ' display ("ansi")  [default: bash]'
        ),
    )
    p_segment = sub.add_parser(
        "segment",
        help="Show the colors, text, & separator of the segment at index IDX",
    )
    p_segment.add_argument("idx", type=int, metavar="IDX")
    sub.add_parser("current-config", help="Print the current configuration as JSON")
    sub.add_parser("default-config", help="Print the default configuration as JSON")
    sub.add_parser("location", help="Print the location of the configuration directory")
    sub.add_parser(
        "init",
        help=(
            "Print shell code that enables promptr, saving a default"
            " configuration first.  Run as: source <(promptr init)"
        ),
    )
    sub.add_parser(
        "load",
        help="Like init, but without creating a configuration file",
    )
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        format="promptr: %(levelname)s: %(message)s",
        level=level,
        stream=sys.stderr,
    )

    env = dict(os.environ)
    config_path = args.config or config_dir(env) / CONFIG_FILENAME

    if args.command == "prompt":
        config = load_config(config_path)
        state = ApplicationState.build(config.theme, env)
        segments = load_segments(config.segments, state)
        print(
            render(
                segments,
                styler=STYLERS[args.styler](),
                thin_separator_fg=config.theme.thin_separator_fg,
            ),
            end="",
        )
    elif args.command == "segment":
        config = load_config(config_path)
        # Fill in what the shell would normally pass to `promptr prompt`
        env.setdefault("code", "0")
        env.setdefault("hostname", socket.gethostname())
        state = ApplicationState.build(config.theme, env)
        segments = load_segments(config.segments, state)
        try:
            seg = segments[args.idx]
        except IndexError:
            sys.exit(f"promptr: Segment not found, count={len(segments)}")
        print(seg)
    elif args.command == "current-config":
        config = load_config(config_path, quiet=True)
        print(json.dumps(config.dump(), indent=2, ensure_ascii=False))
    elif args.command == "default-config":
        print(json.dumps(PromptrConfig().dump(full=True), indent=2, ensure_ascii=False))
    elif args.command == "location":
        cfgdir = config_path.parent
        try:
            cfgdir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            sys.exit(f"promptr: Could not create {cfgdir}: {e}")
        print(cfgdir)
    else:
        try:
            shell = Shell.detect(env)
        except ValueError as e:
            sys.exit(f"promptr: {e}")
        if Path(sys.argv[0]).name == "promptr":
            self_exe = os.path.abspath(sys.argv[0])
        else:
            self_exe = "promptr"
        if args.command == "init":
            print(shell.init_script(self_exe), end="")
        else:
            print(shell.load_script(self_exe), end="")


if __name__ == "__main__":
    main()
