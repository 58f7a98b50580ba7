"""CLI entry point: argument parsing and dispatch."""

import argparse
import sys
from pathlib import Path

from .backend import BackendError
from .input_history import append_history, clear_history, history_names, load_history
from .log import configure_logging
from .settings import SETTINGS


def cmd_ls(args: argparse.Namespace) -> int:
    for i, entry in enumerate(load_history(args.name)):
        print(f"{i}\t{entry}")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    entries = append_history(args.name, args.text)
    if not entries:
        print("history is disabled or the entry is blank", file=sys.stderr)
        return 1
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    if not clear_history(args.name):
        print(f"no history named {args.name!r}", file=sys.stderr)
        return 1
    return 0


def cmd_names(args: argparse.Namespace) -> int:
    for name in history_names():
        print(name)
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    from .ui import cmd_demo as run_demo

    run_demo(args)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="histpick",
        description="Inspect and pick from named input histories",
    )
    sub = parser.add_subparsers(dest="cmd")

    p_ls = sub.add_parser("ls", help="List entries of a history, oldest first")
    p_ls.add_argument("name", help="History name")
    p_ls.set_defaults(func=cmd_ls)

    p_add = sub.add_parser("add", help="Append an entry to a history")
    p_add.add_argument("name", help="History name")
    p_add.add_argument("text", help="Entry text")
    p_add.set_defaults(func=cmd_add)

    p_clear = sub.add_parser("clear", help="Delete a history")
    p_clear.add_argument("name", help="History name")
    p_clear.set_defaults(func=cmd_clear)

    p_names = sub.add_parser("names", help="List stored history names")
    p_names.set_defaults(func=cmd_names)

    p_demo = sub.add_parser("demo", help="Interactive demo with history inputs")
    p_demo.add_argument(
        "--history-file", type=Path, help="History file to use instead of the default"
    )
    p_demo.set_defaults(func=cmd_demo)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(SETTINGS)
    func = getattr(args, "func", cmd_demo)
    try:
        return func(args)
    except BackendError as exc:
        print(f"histpick: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
