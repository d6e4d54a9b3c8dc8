"""Command-line demo: send commands through one connection and log the bulks."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence

from bulkasync.bulk import connect, disconnect, receive

DEMO_COMMANDS = ("cmd1", "cmd2", "cmd3", "{", "cmd4", "cmd5", "}", "cmd6", "cmd7")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bulkasync",
        description="Group commands into bulks and log them to the console and a file.",
    )
    parser.add_argument("-n", "--bulk-size", type=int, default=3, help="commands per bulk")
    parser.add_argument(
        "--delay", type=float, default=1.0, help="seconds to wait before disconnecting"
    )
    parser.add_argument("commands", nargs="*", help="commands to send (a demo set by default)")
    args = parser.parse_args(argv)
    if args.bulk_size < 0:
        parser.error("--bulk-size must not be negative")
    if args.delay < 0:
        parser.error("--delay must not be negative")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    commands = args.commands or list(DEMO_COMMANDS)

    print("Main -- Starting test...")
    context = connect(args.bulk_size)
    print(f"Main -- Context created: {id(context):#x}")

    for command in commands:
        receive(context, command)
    print("Main -- Commands sent.")

    time.sleep(args.delay)

    print("Main -- Disconnecting...")
    disconnect(context)
    print("Main -- Test finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())