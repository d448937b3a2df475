"""Subcommand dispatcher for keyclip.

Usage:
    keyclip render   --manifest ... --output ...
    keyclip inspect  --manifest ... [--at T]
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="keyclip",
        description="Keyframe timeline compiler and preview renderer.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("render", help="Render a scene manifest to mp4 or png")
    subparsers.add_parser("inspect", help="Print the compiled clips of a scene manifest")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "render":
        from .cli import main as render_main
        render_main(remaining)
    elif parsed.command == "inspect":
        from .inspect_cli import main as inspect_main
        inspect_main(remaining)


if __name__ == "__main__":
    main()
