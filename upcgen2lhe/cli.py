"""
Command-line interface for upcgen2lhe.

Usage:
    upcgen2lhe <INPUT_FILE> <BEAM_1_E> <BEAM_2_E>

The LHE file is written to the current directory as <input stem>.lhe.
"""

from __future__ import annotations

import argparse
import sys

import upcgen2lhe


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        # Any usage problem is exit status 1, reported on stdout
        print(f"Invalid input parameters! ({message})")
        self.print_usage(sys.stdout)
        self.exit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="upcgen2lhe",
        description="Convert UPCgen HEPMC output to the Les Houches Event format. "
        "The output <input stem>.lhe is written to the current directory.",
    )
    parser.add_argument("input", metavar="INPUT_FILE", help="UPCgen ASCII event file")
    parser.add_argument("beam_energy1", metavar="BEAM_1_E", type=float, help="Beam 1 energy [GeV]")
    parser.add_argument("beam_energy2", metavar="BEAM_2_E", type=float, help="Beam 2 energy [GeV]")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        upcgen2lhe.convert(args.input, args.beam_energy1, args.beam_energy2)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
