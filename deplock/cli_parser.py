"""
CLI argument parsing for deplock.

This module provides the main argument parsing entry point,
using modular argument builders from the cli package.
"""

import argparse
import sys

from deplock import VERSION
from deplock.cli import (
    PROGRAM_DESCRIPTIONS,
    add_resolve_arguments,
    add_verify_arguments,
    add_show_arguments,
    add_list_arguments,
)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="deplock",
        description="Dependency lock files: pin, validate and regenerate resolved module versions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    sub_programs = parser.add_subparsers(dest="program", required=True)

    builders = {
        'resolve': add_resolve_arguments,
        'verify': add_verify_arguments,
        'show': add_show_arguments,
        'list': add_list_arguments,
    }
    for name, builder in builders.items():
        sub_parser = sub_programs.add_parser(
            name,
            description=PROGRAM_DESCRIPTIONS[name],
            help=PROGRAM_DESCRIPTIONS[name],
            formatter_class=argparse.RawTextHelpFormatter,
        )
        builder(sub_parser)
    return parser


def parse_arguments(argv=None):
    """Parse command-line arguments for deplock.

    Returns:
        argparse.Namespace: Parsed and validated arguments.
    """
    parser = build_parser()
    if argv is None and len(sys.argv) == 1:
        parser.print_help(sys.stderr)
        sys.exit(1)

    args = parser.parse_args(argv)
    validate_args(parser, args)
    return args


def validate_args(parser, args):
    if getattr(args, "jobs", None) is not None and args.jobs < 1:
        parser.error("--jobs must be at least 1")
    if getattr(args, "no_validate_before_write", False) and not getattr(args, "write_locks", False):
        parser.error("--no-validate-before-write only applies together with --write-locks")
