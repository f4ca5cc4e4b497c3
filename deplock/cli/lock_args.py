"""
CLI argument builders for the lock commands.

Provides arguments for:
- deplock resolve: Replay a resolution through the hooks (validate or write)
- deplock verify: Full report of lock differences
"""

from deplock.cli.common_args import (
    HELP_MESSAGES,
    add_resolution_arguments,
    add_universal_arguments,
)


def add_resolve_arguments(parser):
    """Add resolve command arguments to the parser."""
    add_resolution_arguments(parser)
    mode_args = parser.add_argument_group("Lock Mode")
    mode_args.add_argument(
        '--write-locks',
        action='store_true',
        help=HELP_MESSAGES['write_locks']
    )
    mode_args.add_argument(
        '--freeze-mode',
        action='store_true',
        help=HELP_MESSAGES['freeze_mode']
    )
    mode_args.add_argument(
        '--no-validate-before-write',
        action='store_true',
        help=HELP_MESSAGES['no_validate_before_write']
    )
    add_universal_arguments(parser)
    return parser


def add_verify_arguments(parser):
    """Add verify command arguments to the parser."""
    add_resolution_arguments(parser)
    parser.add_argument(
        '--strict',
        action='store_true',
        help="Also fail when a resolved module is missing from the lock, or a configuration has no lock"
    )
    add_universal_arguments(parser)
    return parser
