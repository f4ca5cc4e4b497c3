"""
Utility CLI argument builders for read-only lock commands.
"""

from deplock.cli.common_args import (
    HELP_MESSAGES,
    add_universal_arguments,
)


def add_show_arguments(parser):
    """Add show command arguments to the parser."""
    parser.add_argument(
        'configuration',
        type=str,
        help=HELP_MESSAGES['configuration']
    )
    add_universal_arguments(parser)
    return parser


def add_list_arguments(parser):
    """Add list command arguments to the parser."""
    add_universal_arguments(parser)
    return parser
