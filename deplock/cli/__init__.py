"""
CLI argument builders for deplock.

Modules:
    - common_args: Shared help messages and universal arguments
    - lock_args: resolve and verify arguments
    - utility_args: show and list arguments
"""

from deplock.cli.common_args import (
    HELP_MESSAGES,
    PROGRAM_DESCRIPTIONS,
    add_universal_arguments,
    add_resolution_arguments,
)

from deplock.cli.lock_args import add_resolve_arguments, add_verify_arguments
from deplock.cli.utility_args import add_show_arguments, add_list_arguments

__all__ = [
    # Common
    'HELP_MESSAGES',
    'PROGRAM_DESCRIPTIONS',
    'add_universal_arguments',
    'add_resolution_arguments',
    # Command argument builders
    'add_resolve_arguments',
    'add_verify_arguments',
    'add_show_arguments',
    'add_list_arguments',
]
