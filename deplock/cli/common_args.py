"""
Common CLI arguments and help messages shared across deplock commands.
"""

from deplock.config import DEPENDENCY_LOCKING_FOLDER, DEFAULT_SETTINGS_FILE


HELP_MESSAGES = {
    'resolution_file': (
        "YAML or JSON file with the components each configuration resolved to. "
        "\nExample:"
        "\n    configurations:"
        "\n      compile:"
        "\n        components: ['org.example:lib:1.2', {project: ':core'}]"
    ),
    'project_dir': "Project directory. Relative lock directories are resolved against it.",
    'lock_dir': f"Lock directory (default: <project-dir>/{DEPENDENCY_LOCKING_FOLDER}).",
    'config_file': f"Path to YAML settings file (default: {DEFAULT_SETTINGS_FILE} if present).",
    'write_locks': (
        "Run the dependency lock task before resolving: every resolved configuration "
        "has its lock file replaced with the new resolution."
    ),
    'freeze_mode': (
        "Decide between validating and writing once, before any configuration resolves."
    ),
    'no_validate_before_write': (
        "When writing locks, do not fail on an out-of-date lock; regenerate it instead."
    ),
    'jobs': "Number of configurations resolved concurrently.",
    'configuration': "Configuration name, e.g. compileClasspath.",
}

PROGRAM_DESCRIPTIONS = {
    'resolve': "Replay a recorded resolution through the locking hooks, validating or writing lock files",
    'verify': "Report every difference between recorded resolutions and lock files without failing fast",
    'show': "Print the locked modules of one configuration",
    'list': "List configurations that have a lock file",
}


def add_universal_arguments(parser):
    """Add arguments common to all commands.

    Args:
        parser: Argparse parser to add arguments to.
    """
    standard_args = parser.add_argument_group("Standard Arguments")
    standard_args.add_argument(
        '--project-dir', '-p',
        type=str,
        default=".",
        help=HELP_MESSAGES['project_dir']
    )
    standard_args.add_argument(
        '--lock-dir', '-l',
        type=str,
        help=HELP_MESSAGES['lock_dir']
    )
    standard_args.add_argument(
        '--config-file', '-c',
        type=str,
        help=HELP_MESSAGES['config_file']
    )

    output_control = parser.add_argument_group("Output Control")
    output_control.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )
    output_control.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose mode"
    )
    output_control.add_argument(
        "--stream-log-level",
        type=str,
        default=None,
        help="Log level for console output (e.g. DEBUG, VERBOSE, INFO, STATUS)"
    )


def add_resolution_arguments(parser):
    """Add arguments for commands that replay a resolution document."""
    parser.add_argument(
        'resolution_file',
        type=str,
        help=HELP_MESSAGES['resolution_file']
    )
    parser.add_argument(
        '--jobs', '-j',
        type=int,
        help=HELP_MESSAGES['jobs']
    )
