#!/usr/bin/env python3
"""
deplock - Main Entry Point

Replays recorded resolutions through the locking hooks and inspects lock
files, with error handling that maps each failure kind to an exit code.
"""

import signal
import sys
import traceback

from deplock.build import Build, LocalProject
from deplock.cli_parser import parse_arguments
from deplock.config import EXIT_CODE, apply_cli_overrides, load_settings
from deplock.dl_logging import setup_logging, apply_logging_options
from deplock.errors import (
    DeplockException,
    ConfigurationError,
    IOFailure,
    LockOutOfDateException,
    MalformedLockEntryError,
)
from deplock.error_messages import format_error, ErrorFormatter
from deplock.hooks import resolved_modules
from deplock.lockfile import LockStore, compare_lock, format_validation_report
from deplock.plugin import DependencyLockingPlugin
from deplock.progress import progress_context
from deplock.resolution_file import load_document


def signal_handler(sig, frame):
    """Exit on SIGINT/SIGTERM; lock files are replaced atomically so none is left half written."""
    sys.exit(EXIT_CODE.INTERRUPTED)


def handle_resolve_command(args, settings, logger) -> int:
    """Resolve every configuration of a resolution document through the plugin.

    Returns:
        Exit code (0 for success).

    Raises:
        DeplockException: The first failure, by configuration name.
    """
    document = load_document(args.resolution_file)
    project = LocalProject(args.project_dir)
    context = DependencyLockingPlugin(settings, logger).apply(project)
    document.create_configurations(project)

    if args.write_locks:
        context.lock_task.run()
    context.start_build()
    logger.verbose(f"Lock directory: {context.store.root}")

    names = document.resolvable_names()
    build = Build(project, document.resolve, logger, max_workers=settings.max_workers)
    with progress_context("Resolving configurations", total=len(names), logger=logger) as (update, _):
        result = build.resolve_all(names, on_done=lambda name: update())

    if not result.success:
        raise result.first_failure()

    if context.trigger.should_write():
        logger.status(f"Wrote lock files for {len(result.resolved)} configuration(s) to {context.store.root}")
    else:
        logger.status(f"{len(result.resolved)} configuration(s) match their lock files")
    return EXIT_CODE.SUCCESS


def handle_verify_command(args, settings, logger) -> int:
    """Compare every configuration with its lock and report all differences."""
    document = load_document(args.resolution_file)
    store = LockStore(settings.lock_root(args.project_dir), logger=logger)

    failed = []
    for name in document.resolvable_names():
        snapshot = resolved_modules(document.resolve(name, []))
        result = compare_lock(name, store.read(name), snapshot, locked=store.exists(name))
        report = format_validation_report(result)

        strict_failure = args.strict and (not result.locked or result.unlocked_modules)
        if result.valid and not strict_failure:
            logger.verbose(report)
            logger.status(result.summary)
        else:
            logger.error(report)
            failed.append(name)

    if failed:
        logger.error(f"Lock files out of date for: {', '.join(failed)}")
        logger.info("Regenerate them with: deplock resolve --write-locks " + args.resolution_file)
        return EXIT_CODE.LOCK_OUT_OF_DATE
    return EXIT_CODE.SUCCESS


def handle_show_command(args, settings, logger) -> int:
    store = LockStore(settings.lock_root(args.project_dir), logger=logger)
    if not store.exists(args.configuration):
        logger.error(f"No lock file for configuration '{args.configuration}' in {store.root}")
        return EXIT_CODE.FAILURE
    for entry in store.read_entries(args.configuration):
        print(entry.notation)
    return EXIT_CODE.SUCCESS


def handle_list_command(args, settings, logger) -> int:
    store = LockStore(settings.lock_root(args.project_dir), logger=logger)
    names = store.configurations()
    if not names:
        logger.warning(f"No lock files in {store.root}")
    for name in names:
        print(name)
    return EXIT_CODE.SUCCESS


COMMAND_HANDLERS = {
    'resolve': handle_resolve_command,
    'verify': handle_verify_command,
    'show': handle_show_command,
    'list': handle_list_command,
}


def _main_impl(args, logger):
    settings = apply_cli_overrides(load_settings(args.config_file), args)
    logger.debug(f"Settings: {settings}")
    return COMMAND_HANDLERS[args.program](args, settings, logger)


def main(argv=None):
    """
    Main entry point with comprehensive error handling.

    Each deplock exception kind is logged with its suggestion and mapped to
    its own exit code.
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger = setup_logging("deplock")
    args = parse_arguments(argv)
    apply_logging_options(logger, args)
    error_formatter = ErrorFormatter(use_colors=sys.stderr.isatty())

    try:
        return _main_impl(args, logger)

    except LockOutOfDateException as e:
        logger.error(error_formatter.format_exception(e))
        return EXIT_CODE.LOCK_OUT_OF_DATE

    except IOFailure as e:
        logger.error(error_formatter.format_exception(e))
        return EXIT_CODE.IO_FAILURE

    except (ConfigurationError, MalformedLockEntryError) as e:
        logger.error(error_formatter.format_exception(e))
        return EXIT_CODE.CONFIG_ERROR

    except DeplockException as e:
        logger.error(error_formatter.format_exception(e))
        return EXIT_CODE.FAILURE

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_CODE.INTERRUPTED

    except Exception as e:
        logger.error(format_error('INTERNAL_ERROR', error=str(e)))
        if getattr(args, "debug", False):
            logger.debug("Stack trace:")
            traceback.print_exc()
        else:
            logger.info("Run with --debug for full stack trace")
        return EXIT_CODE.FAILURE


if __name__ == "__main__":
    sys.exit(main())
