"""
Main entry point for Disc Inspector.

This module provides the main() function: it parses the command line,
configures logging, opens the drive or image, runs the inspection and
renders the report.

Exit codes:
    0: Report printed
    1: Device could not be opened (nothing else is printed)
    2: Report printed, but the track positions were inconsistent
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console

from disc_inspector import __version__
from disc_inspector.analysis.reporter import render_json, render_report
from disc_inspector.core.inspector import inspect_disc
from disc_inspector.core.settings import InspectorSettings, OutputFormat, load_settings
from disc_inspector.hardware import DiscDeviceError, DriverType, IDiscDevice
from disc_inspector.hardware.libcdio_device import LibcdioDevice
from disc_inspector.utils.context_managers import DiscOperationContext
from disc_inspector.utils.logging import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_DATA_ERROR = 2

DeviceFactory = Callable[[Optional[str], DriverType], IDiscDevice]


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="disc-inspector",
        description="Report filesystem, format and audio track metadata of an optical disc.",
    )
    parser.add_argument(
        "source", nargs="?", default=None,
        help="Device path or image file (.cue, .nrg, .toc); default drive if omitted",
    )
    parser.add_argument(
        "--driver", choices=[d.value for d in DriverType], default=None,
        help="Driver used to open the source (default: device)",
    )
    parser.add_argument(
        "--format", dest="output_format", choices=[f.value for f in OutputFormat],
        default=None, help="Report format (default: text)",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="Settings file to use instead of the default")
    parser.add_argument("--log-file", default=None, help="Write a debug log to this file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log progress to stderr")
    parser.add_argument("--no-color", action="store_true", help="Disable styled output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_arguments(settings: InspectorSettings,
                    args: argparse.Namespace) -> InspectorSettings:
    """Override settings with the options given on the command line."""
    overrides = {}
    if args.source is not None:
        overrides['source'] = args.source
    if args.driver is not None:
        overrides['driver'] = DriverType(args.driver)
    if args.output_format is not None:
        overrides['output_format'] = OutputFormat(args.output_format)
    if args.log_file is not None:
        overrides['log_file'] = args.log_file
    if args.verbose:
        overrides['log_level'] = "INFO"
    if args.no_color:
        overrides['color'] = False
    return settings.model_copy(update=overrides)


def settings_from_arguments(args: argparse.Namespace) -> InspectorSettings:
    """
    Build the effective settings for a run.

    A settings file is only read when --config names one; otherwise the
    defaults apply and only the command-line options change them.
    """
    base = load_settings(args.config) if args.config is not None else InspectorSettings()
    return apply_arguments(base, args)


def run(settings: InspectorSettings, console: Console,
        device_factory: DeviceFactory = LibcdioDevice) -> int:
    """
    Inspect one disc and render the report.

    Args:
        settings: Effective settings
        console: Console for the report
        device_factory: Builds the device from (source, driver)

    Returns:
        Process exit code
    """
    device = device_factory(settings.source, settings.driver)

    try:
        with DiscOperationContext(device) as open_device:
            report = inspect_disc(
                open_device,
                normalize_cdtext_labels=settings.normalize_cdtext_labels,
            )
    except DiscDeviceError as e:
        console.print(f"[Error] {e}", style="bold red", markup=False, highlight=False)
        return EXIT_FATAL

    if settings.output_format is OutputFormat.JSON:
        render_json(report, console)
    else:
        render_report(report, console)

    if report.has_data_error:
        return EXIT_DATA_ERROR
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for Disc Inspector.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    settings = settings_from_arguments(args)

    setup_logging(settings.log_file, console_level=settings.log_level_value)

    console = Console(
        highlight=False,
        soft_wrap=True,
        no_color=not settings.color,
    )
    return run(settings, console)


if __name__ == "__main__":
    sys.exit(main())
