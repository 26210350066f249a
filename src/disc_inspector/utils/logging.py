"""
Logging configuration for Disc Inspector.

Provides structured logging with system information capture for debugging
and troubleshooting. The report itself goes to stdout, so console logging
is written to stderr.
"""

import logging
import sys
import platform
from pathlib import Path
from typing import Optional


def setup_logging(log_file: Optional[str] = None, level: int = logging.DEBUG,
                  console_level: int = logging.WARNING) -> None:
    """
    Configure structured logging for the application.

    Sets up optional file-based logging and a console handler, and captures
    system information on startup for troubleshooting purposes.

    Args:
        log_file: Path to log file (default: None, console only)
        level: Logging level for the log file (default: logging.DEBUG)
        console_level: Logging level for the console (default: logging.WARNING)

    Example:
        >>> setup_logging("disc_inspector.log", console_level=logging.INFO)
        >>> logging.info("Application started")
    """
    root = logging.getLogger()

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logging.basicConfig(
            filename=log_file,
            level=level,
            format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        root.setLevel(console_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(console_formatter)
    root.addHandler(console_handler)

    log_system_info()


def log_system_info() -> None:
    """
    Log system information for debugging purposes.

    Captures platform, Python version and the libcdio library location
    to aid in troubleshooting platform-specific issues.
    """
    from disc_inspector.hardware.libcdio_device import libcdio_location

    logging.info("=" * 60)
    logging.info("Disc Inspector - System Information")
    logging.info("=" * 60)
    logging.info(f"Platform: {platform.system()} {platform.release()}")
    logging.info(f"Machine: {platform.machine()}")
    logging.info(f"Python version: {sys.version}")
    logging.info(f"libcdio: {libcdio_location() or 'not found'}")
    logging.info("=" * 60)


def log_operation(operation: str, details: str, level: int = logging.INFO) -> None:
    """
    Log a device operation with details.

    Args:
        operation: Name of the operation (e.g., "guess_format", "read_subchannel")
        details: Additional details about the operation
        level: Logging level (default: logging.INFO)

    Example:
        >>> log_operation("guess_format", "0x1001 -> AUDIO", logging.DEBUG)
    """
    logging.log(level, f"{operation}: {details}")


def log_error(operation: str, error_code: int, error_message: str) -> None:
    """
    Log an error with operation context.

    Args:
        operation: Name of the operation that failed
        error_code: libcdio driver return code
        error_message: Error message or description

    Example:
        >>> log_error("audio_get_volume", -2, "Operation not supported")
    """
    logging.error(f"{operation} failed - Error {error_code}: {error_message}")


def log_device_info(source: Optional[str], driver: str, track_count: int,
                    first_track: int) -> None:
    """
    Log device information.

    Args:
        source: Device path or image file (None for the default drive)
        driver: Driver name
        track_count: Number of tracks on the disc
        first_track: First track number

    Example:
        >>> log_device_info('/dev/sr0', 'device', 12, 1)
    """
    logging.info(f"Device: {source or 'default device'} ({driver})")
    logging.info(f"Tracks: {track_count} starting at {first_track}")
