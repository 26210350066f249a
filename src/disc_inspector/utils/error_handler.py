"""
Error handling utilities for Disc Inspector.

Provides libcdio driver return code handling with context-aware messages
and severity classification.
"""

from disc_inspector.hardware import DriverReturnCode


_DRIVER_MESSAGES = {
    DriverReturnCode.ERROR: "Driver error - the drive rejected the request",
    DriverReturnCode.UNSUPPORTED: "Operation not supported by this driver or image type",
    DriverReturnCode.UNINIT: "Driver not initialized",
    DriverReturnCode.NOT_PERMITTED: (
        "Operation not permitted. Check:\n"
        "1. Read access to the device node?\n"
        "2. Another program holding the drive?"
    ),
    DriverReturnCode.BAD_PARAMETER: "Bad parameter passed to driver",
    DriverReturnCode.BAD_POINTER: "Bad pointer passed to driver",
    DriverReturnCode.NO_DRIVER: "No driver available for this source",
    DriverReturnCode.MMC_SENSE_DATA: "Drive returned MMC sense data - no disc or medium error",
}


def handle_driver_error(code: int, operation: str = "driver operation") -> str:
    """
    Centralized error handling with context-aware messages.

    Args:
        code: libcdio driver return code
        operation: Description of the operation that failed

    Returns:
        Formatted error message

    Example:
        >>> handle_driver_error(-2, "read sub-channel")
        'read sub-channel failed: Operation not supported by this driver or image type (-2)'
    """
    try:
        message = _DRIVER_MESSAGES.get(DriverReturnCode(code), f"Unknown error {code}")
    except ValueError:
        message = f"Unknown error {code}"
    return f"{operation} failed: {message} ({code})"


def is_fatal_error(code: int) -> bool:
    """
    Determine if a driver error means the device is unusable.

    Fatal codes indicate no query can succeed; anything else only loses the
    section of the report the failing query feeds.

    Args:
        code: libcdio driver return code

    Returns:
        True if error is fatal
    """
    fatal_errors = {
        DriverReturnCode.UNINIT,
        DriverReturnCode.NO_DRIVER,
    }
    return code in fatal_errors


def get_error_severity(code: int) -> str:
    """
    Get the severity level of a driver return code.

    Args:
        code: libcdio driver return code

    Returns:
        Severity level: "critical", "warning", "error", or "info"
    """
    if code == DriverReturnCode.SUCCESS:
        return "info"

    if is_fatal_error(code):
        return "critical"

    # The query is valid but this drive or image type can't answer it
    if code == DriverReturnCode.UNSUPPORTED:
        return "warning"

    return "error"
