"""
Utility functions for Disc Inspector.

This module provides error handling, logging and context managers for
the inspection tool.
"""

from disc_inspector.utils.error_handler import (
    handle_driver_error,
    is_fatal_error,
    get_error_severity,
)

from disc_inspector.utils.logging import (
    setup_logging,
    log_system_info,
    log_operation,
    log_error,
    log_device_info,
)

from disc_inspector.utils.context_managers import (
    DiscOperationContext,
)

__all__ = [
    # Error handling
    "handle_driver_error",
    "is_fatal_error",
    "get_error_severity",

    # Logging
    "setup_logging",
    "log_system_info",
    "log_operation",
    "log_error",
    "log_device_info",

    # Context managers
    "DiscOperationContext",
]
