"""
Context managers for Disc Inspector.

Provides scoped device acquisition: the handle is opened once on entry and
released on every exit path, including exceptions raised mid-inspection.
"""

import logging

from disc_inspector.hardware import IDiscDevice


class DiscOperationContext:
    """
    Context manager for safe disc operations.

    Handles opening/closing the device and ensures the handle is released
    even if an exception occurs.

    Attributes:
        device: Device to open
        device_label: Source description used in log messages

    Example:
        >>> with DiscOperationContext(LibcdioDevice('/dev/sr0')) as device:
        ...     report = inspect_disc(device)
        >>> # Handle automatically released
    """

    def __init__(self, device: IDiscDevice):
        """
        Initialize disc operation context.

        Args:
            device: Device to open
        """
        self.device = device
        self.device_label = device.source or "default device"

    def __enter__(self) -> IDiscDevice:
        """
        Enter context - open device.

        Returns:
            The open device

        Raises:
            DiscDeviceError: If device cannot be opened
        """
        logging.debug(
            f"Opening {self.device_label} "
            f"(driver={self.device.driver.value})"
        )

        try:
            self.device.open()
        except Exception as e:
            logging.error(f"Failed to open device: {e}")
            raise

        logging.debug("Device opened successfully")
        return self.device

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit context - release the handle.

        Returns:
            False to not suppress exceptions
        """
        if self.device.is_open():
            try:
                self.device.close()
                logging.debug("Device closed")
            except Exception as close_error:
                logging.error(f"Failed to close device: {close_error}")

        # Don't suppress exceptions
        return False
