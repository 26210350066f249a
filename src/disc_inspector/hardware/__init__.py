"""
Optical drive abstraction layer for disc inspection.

This module provides the device-query interface used by the inspection core.
The core never talks to a drive directly: it is handed an open device and
issues a fixed sequence of point queries against it (format guess, track
layout, audio volume, CD-TEXT, sub-channel).

Classes:
    IDiscDevice: Abstract interface for optical device implementations
    CdTextSource: Abstract per-disc CD-TEXT lookup
    FilesystemAnalysis: Filesystem details reported by the format guess
    AudioVolume: Four-channel audio volume snapshot
    SubchannelSnapshot: Q sub-channel snapshot
    Msf: Minute/second/frame position

Exceptions:
    DiscDeviceError: Base exception for all device-related errors
    LibraryNotFoundError: libcdio shared library could not be loaded
    NoDeviceError: Device or image could not be opened
    DriverError: Driver returned a failure code for a query
    TrackError: Track position query failed
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple


# =============================================================================
# Custom Exceptions
# =============================================================================

class DiscDeviceError(Exception):
    """Base exception for all disc device errors."""

    def __init__(self, message: str, device_info: Optional[str] = None):
        self.message = message
        self.device_info = device_info
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.device_info:
            return f"{self.message} [Device: {self.device_info}]"
        return self.message


class LibraryNotFoundError(DiscDeviceError):
    """Raised when the libcdio shared library cannot be loaded."""

    def __init__(self, message: str = "libcdio shared library not found"):
        super().__init__(message)


class NoDeviceError(DiscDeviceError):
    """Raised when the drive or image cannot be opened."""

    def __init__(self, message: str = "Failed to open cdio drive",
                 source: Optional[str] = None,
                 device_info: Optional[str] = None):
        self.source = source
        super().__init__(message, device_info)

    def _format_message(self) -> str:
        base = super()._format_message()
        if self.source:
            return f"{base} [Source: {self.source}]"
        return base


class DriverError(DiscDeviceError):
    """Raised when a driver query returns a failure code."""

    def __init__(self, message: str, code: int,
                 operation: Optional[str] = None,
                 device_info: Optional[str] = None):
        self.code = code
        self.operation = operation
        super().__init__(message, device_info)

    def _format_message(self) -> str:
        base = super()._format_message()
        parts = [f"Code: {self.code}"]
        if self.operation:
            parts.insert(0, f"Op: {self.operation}")
        return f"{base} [{', '.join(parts)}]"


class TrackError(DiscDeviceError):
    """Raised when a track position cannot be read."""

    def __init__(self, message: str, track: Optional[int] = None,
                 device_info: Optional[str] = None):
        self.track = track
        super().__init__(message, device_info)

    def _format_message(self) -> str:
        base = super()._format_message()
        if self.track is not None:
            return f"{base} [Track: {self.track}]"
        return base


# =============================================================================
# Enums and Constants
# =============================================================================

class DriverType(str, Enum):
    """Driver selection for opening a source."""
    UNKNOWN = "unknown"    # Let libcdio pick whatever driver accepts the source
    DEVICE = "device"      # Physical drive (platform driver)
    BINCUE = "bincue"      # CDRWIN BIN/CUE image
    NRG = "nrg"            # Nero NRG image
    CDRDAO = "cdrdao"      # cdrdao TOC image


class DriverReturnCode(IntEnum):
    """libcdio driver_return_code_t values."""
    SUCCESS = 0
    ERROR = -1
    UNSUPPORTED = -2
    UNINIT = -3
    NOT_PERMITTED = -4
    BAD_PARAMETER = -5
    BAD_POINTER = -6
    NO_DRIVER = -7
    MMC_SENSE_DATA = -8


# Sector where the format guess starts looking for a session
DEFAULT_SESSION_START = 0

# Channel order of AudioVolume.levels
VOLUME_CHANNELS = ("front left", "front right", "rear left", "rear right")


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class Msf:
    """
    Minute/second/frame position on a disc.

    Values are plain integers (already decoded from BCD). There are 75
    frames in a second.
    """
    minutes: int
    seconds: int
    frames: int

    @property
    def total_seconds(self) -> int:
        """Whole seconds from the start of the audio area."""
        return self.minutes * 60 + self.seconds

    def __str__(self) -> str:
        return f"{self.minutes:02d}:{self.seconds:02d}:{self.frames:02d}"


@dataclass(frozen=True)
class FilesystemAnalysis:
    """
    Filesystem details filled in by the format guess.

    Attributes:
        joliet_level: Joliet level (only meaningful when Joliet is detected)
        iso_label: Volume label, None when the disc reports an empty label
        isofs_size: Filesystem size in sectors (0 means not reported)
        udf_version_major: UDF major version (only meaningful for UDF)
        udf_version_minor: UDF minor version (only meaningful for UDF)
    """
    joliet_level: int = 0
    iso_label: Optional[str] = None
    isofs_size: int = 0
    udf_version_major: int = 0
    udf_version_minor: int = 0


@dataclass(frozen=True)
class AudioVolume:
    """Audio volume levels (0-255) in VOLUME_CHANNELS order."""
    levels: Tuple[int, int, int, int]

    def __post_init__(self):
        if len(self.levels) != len(VOLUME_CHANNELS):
            raise ValueError(
                f"Expected {len(VOLUME_CHANNELS)} volume levels, got {len(self.levels)}"
            )
        for level in self.levels:
            if not 0 <= level <= 255:
                raise ValueError(f"Volume level out of range: {level}")

    @property
    def channels(self) -> Tuple[Tuple[str, int], ...]:
        """Channel name and level pairs."""
        return tuple(zip(VOLUME_CHANNELS, self.levels))


@dataclass(frozen=True)
class SubchannelSnapshot:
    """
    Q sub-channel snapshot as reported by the drive.

    Attributes:
        format: Sub-channel data format code
        audio_status: Audio status code (see core.status)
        address: ADR field, what the Q channel carries
        control: 4-bit control field (see core.status.decode_control_flags)
        track: Current track number
        index: Current index within the track
        absolute: Absolute disc position
        relative: Position relative to the track start
    """
    format: int
    audio_status: int
    address: int
    control: int
    track: int
    index: int
    absolute: Msf
    relative: Msf


# =============================================================================
# Abstract Interfaces
# =============================================================================

class CdTextSource(ABC):
    """CD-TEXT block of an audio disc."""

    @abstractmethod
    def lookup(self, field: int, track: int) -> Optional[str]:
        """
        Look up a CD-TEXT value.

        Args:
            field: CD-TEXT field id (see core.cdtext.CdTextField)
            track: Track number, or 0 for the album scope

        Returns:
            The value, or None if the disc has none for this field and scope
        """
        pass


class IDiscDevice(ABC):
    """
    Abstract interface for optical device implementations.

    This interface allows different backends (libcdio, test doubles) to be
    used interchangeably by the inspection core.
    """

    @property
    @abstractmethod
    def source(self) -> Optional[str]:
        """Device path or image file, None for the default drive."""
        pass

    @property
    @abstractmethod
    def driver(self) -> DriverType:
        """Driver used to open the source."""
        pass

    @abstractmethod
    def open(self) -> None:
        """
        Open the device.

        Raises:
            NoDeviceError: If the device or image cannot be opened
            LibraryNotFoundError: If the backend library is missing
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Release the device handle.

        Should be safe to call multiple times.
        """
        pass

    @abstractmethod
    def is_open(self) -> bool:
        """Check if the device handle is currently held."""
        pass

    @abstractmethod
    def guess_format(self, start_sector: int,
                     first_track: int) -> Tuple[int, FilesystemAnalysis]:
        """
        Analyse the disc and guess its format.

        Args:
            start_sector: Session start sector to analyse from
            first_track: First track number on the disc

        Returns:
            Tuple of (raw format guess bitmask, FilesystemAnalysis)
        """
        pass

    @abstractmethod
    def get_first_track_number(self) -> int:
        """Get the first track number on the disc."""
        pass

    @abstractmethod
    def get_track_count(self) -> int:
        """Get the number of tracks on the disc."""
        pass

    @abstractmethod
    def get_track_start_seconds(self, track: int) -> int:
        """
        Get the absolute start of a track in whole seconds.

        Valid for track numbers from the first track up to one past the
        last track, which addresses the lead-out.

        Raises:
            TrackError: If the position cannot be read
        """
        pass

    @abstractmethod
    def get_audio_volume(self) -> AudioVolume:
        """
        Read the drive's audio volume levels.

        Raises:
            DriverError: If the driver reports a failure
        """
        pass

    @abstractmethod
    def get_cdtext(self) -> Optional[CdTextSource]:
        """Get the disc's CD-TEXT block, None if the disc has none."""
        pass

    @abstractmethod
    def read_subchannel(self) -> SubchannelSnapshot:
        """
        Read the current Q sub-channel.

        Raises:
            DriverError: If the driver reports a failure
        """
        pass


__all__ = [
    # Exceptions
    "DiscDeviceError",
    "LibraryNotFoundError",
    "NoDeviceError",
    "DriverError",
    "TrackError",

    # Enums and constants
    "DriverType",
    "DriverReturnCode",
    "DEFAULT_SESSION_START",
    "VOLUME_CHANNELS",

    # Data classes
    "Msf",
    "FilesystemAnalysis",
    "AudioVolume",
    "SubchannelSnapshot",

    # Interfaces
    "CdTextSource",
    "IDiscDevice",
]
