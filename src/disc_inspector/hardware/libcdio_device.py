"""
libcdio device driver for optical drives and disc images.

This module provides the LibcdioDevice class which binds the system libcdio
shared library through ctypes and exposes it through the IDiscDevice
interface. libcdio handles both physical drives and image files (BIN/CUE,
NRG, cdrdao TOC), so the same class serves both.

Key Features:
    - Default-drive or explicit source selection
    - Filesystem/format guess with ISO 9660, Joliet and UDF details
    - Track layout, CD-TEXT, audio volume and sub-channel queries
    - Full context manager support for safe handle release

Example:
    with LibcdioDevice() as device:
        first = device.get_first_track_number()
        guess, analysis = device.guess_format(0, first)
"""

from __future__ import annotations

import ctypes
import logging
import os
from ctypes.util import find_library
from typing import Optional, Tuple

from . import (
    IDiscDevice,
    CdTextSource,
    DriverType,
    DriverReturnCode,
    DriverError,
    LibraryNotFoundError,
    NoDeviceError,
    TrackError,
    Msf,
    FilesystemAnalysis,
    AudioVolume,
    SubchannelSnapshot,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

LIBCDIO_NAME = "cdio"

# driver_id_t values (libcdio 2.x device.h)
DRIVER_IDS = {
    DriverType.UNKNOWN: 0,
    DriverType.CDRDAO: 8,
    DriverType.BINCUE: 9,
    DriverType.NRG: 10,
    DriverType.DEVICE: 11,
}

# track_t value libcdio returns when the TOC cannot be read
CDIO_INVALID_TRACK = 0xFF

# Length of cdio_iso_analysis_t.iso_label (32 characters + NUL)
ISO_LABEL_SIZE = 33


# =============================================================================
# C Structures
# =============================================================================

class _MsfStruct(ctypes.Structure):
    """msf_t: BCD-encoded minute/second/frame."""
    _fields_ = [
        ("m", ctypes.c_uint8),
        ("s", ctypes.c_uint8),
        ("f", ctypes.c_uint8),
    ]


class _IsoAnalysisStruct(ctypes.Structure):
    """cdio_iso_analysis_t."""
    _fields_ = [
        ("joliet_level", ctypes.c_uint),
        ("iso_label", ctypes.c_char * ISO_LABEL_SIZE),
        ("isofs_size", ctypes.c_uint),
        ("UDFVerMinor", ctypes.c_uint8),
        ("UDFVerMajor", ctypes.c_uint8),
    ]


class _AudioVolumeStruct(ctypes.Structure):
    """cdio_audio_volume_t."""
    _fields_ = [
        ("level", ctypes.c_uint8 * 4),
    ]


class _SubchannelStruct(ctypes.Structure):
    """cdio_subchannel_t (address and control share one byte)."""
    _fields_ = [
        ("format", ctypes.c_uint8),
        ("audio_status", ctypes.c_uint8),
        ("address", ctypes.c_uint8, 4),
        ("control", ctypes.c_uint8, 4),
        ("track", ctypes.c_uint8),
        ("index", ctypes.c_uint8),
        ("abs_addr", _MsfStruct),
        ("rel_addr", _MsfStruct),
    ]


# =============================================================================
# Library Loading
# =============================================================================

_library: Optional[ctypes.CDLL] = None


def from_bcd8(value: int) -> int:
    """Decode a two-digit BCD byte."""
    return (value >> 4) * 10 + (value & 0x0F)


def msf_from_struct(msf: _MsfStruct) -> Msf:
    """Convert a BCD msf_t into an Msf."""
    return Msf(
        minutes=from_bcd8(msf.m),
        seconds=from_bcd8(msf.s),
        frames=from_bcd8(msf.f),
    )


def _declare_prototypes(lib: ctypes.CDLL) -> None:
    """Set argument and return types for every libcdio call we make."""
    handle = ctypes.c_void_p

    lib.cdio_open.argtypes = [ctypes.c_char_p, ctypes.c_int]
    lib.cdio_open.restype = handle

    lib.cdio_destroy.argtypes = [handle]
    lib.cdio_destroy.restype = None

    lib.cdio_guess_cd_type.argtypes = [
        handle, ctypes.c_int32, ctypes.c_uint8,
        ctypes.POINTER(_IsoAnalysisStruct),
    ]
    lib.cdio_guess_cd_type.restype = ctypes.c_int

    lib.cdio_get_first_track_num.argtypes = [handle]
    lib.cdio_get_first_track_num.restype = ctypes.c_uint8

    lib.cdio_get_num_tracks.argtypes = [handle]
    lib.cdio_get_num_tracks.restype = ctypes.c_uint8

    lib.cdio_get_track_msf.argtypes = [
        handle, ctypes.c_uint8, ctypes.POINTER(_MsfStruct),
    ]
    lib.cdio_get_track_msf.restype = ctypes.c_bool

    lib.cdio_audio_get_volume.argtypes = [
        handle, ctypes.POINTER(_AudioVolumeStruct),
    ]
    lib.cdio_audio_get_volume.restype = ctypes.c_int

    lib.cdio_get_cdtext.argtypes = [handle]
    lib.cdio_get_cdtext.restype = ctypes.c_void_p

    lib.cdtext_get_const.argtypes = [ctypes.c_void_p, ctypes.c_int, ctypes.c_uint8]
    lib.cdtext_get_const.restype = ctypes.c_char_p

    lib.cdio_audio_read_subchannel.argtypes = [
        handle, ctypes.POINTER(_SubchannelStruct),
    ]
    lib.cdio_audio_read_subchannel.restype = ctypes.c_int


def load_libcdio() -> ctypes.CDLL:
    """
    Load the libcdio shared library once per process.

    Returns:
        The loaded library with prototypes declared

    Raises:
        LibraryNotFoundError: If libcdio is not installed or fails to load
    """
    global _library

    if _library is not None:
        return _library

    path = find_library(LIBCDIO_NAME)
    if path is None:
        raise LibraryNotFoundError(
            "libcdio shared library not found. "
            "Install it with your package manager (e.g. libcdio19 / libcdio)"
        )

    try:
        lib = ctypes.CDLL(path)
    except OSError as e:
        raise LibraryNotFoundError(f"Failed to load {path}: {e}") from e

    _declare_prototypes(lib)
    logger.debug("Loaded libcdio from %s", path)
    _library = lib
    return lib


def libcdio_location() -> Optional[str]:
    """Get the resolved libcdio library name, None if not installed."""
    return find_library(LIBCDIO_NAME)


# =============================================================================
# CD-TEXT
# =============================================================================

class LibcdioCdText(CdTextSource):
    """CD-TEXT block owned by an open LibcdioDevice."""

    def __init__(self, lib: ctypes.CDLL, cdtext: int):
        self._lib = lib
        self._cdtext = cdtext

    def lookup(self, field: int, track: int) -> Optional[str]:
        value = self._lib.cdtext_get_const(self._cdtext, int(field), track)
        if value is None:
            return None
        return value.decode("utf-8", errors="replace")


# =============================================================================
# Device
# =============================================================================

class LibcdioDevice(IDiscDevice):
    """
    Optical device backed by libcdio.

    Attributes:
        source: Device path or image file; None opens the default drive
        driver: Driver used to open the source
    """

    def __init__(self, source: Optional[str] = None,
                 driver: DriverType = DriverType.DEVICE):
        """
        Initialize the device.

        Args:
            source: Device path or image file. If None, libcdio's default
                    device for the driver is used.
            driver: Driver to open the source with.
        """
        self._source = source
        self._driver = DriverType(driver)
        self._lib: Optional[ctypes.CDLL] = None
        self._handle: Optional[int] = None

        logger.debug("LibcdioDevice initialized (source=%s, driver=%s)",
                     source, self._driver.value)

    @property
    def source(self) -> Optional[str]:
        return self._source

    @property
    def driver(self) -> DriverType:
        return self._driver

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open(self) -> None:
        """
        Open the source with libcdio.

        Raises:
            LibraryNotFoundError: If libcdio is not installed
            NoDeviceError: If libcdio cannot open the source
        """
        if self._handle is not None:
            logger.warning("Device already open, closing first")
            self.close()

        lib = load_libcdio()
        encoded = os.fsencode(self._source) if self._source is not None else None

        handle = lib.cdio_open(encoded, DRIVER_IDS[self._driver])
        if not handle:
            raise NoDeviceError(source=self._source)

        self._lib = lib
        self._handle = handle
        logger.info("Opened %s with %s driver",
                    self._source or "default device", self._driver.value)

    def close(self) -> None:
        """Destroy the libcdio handle. Safe to call multiple times."""
        if self._handle is None:
            logger.debug("Already closed")
            return

        self._lib.cdio_destroy(self._handle)
        self._handle = None
        logger.debug("Device closed")

    def is_open(self) -> bool:
        return self._handle is not None

    def _ensure_open(self) -> ctypes.CDLL:
        """Ensure the handle is held, raise if not."""
        if self._handle is None:
            raise NoDeviceError("Device not open. Call open() first.",
                                source=self._source)
        return self._lib

    def __enter__(self) -> "LibcdioDevice":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Queries
    # =========================================================================

    def guess_format(self, start_sector: int,
                     first_track: int) -> Tuple[int, FilesystemAnalysis]:
        lib = self._ensure_open()
        analysis = _IsoAnalysisStruct()
        guess = lib.cdio_guess_cd_type(
            self._handle, start_sector, first_track, ctypes.byref(analysis)
        )

        label = analysis.iso_label.decode("ascii", errors="replace")
        result = FilesystemAnalysis(
            joliet_level=analysis.joliet_level,
            iso_label=label or None,
            isofs_size=analysis.isofs_size,
            udf_version_major=analysis.UDFVerMajor,
            udf_version_minor=analysis.UDFVerMinor,
        )
        logger.debug("cdio_guess_cd_type: 0x%X %s", guess, result)
        return guess, result

    def get_first_track_number(self) -> int:
        lib = self._ensure_open()
        track = lib.cdio_get_first_track_num(self._handle)
        if track == CDIO_INVALID_TRACK:
            raise TrackError("Failed to read first track number")
        return track

    def get_track_count(self) -> int:
        lib = self._ensure_open()
        count = lib.cdio_get_num_tracks(self._handle)
        if count == CDIO_INVALID_TRACK:
            raise TrackError("Failed to read track count")
        return count

    def get_track_start_seconds(self, track: int) -> int:
        lib = self._ensure_open()
        msf = _MsfStruct()
        if not lib.cdio_get_track_msf(self._handle, track, ctypes.byref(msf)):
            raise TrackError("Failed to read track position", track=track)
        return msf_from_struct(msf).total_seconds

    def get_audio_volume(self) -> AudioVolume:
        lib = self._ensure_open()
        volume = _AudioVolumeStruct()
        result = lib.cdio_audio_get_volume(self._handle, ctypes.byref(volume))
        if result != DriverReturnCode.SUCCESS:
            raise DriverError("Failed to obtain CD driver audio volume",
                              code=result, operation="audio_get_volume")
        return AudioVolume(levels=tuple(volume.level))

    def get_cdtext(self) -> Optional[CdTextSource]:
        lib = self._ensure_open()
        cdtext = lib.cdio_get_cdtext(self._handle)
        if not cdtext:
            return None
        return LibcdioCdText(lib, cdtext)

    def read_subchannel(self) -> SubchannelSnapshot:
        lib = self._ensure_open()
        sub = _SubchannelStruct()
        result = lib.cdio_audio_read_subchannel(self._handle, ctypes.byref(sub))
        if result != DriverReturnCode.SUCCESS:
            raise DriverError("Failed to obtain disc sub-channel info",
                              code=result, operation="audio_read_subchannel")
        return SubchannelSnapshot(
            format=sub.format,
            audio_status=sub.audio_status,
            address=sub.address,
            control=sub.control,
            track=sub.track,
            index=sub.index,
            absolute=msf_from_struct(sub.abs_addr),
            relative=msf_from_struct(sub.rel_addr),
        )
