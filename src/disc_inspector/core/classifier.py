"""
Disc format classification.

This module turns the raw format-guess bitmask reported by the drive into a
filesystem type, an ordered set of capability labels, and the derived flags
that decide which filesystem analysis fields are meaningful.

The guess packs two things into one integer: a 4-bit filesystem type in the
low nibble (only one type is ever active) and independent capability bits
above it (any number may be set).
"""

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Tuple


# Low nibble of the guess carries the filesystem type code
FS_MASK = 0x0F


# =============================================================================
# Filesystem Types
# =============================================================================

class FilesystemType(Enum):
    """Filesystem type carried in the low nibble of a format guess."""
    UNKNOWN = "UNKNOWN"
    AUDIO = "AUDIO"
    HIGH_SIERRA = "HIGH_SIERRA"
    ISO_9660 = "ISO_9660"
    INTERACTIVE = "INTERACTIVE"
    HFS = "HFS"
    UFS = "UFS"
    EXT2 = "EXT2"
    ISO_HFS = "ISO_HFS"
    ISO_9660_INTERACTIVE = "ISO_9660_INTERACTIVE"
    THREE_DO = "3DO"
    XISO = "XISO"
    UDFX = "UDFX"
    UDF = "UDF"
    ISO_UDF = "ISO_UDF"

    @property
    def label(self) -> str:
        """Display label."""
        return self.value


FILESYSTEM_CODES = {
    1: FilesystemType.AUDIO,
    2: FilesystemType.HIGH_SIERRA,
    3: FilesystemType.ISO_9660,
    4: FilesystemType.INTERACTIVE,
    5: FilesystemType.HFS,
    6: FilesystemType.UFS,
    7: FilesystemType.EXT2,
    8: FilesystemType.ISO_HFS,
    9: FilesystemType.ISO_9660_INTERACTIVE,
    10: FilesystemType.THREE_DO,
    11: FilesystemType.XISO,
    12: FilesystemType.UDFX,
    13: FilesystemType.UDF,
    14: FilesystemType.ISO_UDF,
}

UDF_FILESYSTEMS = frozenset({FilesystemType.UDF, FilesystemType.ISO_UDF})


# =============================================================================
# Capabilities
# =============================================================================

class Capability(IntFlag):
    """Independent capability bits of a format guess."""
    XA = 0x10
    MULTISESSION = 0x20
    PHOTO_CD = 0x40
    HIDDEN_TRACK = 0x80
    CDTV = 0x100
    BOOTABLE = 0x200
    VIDEOCD = 0x400
    ROCKRIDGE = 0x800
    JOLIET = 0x1000
    SVCD = 0x2000
    CVD = 0x4000
    XISO = 0x8000
    ISO9660_ANY = 0x10000


# Display order, independent of bit values
CAPABILITY_ORDER: Tuple[Tuple[Capability, str], ...] = (
    (Capability.XA, "XA"),
    (Capability.MULTISESSION, "MULTISESSION"),
    (Capability.PHOTO_CD, "PHOTO_CD"),
    (Capability.HIDDEN_TRACK, "HIDDEN_TRACK"),
    (Capability.CDTV, "CDTV"),
    (Capability.BOOTABLE, "BOOTABLE"),
    (Capability.VIDEOCD, "VIDEOCD"),
    (Capability.ROCKRIDGE, "ROCKRIDGE"),
    (Capability.JOLIET, "JOLIET"),
    (Capability.SVCD, "SVCD"),
    (Capability.CVD, "CVD"),
    (Capability.XISO, "XISO"),
    (Capability.ISO9660_ANY, "ISO9660_ANY"),
)

CAPABILITY_LABELS = dict(CAPABILITY_ORDER)


# =============================================================================
# Classification
# =============================================================================

@dataclass(frozen=True)
class DiscClassification:
    """
    Classified format guess.

    Attributes:
        guess: Raw format guess bitmask
        filesystem: Filesystem type from the low nibble
        capabilities: Capabilities set in the guess, in display order
        is_udf: Whether UDF version fields are meaningful
        is_joliet: Whether the Joliet level is meaningful
    """
    guess: int
    filesystem: FilesystemType
    capabilities: Tuple[Capability, ...]
    is_udf: bool
    is_joliet: bool

    @property
    def is_audio(self) -> bool:
        """Check if this is an audio disc."""
        return self.filesystem is FilesystemType.AUDIO

    @property
    def capability_labels(self) -> Tuple[str, ...]:
        """Display labels of the capabilities."""
        return tuple(CAPABILITY_LABELS[cap] for cap in self.capabilities)


def filesystem_code(guess: int) -> int:
    """Extract the 4-bit filesystem type code from a raw guess."""
    return guess & FS_MASK


def classify_filesystem(code: int) -> FilesystemType:
    """
    Map a filesystem type code to its FilesystemType.

    Args:
        code: Filesystem type code (1-14 are defined)

    Returns:
        The matching FilesystemType, UNKNOWN for any other value

    Example:
        >>> classify_filesystem(3)
        <FilesystemType.ISO_9660: 'ISO_9660'>
        >>> classify_filesystem(99)
        <FilesystemType.UNKNOWN: 'UNKNOWN'>
    """
    return FILESYSTEM_CODES.get(code, FilesystemType.UNKNOWN)


def classify_capabilities(mask: int) -> Tuple[Capability, ...]:
    """
    List the capabilities set in a format guess.

    Bits outside the capability enumeration (including the filesystem
    nibble) are ignored.

    Args:
        mask: Raw format guess bitmask

    Returns:
        Capabilities in display order
    """
    return tuple(cap for cap, _ in CAPABILITY_ORDER if mask & cap)


def derive_flags(filesystem: FilesystemType, guess: int) -> Tuple[bool, bool]:
    """
    Derive which analysis fields are meaningful.

    Joliet is tested against the raw guess, not a decoded capability set.

    Args:
        filesystem: Classified filesystem type
        guess: Raw format guess bitmask

    Returns:
        Tuple of (is_udf, is_joliet)
    """
    is_udf = filesystem in UDF_FILESYSTEMS
    is_joliet = bool(guess & Capability.JOLIET)
    return is_udf, is_joliet


def classify(guess: int) -> DiscClassification:
    """Classify a raw format guess."""
    filesystem = classify_filesystem(filesystem_code(guess))
    is_udf, is_joliet = derive_flags(filesystem, guess)
    return DiscClassification(
        guess=guess,
        filesystem=filesystem,
        capabilities=classify_capabilities(guess),
        is_udf=is_udf,
        is_joliet=is_joliet,
    )
