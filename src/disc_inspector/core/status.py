"""
Sub-channel status decoders.

Small lookups turning the codes in a sub-channel snapshot into labels.
Unrecognised codes map to an explicit fallback label.
"""

from dataclasses import dataclass


AUDIO_STATUS_LABELS = {
    0x00: "No audio status",
    0x11: "Audio playing",
    0x12: "Audio paused",
}
UNKNOWN_AUDIO_STATUS = "Unknown status"

ADDRESS_LABELS = {
    0x0: "Track Number",
    0x1: "Absolute Time",
    0x2: "Media Catalog Number",
    0x3: "ISRC",
}
OTHER_ADDRESS = "Other"

# Control field bits
CONTROL_DATA_TRACK = 0x4
CONTROL_COPY_PERMITTED = 0x2
CONTROL_PRE_EMPHASIS = 0x1


@dataclass(frozen=True)
class ControlFlags:
    """Decoded sub-channel control field."""
    data_track: bool
    copy_permitted: bool
    pre_emphasis: bool


def describe_audio_status(code: int) -> str:
    """Label an audio status code."""
    return AUDIO_STATUS_LABELS.get(code, UNKNOWN_AUDIO_STATUS)


def describe_address(code: int) -> str:
    """Label a sub-channel address (ADR) code."""
    return ADDRESS_LABELS.get(code, OTHER_ADDRESS)


def decode_control_flags(control: int) -> ControlFlags:
    """
    Decode the control field into its three flags.

    Example:
        >>> decode_control_flags(0b110)
        ControlFlags(data_track=True, copy_permitted=True, pre_emphasis=False)
    """
    return ControlFlags(
        data_track=bool(control & CONTROL_DATA_TRACK),
        copy_permitted=bool(control & CONTROL_COPY_PERMITTED),
        pre_emphasis=bool(control & CONTROL_PRE_EMPHASIS),
    )


def format_duration(seconds: int) -> str:
    """Format whole seconds as HH:MM:SS."""
    return f"{seconds // 3600:02d}:{(seconds % 3600) // 60:02d}:{seconds % 60:02d}"
