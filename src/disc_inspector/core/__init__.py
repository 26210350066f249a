"""
Core inspection logic for Disc Inspector.

This module provides format classification, CD-TEXT collection, track
timeline reconstruction, sub-channel decoding, the inspection run and
settings management.
"""

from disc_inspector.core.classifier import (
    FS_MASK,
    FilesystemType,
    Capability,
    DiscClassification,
    filesystem_code,
    classify_filesystem,
    classify_capabilities,
    derive_flags,
    classify,
)

from disc_inspector.core.cdtext import (
    ALBUM_SCOPE,
    CdTextField,
    CdTextEntry,
    album_label,
    track_label,
    collect_fields,
)

from disc_inspector.core.timeline import (
    TrackPosition,
    TrackSpan,
    Timeline,
    TimelineError,
    build_timeline,
    read_track_positions,
)

from disc_inspector.core.status import (
    ControlFlags,
    describe_audio_status,
    describe_address,
    decode_control_flags,
    format_duration,
)

from disc_inspector.core.inspector import (
    AudioReport,
    DiscReport,
    inspect_audio,
    inspect_disc,
)

from disc_inspector.core.settings import (
    InspectorSettings,
    OutputFormat,
    load_settings,
    save_settings,
)

__all__ = [
    # Classification
    "FS_MASK",
    "FilesystemType",
    "Capability",
    "DiscClassification",
    "filesystem_code",
    "classify_filesystem",
    "classify_capabilities",
    "derive_flags",
    "classify",

    # CD-TEXT
    "ALBUM_SCOPE",
    "CdTextField",
    "CdTextEntry",
    "album_label",
    "track_label",
    "collect_fields",

    # Timeline
    "TrackPosition",
    "TrackSpan",
    "Timeline",
    "TimelineError",
    "build_timeline",
    "read_track_positions",

    # Status decoding
    "ControlFlags",
    "describe_audio_status",
    "describe_address",
    "decode_control_flags",
    "format_duration",

    # Inspection
    "AudioReport",
    "DiscReport",
    "inspect_audio",
    "inspect_disc",

    # Settings
    "InspectorSettings",
    "OutputFormat",
    "load_settings",
    "save_settings",
]
