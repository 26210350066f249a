"""
Disc Inspector - optical disc metadata reporting tool.

Inspects an optical disc or disc image through libcdio and reports its
filesystem type, format capabilities and, for audio discs, the track
timeline, CD-TEXT, audio volume and sub-channel status. Read-only: nothing
on the disc is ever modified.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from disc_inspector.core.classifier import (
    DiscClassification,
    FilesystemType,
    Capability,
    classify,
    classify_filesystem,
    classify_capabilities,
    derive_flags,
)
from disc_inspector.core.timeline import (
    TrackPosition,
    TrackSpan,
    Timeline,
    TimelineError,
    build_timeline,
)
from disc_inspector.core.inspector import (
    DiscReport,
    AudioReport,
    inspect_disc,
)

__all__ = [
    "__version__",

    # Classification
    "DiscClassification",
    "FilesystemType",
    "Capability",
    "classify",
    "classify_filesystem",
    "classify_capabilities",
    "derive_flags",

    # Timeline
    "TrackPosition",
    "TrackSpan",
    "Timeline",
    "TimelineError",
    "build_timeline",

    # Inspection
    "DiscReport",
    "AudioReport",
    "inspect_disc",
]
