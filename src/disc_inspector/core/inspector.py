"""
Disc inspection run.

This module issues the fixed sequence of point queries against an open
device and assembles the results into an immutable DiscReport:

1. Guess the format and classify it
2. For audio discs: audio volume, track layout, CD-TEXT, timeline and the
   current sub-channel

A failed volume or sub-channel read, or a disc without CD-TEXT, only
removes that section from the report. Inconsistent track positions are
recorded as a timeline error instead of spans. Every query is issued once.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from disc_inspector.core.classifier import DiscClassification, classify
from disc_inspector.core.timeline import (
    Timeline,
    TimelineError,
    build_timeline,
    read_track_positions,
)
from disc_inspector.hardware import (
    DEFAULT_SESSION_START,
    AudioVolume,
    DriverError,
    DriverType,
    FilesystemAnalysis,
    IDiscDevice,
    SubchannelSnapshot,
    TrackError,
)
from disc_inspector.utils.error_handler import get_error_severity, handle_driver_error
from disc_inspector.utils.logging import log_device_info, log_error, log_operation

logger = logging.getLogger(__name__)


# =============================================================================
# Report Data Classes
# =============================================================================

@dataclass(frozen=True)
class AudioReport:
    """
    Audio section of a disc report.

    Exactly one of volume / volume_error is set, likewise for the timeline
    and the sub-channel pairs (timeline_error is only set when the track
    positions were inconsistent).
    """
    first_track: int
    track_count: int
    has_cdtext: bool
    volume: Optional[AudioVolume] = None
    volume_error: Optional[int] = None
    timeline: Optional[Timeline] = None
    timeline_error: Optional[str] = None
    subchannel: Optional[SubchannelSnapshot] = None
    subchannel_error: Optional[int] = None


@dataclass(frozen=True)
class DiscReport:
    """
    Everything learned about one disc.

    Attributes:
        source: Device path or image file, None for the default drive
        driver: Driver the source was opened with
        classification: Classified format guess
        analysis: Filesystem analysis from the format guess
        audio: Audio section, present for audio discs only
    """
    source: Optional[str]
    driver: DriverType
    classification: DiscClassification
    analysis: FilesystemAnalysis
    audio: Optional[AudioReport] = None

    @property
    def has_data_error(self) -> bool:
        """Check if the report carries a data inconsistency."""
        return self.audio is not None and self.audio.timeline_error is not None


# =============================================================================
# Inspection
# =============================================================================

def _log_driver_failure(error: DriverError) -> None:
    operation = error.operation or "driver"
    if get_error_severity(error.code) in ("critical", "error"):
        log_error(operation, error.code, error.message)
    else:
        log_operation(operation, handle_driver_error(error.code, error.message), logging.WARNING)


def inspect_audio(device: IDiscDevice, first_track: int,
                  normalize_cdtext_labels: bool = False) -> AudioReport:
    """
    Gather the audio section of the report.

    Args:
        device: Open device holding an audio disc
        first_track: First track number
        normalize_cdtext_labels: Use track-scope label casing for album values

    Returns:
        AudioReport

    Raises:
        TrackError: If the track count cannot be read
    """
    volume = None
    volume_error = None
    try:
        volume = device.get_audio_volume()
    except DriverError as e:
        _log_driver_failure(e)
        volume_error = e.code

    track_count = device.get_track_count()
    cdtext = device.get_cdtext()
    log_device_info(device.source, device.driver.value, track_count, first_track)

    timeline = None
    timeline_error = None
    try:
        positions = read_track_positions(device, first_track, track_count)
        timeline = build_timeline(positions, cdtext, track_count=track_count,
                                  normalize_labels=normalize_cdtext_labels)
    except (TimelineError, TrackError) as e:
        logger.error("Inconsistent track positions: %s", e)
        timeline_error = str(e)

    subchannel = None
    subchannel_error = None
    try:
        subchannel = device.read_subchannel()
    except DriverError as e:
        _log_driver_failure(e)
        subchannel_error = e.code

    return AudioReport(
        first_track=first_track,
        track_count=track_count,
        has_cdtext=cdtext is not None,
        volume=volume,
        volume_error=volume_error,
        timeline=timeline,
        timeline_error=timeline_error,
        subchannel=subchannel,
        subchannel_error=subchannel_error,
    )


def inspect_disc(device: IDiscDevice,
                 normalize_cdtext_labels: bool = False) -> DiscReport:
    """
    Inspect the disc in an open device.

    Args:
        device: Open device
        normalize_cdtext_labels: Use track-scope label casing for album values

    Returns:
        DiscReport

    Raises:
        TrackError: If the disc's table of contents cannot be read

    Example:
        >>> with DiscOperationContext(LibcdioDevice()) as device:
        ...     report = inspect_disc(device)
        >>> report.classification.filesystem
        <FilesystemType.AUDIO: 'AUDIO'>
    """
    first_track = device.get_first_track_number()
    guess, analysis = device.guess_format(DEFAULT_SESSION_START, first_track)
    classification = classify(guess)
    log_operation(
        "guess_format",
        f"0x{guess:X} -> {classification.filesystem.label} "
        f"{list(classification.capability_labels)}",
        logging.DEBUG,
    )

    audio = None
    if classification.is_audio:
        audio = inspect_audio(device, first_track, normalize_cdtext_labels)

    return DiscReport(
        source=device.source,
        driver=device.driver,
        classification=classification,
        analysis=analysis,
        audio=audio,
    )
