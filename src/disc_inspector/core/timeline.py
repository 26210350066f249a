"""
Audio track timeline reconstruction.

This module rebuilds per-track start/end/length from the absolute start
positions of consecutive track boundaries. The boundary entering track N+1
is the end of track N, so a disc with N tracks is described by N+1
positions: one per track plus the lead-out.

Example:
    >>> positions = [TrackPosition(1, 0), TrackPosition(2, 174),
    ...              TrackPosition(3, 229), TrackPosition(4, 320, is_lead_out=True)]
    >>> timeline = build_timeline(positions)
    >>> [(s.track, s.start, s.end, s.length) for s in timeline.spans]
    [(1, 0, 174, 174), (2, 174, 229, 55), (3, 229, 320, 91)]
    >>> timeline.album_duration
    320
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from disc_inspector.core.cdtext import ALBUM_SCOPE, CdTextEntry, collect_fields
from disc_inspector.hardware import CdTextSource, IDiscDevice

logger = logging.getLogger(__name__)


class TimelineError(Exception):
    """Raised when track positions are inconsistent."""

    def __init__(self, message: str, track: Optional[int] = None):
        self.message = message
        self.track = track
        super().__init__(message if track is None else f"{message} [Track: {track}]")


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class TrackPosition:
    """
    Absolute start of a track boundary.

    Attributes:
        track: Track number the boundary enters (1-based)
        seconds: Offset in whole seconds from the start of the audio area
        is_lead_out: True for the boundary one past the last track
    """
    track: int
    seconds: int
    is_lead_out: bool = False


@dataclass(frozen=True)
class TrackSpan:
    """
    One audible track.

    Attributes:
        track: Audible track number
        start: Start offset in seconds
        end: End offset in seconds
        length: end - start, never negative
        cdtext: Track-scope CD-TEXT values
    """
    track: int
    start: int
    end: int
    length: int
    cdtext: Tuple[CdTextEntry, ...] = ()


@dataclass(frozen=True)
class Timeline:
    """
    Reconstructed audio timeline.

    Attributes:
        spans: Tracks in disc order
        album_cdtext: Album-scope CD-TEXT values
        album_duration: Sum of track lengths, None when there are no tracks
    """
    spans: Tuple[TrackSpan, ...] = ()
    album_cdtext: Tuple[CdTextEntry, ...] = ()
    album_duration: Optional[int] = None

    @property
    def track_count(self) -> int:
        return len(self.spans)


# =============================================================================
# Building
# =============================================================================

def _validate_positions(positions: Sequence[TrackPosition],
                        track_count: Optional[int]) -> None:
    """Check the lead-out contract and contiguous track numbering."""
    if track_count is not None and len(positions) != track_count + 1:
        raise TimelineError(
            f"Expected {track_count + 1} positions for {track_count} tracks "
            f"plus lead-out, got {len(positions)}"
        )

    if not positions[-1].is_lead_out:
        raise TimelineError("Last position is not marked as lead-out",
                            track=positions[-1].track)

    for previous, current in zip(positions, positions[1:]):
        if previous.is_lead_out:
            raise TimelineError("Lead-out is not the last position",
                                track=previous.track)
        if current.track != previous.track + 1:
            raise TimelineError(
                f"Track numbers not contiguous: {previous.track} then {current.track}",
                track=current.track,
            )


def build_timeline(positions: Sequence[TrackPosition],
                   cdtext: Optional[CdTextSource] = None,
                   track_count: Optional[int] = None,
                   normalize_labels: bool = False) -> Timeline:
    """
    Reconstruct the track timeline from boundary positions.

    Args:
        positions: Boundaries for tracks first..last plus the lead-out;
                   the final position must be marked is_lead_out
        cdtext: Optional CD-TEXT source for album and track values
        track_count: Declared track count; when given, the sequence must
                     hold exactly track_count + 1 positions
        normalize_labels: Use track-scope label casing for album values

    Returns:
        Timeline with one span per track; empty if fewer than two positions

    Raises:
        TimelineError: If the positions are inconsistent, including any
                       boundary that lies before its predecessor
    """
    if len(positions) < 2:
        if track_count:
            raise TimelineError(
                f"Expected {track_count + 1} positions for {track_count} tracks "
                f"plus lead-out, got {len(positions)}"
            )
        return Timeline()

    _validate_positions(positions, track_count)

    album_cdtext = collect_fields(cdtext, ALBUM_SCOPE, normalize_labels)

    spans: List[TrackSpan] = []
    previous = positions[0]
    total = 0

    for position in positions[1:]:
        length = position.seconds - previous.seconds
        audible = position.track - 1
        if length < 0:
            raise TimelineError(
                f"Track ends before it starts ({previous.seconds}s -> {position.seconds}s)",
                track=audible,
            )

        spans.append(TrackSpan(
            track=audible,
            start=previous.seconds,
            end=position.seconds,
            length=length,
            cdtext=collect_fields(cdtext, audible, normalize_labels),
        ))
        total += length
        previous = position

    logger.debug("Built timeline: %d tracks, %ds", len(spans), total)
    return Timeline(spans=tuple(spans), album_cdtext=album_cdtext,
                    album_duration=total)


def read_track_positions(device: IDiscDevice, first_track: int,
                         track_count: int) -> List[TrackPosition]:
    """
    Query the start of every track boundary, lead-out included.

    Args:
        device: Open device
        first_track: First track number
        track_count: Number of tracks

    Returns:
        track_count + 1 positions, the last one marked as lead-out;
        empty when the disc has no tracks

    Raises:
        TrackError: If a position cannot be read
    """
    if track_count <= 0:
        return []

    lead_out = first_track + track_count
    positions = []
    for track in range(first_track, lead_out + 1):
        seconds = device.get_track_start_seconds(track)
        logger.debug("Track %d boundary at %ds", track, seconds)
        positions.append(TrackPosition(track=track, seconds=seconds,
                                       is_lead_out=track == lead_out))
    return positions
