"""
Report rendering for disc inspections.

This module turns a DiscReport into output:
- Line-oriented text report (filesystem, capabilities, audio section)
- JSON document of the same data
- Plain-text rendering for piping and tests

All rendering goes through a rich Console. Values taken from the disc are
passed as Text objects so CD-TEXT content is never parsed as markup.
"""

import io
from dataclasses import asdict
from enum import Enum
from typing import Any, Dict, Optional

from rich.console import Console
from rich.text import Text

from disc_inspector.core.inspector import AudioReport, DiscReport
from disc_inspector.core.status import (
    decode_control_flags,
    describe_address,
    describe_audio_status,
    format_duration,
)
from disc_inspector.core.timeline import Timeline, TrackSpan
from disc_inspector.hardware import SubchannelSnapshot
from disc_inspector.utils.error_handler import handle_driver_error


ERROR_STYLE = "bold red"
LABEL_STYLE = "bold"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _field(console: Console, label: str, value: Any,
           style: Optional[str] = None) -> None:
    """Print one 'Label: value' line."""
    console.print(Text.assemble((f"{label}: ", LABEL_STYLE), (str(value), style or "")))


def _error(console: Console, message: str) -> None:
    console.print(Text(message, style=ERROR_STYLE))


# =============================================================================
# Filesystem Section
# =============================================================================

def render_filesystem(report: DiscReport, console: Console) -> None:
    """
    Render filesystem type, analysis fields and capabilities.

    Joliet level and UDF version are only printed when meaningful; an empty
    label and a zero filesystem size are omitted.
    """
    classification = report.classification
    analysis = report.analysis

    _field(console, "Filesystem Type", classification.filesystem.label)

    if classification.is_joliet:
        _field(console, "Joliet Level", analysis.joliet_level)

    if analysis.iso_label:
        _field(console, "ISO Label", analysis.iso_label)

    if analysis.isofs_size:
        _field(console, "ISO Filesystem Size", analysis.isofs_size)

    if classification.is_udf:
        _field(console, "UDF Version Major", analysis.udf_version_major)
        _field(console, "UDF Version Minor", analysis.udf_version_minor)

    for label in classification.capability_labels:
        _field(console, "Disc format", label)

    console.print()


# =============================================================================
# Audio Section
# =============================================================================

def render_span(span: TrackSpan, console: Console) -> None:
    """Render one track with its CD-TEXT values."""
    _field(console, "Track index", span.track)
    _field(console, "Track start", format_duration(span.start))
    _field(console, "Track end", format_duration(span.end))
    _field(console, "Track length", format_duration(span.length))

    for entry in span.cdtext:
        _field(console, entry.label, entry.value)

    console.print()


def render_timeline(timeline: Timeline, console: Console) -> None:
    """Render album CD-TEXT, every track, and the total time."""
    if timeline.album_cdtext:
        for entry in timeline.album_cdtext:
            _field(console, f"Album {entry.label}", entry.value)
        console.print()

    for span in timeline.spans:
        render_span(span, console)

    if timeline.album_duration is not None:
        _field(console, "Audio CD total time", format_duration(timeline.album_duration))


def render_subchannel(subchannel: SubchannelSnapshot, console: Console) -> None:
    """Render a sub-channel snapshot with decoded codes and flags."""
    flags = decode_control_flags(subchannel.control)

    _field(console, "Format", subchannel.format)
    _field(console, "Audio Status",
           f"{subchannel.audio_status} ({describe_audio_status(subchannel.audio_status)})")
    _field(console, "Address",
           f"{subchannel.address} ({describe_address(subchannel.address)})")
    _field(console, "Control", subchannel.control)
    console.print(Text("Control Flags:", style=LABEL_STYLE))
    _field(console, "Data Track", _yes_no(flags.data_track))
    _field(console, "Copy Permitted", _yes_no(flags.copy_permitted))
    _field(console, "Pre-emphasis", _yes_no(flags.pre_emphasis))
    _field(console, "Track", subchannel.track)
    _field(console, "Index", subchannel.index)
    _field(console, "Absolute Address", subchannel.absolute)
    _field(console, "Relative Address", subchannel.relative)


def render_audio(audio: AudioReport, console: Console) -> None:
    """Render the audio section of a report."""
    if audio.volume is not None:
        for channel, level in audio.volume.channels:
            _field(console, f"Channel {channel} volume", level)
    else:
        _error(console, f"Failed to obtain CD driver audio volume, err: {audio.volume_error}")
        _error(console, handle_driver_error(audio.volume_error, "audio volume read"))

    console.print()
    _field(console, "Audio CD track count", audio.track_count)
    _field(console, "Has CD-Text data", "yes" if audio.has_cdtext else "no")

    if audio.track_count > 0:
        console.print()
        if audio.timeline_error is not None:
            _error(console, f"[Error] Inconsistent track positions: {audio.timeline_error}")
        elif audio.timeline is not None:
            render_timeline(audio.timeline, console)

    console.print()
    if audio.subchannel is not None:
        render_subchannel(audio.subchannel, console)
    else:
        _error(console, "[Error] Failed to obtain disc sub-channel info")
        _error(console, handle_driver_error(audio.subchannel_error, "sub-channel read"))


def render_report(report: DiscReport, console: Console) -> None:
    """
    Render a full text report.

    Args:
        report: Inspection result
        console: Console to render to
    """
    render_filesystem(report, console)
    if report.audio is not None:
        render_audio(report.audio, console)


def format_report(report: DiscReport, width: int = 200) -> str:
    """
    Render a report as plain text.

    Args:
        report: Inspection result
        width: Line width (long CD-TEXT values are never wrapped below it)

    Returns:
        Report text without styling
    """
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, color_system=None,
                      force_terminal=False, highlight=False, soft_wrap=True)
    render_report(report, console)
    return buffer.getvalue()


# =============================================================================
# JSON
# =============================================================================

def _plain(value: Any) -> Any:
    """Make asdict() output JSON-friendly."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def report_to_dict(report: DiscReport) -> Dict[str, Any]:
    """
    Convert a report to a JSON-serializable dictionary.

    Derived labels (filesystem, capabilities, status descriptions, control
    flags) are included alongside the raw values.
    """
    classification = report.classification
    data = {
        'source': report.source,
        'driver': report.driver.value,
        'guess': classification.guess,
        'filesystem': classification.filesystem.label,
        'capabilities': list(classification.capability_labels),
        'is_udf': classification.is_udf,
        'is_joliet': classification.is_joliet,
        'analysis': _plain(asdict(report.analysis)),
        'audio': None,
    }

    audio = report.audio
    if audio is not None:
        audio_data = _plain(asdict(audio))
        if audio.subchannel is not None:
            sub = audio.subchannel
            audio_data['subchannel'].update({
                'absolute': str(sub.absolute),
                'relative': str(sub.relative),
                'audio_status_label': describe_audio_status(sub.audio_status),
                'address_label': describe_address(sub.address),
                'control_flags': asdict(decode_control_flags(sub.control)),
            })
        if audio.volume is not None:
            audio_data['volume'] = dict(audio.volume.channels)
        data['audio'] = audio_data

    return data


def render_json(report: DiscReport, console: Console) -> None:
    """Render a report as JSON."""
    console.print_json(data=report_to_dict(report))
