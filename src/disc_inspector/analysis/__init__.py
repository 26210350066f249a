"""
Report rendering for Disc Inspector.

Provides text and JSON rendering of inspection results.
"""

from disc_inspector.analysis.reporter import (
    render_report,
    render_filesystem,
    render_audio,
    render_timeline,
    render_subchannel,
    format_report,
    report_to_dict,
    render_json,
)

__all__ = [
    "render_report",
    "render_filesystem",
    "render_audio",
    "render_timeline",
    "render_subchannel",
    "format_report",
    "report_to_dict",
    "render_json",
]
