"""
CD-TEXT field enumeration and per-scope collection.

CD-TEXT values are scoped either to the whole album (track 0) or to a single
track. Labels are derived from the field name; album labels are fully lower
cased ("title") while track labels keep their first character ("Title").
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from disc_inspector.hardware import CdTextSource


ALBUM_SCOPE = 0


class CdTextField(IntEnum):
    """CD-TEXT field kinds, in lookup order."""
    TITLE = 0
    PERFORMER = 1
    SONGWRITER = 2
    COMPOSER = 3
    MESSAGE = 4
    ARRANGER = 5
    ISRC = 6
    UPC_EAN = 7
    GENRE = 8
    DISC_ID = 9


@dataclass(frozen=True)
class CdTextEntry:
    """A present CD-TEXT value with its display label."""
    field: CdTextField
    label: str
    value: str


def album_label(field: CdTextField) -> str:
    """Album-scope label: the field name fully lower-cased."""
    return field.name.lower()


def track_label(field: CdTextField) -> str:
    """Track-scope label: first character kept, the rest lower-cased."""
    name = field.name
    return name[:1] + name[1:].lower()


def collect_fields(cdtext: Optional[CdTextSource], scope: int,
                   normalize_labels: bool = False) -> Tuple[CdTextEntry, ...]:
    """
    Query every field kind at one scope.

    Args:
        cdtext: CD-TEXT source, None if the disc has none
        scope: ALBUM_SCOPE or a track number
        normalize_labels: Use the track-scope casing for the album scope too

    Returns:
        Entries for the fields that have a value, in field order
    """
    if cdtext is None:
        return ()

    if scope == ALBUM_SCOPE and not normalize_labels:
        make_label = album_label
    else:
        make_label = track_label

    entries = []
    for field in CdTextField:
        value = cdtext.lookup(field, scope)
        if value is not None:
            entries.append(CdTextEntry(field=field, label=make_label(field), value=value))
    return tuple(entries)
