"""
Mock device fixtures for testing Disc Inspector.

Provides mock implementations of the device-query interface, CD-TEXT
blocks and ready-made discs for testing without a physical drive.
"""

from typing import Dict, List, Optional, Tuple

from disc_inspector.hardware import (
    IDiscDevice,
    CdTextSource,
    DriverType,
    DriverReturnCode,
    DriverError,
    NoDeviceError,
    TrackError,
    Msf,
    FilesystemAnalysis,
    AudioVolume,
    SubchannelSnapshot,
)

# Format guess values
FS_AUDIO = 0x1
FS_ISO_9660 = 0x3
FS_UDF = 0xD
FS_ISO_UDF = 0xE
CAP_JOLIET = 0x1000
CAP_ROCKRIDGE = 0x800
CAP_BOOTABLE = 0x200


class MockCdText(CdTextSource):
    """
    Mock CD-TEXT block.

    Attributes:
        values: Mapping of (field id, track or 0) to value
        lookups: Every (field, track) pair queried, in order
    """

    def __init__(self, values: Dict[Tuple[int, int], str] = None):
        self.values = values or {}
        self.lookups: List[Tuple[int, int]] = []

    def lookup(self, field: int, track: int) -> Optional[str]:
        self.lookups.append((int(field), track))
        return self.values.get((int(field), track))


def default_subchannel() -> SubchannelSnapshot:
    """Sub-channel of a disc playing track 2."""
    return SubchannelSnapshot(
        format=1,
        audio_status=0x11,
        address=0x1,
        control=0x2,
        track=2,
        index=1,
        absolute=Msf(3, 5, 12),
        relative=Msf(0, 11, 12),
    )


class MockDiscDevice(IDiscDevice):
    """
    Mock optical device answering queries from fixed data.

    Track boundaries are given as seconds for tracks first..last plus the
    lead-out. Volume and sub-channel reads fail with the given driver code
    when one is set.
    """

    def __init__(
        self,
        guess: int = FS_AUDIO,
        analysis: FilesystemAnalysis = None,
        first_track: int = 1,
        boundaries: List[int] = None,
        cdtext: Optional[MockCdText] = None,
        volume: Tuple[int, int, int, int] = (255, 255, 128, 128),
        volume_error: Optional[int] = None,
        subchannel: Optional[SubchannelSnapshot] = None,
        subchannel_error: Optional[int] = None,
        unreadable_tracks: Tuple[int, ...] = (),
        fail_open: bool = False,
        source: Optional[str] = None,
        driver: DriverType = DriverType.DEVICE,
    ):
        self.guess = guess
        self.analysis = analysis or FilesystemAnalysis()
        self.first_track = first_track
        self.boundaries = boundaries if boundaries is not None else []
        self.cdtext = cdtext
        self.volume = volume
        self.volume_error = volume_error
        self.subchannel = subchannel or default_subchannel()
        self.subchannel_error = subchannel_error
        self.unreadable_tracks = set(unreadable_tracks)
        self.fail_open = fail_open
        self._source = source
        self._driver = driver
        self._open = False
        self.open_count = 0
        self.close_count = 0
        self.queries: List[str] = []

    @property
    def source(self) -> Optional[str]:
        return self._source

    @property
    def driver(self) -> DriverType:
        return self._driver

    def open(self) -> None:
        self.open_count += 1
        if self.fail_open:
            raise NoDeviceError(source=self._source)
        self._open = True

    def close(self) -> None:
        self.close_count += 1
        self._open = False

    def is_open(self) -> bool:
        return self._open

    def _record(self, query: str) -> None:
        if not self._open:
            raise NoDeviceError("Device not open. Call open() first.")
        self.queries.append(query)

    def guess_format(self, start_sector: int,
                     first_track: int) -> Tuple[int, FilesystemAnalysis]:
        self._record("guess_format")
        return self.guess, self.analysis

    def get_first_track_number(self) -> int:
        self._record("get_first_track_number")
        return self.first_track

    def get_track_count(self) -> int:
        self._record("get_track_count")
        return max(len(self.boundaries) - 1, 0)

    def get_track_start_seconds(self, track: int) -> int:
        self._record(f"get_track_start_seconds:{track}")
        index = track - self.first_track
        if track in self.unreadable_tracks or not 0 <= index < len(self.boundaries):
            raise TrackError("Failed to read track position", track=track)
        return self.boundaries[index]

    def get_audio_volume(self) -> AudioVolume:
        self._record("get_audio_volume")
        if self.volume_error is not None:
            raise DriverError("Failed to obtain CD driver audio volume",
                              code=self.volume_error, operation="audio_get_volume")
        return AudioVolume(levels=self.volume)

    def get_cdtext(self) -> Optional[CdTextSource]:
        self._record("get_cdtext")
        return self.cdtext

    def read_subchannel(self) -> SubchannelSnapshot:
        self._record("read_subchannel")
        if self.subchannel_error is not None:
            raise DriverError("Failed to obtain disc sub-channel info",
                              code=self.subchannel_error, operation="audio_read_subchannel")
        return self.subchannel


# =============================================================================
# Ready-made discs
# =============================================================================

def create_audio_disc(**kwargs) -> MockDiscDevice:
    """Three-track audio disc without CD-TEXT (0s, 174s, 229s, lead-out 320s)."""
    kwargs.setdefault("boundaries", [0, 174, 229, 320])
    return MockDiscDevice(guess=FS_AUDIO, **kwargs)


def create_cdtext_disc(**kwargs) -> MockDiscDevice:
    """Three-track audio disc with album and per-track CD-TEXT."""
    cdtext = MockCdText({
        (0, 0): "Greatest Hits",        # TITLE, album
        (1, 0): "The Band",             # PERFORMER, album
        (8, 0): "Rock",                 # GENRE, album
        (0, 1): "Opening",              # TITLE, track 1
        (1, 1): "The Band",             # PERFORMER, track 1
        (0, 2): "Interlude [live]",     # TITLE, track 2
        (6, 2): "USABC0000002",         # ISRC, track 2
        (0, 3): "Finale",               # TITLE, track 3
    })
    kwargs.setdefault("boundaries", [0, 174, 229, 320])
    return MockDiscDevice(guess=FS_AUDIO, cdtext=cdtext, **kwargs)


def create_data_disc(**kwargs) -> MockDiscDevice:
    """Bootable ISO 9660 disc with Joliet and Rock Ridge."""
    kwargs.setdefault("analysis", FilesystemAnalysis(
        joliet_level=3,
        iso_label="INSTALL_DISC",
        isofs_size=332800,
    ))
    return MockDiscDevice(
        guess=FS_ISO_9660 | CAP_JOLIET | CAP_ROCKRIDGE | CAP_BOOTABLE,
        boundaries=[0, 4437],
        **kwargs,
    )


def create_udf_disc(**kwargs) -> MockDiscDevice:
    """ISO/UDF bridge disc reporting UDF 1.02."""
    kwargs.setdefault("analysis", FilesystemAnalysis(
        iso_label="MOVIE",
        udf_version_major=1,
        udf_version_minor=2,
    ))
    return MockDiscDevice(guess=FS_ISO_UDF, boundaries=[0, 7000], **kwargs)


def create_empty_audio_disc(**kwargs) -> MockDiscDevice:
    """Audio disc reporting no tracks."""
    return MockDiscDevice(guess=FS_AUDIO, boundaries=[], **kwargs)


def create_inconsistent_disc(**kwargs) -> MockDiscDevice:
    """Audio disc whose third boundary lies before the second."""
    kwargs.setdefault("boundaries", [0, 174, 120, 320])
    return MockDiscDevice(guess=FS_AUDIO, **kwargs)


def create_failing_audio_disc(**kwargs) -> MockDiscDevice:
    """Audio disc in a drive that cannot report volume or sub-channel."""
    kwargs.setdefault("volume_error", int(DriverReturnCode.UNSUPPORTED))
    kwargs.setdefault("subchannel_error", int(DriverReturnCode.ERROR))
    return create_audio_disc(**kwargs)


def create_unopenable_drive(**kwargs) -> MockDiscDevice:
    """Drive that cannot be opened."""
    return MockDiscDevice(fail_open=True, **kwargs)
