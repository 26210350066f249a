"""
Test fixtures for Disc Inspector.

Provides mock devices, CD-TEXT blocks and ready-made discs for testing
without requiring a physical optical drive.
"""

from tests.fixtures.mock_devices import (
    MockDiscDevice,
    MockCdText,
    default_subchannel,
    create_audio_disc,
    create_cdtext_disc,
    create_data_disc,
    create_udf_disc,
    create_empty_audio_disc,
    create_inconsistent_disc,
    create_failing_audio_disc,
    create_unopenable_drive,
)

__all__ = [
    "MockDiscDevice",
    "MockCdText",
    "default_subchannel",
    "create_audio_disc",
    "create_cdtext_disc",
    "create_data_disc",
    "create_udf_disc",
    "create_empty_audio_disc",
    "create_inconsistent_disc",
    "create_failing_audio_disc",
    "create_unopenable_drive",
]
