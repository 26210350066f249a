"""
Unit tests for format classification.

Tests filesystem type lookup, capability decoding and derived flags.
"""

import pytest
from disc_inspector.core import (
    FilesystemType,
    Capability,
    classify,
    classify_filesystem,
    classify_capabilities,
    derive_flags,
    filesystem_code,
)


class TestClassifyFilesystem:
    """Test filesystem type code lookup."""

    def test_iso_9660(self):
        """Code 3 is ISO 9660."""
        assert classify_filesystem(3) is FilesystemType.ISO_9660

    def test_unknown_codes(self):
        """0 and out-of-range codes are unknown."""
        assert classify_filesystem(0) is FilesystemType.UNKNOWN
        assert classify_filesystem(15) is FilesystemType.UNKNOWN
        assert classify_filesystem(99) is FilesystemType.UNKNOWN

    def test_all_defined_codes(self):
        """Codes 1-14 map to fourteen distinct named labels."""
        expected = [
            "AUDIO", "HIGH_SIERRA", "ISO_9660", "INTERACTIVE", "HFS", "UFS",
            "EXT2", "ISO_HFS", "ISO_9660_INTERACTIVE", "3DO", "XISO", "UDFX",
            "UDF", "ISO_UDF",
        ]
        labels = [classify_filesystem(code).label for code in range(1, 15)]
        assert labels == expected

    def test_total_over_uint8(self):
        """Every byte value maps to one of the fifteen labels."""
        results = {classify_filesystem(code) for code in range(256)}
        assert results == set(FilesystemType)
        for code in range(256):
            if not 1 <= code <= 14:
                assert classify_filesystem(code) is FilesystemType.UNKNOWN

    def test_filesystem_code_masks_nibble(self):
        """Only the low nibble of a guess is the type code."""
        assert filesystem_code(0x1003) == 3
        assert filesystem_code(0x10) == 0


class TestClassifyCapabilities:
    """Test capability bit decoding."""

    def test_zero_mask(self):
        """No bits, no capabilities."""
        assert classify_capabilities(0) == ()

    def test_filesystem_nibble_ignored(self):
        """Filesystem type bits are not capabilities."""
        assert classify_capabilities(0x0F) == ()

    def test_multiple_bits(self):
        """Every set bit is reported."""
        mask = Capability.JOLIET | Capability.ROCKRIDGE | Capability.BOOTABLE
        assert classify_capabilities(mask) == (
            Capability.BOOTABLE,
            Capability.ROCKRIDGE,
            Capability.JOLIET,
        )

    def test_all_bits_in_display_order(self):
        """All thirteen capabilities come out in the fixed order."""
        labels = classify(0x1FFF0).capability_labels
        assert labels == (
            "XA", "MULTISESSION", "PHOTO_CD", "HIDDEN_TRACK", "CDTV",
            "BOOTABLE", "VIDEOCD", "ROCKRIDGE", "JOLIET", "SVCD", "CVD",
            "XISO", "ISO9660_ANY",
        )

    def test_unknown_high_bits_ignored(self):
        """Bits outside the enumeration are silently dropped."""
        assert classify_capabilities(0x100000 | Capability.XA) == (Capability.XA,)

    def test_idempotent(self):
        """Same mask, same ordered result."""
        mask = 0x3A50
        assert classify_capabilities(mask) == classify_capabilities(mask)


class TestDeriveFlags:
    """Test UDF/Joliet flag derivation."""

    @pytest.mark.parametrize("filesystem", [FilesystemType.UDF, FilesystemType.ISO_UDF])
    def test_udf_filesystems(self, filesystem):
        """UDF and ISO_UDF enable UDF fields."""
        is_udf, _ = derive_flags(filesystem, 0)
        assert is_udf is True

    def test_non_udf(self):
        """UDFX is not treated as UDF."""
        is_udf, _ = derive_flags(FilesystemType.UDFX, 0)
        assert is_udf is False

    def test_joliet_from_raw_guess(self):
        """Joliet bit is tested on the raw guess, alongside other bits."""
        _, is_joliet = derive_flags(FilesystemType.ISO_9660, 0x3 | 0x1000 | 0x800)
        assert is_joliet is True

    def test_no_joliet(self):
        """No Joliet bit, no Joliet level."""
        _, is_joliet = derive_flags(FilesystemType.ISO_9660, 0x3 | 0x800)
        assert is_joliet is False


class TestClassify:
    """Test the combined classification."""

    def test_audio_disc(self):
        """Plain audio guess."""
        result = classify(0x1)
        assert result.filesystem is FilesystemType.AUDIO
        assert result.is_audio is True
        assert result.capabilities == ()
        assert result.is_udf is False
        assert result.is_joliet is False

    def test_iso_udf_with_capabilities(self):
        """Bridge disc with a capability bit."""
        result = classify(0xE | 0x10000)
        assert result.filesystem is FilesystemType.ISO_UDF
        assert result.is_udf is True
        assert result.is_audio is False
        assert result.capability_labels == ("ISO9660_ANY",)
        assert result.guess == 0x1000E
