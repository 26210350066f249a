"""
Test suite for Disc Inspector.

This package contains:
- Unit tests for classification, timeline, CD-TEXT, status decoding,
  settings, error handling and the libcdio binding helpers
- Integration tests for complete inspection runs
- Mock fixtures for testing without an optical drive
"""
