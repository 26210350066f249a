"""
Settings management module for Disc Inspector.

This module provides settings loading and saving with JSON-based
persistence and validation through a pydantic model.

Features:
    - JSON-based configuration file persistence
    - Platform-specific settings paths
    - Validation of every field on load
    - Edge case handling (file missing, unreadable, invalid JSON, invalid values)

Settings:
    - source / driver: which drive or image to inspect
    - output_format: text or JSON report
    - log_file / log_level: logging destination and verbosity
    - normalize_cdtext_labels: CD-TEXT label casing for album values
    - color: styled terminal output
"""

import json
import logging
import os
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from disc_inspector.hardware import DriverType


# Module logger
logger = logging.getLogger(__name__)

SETTINGS_VERSION = 1


# =============================================================================
# Settings File Paths
# =============================================================================

def get_settings_dir() -> Path:
    """
    Get the platform-specific settings directory.

    Returns:
        Path to settings directory

    Platform paths:
        - Linux: ~/.config/disc-inspector/
        - Windows: %APPDATA%/DiscInspector/
        - macOS: ~/Library/Application Support/DiscInspector/
    """
    if sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', Path.home() / 'AppData' / 'Roaming'))
        return base / 'DiscInspector'
    elif sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'DiscInspector'
    else:
        xdg_config = os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config')
        return Path(xdg_config) / 'disc-inspector'


def get_settings_file() -> Path:
    """Get the settings file path."""
    return get_settings_dir() / 'settings.json'


# =============================================================================
# Enumerations
# =============================================================================

class OutputFormat(Enum):
    """Report output format."""
    TEXT = "text"
    JSON = "json"


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Settings Model
# =============================================================================

class InspectorSettings(BaseModel):
    """
    Disc Inspector settings.

    Attributes:
        source: Device path or image file, None for the default drive
        driver: Driver used to open the source
        output_format: Report format
        log_file: Log file path, None to log to the console only
        log_level: Console log level name
        normalize_cdtext_labels: Use "Title" style labels for album values
                                 too, instead of lower-cased "title"
        color: Allow styled terminal output
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    source: Optional[str] = None
    driver: DriverType = DriverType.DEVICE
    output_format: OutputFormat = OutputFormat.TEXT
    log_file: Optional[str] = None
    log_level: str = "WARNING"
    normalize_cdtext_labels: bool = False
    color: bool = True

    @field_validator('log_level')
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return getattr(logging, self.log_level)


# =============================================================================
# Persistence
# =============================================================================

def load_settings(path: Optional[Path] = None) -> InspectorSettings:
    """
    Load settings from file.

    Any problem with the file is logged and defaults are used instead, so a
    broken configuration never stops an inspection.

    Args:
        path: Settings file (default: platform settings file)

    Returns:
        Loaded settings, or defaults
    """
    settings_file = Path(path) if path is not None else get_settings_file()

    if not settings_file.exists():
        logger.debug(f"Settings file not found: {settings_file}")
        return InspectorSettings()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logger.error(f"Settings file is not a JSON object: {settings_file}")
            return InspectorSettings()

        version = data.get('version', 0)
        if version > SETTINGS_VERSION:
            logger.warning(
                f"Settings version {version} is newer than supported "
                f"version {SETTINGS_VERSION}"
            )

        settings = InspectorSettings.model_validate(data)
        logger.debug(f"Settings loaded from {settings_file}")
        return settings

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in settings file: {e}")
    except ValidationError as e:
        logger.error(f"Invalid settings in {settings_file}: {e}")
    except PermissionError as e:
        logger.error(f"Permission denied reading settings: {e}")
    except OSError as e:
        logger.error(f"Error loading settings: {e}")

    return InspectorSettings()


def save_settings(settings: InspectorSettings, path: Optional[Path] = None) -> bool:
    """
    Save settings to file.

    Args:
        settings: Settings to save
        path: Settings file (default: platform settings file)

    Returns:
        True if settings were saved successfully
    """
    settings_file = Path(path) if path is not None else get_settings_file()

    try:
        settings_file.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'version': SETTINGS_VERSION,
            'saved_at': datetime.now().isoformat(),
            **settings.model_dump(mode='json'),
        }

        # Write to temp file first, then rename (atomic)
        temp_file = settings_file.with_suffix('.tmp')
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        temp_file.replace(settings_file)

        logger.info(f"Settings saved to {settings_file}")
        return True

    except PermissionError as e:
        logger.error(f"Permission denied saving settings: {e}")
        return False
    except OSError as e:
        logger.error(f"OS error saving settings: {e}")
        return False
