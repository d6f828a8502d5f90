"""Custom exceptions for obsid."""


class ObsidError(Exception):
    """Base exception for obsid."""


class ConfigError(ObsidError):
    """Raised when configuration is missing or invalid."""


class NoMatchError(ObsidError):
    """Raised when no known date format matches the daily note filenames."""


class VaultError(ObsidError):
    """Raised when the vault, daily notes directory or a daily note is missing."""


class GitError(ObsidError):
    """Raised when git is unavailable or a git command fails."""


class TimeframeError(ObsidError):
    """Raised when a timeframe string cannot be parsed."""
