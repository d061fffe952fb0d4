"""
Error types raised by confcrypt.

Construction-time errors (ConfigError, MissingRequiredConfig) abort startup.
Read-time errors (DecryptionError) propagate to the caller that asked for the
property and carry the offending key.
"""

from typing import Optional


class EncryptableConfigError(Exception):
    """Base class for all confcrypt errors."""


class ConfigError(EncryptableConfigError):
    """Invalid encryptor configuration or unreadable configuration source."""


class MissingRequiredConfig(ConfigError):
    """A required encryptor property is absent."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Required encryption configuration property missing: {key}")


class DecryptionError(EncryptableConfigError):
    """An encrypted value could not be decrypted."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class EncryptionError(EncryptableConfigError):
    """A value could not be encrypted."""
