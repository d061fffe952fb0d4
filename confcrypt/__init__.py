"""
confcrypt - transparent decryption of encrypted configuration values.

Configuration values written as ``ENC(<ciphertext>)`` are decrypted on read
with a password-based cipher configured through the ``encryptor.*``
properties. Application code keeps reading plain strings.
"""

from .config import (
    ConfigEnvironment,
    ConfigSource,
    DecryptingConfigSource,
    EnvironmentVariableSource,
    FileConfigSource,
    MapConfigSource,
    SourceRegistry,
    enable_encryptable_sources,
)
from .crypto import (
    CipherConfig,
    PBEStringEncryptor,
    PooledPBEStringEncryptor,
    StringEncryptor,
)
from .errors import (
    ConfigError,
    DecryptionError,
    EncryptableConfigError,
    EncryptionError,
    MissingRequiredConfig,
)

__version__ = "1.0.0"

__all__ = [
    'ConfigEnvironment',
    'ConfigSource',
    'DecryptingConfigSource',
    'EnvironmentVariableSource',
    'FileConfigSource',
    'MapConfigSource',
    'SourceRegistry',
    'enable_encryptable_sources',
    'CipherConfig',
    'PBEStringEncryptor',
    'PooledPBEStringEncryptor',
    'StringEncryptor',
    'ConfigError',
    'DecryptionError',
    'EncryptableConfigError',
    'EncryptionError',
    'MissingRequiredConfig',
]
