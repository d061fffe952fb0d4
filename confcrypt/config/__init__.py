"""
Configuration Module for confcrypt.

Provides transparent decryption of configuration values:
- Ordered configuration sources and the environment that reads them
- Detection of ENC(...) encrypted literals
- Decrypting wrappers installed over every source at startup
- Resolution of the encryptor's own settings
"""

from .detector import (
    PlainValue,
    EncryptedValue,
    detect,
    is_encrypted,
    wrap,
)

from .sources import (
    ConfigSource,
    ConfigFormat,
    MapConfigSource,
    EnvironmentVariableSource,
    FileConfigSource,
    load_file,
)

from .environment import (
    SourceRegistry,
    ConfigEnvironment,
)

from .wrapper import DecryptingConfigSource

from .installer import (
    SourceSetInstaller,
    install,
)

from .resolver import (
    CipherConfigResolver,
    ResolutionResult,
)

from .bootstrap import (
    build_encryptor,
    enable_encryptable_sources,
)

__all__ = [
    # Detection
    'PlainValue',
    'EncryptedValue',
    'detect',
    'is_encrypted',
    'wrap',

    # Sources
    'ConfigSource',
    'ConfigFormat',
    'MapConfigSource',
    'EnvironmentVariableSource',
    'FileConfigSource',
    'load_file',

    # Environment
    'SourceRegistry',
    'ConfigEnvironment',

    # Decryption
    'DecryptingConfigSource',
    'SourceSetInstaller',
    'install',

    # Resolution
    'CipherConfigResolver',
    'ResolutionResult',
    'build_encryptor',
    'enable_encryptable_sources',
]
