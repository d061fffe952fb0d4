"""
Cryptographic module for confcrypt.

Password-based encryption of configuration values, exposed through the
StringEncryptor interface and its pooled implementation.
"""

from .algorithms import (
    PBEAlgorithm,
    get_algorithm,
    get_provider,
    supported_algorithms,
)

from .salt import (
    SaltGenerator,
    RandomSaltGenerator,
    ZeroSaltGenerator,
    get_salt_generator,
)

from .pbe import (
    CipherConfig,
    StringEncryptor,
    PBEStringEncryptor,
)

from .pooled import PooledPBEStringEncryptor

__all__ = [
    # Algorithms
    'PBEAlgorithm',
    'get_algorithm',
    'get_provider',
    'supported_algorithms',

    # Salt
    'SaltGenerator',
    'RandomSaltGenerator',
    'ZeroSaltGenerator',
    'get_salt_generator',

    # Encryptors
    'CipherConfig',
    'StringEncryptor',
    'PBEStringEncryptor',
    'PooledPBEStringEncryptor',
]
