"""
Password-based string encryption.

A PBEStringEncryptor is one cipher instance: it validates its CipherConfig
once, then encrypts and decrypts strings. It keeps no per-call state, but it
is normally used through the pooled encryptor in ``pooled.py``.

Encrypted bytes are laid out as::

    [salt, when the salt generator includes it][IV, PBES2 only][ciphertext]

and rendered as base64 or upper-case hexadecimal text.
"""

import base64
import binascii
import logging
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass

from cryptography.hazmat.primitives import padding

from ..constants import Defaults, OutputType
from ..errors import ConfigError, DecryptionError, EncryptionError
from .algorithms import get_algorithm, get_provider
from .salt import get_salt_generator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CipherConfig:
    """Immutable settings for a password-based cipher."""
    password: str
    algorithm: str = Defaults.ALGORITHM
    key_obtention_iterations: int = int(Defaults.KEY_OBTENTION_ITERATIONS)
    pool_size: int = int(Defaults.POOL_SIZE)
    provider_name: str = Defaults.PROVIDER_NAME
    salt_generator_classname: str = Defaults.SALT_GENERATOR_CLASSNAME
    string_output_type: str = Defaults.STRING_OUTPUT_TYPE

    def __post_init__(self):
        if not self.password:
            raise ConfigError("Encryptor password cannot be empty")
        if self.key_obtention_iterations < 1:
            raise ConfigError(
                f"keyObtentionIterations must be positive; got {self.key_obtention_iterations}"
            )
        if self.pool_size < 1:
            raise ConfigError(f"poolSize must be positive; got {self.pool_size}")
        if self.string_output_type.lower() not in OutputType.ALL:
            raise ConfigError(
                f"Unsupported string output type: {self.string_output_type} "
                f"(expected one of {', '.join(OutputType.ALL)})"
            )

    def __repr__(self) -> str:
        return (
            f"CipherConfig(password='****', algorithm={self.algorithm!r}, "
            f"key_obtention_iterations={self.key_obtention_iterations}, "
            f"pool_size={self.pool_size}, provider_name={self.provider_name!r}, "
            f"salt_generator_classname={self.salt_generator_classname!r}, "
            f"string_output_type={self.string_output_type!r})"
        )


class StringEncryptor(ABC):
    """Anything able to turn plaintext into ciphertext text and back."""

    @abstractmethod
    def encrypt(self, message: str) -> str:
        pass

    @abstractmethod
    def decrypt(self, encrypted_message: str) -> str:
        pass


def _encode(data: bytes, output_type: str) -> str:
    if output_type == OutputType.HEXADECIMAL:
        return data.hex().upper()
    return base64.b64encode(data).decode("ascii")


def _decode(text: str, output_type: str) -> bytes:
    if output_type == OutputType.HEXADECIMAL:
        return bytes.fromhex(text)
    return base64.b64decode(text.encode("ascii"), validate=True)


def _random_iv(size: int) -> bytes:
    return secrets.token_bytes(size) if size else b""


class PBEStringEncryptor(StringEncryptor):
    """A single password-based cipher instance built from a CipherConfig."""

    def __init__(self, config: CipherConfig):
        self.config = config
        self.algorithm = get_algorithm(config.algorithm)
        self.provider = get_provider(config.provider_name)
        self.salt_generator = get_salt_generator(config.salt_generator_classname)
        self._output_type = config.string_output_type.lower()
        self._password = config.password.encode("utf-8")
        logger.debug(
            f"Cipher instance ready: algorithm={self.algorithm.name} provider={self.provider} "
            f"salt={type(self.salt_generator).__name__} output={self._output_type}"
        )

    def _key_and_iv(self, salt: bytes, iv: bytes):
        derived = self.algorithm.derive(
            self._password, salt, self.config.key_obtention_iterations
        )
        if iv:
            return derived, iv
        key_length = self.algorithm.key_length
        return derived[:key_length], derived[key_length:]

    def encrypt(self, message: str) -> str:
        if not isinstance(message, str):
            raise EncryptionError(f"Only strings can be encrypted; got {type(message).__name__}")

        algorithm = self.algorithm
        salt = self.salt_generator.generate_salt(algorithm.salt_size)
        iv = _random_iv(algorithm.iv_size)

        try:
            key, iv = self._key_and_iv(salt, iv)
            padder = padding.PKCS7(algorithm.block_size * 8).padder()
            data = padder.update(message.encode("utf-8")) + padder.finalize()
            encryptor = algorithm.cipher(key, iv).encryptor()
            ciphertext = encryptor.update(data) + encryptor.finalize()
        except (ValueError, TypeError) as e:
            raise EncryptionError(f"Encryption failed: {e}") from e

        parts = []
        if self.salt_generator.includes_plain_salt:
            parts.append(salt)
        if algorithm.iv_size:
            parts.append(iv)
        parts.append(ciphertext)
        return _encode(b"".join(parts), self._output_type)

    def decrypt(self, encrypted_message: str) -> str:
        if not isinstance(encrypted_message, str):
            raise DecryptionError(
                f"Only strings can be decrypted; got {type(encrypted_message).__name__}"
            )

        try:
            raw = _decode(encrypted_message.strip(), self._output_type)
        except (binascii.Error, ValueError, UnicodeEncodeError) as e:
            raise DecryptionError(
                f"Encrypted value is not valid {self._output_type}"
            ) from e

        algorithm = self.algorithm
        salt_size = algorithm.salt_size if self.salt_generator.includes_plain_salt else 0
        header_size = salt_size + algorithm.iv_size
        ciphertext = raw[header_size:]
        if not ciphertext or len(ciphertext) % algorithm.block_size:
            raise DecryptionError("Encrypted value has an invalid length")

        if salt_size:
            salt = raw[:salt_size]
        else:
            salt = self.salt_generator.generate_salt(algorithm.salt_size)
        iv = raw[salt_size:header_size]

        try:
            key, iv = self._key_and_iv(salt, iv)
            decryptor = algorithm.cipher(key, iv).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()
            unpadder = padding.PKCS7(algorithm.block_size * 8).unpadder()
            data = unpadder.update(padded) + unpadder.finalize()
            return data.decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise DecryptionError(
                "Decryption failed - wrong password or corrupted value"
            ) from e

