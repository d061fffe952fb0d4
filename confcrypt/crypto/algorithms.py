"""
Password-Based Encryption algorithm registry.

Two schemes are supported:

- PBES1 (``PBEWithMD5AndDES``): PBKDF1 with MD5 derives 16 bytes; the first
  eight are the DES key and the last eight the CBC IV.
- PBES2 (``PBEWithHMACSHA<n>AndAES_<bits>``): PBKDF2-HMAC derives the AES
  key; the IV is random and travels with the ciphertext.

Cipher primitives come from the ``cryptography`` package. Single DES is
expressed as TripleDES keyed with the DES key repeated three times.
"""

from dataclasses import dataclass
from typing import Dict, Type

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..errors import ConfigError


PBES1 = "pbes1"
PBES2 = "pbes2"


@dataclass(frozen=True)
class PBEAlgorithm:
    """Description of one password-based encryption algorithm."""
    name: str
    scheme: str
    digest: Type[hashes.HashAlgorithm]
    cipher_name: str
    key_length: int
    block_size: int

    @property
    def salt_size(self) -> int:
        return self.block_size

    @property
    def iv_size(self) -> int:
        """Bytes of IV stored in the output (PBES1 derives its IV instead)."""
        return self.block_size if self.scheme == PBES2 else 0

    def derive(self, password: bytes, salt: bytes, iterations: int) -> bytes:
        """Derive key material (PBES1: key + IV, PBES2: key only)."""
        if self.scheme == PBES1:
            return _pbkdf1(self.digest, password, salt, iterations,
                           self.key_length + self.block_size)

        kdf = PBKDF2HMAC(
            algorithm=self.digest(),
            length=self.key_length,
            salt=salt,
            iterations=iterations,
        )
        return kdf.derive(password)

    def cipher(self, key: bytes, iv: bytes) -> Cipher:
        if self.cipher_name == "des":
            # K1 = K2 = K3 is single DES
            return Cipher(TripleDES(key * 3), modes.CBC(iv))
        return Cipher(algorithms.AES(key), modes.CBC(iv))


def _pbkdf1(digest: Type[hashes.HashAlgorithm], password: bytes, salt: bytes,
            iterations: int, length: int) -> bytes:
    """PKCS#5 v1.5 PBKDF1: T1 = H(P || S), Ti = H(Ti-1)."""
    h = hashes.Hash(digest())
    h.update(password + salt)
    derived = h.finalize()
    for _ in range(iterations - 1):
        h = hashes.Hash(digest())
        h.update(derived)
        derived = h.finalize()

    if length > len(derived):
        raise ConfigError(f"PBKDF1 cannot derive {length} bytes from {digest.name}")
    return derived[:length]


def _build_registry() -> Dict[str, PBEAlgorithm]:
    registry = {
        "PBEWithMD5AndDES": PBEAlgorithm(
            name="PBEWithMD5AndDES",
            scheme=PBES1,
            digest=hashes.MD5,
            cipher_name="des",
            key_length=8,
            block_size=8,
        ),
    }

    digests = {
        "SHA1": hashes.SHA1,
        "SHA224": hashes.SHA224,
        "SHA256": hashes.SHA256,
        "SHA384": hashes.SHA384,
        "SHA512": hashes.SHA512,
    }
    for digest_name, digest in digests.items():
        for bits in (128, 256):
            name = f"PBEWithHMAC{digest_name}AndAES_{bits}"
            registry[name] = PBEAlgorithm(
                name=name,
                scheme=PBES2,
                digest=digest,
                cipher_name="aes",
                key_length=bits // 8,
                block_size=16,
            )

    return {name.upper(): algorithm for name, algorithm in registry.items()}


ALGORITHMS = _build_registry()

# Provider names accepted for compatibility; all map onto the OpenSSL backend
PROVIDERS = {
    "SUNJCE": "SunJCE",
}


def get_algorithm(name: str) -> PBEAlgorithm:
    """Look up an algorithm by name (case-insensitive)."""
    algorithm = ALGORITHMS.get((name or "").strip().upper())
    if algorithm is None:
        raise ConfigError(
            f"Unsupported encryption algorithm: {name} "
            f"(supported: {', '.join(supported_algorithms())})"
        )
    return algorithm


def get_provider(name: str) -> str:
    """Return the canonical provider name or raise ConfigError."""
    provider = PROVIDERS.get((name or "").strip().upper())
    if provider is None:
        raise ConfigError(f"Unsupported security provider: {name}")
    return provider


def supported_algorithms():
    return sorted(algorithm.name for algorithm in ALGORITHMS.values())
