"""Salt generators selectable through encryptor.saltGeneratorClassname."""

import secrets
from abc import ABC, abstractmethod
from typing import Dict, Type

from ..errors import ConfigError


class SaltGenerator(ABC):
    """Produces the salt used for one encryption."""

    @abstractmethod
    def generate_salt(self, length: int) -> bytes:
        pass

    @property
    @abstractmethod
    def includes_plain_salt(self) -> bool:
        """Whether the salt is prepended to the encrypted output."""
        pass


class RandomSaltGenerator(SaltGenerator):
    """Fresh random salt per message, stored in front of the ciphertext."""

    def generate_salt(self, length: int) -> bytes:
        return secrets.token_bytes(length)

    @property
    def includes_plain_salt(self) -> bool:
        return True


class ZeroSaltGenerator(SaltGenerator):
    """All-zero salt. Output is deterministic and carries no salt."""

    def generate_salt(self, length: int) -> bytes:
        return bytes(length)

    @property
    def includes_plain_salt(self) -> bool:
        return False


SALT_GENERATORS: Dict[str, Type[SaltGenerator]] = {
    "org.jasypt.salt.randomsaltgenerator": RandomSaltGenerator,
    "org.jasypt.salt.zerosaltgenerator": ZeroSaltGenerator,
    "random": RandomSaltGenerator,
    "zero": ZeroSaltGenerator,
}


def get_salt_generator(classname: str) -> SaltGenerator:
    """Instantiate the salt generator registered under ``classname``."""
    generator_cls = SALT_GENERATORS.get((classname or "").strip().lower())
    if generator_cls is None:
        raise ConfigError(f"Unsupported salt generator: {classname}")
    return generator_cls()
