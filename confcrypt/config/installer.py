"""
Source-set installer.

Replaces every source registered with an environment by a
DecryptingConfigSource around it, slot for slot, so precedence is unchanged.
Sources that are already wrapped are left alone, which makes installation
idempotent. Runs once during startup, before the environment is shared
between threads.
"""

import logging

from ..crypto.pbe import StringEncryptor
from .environment import ConfigEnvironment
from .wrapper import DecryptingConfigSource

logger = logging.getLogger(__name__)


class SourceSetInstaller:
    """Wraps all sources of an environment with one shared encryptor."""

    def __init__(self, encryptor: StringEncryptor):
        self.encryptor = encryptor

    def install(self, environment: ConfigEnvironment) -> int:
        """
        Wrap every unwrapped source of ``environment``.

        Returns:
            Number of sources newly wrapped
        """
        wrapped = 0
        skipped = 0

        for source in environment.sources:
            if isinstance(source, DecryptingConfigSource):
                skipped += 1
                continue
            environment.sources.replace(
                source.name, DecryptingConfigSource(source, self.encryptor)
            )
            wrapped += 1

        logger.info(
            f"Encryptable configuration installed: {wrapped} source(s) wrapped, "
            f"{skipped} already wrapped"
        )
        logger.debug(f"Source order: {environment.sources.names()}")
        return wrapped


def install(environment: ConfigEnvironment, encryptor: StringEncryptor) -> int:
    """Wrap all sources of ``environment`` for decryption with ``encryptor``."""
    return SourceSetInstaller(encryptor).install(environment)
