"""
Pooled password-based string encryptor.

Holds ``pool_size`` interchangeable PBEStringEncryptor instances. Each call
borrows one instance for its duration; when every instance is checked out
the caller blocks until one is returned. Instances are always returned,
whatever the outcome of the call.
"""

import logging
import queue
from contextlib import contextmanager
from typing import Iterator, Optional, Type

from ..errors import DecryptionError, EncryptableConfigError, EncryptionError
from .pbe import CipherConfig, PBEStringEncryptor, StringEncryptor

logger = logging.getLogger(__name__)


class PooledPBEStringEncryptor(StringEncryptor):
    """
    Thread-safe string encryptor backed by a fixed pool of cipher instances.

    Args:
        config: Cipher settings shared by every pooled instance
        borrow_timeout: Seconds to wait for a free instance (None waits forever)
    """

    def __init__(self, config: CipherConfig, borrow_timeout: Optional[float] = None):
        self.config = config
        self.borrow_timeout = borrow_timeout
        self._pool: "queue.Queue[PBEStringEncryptor]" = queue.Queue(maxsize=config.pool_size)

        # Building the first instance validates algorithm, provider and salt generator
        for _ in range(config.pool_size):
            self._pool.put_nowait(PBEStringEncryptor(config))

        logger.info(
            f"Encryptor pool initialized: algorithm={config.algorithm} "
            f"iterations={config.key_obtention_iterations} pool_size={config.pool_size} "
            f"output={config.string_output_type}"
        )

    @property
    def pool_size(self) -> int:
        return self.config.pool_size

    @property
    def available(self) -> int:
        """Number of instances currently idle in the pool."""
        return self._pool.qsize()

    @contextmanager
    def borrow(
        self, error_cls: Type[EncryptableConfigError] = DecryptionError
    ) -> Iterator[PBEStringEncryptor]:
        """Check out one cipher instance for the duration of the block."""
        try:
            instance = self._pool.get(timeout=self.borrow_timeout)
        except queue.Empty:
            raise error_cls(
                f"No cipher instance available after {self.borrow_timeout}s "
                f"(pool size {self.pool_size})"
            )

        try:
            yield instance
        finally:
            self._pool.put_nowait(instance)

    def encrypt(self, message: str) -> str:
        with self.borrow(EncryptionError) as instance:
            return instance.encrypt(message)

    def decrypt(self, encrypted_message: str) -> str:
        with self.borrow(DecryptionError) as instance:
            return instance.decrypt(encrypted_message)
