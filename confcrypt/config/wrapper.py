"""
Decrypting configuration source.

Decorates one ConfigSource: every lookup passes through the encrypted-value
detector, and marked values are decrypted with the shared encryptor before
being returned. A marked value that cannot be decrypted is an error; the
ciphertext is never handed back to the caller.
"""

import logging
from typing import List, Optional

from ..crypto.pbe import StringEncryptor
from ..errors import DecryptionError
from .detector import EncryptedValue, detect
from .sources import ConfigSource

logger = logging.getLogger(__name__)


class DecryptingConfigSource(ConfigSource):
    """
    Wraps a ConfigSource so encrypted literals read back as plaintext.

    The wrapper keeps a reference to the encryptor, not ownership of it; the
    same encryptor is normally shared by every wrapper in an environment.
    """

    def __init__(self, delegate: ConfigSource, encryptor: StringEncryptor):
        super().__init__(delegate.name)
        self._delegate = delegate
        self._encryptor = encryptor

    @property
    def delegate(self) -> ConfigSource:
        return self._delegate

    @property
    def encryptor(self) -> StringEncryptor:
        return self._encryptor

    def get(self, key: str) -> Optional[str]:
        raw = self._delegate.get(key)
        if raw is None:
            return None

        literal = detect(raw)
        if not isinstance(literal, EncryptedValue):
            return raw

        try:
            return self._encryptor.decrypt(literal.payload)
        except Exception as e:
            logger.error(
                f"Failed to decrypt property '{key}' from source '{self.name}': {e}"
            )
            raise DecryptionError(
                f"Unable to decrypt property '{key}' from source '{self.name}': {e}",
                key=key,
            ) from e

    def keys(self) -> List[str]:
        return self._delegate.keys()

    def contains(self, key: str) -> bool:
        return self._delegate.contains(key)

    def __repr__(self) -> str:
        return f"DecryptingConfigSource({self._delegate!r})"
