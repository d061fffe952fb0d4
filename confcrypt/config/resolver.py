"""
Cipher configuration resolver.

Reads the ``encryptor.*`` properties that configure the default encryptor.
Lookups go to the unwrapped view of the environment: the encryptor cannot
be used to decrypt its own settings.

``resolve()`` returns a ResolutionResult instead of raising, so startup code
can report every problem at once and decide how to abort.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..constants import Defaults, EncryptorProperties
from ..crypto.pbe import CipherConfig
from ..errors import ConfigError, MissingRequiredConfig
from .environment import ConfigEnvironment

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Outcome of resolving the cipher configuration."""
    config: Optional[CipherConfig] = None
    errors: List[ConfigError] = field(default_factory=list)
    defaulted: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.config is not None and not self.errors

    def unwrap(self) -> CipherConfig:
        """Return the configuration or raise the first error."""
        if self.errors:
            raise self.errors[0]
        if self.config is None:
            raise ConfigError("Cipher configuration was not resolved")
        return self.config


def _parse_positive_int(value: str, *, key: str) -> int:
    try:
        parsed = int(value.strip())
    except (TypeError, ValueError):
        raise ConfigError(f"Config key {key} must be an integer; got {value!r}")
    if parsed < 1:
        raise ConfigError(f"Config key {key} must be positive; got {parsed}")
    return parsed


class CipherConfigResolver:
    """Resolves encryptor settings with required / optional-with-default semantics."""

    def __init__(self, environment: ConfigEnvironment):
        self.environment = environment.unwrapped()

    def _property_exists(self, key: str) -> bool:
        return self.environment.get_property(key) is not None

    def require_property(self, key: str) -> str:
        if not self._property_exists(key):
            raise MissingRequiredConfig(key)
        return self.environment.get_property(key)

    def optional_property(self, key: str, default: str) -> str:
        if not self._property_exists(key):
            logger.info(
                f"Encryptor config not found for property {key}, using default value: {default}"
            )
        return self.environment.get_property(key, default)

    def resolve(self) -> ResolutionResult:
        result = ResolutionResult()

        password = None
        try:
            password = self.require_property(EncryptorProperties.PASSWORD)
        except MissingRequiredConfig as e:
            result.errors.append(e)

        def optional(key: str, default: str) -> str:
            if not self._property_exists(key):
                result.defaulted.append(key)
            return self.optional_property(key, default)

        algorithm = optional(EncryptorProperties.ALGORITHM, Defaults.ALGORITHM)
        iterations_text = optional(
            EncryptorProperties.KEY_OBTENTION_ITERATIONS, Defaults.KEY_OBTENTION_ITERATIONS
        )
        pool_size_text = optional(EncryptorProperties.POOL_SIZE, Defaults.POOL_SIZE)
        provider_name = optional(EncryptorProperties.PROVIDER_NAME, Defaults.PROVIDER_NAME)
        salt_generator = optional(
            EncryptorProperties.SALT_GENERATOR_CLASSNAME, Defaults.SALT_GENERATOR_CLASSNAME
        )
        output_type = optional(
            EncryptorProperties.STRING_OUTPUT_TYPE, Defaults.STRING_OUTPUT_TYPE
        )

        iterations = pool_size = None
        try:
            iterations = _parse_positive_int(
                iterations_text, key=EncryptorProperties.KEY_OBTENTION_ITERATIONS
            )
        except ConfigError as e:
            result.errors.append(e)
        try:
            pool_size = _parse_positive_int(pool_size_text, key=EncryptorProperties.POOL_SIZE)
        except ConfigError as e:
            result.errors.append(e)

        if result.errors:
            return result

        try:
            result.config = CipherConfig(
                password=password,
                algorithm=algorithm,
                key_obtention_iterations=iterations,
                pool_size=pool_size,
                provider_name=provider_name,
                salt_generator_classname=salt_generator,
                string_output_type=output_type,
            )
        except ConfigError as e:
            result.errors.append(e)

        return result
