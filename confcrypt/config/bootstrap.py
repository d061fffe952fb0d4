"""
Startup wiring for encryptable configuration.

Usage:
    from confcrypt.config import ConfigEnvironment, enable_encryptable_sources

    environment = ConfigEnvironment.from_defaults(files=["app.yaml"])
    enable_encryptable_sources(environment)

    environment.get_property("db.password")   # plaintext

An application that brings its own StringEncryptor passes it in and the
``encryptor.*`` properties are not consulted.
"""

import logging
from typing import Optional

from ..crypto.pbe import StringEncryptor
from ..crypto.pooled import PooledPBEStringEncryptor
from ..errors import ConfigError
from .environment import ConfigEnvironment
from .installer import SourceSetInstaller
from .resolver import CipherConfigResolver

logger = logging.getLogger(__name__)


def build_encryptor(
    environment: ConfigEnvironment,
    borrow_timeout: Optional[float] = None,
) -> PooledPBEStringEncryptor:
    """
    Build the default pooled encryptor from the ``encryptor.*`` properties.

    Raises:
        MissingRequiredConfig: encryptor.password is absent
        ConfigError: any other setting is invalid
    """
    result = CipherConfigResolver(environment).resolve()
    if not result.ok:
        for error in result.errors:
            logger.error(f"Encryptor configuration error: {error}")
    config = result.unwrap()

    try:
        return PooledPBEStringEncryptor(config, borrow_timeout=borrow_timeout)
    except ConfigError as e:
        logger.error(f"Failed to construct encryptor: {e}")
        raise


def enable_encryptable_sources(
    environment: ConfigEnvironment,
    encryptor: Optional[StringEncryptor] = None,
) -> StringEncryptor:
    """
    Install transparent decryption on every source of ``environment``.

    Args:
        environment: Environment whose sources are wrapped in place
        encryptor: Encryptor to use; built from configuration when None

    Returns:
        The encryptor the wrappers were bound to
    """
    if encryptor is None:
        encryptor = build_encryptor(environment)
    else:
        logger.info(f"Using supplied encryptor {type(encryptor).__name__}")

    SourceSetInstaller(encryptor).install(environment)
    return encryptor
