"""
Pytest configuration and shared fixtures for confcrypt tests.

This module provides common fixtures for testing encryptors, configuration
sources and environments.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator

import pytest

# Add the parent directory to the path for imports
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from confcrypt.config import ConfigEnvironment, MapConfigSource, wrap
from confcrypt.crypto import CipherConfig, PBEStringEncryptor, PooledPBEStringEncryptor


TEST_PASSWORD = "unit-test-master-password"


# ===========================================================================
# Temporary Directory Fixtures
# ===========================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is cleaned up after the test."""
    tmpdir = tempfile.mkdtemp(prefix="confcrypt_test_")
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


# ===========================================================================
# Encryptor Fixtures
# ===========================================================================

@pytest.fixture
def cipher_config() -> CipherConfig:
    """Provide a CipherConfig with default settings."""
    return CipherConfig(password=TEST_PASSWORD)


@pytest.fixture
def single_encryptor(cipher_config: CipherConfig) -> PBEStringEncryptor:
    """Provide a single (unpooled) cipher instance."""
    return PBEStringEncryptor(cipher_config)


@pytest.fixture
def pooled_encryptor() -> PooledPBEStringEncryptor:
    """Provide a pooled encryptor with four instances."""
    return PooledPBEStringEncryptor(CipherConfig(password=TEST_PASSWORD, pool_size=4))


@pytest.fixture
def encrypt_literal(single_encryptor: PBEStringEncryptor) -> Callable[[str], str]:
    """Provide a function turning plaintext into an ENC(...) literal."""
    def _encrypt(plaintext: str) -> str:
        return wrap(single_encryptor.encrypt(plaintext))
    return _encrypt


# ===========================================================================
# Environment Fixtures
# ===========================================================================

@pytest.fixture
def make_environment() -> Callable[..., ConfigEnvironment]:
    """Provide a factory building an environment from name -> mapping pairs.

    Sources are registered in the order given, highest precedence first.
    """
    def _make(*named_mappings) -> ConfigEnvironment:
        sources = [MapConfigSource(name, dict(mapping)) for name, mapping in named_mappings]
        return ConfigEnvironment(sources)
    return _make


@pytest.fixture
def encryptor_properties() -> Dict[str, str]:
    """Provide the minimal encryptor properties."""
    return {"encryptor.password": TEST_PASSWORD}


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Restore root handlers and confcrypt logger level changed by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    confcrypt_level = logging.getLogger('confcrypt').level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger('confcrypt').setLevel(confcrypt_level)


# ===========================================================================
# Markers Registration
# ===========================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "security: Security-specific tests")
    config.addinivalue_line("markers", "slow: Slow tests (>1s)")
