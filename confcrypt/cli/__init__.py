"""
CLI Module for confcrypt

Provides command-line tools for encrypted configuration values:
- encryptctl: encrypt, decrypt and inspect ENC(...) values

Usage:
    python -m confcrypt.cli.encryptctl encrypt "secret"
    python -m confcrypt.cli.encryptctl status config/app.yaml
"""

from .encryptctl import EncryptCLI, main as encryptctl_main

__all__ = [
    'EncryptCLI',
    'encryptctl_main',
]
