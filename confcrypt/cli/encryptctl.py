#!/usr/bin/env python3
"""
encryptctl - Encrypted configuration value tool

Provides command-line access to the configured encryptor:
- Encrypt a secret into an ENC(...) literal for a configuration file
- Decrypt an ENC(...) literal
- Read one property of a configuration file with decryption applied
- Show which properties of a file are encrypted

Usage:
    encryptctl --password s3cret encrypt "db-password"
    encryptctl decrypt "ENC(nRmY3mD6Wm1HAfKi9S0BmQ==)"
    encryptctl get config/app.yaml db.password
    encryptctl status config/app.yaml

Environment Variables:
    ENCRYPTOR_PASSWORD  - Encryptor password when --password is not given
    ENCRYPTOR_*         - Any other encryptor.* property (e.g. ENCRYPTOR_ALGORITHM)
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from confcrypt.config import (
    ConfigEnvironment,
    EnvironmentVariableSource,
    FileConfigSource,
    MapConfigSource,
    build_encryptor,
    detect,
    install,
    wrap,
)
from confcrypt.config.detector import EncryptedValue
from confcrypt.constants import CliEnv, EncryptorProperties, OutputType
from confcrypt.errors import EncryptableConfigError
from confcrypt.logging_config import set_verbose, setup_logging

logger = logging.getLogger(__name__)


# ANSI color codes
class Colors:
    RESET = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    GRAY = '\033[90m'

    @classmethod
    def disable(cls):
        """Disable colors for non-TTY output."""
        cls.RESET = ''
        cls.BOLD = ''
        cls.RED = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.GRAY = ''


def print_error(msg: str) -> None:
    """Print error message."""
    print(f"{Colors.RED}Error:{Colors.RESET} {msg}", file=sys.stderr)


class EncryptCLI:
    """CLI handler for encryptctl commands."""

    def __init__(self, args: argparse.Namespace):
        self.args = args

    def _cli_properties(self) -> Dict[str, str]:
        """encryptor.* properties given on the command line."""
        args = self.args
        given = {
            EncryptorProperties.PASSWORD: args.password,
            EncryptorProperties.ALGORITHM: args.algorithm,
            EncryptorProperties.KEY_OBTENTION_ITERATIONS: args.iterations,
            EncryptorProperties.SALT_GENERATOR_CLASSNAME: args.salt_generator,
            EncryptorProperties.STRING_OUTPUT_TYPE: args.output_type,
        }
        return {key: str(value) for key, value in given.items() if value is not None}

    def _environment(self, files: Optional[List[str]] = None) -> ConfigEnvironment:
        sources = [
            MapConfigSource("command-line", self._cli_properties()),
            EnvironmentVariableSource(),
        ]
        for path in reversed(files or []):
            sources.append(FileConfigSource.from_file(path))
        return ConfigEnvironment(sources)

    def cmd_encrypt(self) -> int:
        encryptor = build_encryptor(self._environment())
        print(wrap(encryptor.encrypt(self.args.value)))
        return 0

    def cmd_decrypt(self) -> int:
        literal = detect(self.args.value)
        payload = literal.payload if isinstance(literal, EncryptedValue) else self.args.value
        encryptor = build_encryptor(self._environment())
        print(encryptor.decrypt(payload))
        return 0

    def cmd_get(self) -> int:
        environment = self._environment([self.args.file])
        install(environment, build_encryptor(environment))
        value = environment.get_property(self.args.key)
        if value is None:
            print_error(f"Property not found: {self.args.key}")
            return 1
        print(value)
        return 0

    def cmd_status(self) -> int:
        source = FileConfigSource.from_file(self.args.file)
        status = {
            key: "encrypted" if isinstance(detect(source.get(key)), EncryptedValue) else "plain"
            for key in source.keys()
        }

        if self.args.json:
            print(json.dumps(status, indent=2))
            return 0

        print(f"{Colors.BOLD}File:{Colors.RESET} {self.args.file}")
        for key, state in status.items():
            color = Colors.YELLOW if state == "encrypted" else Colors.GRAY
            print(f"  {key:40} {color}{state}{Colors.RESET}")
        encrypted = sum(1 for state in status.values() if state == "encrypted")
        print(f"{Colors.GREEN}{encrypted}{Colors.RESET} of {len(status)} properties encrypted")
        return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='encryptctl',
        description='Encrypt, decrypt and inspect ENC(...) configuration values',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  encryptctl --password s3cret encrypt "db-password"
  encryptctl --password s3cret decrypt "ENC(...)"
  encryptctl get config/app.yaml db.password
  encryptctl status config/app.yaml --json
        """
    )

    parser.add_argument(
        '--no-color', action='store_true',
        help='Disable colored output'
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--json-logs', action='store_true',
        help='Emit log records as JSON lines'
    )
    parser.add_argument(
        '-p', '--password', metavar='PASSWORD',
        help=f'Encryptor password (default: ${CliEnv.PASSWORD})'
    )
    parser.add_argument(
        '-a', '--algorithm', metavar='NAME',
        help='PBE algorithm (default: PBEWithMD5AndDES)'
    )
    parser.add_argument(
        '-i', '--iterations', type=int, metavar='N',
        help='Key obtention iterations (default: 1000)'
    )
    parser.add_argument(
        '-s', '--salt-generator', metavar='CLASSNAME',
        help='Salt generator (default: org.jasypt.salt.RandomSaltGenerator)'
    )
    parser.add_argument(
        '-o', '--output-type', choices=list(OutputType.ALL),
        help='Ciphertext encoding (default: base64)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    encrypt_parser = subparsers.add_parser('encrypt', help='Encrypt a value')
    encrypt_parser.add_argument('value', help='Plaintext to encrypt')

    decrypt_parser = subparsers.add_parser('decrypt', help='Decrypt a value')
    decrypt_parser.add_argument('value', help='ENC(...) literal or bare payload')

    get_parser = subparsers.add_parser('get', help='Read a property from a config file')
    get_parser.add_argument('file', help='Configuration file')
    get_parser.add_argument('key', help='Property key, e.g. db.password')

    status_parser = subparsers.add_parser('status', help='Show encrypted properties of a file')
    status_parser.add_argument('file', help='Configuration file')
    status_parser.add_argument('--json', action='store_true', help='Output as JSON')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color or not sys.stdout.isatty():
        Colors.disable()

    setup_logging(json_format=args.json_logs)
    if args.verbose:
        set_verbose(True)
    else:
        logging.getLogger('confcrypt').setLevel(logging.WARNING)

    if not args.command:
        parser.print_help()
        return 2

    cli = EncryptCLI(args)
    command_map = {
        'encrypt': cli.cmd_encrypt,
        'decrypt': cli.cmd_decrypt,
        'get': cli.cmd_get,
        'status': cli.cmd_status,
    }

    try:
        return command_map[args.command]()
    except (EncryptableConfigError, FileNotFoundError) as e:
        print_error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
