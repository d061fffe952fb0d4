"""
Tests for confcrypt/config/bootstrap.py - Startup Wiring

Integration tests running the full path: resolve settings, build the pooled
encryptor, install wrappers, read decrypted values.
"""

import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from confcrypt.config import (
    ConfigEnvironment, DecryptingConfigSource, build_encryptor,
    enable_encryptable_sources, wrap
)
from confcrypt.crypto import CipherConfig, PBEStringEncryptor, PooledPBEStringEncryptor, StringEncryptor
from confcrypt.errors import ConfigError, DecryptionError, MissingRequiredConfig


PASSWORD = "bootstrap-password"


def _literal(plaintext, **config):
    return wrap(PBEStringEncryptor(CipherConfig(password=PASSWORD, **config)).encrypt(plaintext))


class TestBuildEncryptor:
    """Tests for default encryptor construction."""

    @pytest.mark.integration
    def test_missing_password(self, make_environment):
        with pytest.raises(MissingRequiredConfig) as exc_info:
            build_encryptor(make_environment(("app", {"db.user": "admin"})))
        assert "encryptor.password" in str(exc_info.value)

    @pytest.mark.integration
    def test_missing_password_logged_once(self, make_environment, caplog):
        caplog.set_level(logging.INFO, logger="confcrypt")
        with pytest.raises(MissingRequiredConfig):
            build_encryptor(make_environment(("app", {})))
        errors = [
            r for r in caplog.records
            if r.levelno == logging.ERROR and "encryptor.password" in r.getMessage()
        ]
        assert len(errors) == 1

    @pytest.mark.integration
    def test_invalid_algorithm(self, make_environment):
        with pytest.raises(ConfigError):
            build_encryptor(make_environment(("app", {
                "encryptor.password": PASSWORD,
                "encryptor.algorithm": "PBEWithNothing",
            })))

    @pytest.mark.integration
    def test_pool_size_from_configuration(self, make_environment):
        encryptor = build_encryptor(make_environment(("app", {
            "encryptor.password": PASSWORD,
            "encryptor.poolSize": "3",
        })))
        assert isinstance(encryptor, PooledPBEStringEncryptor)
        assert encryptor.pool_size == 3

    @pytest.mark.integration
    def test_default_algorithm_matches_explicit(self, make_environment):
        """Test that omitting the algorithm is the same as PBEWithMD5AndDES."""
        implicit = build_encryptor(make_environment(("app", {"encryptor.password": PASSWORD})))
        explicit = build_encryptor(make_environment(("app", {
            "encryptor.password": PASSWORD,
            "encryptor.algorithm": "PBEWithMD5AndDES",
        })))
        assert explicit.decrypt(implicit.encrypt("same")) == "same"
        assert implicit.decrypt(explicit.encrypt("same")) == "same"


class TestEnableEncryptableSources:
    """Tests for the full startup sequence."""

    @pytest.mark.integration
    def test_encrypted_property_read_as_plaintext(self, make_environment):
        environment = make_environment(("app", {
            "encryptor.password": PASSWORD,
            "db.user": "admin",
            "db.pass": _literal("s3cr3t"),
        }))

        encryptor = enable_encryptable_sources(environment)

        assert isinstance(encryptor, PooledPBEStringEncryptor)
        assert environment.get_property("db.pass") == "s3cr3t"
        assert environment.get_property("db.user") == "admin"
        assert environment.get_property("db.missing") is None

    @pytest.mark.integration
    def test_password_from_other_source(self, make_environment):
        environment = make_environment(
            ("secrets", {"encryptor.password": PASSWORD}),
            ("app", {"db.pass": _literal("s3cr3t")}),
        )
        enable_encryptable_sources(environment)
        assert environment.get_property("db.pass") == "s3cr3t"

    @pytest.mark.integration
    def test_configured_algorithm_used(self, make_environment):
        settings = {"algorithm": "PBEWithHMACSHA256AndAES_128", "string_output_type": "hexadecimal"}
        environment = make_environment(("app", {
            "encryptor.password": PASSWORD,
            "encryptor.algorithm": "PBEWithHMACSHA256AndAES_128",
            "encryptor.stringOutputType": "hexadecimal",
            "api.token": _literal("tok-123", **settings),
        }))
        enable_encryptable_sources(environment)
        assert environment.get_property("api.token") == "tok-123"

    @pytest.mark.integration
    def test_missing_password_aborts_before_wrapping(self, make_environment):
        environment = make_environment(("app", {"db.pass": "ENC(abc)"}))
        with pytest.raises(MissingRequiredConfig):
            enable_encryptable_sources(environment)
        assert not any(isinstance(s, DecryptingConfigSource) for s in environment.sources)

    @pytest.mark.integration
    def test_supplied_encryptor_skips_resolution(self, make_environment):
        """Test that a supplied encryptor is used and encryptor.* is not required."""
        encryptor = MagicMock(spec=StringEncryptor)
        encryptor.decrypt.return_value = "from-custom"
        environment = make_environment(("app", {"db.pass": "ENC(anything)"}))

        assert enable_encryptable_sources(environment, encryptor=encryptor) is encryptor
        assert environment.get_property("db.pass") == "from-custom"

    @pytest.mark.integration
    @pytest.mark.security
    def test_undecryptable_value_raises_with_key(self, make_environment):
        literal = "ENC(" + "A" * 5 + ")"
        environment = make_environment(("app", {
            "encryptor.password": PASSWORD,
            "db.pass": literal,
        }))
        enable_encryptable_sources(environment)
        with pytest.raises(DecryptionError) as exc_info:
            environment.get_property("db.pass")
        assert exc_info.value.key == "db.pass"

    @pytest.mark.integration
    def test_file_based_environment(self, temp_dir):
        config_file = temp_dir / "application.yaml"
        config_file.write_text(
            "db:\n"
            "  user: admin\n"
            f"  password: {_literal('yaml-secret')}\n"
        )
        environment = ConfigEnvironment.from_defaults(
            files=[config_file],
            environ={"ENCRYPTOR_PASSWORD": PASSWORD},
        )
        enable_encryptable_sources(environment)
        assert environment.get_property("db.password") == "yaml-secret"

    @pytest.mark.integration
    def test_installing_twice_is_harmless(self, make_environment):
        environment = make_environment(("app", {
            "encryptor.password": PASSWORD,
            "db.pass": _literal("once"),
        }))
        enable_encryptable_sources(environment)
        enable_encryptable_sources(environment)
        source = environment.sources.get("app")
        assert not isinstance(source.delegate, DecryptingConfigSource)
        assert environment.get_property("db.pass") == "once"

    @pytest.mark.integration
    def test_concurrent_reads_with_small_pool(self, make_environment):
        secrets = {f"secret.{i}": f"value-{i}" for i in range(12)}
        properties = {key: _literal(value) for key, value in secrets.items()}
        properties.update({"encryptor.password": PASSWORD, "encryptor.poolSize": "3"})
        environment = make_environment(("app", properties))
        enable_encryptable_sources(environment)

        keys = list(secrets) * 3
        with ThreadPoolExecutor(max_workers=9) as executor:
            results = list(executor.map(environment.get_property, keys))

        assert results == [secrets[key] for key in keys]
