"""
Tests for confcrypt/config/installer.py - Source-Set Installer

Tests cover:
- Wrapping of every registered source
- Preservation of order and override semantics
- Idempotency
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from confcrypt.config import DecryptingConfigSource, SourceSetInstaller, install


class TestInstall:
    """Tests for wrapping an environment's sources."""

    @pytest.mark.unit
    def test_all_sources_wrapped_in_order(self, make_environment, single_encryptor):
        environment = make_environment(("a", {}), ("b", {}), ("c", {}))
        originals = list(environment.sources)

        wrapped = install(environment, single_encryptor)

        assert wrapped == 3
        assert environment.sources.names() == ["a", "b", "c"]
        for original, current in zip(originals, environment.sources):
            assert isinstance(current, DecryptingConfigSource)
            assert current.delegate is original
            assert current.encryptor is single_encryptor

    @pytest.mark.unit
    def test_encrypted_value_readable_after_install(
        self, make_environment, single_encryptor, encrypt_literal
    ):
        environment = make_environment(("app", {"db.pass": encrypt_literal("s3cr3t")}))
        install(environment, single_encryptor)
        assert environment.get_property("db.pass") == "s3cr3t"

    @pytest.mark.unit
    def test_higher_priority_plaintext_override(
        self, make_environment, single_encryptor, encrypt_literal
    ):
        environment = make_environment(
            ("override", {"db.pass": "plain-override"}),
            ("defaults", {"db.pass": encrypt_literal("from-defaults")}),
        )
        install(environment, single_encryptor)
        assert environment.get_property("db.pass") == "plain-override"

    @pytest.mark.unit
    def test_higher_priority_encrypted_override(
        self, make_environment, single_encryptor, encrypt_literal
    ):
        environment = make_environment(
            ("override", {"db.pass": encrypt_literal("from-override")}),
            ("defaults", {"db.pass": "plain-default"}),
        )
        install(environment, single_encryptor)
        assert environment.get_property("db.pass") == "from-override"

    @pytest.mark.unit
    def test_empty_environment(self, make_environment, single_encryptor):
        environment = make_environment()
        assert install(environment, single_encryptor) == 0


class TestIdempotency:
    """Tests for running the installer more than once."""

    @pytest.mark.unit
    def test_second_run_wraps_nothing(self, make_environment, single_encryptor, encrypt_literal):
        environment = make_environment(("a", {"k": encrypt_literal("v")}), ("b", {}))
        installer = SourceSetInstaller(single_encryptor)

        assert installer.install(environment) == 2
        first = list(environment.sources)
        assert installer.install(environment) == 0

        assert list(environment.sources) == first
        for source in environment.sources:
            assert not isinstance(source.delegate, DecryptingConfigSource)
        assert environment.get_property("k") == "v"

    @pytest.mark.unit
    def test_new_source_wrapped_on_rerun(self, make_environment, single_encryptor):
        from confcrypt.config import MapConfigSource

        environment = make_environment(("a", {}))
        install(environment, single_encryptor)
        environment.sources.add_first(MapConfigSource("late", {}))

        assert install(environment, single_encryptor) == 1
        assert environment.sources.names() == ["late", "a"]
        assert all(isinstance(s, DecryptingConfigSource) for s in environment.sources)
