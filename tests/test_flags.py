"""Tests for build flag profiles."""

import pytest
import yaml
from cryptography.exceptions import UnsupportedAlgorithm
from pydantic import ValidationError

from cryptoplug.features import BuildFlags, probe_build_flags
from cryptoplug.features import flags as flags_module


class TestProfiles:
    def test_default_is_fully_featured(self):
        flags = BuildFlags()
        assert flags.disabled() == []
        assert "rsa" in flags.enabled()

    def test_none(self):
        assert BuildFlags.none().enabled() == []

    def test_only(self):
        flags = BuildFlags.only("sha1", "hmac")
        assert flags.enabled() == ["sha1", "hmac"]

    def test_only_rejects_unknown(self):
        with pytest.raises(ValueError, match="sha4"):
            BuildFlags.only("sha1", "sha4")

    def test_frozen(self):
        with pytest.raises(ValidationError):
            BuildFlags().rsa = False

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            BuildFlags(quantum=True)


class TestYaml:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "profile.yaml"
        flags = BuildFlags.only("aes", "aead_gcm", "sha2_32")
        flags.to_yaml(path)
        assert BuildFlags.from_yaml(path) == flags

    def test_missing_flags_default_to_available(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text("md5: false\n")
        flags = BuildFlags.from_yaml(path)
        assert flags.disabled() == ["md5"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text("")
        assert BuildFlags.from_yaml(path) == BuildFlags()

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text(yaml.safe_dump({"sha1": True, "sha4": True}))
        with pytest.raises(ValidationError):
            BuildFlags.from_yaml(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text("- sha1\n- md5\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            BuildFlags.from_yaml(path)


class TestProbe:
    def test_probe_installed_library(self):
        probe_build_flags.cache_clear()
        flags = probe_build_flags()
        assert isinstance(flags, BuildFlags)
        # Never probed, always reported available
        assert flags.diffie_hellman
        assert flags.rsa
        assert flags.system_rng
        # Every supported cryptography release ships SHA-256
        assert flags.sha2_32

    def test_probe_is_cached(self):
        probe_build_flags.cache_clear()
        assert probe_build_flags() is probe_build_flags()

    def test_unsupported_algorithm_reported_unavailable(self, monkeypatch):
        def unsupported():
            raise UnsupportedAlgorithm("not in this build")

        real_checks = flags_module._probe_checks

        def checks():
            probes = real_checks()
            probes["chacha20_poly1305"] = unsupported
            probes["md5"] = unsupported
            return probes

        monkeypatch.setattr(flags_module, "_probe_checks", checks)
        probe_build_flags.cache_clear()

        flags = probe_build_flags()
        assert not flags.chacha20_poly1305
        assert not flags.md5
        assert flags.rsa
