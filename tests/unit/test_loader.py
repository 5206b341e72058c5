"""Unit tests for the configuration loader and settings."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from bfdconf.bfd.context import Role
from bfdconf.bfd.keywords import build_keyword_table, role_handlers
from bfdconf.config import BfdConfSettings
from bfdconf.errors import ConfigLoadError, ConfigParseError, RoleError
from bfdconf.loader import ConfigLoader, load_config, loads_config

SAMPLE_CONFIG = """
! Shared keepalived configuration
global_defs {
    router_id lb1
}

bfd_instance core1 {
    neighbor_ip 192.0.2.1
    source_ip 192.0.2.254
    min_rx 50
    min_tx 50
    idle_tx 2000
    multiplier 3
    vrrp
    weight -30
}

bfd_instance core2 {
    neighbor_ip 2001:db8::1
    max_hops 200
    checker
}

vrrp_instance VI_1 {
    state MASTER
    track_bfd {
        core1
    }
}
"""


class TestKeywordActivation:
    """Tests for role-dependent keyword tables."""

    @pytest.mark.parametrize("role", [Role.VRRP, Role.CHECKER, Role.PARENT])
    def test_field_keywords_inactive_outside_bfd(self, role):
        table = build_keyword_table(role)
        children = table.get("bfd_instance").children

        assert "neighbor_ip" in children
        assert "neighbor_ip" not in children.active_names()

    def test_bfd_role_active_keywords(self):
        children = build_keyword_table(Role.BFD).get("bfd_instance").children
        assert children.active_names() == [
            "source_ip",
            "neighbor_ip",
            "min_rx",
            "min_tx",
            "idle_tx",
            "multiplier",
            "passive",
            "ttl",
            "hoplimit",
            "max_hops",
            "vrrp",
            "checker",
        ]

    def test_weight_active_only_for_vrrp(self):
        vrrp_children = build_keyword_table(Role.VRRP).get("bfd_instance").children
        bfd_children = build_keyword_table(Role.BFD).get("bfd_instance").children

        assert "weight" in vrrp_children.active_names()
        assert "weight" in bfd_children
        assert "weight" not in bfd_children.active_names()

    def test_selectors_follow_enabled_roles(self):
        children = build_keyword_table(Role.BFD, {Role.CHECKER}).get("bfd_instance").children
        assert "checker" in children
        assert "vrrp" not in children
        assert "weight" not in children

    def test_disabled_role_has_no_handlers(self):
        assert Role.VRRP not in role_handlers({Role.CHECKER})
        with pytest.raises(RoleError):
            build_keyword_table(Role.VRRP, {Role.CHECKER})

    def test_tables_are_independent(self):
        assert build_keyword_table(Role.BFD) is not build_keyword_table(Role.BFD)


class TestConfigLoader:
    """Tests for ConfigLoader."""

    @pytest.fixture
    def config_file(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".conf", delete=False) as f:
            f.write(SAMPLE_CONFIG)
            f.flush()
            yield Path(f.name)
        Path(f.name).unlink()

    def test_load_bfd_role(self, config_file):
        result = load_config(config_file, Role.BFD)

        assert result.source == str(config_file)
        assert [b.name for b in result.instances] == ["core1", "core2"]
        core1 = result.get_instance("core1")
        assert core1.min_rx == 50_000
        assert core1.idle_tx == 2_000_000
        assert core1.detect_multiplier == 3
        assert (core1.vrrp, core1.checker) == (True, False)
        core2 = result.get_instance("core2")
        assert core2.ttl == 64
        assert core2.max_hops == 64
        assert (core2.vrrp, core2.checker) == (False, True)

    def test_load_consumer_roles(self, config_file):
        vrrp = load_config(config_file, Role.VRRP)
        checker = load_config(config_file, Role.CHECKER)

        assert [(t.name, t.weight) for t in vrrp.vrrp_tracked] == [("core1", -30)]
        assert vrrp.get_tracked("core1") is not None
        assert [t.name for t in checker.checker_tracked] == ["core2"]

    def test_load_all(self, config_file):
        results = ConfigLoader(BfdConfSettings()).load_all(config_file)

        assert set(results) == {Role.PARENT, Role.BFD, Role.VRRP, Role.CHECKER}
        assert results[Role.PARENT].have_bfd_instances is True

    def test_default_path_and_role_from_settings(self, config_file):
        settings = BfdConfSettings(config_file=config_file, role=Role.CHECKER)
        result = ConfigLoader(settings).load()

        assert result.role is Role.CHECKER
        assert [t.name for t in result.tracked] == ["core2"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigLoadError) as exc_info:
            load_config(tmp_path / "absent.conf")
        assert "not found" in exc_info.value.message

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.conf"
        path.write_bytes(b"bfd_instance caf\xe9 {\n}\n")
        with pytest.raises(ConfigLoadError, match="UTF-8"):
            load_config(path)

    def test_unbalanced_braces(self):
        with pytest.raises(ConfigParseError):
            loads_config("bfd_instance a {\n    neighbor_ip 192.0.2.1\n")

    def test_disabled_role_rejected(self):
        settings = BfdConfSettings(enabled_roles={Role.CHECKER})
        with pytest.raises(RoleError) as exc_info:
            ConfigLoader(settings).loads("", Role.VRRP)
        assert exc_info.value.details["enabled"] == ["bfd", "parent", "checker"]


class TestDeterminism:
    """Tests that independent loads do not share state."""

    def test_same_text_same_result(self):
        loader = ConfigLoader(BfdConfSettings())
        for role in (Role.BFD, Role.VRRP, Role.CHECKER, Role.PARENT):
            first = loader.loads(SAMPLE_CONFIG, role)
            second = loader.loads(SAMPLE_CONFIG, role)
            assert first.model_dump() == second.model_dump()

    def test_selectors_do_not_leak_between_loads(self):
        loader = ConfigLoader(BfdConfSettings())
        with_selector = "bfd_instance a {\n    neighbor_ip 192.0.2.1\n    vrrp\n}\n"
        without_selector = "bfd_instance b {\n    neighbor_ip 192.0.2.2\n}\n"

        loader.loads(with_selector, Role.CHECKER)
        result = loader.loads(without_selector, Role.CHECKER)
        assert [t.name for t in result.checker_tracked] == ["b"]

        loader.loads(with_selector, Role.BFD)
        bfd = loader.loads(without_selector, Role.BFD).instances[0]
        assert (bfd.vrrp, bfd.checker) == (True, True)


class TestSettings:
    """Tests for BfdConfSettings."""

    def test_defaults(self):
        settings = BfdConfSettings()
        assert settings.enabled_roles == {Role.VRRP, Role.CHECKER}
        assert settings.log_level == "INFO"

    def test_log_level_normalized(self):
        assert BfdConfSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            BfdConfSettings(log_level="LOUD")

    def test_only_consumer_roles_can_be_enabled(self):
        with pytest.raises(ValidationError):
            BfdConfSettings(enabled_roles={Role.BFD})

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("BFDCONF_ROLE", "vrrp")
        monkeypatch.setenv("BFDCONF_ENABLED_ROLES", '["vrrp"]')
        settings = BfdConfSettings()

        assert settings.role is Role.VRRP
        assert settings.enabled_roles == {Role.VRRP}
