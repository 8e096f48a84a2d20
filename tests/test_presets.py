"""Tests for YAML policy presets."""

from __future__ import annotations

import pytest

from csp_header.config.presets import (
    build_preset_policy,
    get_preset,
    load_presets,
    reset_presets_cache,
)
from csp_header.directive import DocumentDirective, FetchDirective, OtherDirective
from csp_header.exceptions import UnknownPreset
from csp_header.models.policy_config import PolicyConfig

BALANCED = (
    "default-src 'self'; script-src 'self' 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline'; img-src 'self' data: https:; "
    "font-src 'self' https:; connect-src 'self' https:; object-src 'none'; "
    "form-action 'self'; frame-ancestors 'self'; base-uri 'self'"
)


class TestLoadPresets:
    def test_bundled_presets(self):
        assert {"strict", "balanced", "permissive"} <= set(load_presets())

    def test_cached(self):
        assert load_presets() is load_presets()

    def test_missing_file(self, tmp_path):
        assert load_presets(tmp_path / "missing.yaml") == {}

    def test_custom_file(self, tmp_path):
        path = tmp_path / "presets.yaml"
        path.write_text("minimal:\n  default-src: ['''none''']\n")
        assert build_preset_policy("minimal", path=path) == "default-src 'none'"

    def test_custom_file_after_bundled(self, tmp_path):
        """A file passed after the bundled one is read, not served from cache."""
        bundled = load_presets()
        path = tmp_path / "custom.yaml"
        path.write_text("mine:\n  default-src: ['''self''']\n")

        custom = load_presets(path)

        assert "mine" in custom
        assert "mine" not in bundled
        assert load_presets() is bundled
        assert load_presets(path) is custom

    def test_file_from_settings(self, tmp_path, monkeypatch):
        path = tmp_path / "presets.yaml"
        path.write_text("only:\n  sandbox: null\n")
        monkeypatch.setenv("CSP_PRESETS_FILE", str(path))
        reset_presets_cache()
        assert build_preset_policy("only") == "sandbox"


class TestGetPreset:
    def test_resolves_directives(self):
        preset = get_preset("strict")
        assert isinstance(preset[FetchDirective.script_src], PolicyConfig)
        assert preset[FetchDirective.object_src] == ("'none'",)
        assert preset[OtherDirective.upgrade_insecure_requests] is None

    def test_unknown_preset(self):
        with pytest.raises(UnknownPreset, match="paranoid"):
            get_preset("paranoid")

    def test_unknown_directive_in_file(self, tmp_path):
        path = tmp_path / "presets.yaml"
        path.write_text("broken:\n  navigate-to: ['''self''']\n")
        with pytest.raises(ValueError):
            get_preset("broken", path=path)


class TestBuildPresetPolicy:
    def test_balanced_is_default(self):
        assert build_preset_policy() == BALANCED

    def test_strict(self):
        assert build_preset_policy("strict") == (
            "default-src 'self'; script-src 'self' 'strict-dynamic'; style-src 'self'; "
            "img-src 'self'; font-src 'self'; connect-src 'self'; object-src 'none'; "
            "form-action 'self'; frame-ancestors 'none'; upgrade-insecure-requests; "
            "base-uri 'self'"
        )

    def test_permissive(self):
        policy = build_preset_policy("permissive")
        assert "script-src 'self' 'unsafe-eval' 'unsafe-inline' https:" in policy
        assert "img-src data: *" in policy

    def test_nonce_added_to_configured_directives(self):
        policy = build_preset_policy("balanced", nonce="abc123")
        assert "script-src 'self' 'unsafe-inline' 'nonce-abc123';" in policy
        assert "style-src 'self' 'unsafe-inline' 'nonce-abc123';" in policy
        assert policy.count("'nonce-abc123'") == 2

    def test_nonce_on_raw_value_directive(self):
        policy = build_preset_policy("strict", nonce="n1", nonce_directives=["object-src"])
        assert "object-src 'none' 'nonce-n1';" in policy
        assert policy.count("'nonce-n1'") == 1

    def test_nonce_skips_bare_directives(self):
        policy = build_preset_policy(
            "strict", nonce="n1", nonce_directives=[DocumentDirective.sandbox, "upgrade-insecure-requests"]
        )
        assert "'nonce-n1'" not in policy

    def test_nonce_directives_from_settings(self, monkeypatch):
        monkeypatch.setenv("CSP_NONCE_DIRECTIVES", '["script-src"]')
        policy = build_preset_policy("balanced", nonce="abc")
        assert policy.count("'nonce-abc'") == 1
        assert "script-src 'self' 'unsafe-inline' 'nonce-abc';" in policy

    def test_default_preset_from_settings(self, monkeypatch):
        monkeypatch.setenv("CSP_DEFAULT_PRESET", "strict")
        assert "'strict-dynamic'" in build_preset_policy()


class TestPresetOverrides:
    def test_override_appends_new_values(self):
        policy = build_preset_policy(
            "strict", overrides={"script-src": ["https://cdn.example.com"]}
        )
        assert "script-src 'self' 'strict-dynamic' https://cdn.example.com;" in policy

    def test_override_skips_existing_values(self):
        policy = build_preset_policy(
            "balanced", overrides={FetchDirective.img_src: ["data:", "https://img.example.com"]}
        )
        assert "img-src 'self' data: https: https://img.example.com;" in policy
        assert policy.count("data:") == 1

    def test_override_adds_missing_directive(self):
        policy = build_preset_policy("balanced", overrides={"report-to": ["csp-endpoint"]})
        assert policy.endswith("base-uri 'self'; report-to csp-endpoint")

    def test_override_with_nonce(self):
        policy = build_preset_policy(
            "balanced", nonce="abc", overrides={"script-src": ["https://cdn.example.com"]}
        )
        assert "script-src 'self' 'unsafe-inline' 'nonce-abc' https://cdn.example.com;" in policy

    def test_bare_directive_kept(self):
        policy = build_preset_policy("strict", overrides={"img-src": ["data:"]})
        assert "; upgrade-insecure-requests;" in policy

    def test_unknown_override_directive(self):
        with pytest.raises(ValueError):
            build_preset_policy("strict", overrides={"navigate-to": ["'self'"]})

    def test_no_overrides_matches_plain_build(self):
        assert build_preset_policy("strict", overrides={}) == build_preset_policy("strict")
