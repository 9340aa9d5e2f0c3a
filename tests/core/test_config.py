# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for Config: dot-notation lookup, files, env overrides and binding."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from formkit.core.config import Config, config_properties


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"formkit": {"validation": {"debounce_ms": 150}}})
        assert config.get("formkit.validation.debounce_ms") == 150

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "formkit.yaml"
        config_file.write_text("formkit:\n  validation:\n    debounce_ms: 50\n")
        config = Config.from_file(config_file)
        assert config.get("formkit.validation.debounce_ms") == 50
        assert str(config_file) in config.loaded_sources

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "formkit.toml"
        config_file.write_text('[formkit.validation]\nfallback_message = "Nope"\n')
        config = Config.from_file(config_file)
        assert config.get("formkit.validation.fallback_message") == "Nope"

    def test_file_values_override_bundled_defaults(self, tmp_path: Path):
        config_file = tmp_path / "formkit.yaml"
        config_file.write_text("formkit:\n  validation:\n    debounce_ms: 10\n")
        config = Config.from_file(config_file)
        assert config.get("formkit.validation.debounce_ms") == 10
        assert config.get("formkit.validation.fallback_message") == "Validation failed"

    def test_missing_file_keeps_defaults(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("formkit.validation.debounce_ms") == 300

    def test_defaults(self):
        config = Config.defaults()
        assert config.get("formkit.logging.format") == "console"
        assert config.get("formkit.logging.level.root") == "INFO"

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("FORMKIT_VALIDATION_DEBOUNCE_MS", "75")
        config = Config({"formkit": {"validation": {"debounce_ms": 300}}})
        assert config.get("formkit.validation.debounce_ms") == "75"

    def test_get_section(self):
        config = Config({"formkit": {"logging": {"format": "json"}}})
        assert config.get_section("formkit.logging") == {"format": "json"}
        assert config.get_section("formkit.absent") == {}


class TestPlaceholders:
    def test_resolves_config_reference(self):
        config = Config({"messages": {"generic": "Try again"}, "formkit": {"validation": {"fallback_message": "${messages.generic}"}}})
        assert config.get("formkit.validation.fallback_message") == "Try again"

    def test_uses_placeholder_default(self):
        config = Config({"formkit": {"validation": {"fallback_message": "${FORMKIT_TEST_UNSET_MSG:Invalid}"}}})
        assert config.get("formkit.validation.fallback_message") == "Invalid"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"a": "${does.not.exist}"})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("a")


class TestProfileConfigMerging:
    def test_merge_profile_config(self, tmp_path: Path):
        base = tmp_path / "formkit.yaml"
        base.write_text("formkit:\n  validation:\n    debounce_ms: 300\n    fallback_message: base\n")
        (tmp_path / "formkit-dev.yaml").write_text("formkit:\n  validation:\n    debounce_ms: 0\n")

        config = Config.from_file(base, active_profiles=["dev"])
        assert config.get("formkit.validation.debounce_ms") == 0
        assert config.get("formkit.validation.fallback_message") == "base"

    def test_missing_profile_file_is_skipped(self, tmp_path: Path):
        base = tmp_path / "formkit.yaml"
        base.write_text("app:\n  name: test\n")
        config = Config.from_file(base, active_profiles=["nonexistent"])
        assert config.get("app.name") == "test"


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="forms.signup")
        @dataclass
        class SignupConfig:
            min_username: int = 3
            allow_disposable: bool = False

        config = Config({"forms": {"signup": {"min_username": 5, "allow_disposable": True}}})
        bound = config.bind(SignupConfig)
        assert bound.min_username == 5
        assert bound.allow_disposable is True

    def test_bind_coerces_env_strings(self, monkeypatch):
        @config_properties(prefix="forms.signup")
        @dataclass
        class SignupConfig:
            min_username: int = 3
            allow_disposable: bool = False

        monkeypatch.setenv("FORMKIT_FORMS_SIGNUP_MIN_USERNAME", "8")
        monkeypatch.setenv("FORMKIT_FORMS_SIGNUP_ALLOW_DISPOSABLE", "yes")
        bound = Config({}).bind(SignupConfig)
        assert bound.min_username == 8
        assert bound.allow_disposable is True

    def test_bind_undecorated_class_raises(self):
        @dataclass
        class Plain:
            x: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)
