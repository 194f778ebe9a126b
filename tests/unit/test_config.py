"""Tests for configuration loading."""

import json

from kubeobj.core.config import (
    KubectlSettings,
    get_config_value,
    get_kubectl_settings,
    load_config,
)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file(self, tmp_path):
        assert load_config(str(tmp_path / "missing.json")) == {}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        assert load_config(str(path)) == {}

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        assert load_config(str(path)) == {}

    def test_valid_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"kubectl": {"binary": "/usr/bin/kubectl"}}))

        assert load_config(str(path)) == {"kubectl": {"binary": "/usr/bin/kubectl"}}


class TestGetConfigValue:
    """Tests for get_config_value()."""

    def test_nested_value(self):
        config = {"kubectl": {"timeout_seconds": 30}}

        assert get_config_value(["kubectl", "timeout_seconds"], config=config) == 30

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv("KUBECTL_BINARY", "/opt/kubectl")

        assert get_config_value(["kubectl", "binary"], config={}) == "/opt/kubectl"

    def test_config_wins_over_environment(self, monkeypatch):
        monkeypatch.setenv("KUBECTL_BINARY", "/opt/kubectl")

        assert get_config_value(["kubectl", "binary"], config={"kubectl": {"binary": "k"}}) == "k"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("KUBECTL_CONTEXT", raising=False)

        assert get_config_value(["kubectl", "context"], default="none", config={"kubectl": "flat"}) == "none"


class TestKubectlSettings:
    """Tests for get_kubectl_settings()."""

    def test_defaults(self, monkeypatch):
        for name in ("KUBECTL_BINARY", "KUBECTL_TIMEOUT_SECONDS", "KUBECTL_CONTEXT"):
            monkeypatch.delenv(name, raising=False)

        assert get_kubectl_settings(config={}) == KubectlSettings()

    def test_from_config(self):
        config = {"kubectl": {"binary": "/usr/local/bin/kubectl", "timeout_seconds": 45, "context": "kind-dev"}}

        settings = get_kubectl_settings(config=config)

        assert settings.binary == "/usr/local/bin/kubectl"
        assert settings.timeout_seconds == 45.0
        assert settings.context == "kind-dev"

    def test_timeout_from_environment(self, monkeypatch):
        monkeypatch.setenv("KUBECTL_TIMEOUT_SECONDS", "12.5")

        assert get_kubectl_settings(config={}).timeout_seconds == 12.5
