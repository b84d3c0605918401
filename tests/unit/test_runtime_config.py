"""
Runtime Configuration Unit Tests
Tests for csmt/config/runtime.py
"""
import pytest

from csmt.config.runtime import (
    RuntimeConfig,
    TreeConfig,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CSMT_DEBUG", "CSMT_ATOMIC_INSERTS", "CSMT_LOG_LEVEL", "CSMT_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


class TestRuntimeConfig:
    """Tests for config loading."""

    def test_defaults(self):
        config = RuntimeConfig()
        assert config.tree == TreeConfig(debug=False, atomic_inserts=False)
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CSMT_ATOMIC_INSERTS", "true")
        monkeypatch.setenv("CSMT_DEBUG", "1")
        monkeypatch.setenv("CSMT_LOG_LEVEL", "DEBUG")

        config = RuntimeConfig.from_env()

        assert config.tree.atomic_inserts is True
        assert config.tree.debug is True
        assert config.logging.level == "DEBUG"

    def test_false_env_flag(self, monkeypatch):
        monkeypatch.setenv("CSMT_ATOMIC_INSERTS", "false")
        assert RuntimeConfig.from_env().tree.atomic_inserts is False

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"tree": {"atomic_inserts": True}})
        assert config.tree.atomic_inserts is True
        assert config.tree.debug is False
        assert config.logging.level == "INFO"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "csmt.yaml"
        path.write_text("tree:\n  debug: true\nlogging:\n  level: WARNING\n")

        config = RuntimeConfig.from_yaml(path)

        assert config.tree.debug is True
        assert config.logging.level == "WARNING"

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "csmt.yaml"
        path.write_text("logging:\n  level: WARNING\n")
        monkeypatch.setenv("CSMT_LOG_LEVEL", "ERROR")

        base = RuntimeConfig.from_yaml(path)
        config = base.with_env_overrides()

        assert config.logging.level == "ERROR"
        assert base.logging.level == "WARNING"

    def test_to_dict(self):
        assert RuntimeConfig().to_dict() == {
            "tree": {"debug": False, "atomic_inserts": False},
            "logging": {"level": "INFO", "file": None},
        }
