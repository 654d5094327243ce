"""Unit tests for settings loading."""

import os

import pytest

from pipedef.config import Settings, validate_settings_schema
from pipedef.errors import ConfigError
from pipedef.publishing.loader import DEFAULT_REQUIRED_DEPENDENCIES


class TestSettingsFromFile:
    """Test Settings.from_file()."""

    def test_full_file(self, tmp_path):
        settings_file = tmp_path / "pipedef.yaml"
        settings_file.write_text(
            "module: pipelines/ci.py\n"
            "failIfChanged: true\n"
            "searchPaths:\n"
            "  - lib\n"
            "  - /opt/shared\n"
            "requiredDependencies:\n"
            "  - yaml\n"
        )

        settings = Settings.from_file(str(settings_file))

        assert settings.module == str(tmp_path.resolve() / "pipelines" / "ci.py")
        assert settings.fail_if_changed is True
        assert settings.search_paths == [str(tmp_path.resolve() / "lib"), "/opt/shared"]
        assert settings.required_dependencies == ("yaml",)

    def test_defaults(self, tmp_path):
        settings_file = tmp_path / "pipedef.yaml"
        settings_file.write_text("module: ci.py\n")

        settings = Settings.from_file(str(settings_file))

        assert settings.fail_if_changed is False
        assert settings.search_paths == []
        assert settings.required_dependencies == DEFAULT_REQUIRED_DEPENDENCIES

    def test_environment_variables_are_substituted(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CI_MODULE", "/abs/ci.py")
        settings_file = tmp_path / "pipedef.yaml"
        settings_file.write_text(
            "module: ${CI_MODULE}\nsearchPaths:\n  - ${MISSING_DIR:/opt/lib}\n"
        )

        settings = Settings.from_file(str(settings_file))

        assert settings.module == "/abs/ci.py"
        assert settings.search_paths == ["/opt/lib"]

    def test_unknown_key_is_rejected(self, tmp_path):
        settings_file = tmp_path / "pipedef.yaml"
        settings_file.write_text("module: ci.py\nfailIfChanges: true\n")

        with pytest.raises(ConfigError, match="Settings validation failed"):
            Settings.from_file(str(settings_file))

    def test_wrong_type_is_rejected(self, tmp_path):
        settings_file = tmp_path / "pipedef.yaml"
        settings_file.write_text("module: ci.py\nfailIfChanged: sometimes\n")

        with pytest.raises(ConfigError, match="failIfChanged"):
            Settings.from_file(str(settings_file))

    def test_invalid_yaml(self, tmp_path):
        settings_file = tmp_path / "pipedef.yaml"
        settings_file.write_text("module: [unclosed\n")

        with pytest.raises(ConfigError, match="YAML syntax error"):
            Settings.from_file(str(settings_file))


class TestSettingsSchema:
    def test_invalid_dependency_name(self):
        is_valid, errors = validate_settings_schema(
            {"requiredDependencies": ["not a module"]}
        )

        assert not is_valid
        assert errors[0].startswith("Path 'requiredDependencies -> 0':")

    def test_empty_settings_are_valid(self):
        assert validate_settings_schema({}) == (True, [])


class TestSettingsResolve:
    """Test Settings.resolve()."""

    def test_module_from_command_line(self, workdir):
        settings = Settings.resolve(module="ci.py")

        assert settings.module == "ci.py"
        assert settings.fail_if_changed is False

    def test_missing_module(self, workdir):
        with pytest.raises(ConfigError, match="No definitions module given"):
            Settings.resolve()

    def test_missing_settings_file(self, workdir):
        with pytest.raises(ConfigError, match="Settings file not found"):
            Settings.resolve(settings_file="nope.yaml")

    def test_default_settings_file_is_used(self, workdir):
        (workdir / "pipedef.yaml").write_text("module: ci.py\nfailIfChanged: true\n")

        settings = Settings.resolve()

        assert settings.module == str(workdir.resolve() / "ci.py")
        assert settings.fail_if_changed is True

    def test_command_line_wins(self, workdir):
        (workdir / "pipedef.yaml").write_text(
            "module: ci.py\nfailIfChanged: true\nsearchPaths:\n  - lib\n"
        )

        settings = Settings.resolve(
            module="other.py", fail_if_changed=False, search_paths=["extra"]
        )

        assert settings.module == "other.py"
        assert settings.fail_if_changed is False
        assert settings.search_paths == [str(workdir.resolve() / "lib"), "extra"]

    def test_explicit_settings_file(self, workdir):
        config_dir = workdir / "config"
        config_dir.mkdir()
        (config_dir / "ci.yaml").write_text("module: ../pipelines/ci.py\n")

        settings = Settings.resolve(settings_file=os.path.join("config", "ci.yaml"))

        assert os.path.normpath(settings.module) == str(
            workdir.resolve() / "pipelines" / "ci.py"
        )

    def test_loader_config(self):
        settings = Settings(module="ci.py", search_paths=["lib"])

        config = settings.loader_config()

        assert config.search_paths == ["lib"]
        assert config.required_dependencies == DEFAULT_REQUIRED_DEPENDENCIES
