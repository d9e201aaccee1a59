"""Tests for .jestgen.json loading and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from jestgen.config import (
    CONFIG_FILE_NAME,
    DEFAULT_TEMPLATE_PATH,
    config_to_json,
    default_config,
    initial_config_json,
    load_config,
    parse_config,
    validate_config,
)


def _write_config(root: Path, data: dict[str, Any]) -> Path:
    path = root / CONFIG_FILE_NAME
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _no_project_folder_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JESTGEN_PROJECT_FOLDER", raising=False)


class TestDefaults:
    def test_default_values(self) -> None:
        config = default_config()
        assert config.version == 1
        assert not config.use_custom_template
        assert config.custom_template_path == str(DEFAULT_TEMPLATE_PATH)
        assert not config.use_supertest
        assert config.app_path is None
        assert config.path_strategy == "mirror"
        assert config.test_dir == "test"
        assert config.source_marker == "src"
        assert config.is_default

    def test_factory_returns_fresh_values(self) -> None:
        first = default_config()
        first.custom_placeholders["x"] = "1"
        assert default_config().custom_placeholders == {}

    def test_bundled_templates_exist(self) -> None:
        assert DEFAULT_TEMPLATE_PATH.is_file()


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)
        assert config == default_config()

    def test_invalid_json_gives_defaults(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("{not json", encoding="utf-8")
        assert load_config(tmp_path) == default_config()

    def test_non_object_gives_defaults(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("[1, 2]", encoding="utf-8")
        assert load_config(tmp_path) == default_config()

    def test_empty_root_gives_defaults(self) -> None:
        assert load_config("") == default_config()

    def test_reads_values(self, tmp_path: Path) -> None:
        config_file = _write_config(
            tmp_path,
            {
                "useSupertest": True,
                "appPath": "../src/app",
                "beforeAll": "jest.resetModules();",
                "pathStrategy": "sibling",
                "testDir": "tests",
                "sourceRoot": "src",
            },
        )
        config = load_config(tmp_path)

        assert config.use_supertest
        assert config.app_path == "../src/app"
        assert config.before_all == "jest.resetModules();"
        assert config.after_all is None
        assert config.path_strategy == "sibling"
        assert config.test_dir == "tests"
        assert config.source_root == "src"
        assert config.config_path == str(config_file.resolve())
        assert not config.is_default

    def test_custom_template_path_resolved_against_config_dir(self, tmp_path: Path) -> None:
        (tmp_path / "templates").mkdir()
        _write_config(
            tmp_path,
            {"useCustomTemplate": True, "customTemplatePath": "templates/jest.txt"},
        )
        config = load_config(tmp_path)
        assert config.custom_template_path == str((tmp_path / "templates" / "jest.txt").resolve())

    def test_custom_template_path_ignored_when_disabled(self, tmp_path: Path) -> None:
        _write_config(tmp_path, {"customTemplatePath": "mine.txt"})
        assert load_config(tmp_path).custom_template_path == str(DEFAULT_TEMPLATE_PATH)

    def test_unknown_strategy_falls_back(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        _write_config(tmp_path, {"pathStrategy": "flat"})
        assert load_config(tmp_path).path_strategy == "mirror"
        assert "Unknown pathStrategy" in caplog.text

    def test_other_version_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        _write_config(tmp_path, {"version": 2})
        assert load_config(tmp_path).version == 1
        assert "Unsupported" in caplog.text

    def test_env_overrides_project_folder(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_config(tmp_path, {"projectFolder": "a"})
        monkeypatch.setenv("JESTGEN_PROJECT_FOLDER", "b")
        assert load_config(tmp_path).project_folder == "b"


class TestCustomPlaceholders:
    def test_object_form(self, tmp_path: Path) -> None:
        config = parse_config(
            {"useCustomTemplate": True, "customPlaceholders": {"author": "me", "${team}": "core"}},
            tmp_path / CONFIG_FILE_NAME,
        )
        assert config.custom_placeholders == {"author": "me", "team": "core"}

    def test_pair_list_form(self, tmp_path: Path) -> None:
        config = parse_config(
            {
                "useCustomTemplate": True,
                "customPlaceholders": [["${author}", "me"], ["year", 2024]],
            },
            tmp_path / CONFIG_FILE_NAME,
        )
        assert config.custom_placeholders == {"author": "me", "year": "2024"}

    def test_malformed_pairs_skipped(self, tmp_path: Path) -> None:
        config = parse_config(
            {"useCustomTemplate": True, "customPlaceholders": [["only-one"], ["a", "b"]]},
            tmp_path / CONFIG_FILE_NAME,
        )
        assert config.custom_placeholders == {"a": "b"}

    def test_ignored_without_custom_template(self, tmp_path: Path) -> None:
        config = parse_config(
            {"customPlaceholders": {"author": "me"}},
            tmp_path / CONFIG_FILE_NAME,
        )
        assert config.custom_placeholders == {}


class TestSerialization:
    def test_round_trip_keys(self) -> None:
        data = config_to_json(default_config())
        assert list(data) == [
            "version",
            "useCustomTemplate",
            "customTemplatePath",
            "customPlaceholders",
            "useSupertest",
            "appPath",
            "beforeAll",
            "afterAll",
            "projectFolder",
            "pathStrategy",
            "testDir",
            "sourceMarker",
            "sourceRoot",
        ]

    def test_initial_document_has_no_bundled_path(self) -> None:
        assert initial_config_json()["customTemplatePath"] == ""


class TestValidateConfig:
    def test_defaults_are_valid(self) -> None:
        assert validate_config(default_config()) == []

    def test_missing_custom_template(self, tmp_path: Path) -> None:
        config = default_config()
        config.use_custom_template = True
        config.custom_template_path = str(tmp_path / "missing.txt")
        errors = validate_config(config)
        assert any("customTemplatePath does not exist" in e for e in errors)

    def test_supertest_needs_app_path(self) -> None:
        config = default_config()
        config.use_supertest = True
        assert validate_config(config) == ["appPath is required when useSupertest is true"]

    def test_test_dir_must_be_a_single_name(self) -> None:
        config = default_config()
        config.test_dir = "a/b"
        assert any(e.startswith("testDir") for e in validate_config(config))

    def test_missing_project_folder(self, tmp_path: Path) -> None:
        config = default_config()
        config.project_folder = str(tmp_path / "nope")
        assert any("projectFolder does not exist" in e for e in validate_config(config))
