"""Tests for yoom.rules.detect module."""

import json
import logging

import pytest
from pathlib import Path

from yoom.rules.detect import (
    DETECTION_ORDER,
    FRAMEWORK_DETECTORS,
    FrameworkDetector,
    detect_framework,
    has_composer_package,
    has_npm_dependency,
    has_python_package,
)
from yoom.rules.registry import default_registry
from yoom.rules.types import Framework


def touch(root: Path, relative: str, content: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def write_package_json(root: Path, dependencies=None, dev_dependencies=None) -> None:
    data = {"name": "app"}
    if dependencies is not None:
        data["dependencies"] = dependencies
    if dev_dependencies is not None:
        data["devDependencies"] = dev_dependencies
    touch(root, "package.json", json.dumps(data))


class TestDetectionTable:

    def test_every_framework_has_predicate(self):
        assert set(FRAMEWORK_DETECTORS) == set(Framework)

    def test_order_covers_every_framework_once(self):
        assert sorted(DETECTION_ORDER) == sorted(Framework)
        assert len(DETECTION_ORDER) == len(set(DETECTION_ORDER))

    def test_order(self):
        assert [fw.value for fw in DETECTION_ORDER] == [
            "tauri", "electron", "nextjs", "laravel", "rails", "fastapi", "automation",
        ]


class TestDetectFramework:
    """detect_framework against sample project layouts."""

    def test_empty_directory(self, tmp_path):
        result = detect_framework(tmp_path)
        assert result.framework is None
        assert result.confidence == 0.0
        assert result.matched_markers == ()
        assert not result.found

    def test_nextjs_single_marker(self, tmp_path):
        touch(tmp_path, "next.config.js")
        result = detect_framework(tmp_path)
        assert result.framework.name is Framework.NEXTJS
        assert result.confidence == 0.8
        assert result.matched_markers == ("next.config.js",)

    def test_nextjs_two_markers_is_strong(self, tmp_path):
        touch(tmp_path, "next.config.mjs")
        touch(tmp_path, "app/layout.tsx")
        result = detect_framework(tmp_path)
        assert result.framework.name is Framework.NEXTJS
        assert result.confidence == 1.0

    def test_nextjs_layout_needs_next_dependency(self, tmp_path):
        touch(tmp_path, "app/layout.tsx")
        assert detect_framework(tmp_path).framework is None

        write_package_json(tmp_path, dependencies={"next": "14.0.0", "react": "18.0.0"})
        assert detect_framework(tmp_path).framework.name is Framework.NEXTJS

    def test_tauri_wins_over_nextjs(self, tmp_path):
        """Detection is first-match in priority order."""
        touch(tmp_path, "src-tauri/tauri.conf.json", "{}")
        touch(tmp_path, "next.config.js")
        result = detect_framework(tmp_path)
        assert result.framework.name is Framework.TAURI
        assert result.matched_markers == ("src-tauri/tauri.conf.json",)
        assert result.confidence == 0.8

    def test_electron_from_dev_dependency(self, tmp_path):
        write_package_json(tmp_path, dev_dependencies={"electron": "^28.0.0"})
        assert detect_framework(tmp_path).framework.name is Framework.ELECTRON

    def test_electron_wins_over_nextjs(self, tmp_path):
        touch(tmp_path, "electron-builder.yml")
        touch(tmp_path, "next.config.ts")
        assert detect_framework(tmp_path).framework.name is Framework.ELECTRON

    def test_laravel(self, tmp_path):
        touch(tmp_path, "artisan")
        touch(tmp_path, "composer.json", json.dumps({"require": {"laravel/framework": "^11.0"}}))
        result = detect_framework(tmp_path)
        assert result.framework.name is Framework.LARAVEL
        assert result.confidence == 1.0

    def test_laravel_needs_framework_package(self, tmp_path):
        touch(tmp_path, "artisan")
        touch(tmp_path, "composer.json", json.dumps({"require": {"monolog/monolog": "^3"}}))
        assert detect_framework(tmp_path).framework is None

    def test_rails_needs_all_three_files(self, tmp_path):
        touch(tmp_path, "Gemfile")
        touch(tmp_path, "config/routes.rb")
        assert detect_framework(tmp_path).framework is None

        touch(tmp_path, "app/controllers/application_controller.rb")
        result = detect_framework(tmp_path)
        assert result.framework.name is Framework.RAILS
        assert result.confidence == 1.0

    def test_fastapi_from_requirements(self, tmp_path):
        touch(tmp_path, "requirements.txt", "FastAPI==0.110.0\nuvicorn\n")
        result = detect_framework(tmp_path)
        assert result.framework.name is Framework.FASTAPI
        assert result.matched_markers == ("requirements.txt",)

    def test_fastapi_from_app_main(self, tmp_path):
        touch(tmp_path, "pyproject.toml", "[project]\nname = 'svc'\n")
        touch(tmp_path, "app/main.py")
        result = detect_framework(tmp_path)
        assert result.framework.name is Framework.FASTAPI
        assert result.confidence == 1.0

    def test_python_project_without_fastapi(self, tmp_path):
        touch(tmp_path, "requirements.txt", "django\n")
        assert detect_framework(tmp_path).framework is None

    def test_automation_from_scripts_dir(self, tmp_path):
        (tmp_path / "scripts").mkdir()
        result = detect_framework(tmp_path)
        assert result.framework.name is Framework.AUTOMATION

    def test_malformed_package_json_is_not_fatal(self, tmp_path, caplog):
        touch(tmp_path, "package.json", "{ not json")
        touch(tmp_path, "cli.ts")
        with caplog.at_level(logging.DEBUG, logger="yoom.rules.detect"):
            result = detect_framework(tmp_path)
        assert result.framework.name is Framework.AUTOMATION
        assert "Ignoring malformed" in caplog.text

    def test_accepts_string_path(self, tmp_path):
        touch(tmp_path, "next.config.js")
        assert detect_framework(str(tmp_path)).framework.name is Framework.NEXTJS

    def test_detector_with_explicit_registry(self, tmp_path):
        touch(tmp_path, "Gemfile")
        touch(tmp_path, "config/routes.rb")
        touch(tmp_path, "app/controllers/application_controller.rb")
        registry = default_registry()
        result = FrameworkDetector(registry).detect(tmp_path)
        assert result.framework is registry.get("rails")

    def test_detection_is_logged(self, tmp_path, caplog):
        touch(tmp_path, "next.config.js")
        with caplog.at_level(logging.INFO, logger="yoom.rules.detect"):
            detect_framework(tmp_path)
        assert "[DETECT]" in caplog.text
        assert "nextjs" in caplog.text


class TestManifestHelpers:

    def test_npm_dependency_missing_manifest(self, tmp_path):
        assert not has_npm_dependency(tmp_path, "next")

    def test_npm_dependency_sections(self, tmp_path):
        write_package_json(tmp_path, dependencies={"react": "18"}, dev_dependencies={"vitest": "1"})
        assert has_npm_dependency(tmp_path, "react")
        assert has_npm_dependency(tmp_path, "vitest")
        assert not has_npm_dependency(tmp_path, "next")

    def test_npm_manifest_not_an_object(self, tmp_path):
        touch(tmp_path, "package.json", "[1, 2]")
        assert not has_npm_dependency(tmp_path, "next")

    def test_composer_require_dev(self, tmp_path):
        touch(tmp_path, "composer.json", json.dumps({"require-dev": {"laravel/framework": "^11"}}))
        assert has_composer_package(tmp_path, "laravel/framework")

    def test_python_package_case_insensitive(self, tmp_path):
        touch(tmp_path, "pyproject.toml", 'dependencies = ["FASTAPI>=0.100"]\n')
        assert has_python_package(tmp_path, "fastapi")

    def test_python_package_undecodable_file(self, tmp_path):
        (tmp_path / "requirements.txt").write_bytes(b"\xff\xfe\x00fastapi")
        assert not has_python_package(tmp_path, "fastapi")
