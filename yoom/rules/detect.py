"""
Framework detection.

Walks DETECTION_ORDER and returns the first framework whose predicate
matches the project root. This is first-match, not best-match: a Tauri
app wrapping a Next.js frontend is reported as Tauri.

Predicates only read the file system. A missing or malformed manifest
makes the predicate false; it never fails detection.
"""

import json
import logging
from pathlib import Path
from typing import Callable

from yoom.rules.registry import RuleRegistry, default_registry
from yoom.rules.types import DetectionResult, Framework

logger = logging.getLogger(__name__)


# Most specific first: desktop shells before the web frameworks they wrap,
# generic automation last.
DETECTION_ORDER: tuple[Framework, ...] = (
    Framework.TAURI,
    Framework.ELECTRON,
    Framework.NEXTJS,
    Framework.LARAVEL,
    Framework.RAILS,
    Framework.FASTAPI,
    Framework.AUTOMATION,
)

CONFIDENCE_STRONG = 1.0  # Two or more detection markers on disk
CONFIDENCE_WEAK = 0.8  # Predicate matched with fewer markers


def file_exists(root: Path, relative_path: str) -> bool:
    """Check if a file or directory exists under the project root."""
    return (root / relative_path).exists()


def _load_json_manifest(root: Path, filename: str) -> dict | None:
    """Parse a JSON manifest, or None if it is missing or malformed."""
    path = root / filename
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug(f"[DETECT] Ignoring malformed {path}: {e}")
        return None
    return data if isinstance(data, dict) else None


def _has_key(section, name: str) -> bool:
    return isinstance(section, dict) and bool(section.get(name))


def has_npm_dependency(root: Path, dep_name: str) -> bool:
    """Check package.json dependencies/devDependencies for a package."""
    pkg = _load_json_manifest(root, "package.json")
    if pkg is None:
        return False
    return _has_key(pkg.get("dependencies"), dep_name) or _has_key(pkg.get("devDependencies"), dep_name)


def has_composer_package(root: Path, package_name: str) -> bool:
    """Check composer.json require/require-dev for a package."""
    composer = _load_json_manifest(root, "composer.json")
    if composer is None:
        return False
    return _has_key(composer.get("require"), package_name) or _has_key(composer.get("require-dev"), package_name)


def has_python_package(root: Path, package_name: str) -> bool:
    """Case-insensitive substring search in requirements.txt / pyproject.toml."""
    needle = package_name.lower()
    for filename in ("requirements.txt", "pyproject.toml"):
        path = root / filename
        if not path.is_file():
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.debug(f"[DETECT] Ignoring undecodable {path}: {e}")
            continue
        if needle in content.lower():
            return True
    return False


def _detect_tauri(root: Path) -> bool:
    return file_exists(root, "src-tauri/tauri.conf.json") or file_exists(root, "src-tauri/Cargo.toml")


def _detect_electron(root: Path) -> bool:
    return (
        file_exists(root, "electron-builder.json")
        or file_exists(root, "electron-builder.yml")
        or file_exists(root, "electron.vite.config.ts")
        or has_npm_dependency(root, "electron")
    )


def _detect_nextjs(root: Path) -> bool:
    return (
        file_exists(root, "next.config.js")
        or file_exists(root, "next.config.mjs")
        or file_exists(root, "next.config.ts")
        or (file_exists(root, "app/layout.tsx") and has_npm_dependency(root, "next"))
    )


def _detect_laravel(root: Path) -> bool:
    return (
        file_exists(root, "artisan")
        and file_exists(root, "composer.json")
        and has_composer_package(root, "laravel/framework")
    )


def _detect_rails(root: Path) -> bool:
    return (
        file_exists(root, "Gemfile")
        and file_exists(root, "config/routes.rb")
        and file_exists(root, "app/controllers/application_controller.rb")
    )


def _detect_fastapi(root: Path) -> bool:
    has_manifest = file_exists(root, "requirements.txt") or file_exists(root, "pyproject.toml")
    return has_manifest and (has_python_package(root, "fastapi") or file_exists(root, "app/main.py"))


def _detect_automation(root: Path) -> bool:
    return (
        file_exists(root, "bin/")
        or file_exists(root, "cli.ts")
        or file_exists(root, "cli.js")
        or file_exists(root, "scripts/")
    )


FRAMEWORK_DETECTORS: dict[Framework, Callable[[Path], bool]] = {
    Framework.TAURI: _detect_tauri,
    Framework.ELECTRON: _detect_electron,
    Framework.NEXTJS: _detect_nextjs,
    Framework.LARAVEL: _detect_laravel,
    Framework.RAILS: _detect_rails,
    Framework.FASTAPI: _detect_fastapi,
    Framework.AUTOMATION: _detect_automation,
}

# Every framework needs a predicate and a slot in the priority order
_unhandled = (set(Framework) - set(FRAMEWORK_DETECTORS)) | (set(Framework) - set(DETECTION_ORDER))
if _unhandled:
    raise RuntimeError(f"Frameworks without detection: {sorted(fw.value for fw in _unhandled)}")


class FrameworkDetector:
    """Detects a project's framework against a given registry."""

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def detect(self, project_root: Path | str) -> DetectionResult:
        """Detect the framework of a project.

        Args:
            project_root: Path to the project root

        Returns:
            DetectionResult for the first matching framework in DETECTION_ORDER,
            or one with framework=None and confidence 0 if nothing matches.
        """
        root = Path(project_root)

        for fw in DETECTION_ORDER:
            config = self.registry.get(fw)
            if config is None:
                continue
            if not FRAMEWORK_DETECTORS[fw](root):
                continue

            matched = tuple(m for m in config.detection if file_exists(root, m))
            confidence = CONFIDENCE_STRONG if len(matched) >= 2 else CONFIDENCE_WEAK
            logger.info(f"[DETECT] {root}: {fw.value} (confidence {confidence}, markers {list(matched)})")
            return DetectionResult(framework=config, confidence=confidence, matched_markers=matched)

        logger.info(f"[DETECT] {root}: no framework detected")
        return DetectionResult(framework=None, confidence=0.0, matched_markers=())


def detect_framework(project_root: Path | str, registry: RuleRegistry | None = None) -> DetectionResult:
    """Detect the framework of a project using the packaged registry by default."""
    return FrameworkDetector(registry if registry is not None else default_registry()).detect(project_root)
