"""
Resolver reading the JSON report written by the dependency updates checker
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from ..errors import ReportError
from ..types import (
    DependencyOutdated,
    DependencyVersion,
    GradleRelease,
    GradleReleases,
    Result,
)
from .base import ResultResolver

if TYPE_CHECKING:  # pragma: no cover
    from .updates import DependencyUpdatesTask

DEFAULT_REPORT_PATH = Path("build") / "dependencyUpdates" / "report.json"

# Order in which an available version is picked from the "available" block
AVAILABLE_KEYS = ("release", "milestone", "integration")


def _dependencies(section: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not section:
        return []
    dependencies = section.get("dependencies") or []
    if not isinstance(dependencies, list):
        raise ReportError("Expected 'dependencies' to be a list")
    return dependencies


def _outdated(entry: Dict[str, Any]) -> DependencyOutdated:
    available = entry.get("available") or {}
    available_version = next(
        (available[key] for key in AVAILABLE_KEYS if available.get(key)), None
    )
    if available_version is None:
        raise ReportError(
            f"Outdated dependency {entry['group']}:{entry['name']} has no available version"
        )

    return DependencyOutdated(
        group=entry["group"],
        name=entry["name"],
        current_version=entry["version"],
        available_version=available_version,
        projects=tuple(entry.get("projects") or ()),
    )


def _version(entry: Dict[str, Any]) -> DependencyVersion:
    return DependencyVersion(
        group=entry["group"],
        name=entry["name"],
        version=entry.get("version"),
        reason=entry.get("reason"),
    )


def _release(entry: Optional[Dict[str, Any]]) -> Optional[GradleRelease]:
    if not entry or not entry.get("version"):
        return None
    return GradleRelease(
        version=entry["version"],
        is_update_available=bool(entry.get("isUpdateAvailable", False)),
        is_failure=bool(entry.get("isFailure", False)),
        reason=entry.get("reason") or "",
    )


def _gradle(section: Optional[Dict[str, Any]]) -> Optional[GradleReleases]:
    if not section or not section.get("enabled", True):
        return None
    return GradleReleases(
        running=_release(section.get("running")),
        current=_release(section.get("current")),
        release_candidate=_release(section.get("releaseCandidate")),
        nightly=_release(section.get("nightly")),
    )


def parse_report(data: Dict[str, Any]) -> Result:
    """Build a Result from a decoded JSON report"""
    if not isinstance(data, dict):
        raise ReportError("Report must be a JSON object")

    try:
        return Result(
            outdated=[_outdated(e) for e in _dependencies(data.get("outdated"))],
            current=[_version(e) for e in _dependencies(data.get("current"))],
            exceeded=[_version(e) for e in _dependencies(data.get("exceeded"))],
            unresolved=[_version(e) for e in _dependencies(data.get("unresolved"))],
            gradle=_gradle(data.get("gradle")),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise ReportError(f"Malformed dependency entry in report: {e!r}") from e


class ReportResolver(ResultResolver):
    """Reads the checker's ``report.json`` instead of resolving versions itself"""

    def __init__(self, path: Union[str, Path] = DEFAULT_REPORT_PATH):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return "JSON report"

    def resolve(self, task: "DependencyUpdatesTask") -> Result:
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReportError(f"Cannot read report {self.path}: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ReportError(f"Invalid JSON in report {self.path}: {e}") from e

        return parse_report(data)
