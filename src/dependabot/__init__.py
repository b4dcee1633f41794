"""
dependabot
Registers a dependency update check on a project and collects its outdated dependencies
"""

from .configuration import DependabotConfiguration
from .core import (
    CHECK_TASK_NAME,
    TASK_NAME,
    DependabotPlugin,
    OutdatedDependencies,
    find_or_create,
    report_outdated,
)
from .errors import (
    DuplicateRegistrationError,
    PreconditionViolation,
    ReportError,
    UnknownTaskError,
)
from .project import Project, Task
from .types import DependencyOutdated, GradleRelease, GradleReleases, Result

__version__ = "0.1.0"
__all__ = [
    "CHECK_TASK_NAME",
    "TASK_NAME",
    "DependabotConfiguration",
    "DependabotPlugin",
    "DependencyOutdated",
    "DuplicateRegistrationError",
    "GradleRelease",
    "GradleReleases",
    "OutdatedDependencies",
    "PreconditionViolation",
    "Project",
    "ReportError",
    "Result",
    "Task",
    "UnknownTaskError",
    "find_or_create",
    "report_outdated",
]
