"""
Dependency update checker: the task, its resolvers and selection rules
"""

from .base import (
    ComponentSelection,
    ComponentSelectionRule,
    ResolutionStrategy,
    ResultResolver,
    accept_all,
)
from .report import DEFAULT_REPORT_PATH, ReportResolver, parse_report
from .updates import DependencyUpdatesTask

__all__ = [
    "ComponentSelection",
    "ComponentSelectionRule",
    "DEFAULT_REPORT_PATH",
    "DependencyUpdatesTask",
    "ReportResolver",
    "ResolutionStrategy",
    "ResultResolver",
    "accept_all",
    "parse_report",
]
