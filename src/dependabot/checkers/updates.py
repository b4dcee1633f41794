"""
The dependencyUpdates task: resolves a result, filters it and hands it to a formatter
"""

import logging
from typing import Callable, Optional

from ..project import Project, Task
from ..types import RELEASE_CHANNELS, Result
from .base import ComponentSelection, ResolutionStrategy, ResultResolver

logger = logging.getLogger(__name__)

OutputFormatter = Callable[[Result], None]


def log_summary(result: Result) -> None:
    """Default output formatter"""
    logger.info(
        "%d dependencies checked: %d up to date, %d outdated, %d exceeded, %d unresolved",
        result.count,
        len(result.current),
        len(result.outdated),
        len(result.exceeded),
        len(result.unresolved),
    )


class DependencyUpdatesTask(Task):
    """Checks a project's dependencies for newer versions.

    The versions themselves come from ``resolver``; this task applies the
    component selection rules to the outdated candidates and passes the
    filtered result to ``output_formatter``.
    """

    def __init__(self, name: str, project: Project):
        super().__init__(name, project)
        self.check_for_gradle_update = True
        self._gradle_release_channel = "release-candidate"
        self.resolution_strategy = ResolutionStrategy()
        self.output_formatter: OutputFormatter = log_summary
        self.resolver: Optional[ResultResolver] = None

    @property
    def gradle_release_channel(self) -> str:
        return self._gradle_release_channel

    @gradle_release_channel.setter
    def gradle_release_channel(self, channel: str) -> None:
        if channel not in RELEASE_CHANNELS:
            raise ValueError(
                f"Unknown release channel '{channel}', "
                f"expected one of {', '.join(RELEASE_CHANNELS)}"
            )
        self._gradle_release_channel = channel

    def resolve(self) -> Result:
        if self.resolver is None:
            raise ValueError(f"No resolver configured for task {self.path}")

        result = self.resolver.resolve(self)
        outdated = []
        for dependency in result.outdated:
            selection = self.resolution_strategy.select(
                ComponentSelection(dependency.group, dependency.name, dependency.available_version)
            )
            if selection.rejected:
                logger.debug(
                    "Rejected %s:%s: %s",
                    selection.id,
                    selection.version,
                    selection.rejection_reason,
                )
                continue
            outdated.append(dependency)

        return Result(
            outdated=outdated,
            current=list(result.current),
            exceeded=list(result.exceeded),
            unresolved=list(result.unresolved),
            gradle=result.gradle if self.check_for_gradle_update else None,
        )

    def execute(self) -> None:
        result = self.resolve()
        self.output_formatter(result)
        super().execute()
