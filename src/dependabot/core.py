"""
Core classes for the dependabot plugin
"""

import json
import logging
from typing import Callable, Iterator, List, Optional, Sequence, Type, TypeVar, Union

from .checkers.base import ComponentSelection, ComponentSelectionRule, accept_all
from .checkers.updates import DependencyUpdatesTask
from .configuration import DependabotConfiguration
from .errors import DuplicateRegistrationError, PreconditionViolation
from .project import PATH_SEPARATOR, Project, Task, TaskContainer
from .types import DependencyOutdated, GradleReleases, Result

logger = logging.getLogger(__name__)

CHECK_TASK_NAME = "dependencyUpdates"
TASK_NAME = "dependabot"
RELEASE_CHANNEL = "current"

T = TypeVar("T", bound=Task)


def find_or_create(
    registry: TaskContainer, name: str, factory: Union[Type[T], Callable[[str, Project], T]]
) -> T:
    """Return the task registered under ``name``, creating it with ``factory`` if absent"""
    if isinstance(factory, type):
        return registry.maybe_create(name, factory)

    task = registry.find_by_name(name)
    if task is None:
        return registry.add(factory(name, registry.project))
    return task  # type: ignore[return-value]


class OutdatedDependencies:
    """Append-only sink for the outdated records reported by each check run"""

    def __init__(self) -> None:
        self._records: List[DependencyOutdated] = []
        self.gradle: Optional[GradleReleases] = None

    def collect(self, result: Result) -> None:
        self._records.extend(result.outdated)
        if result.gradle is not None:
            self.gradle = result.gradle

    def clear(self) -> None:
        self._records.clear()
        self.gradle = None

    def __iter__(self) -> Iterator[DependencyOutdated]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> DependencyOutdated:
        return self._records[index]


class DependabotPlugin:
    """Wires the dependency check into a (non-root) project"""

    def __init__(
        self,
        sink: Optional[OutdatedDependencies] = None,
        component_filter: ComponentSelectionRule = accept_all,
    ):
        self.outdated_dependencies = sink if sink is not None else OutdatedDependencies()
        self.component_filter = component_filter

    def apply(self, project: Project) -> None:
        if project.is_root:
            raise PreconditionViolation(
                f"Must be applied to a subproject, but was found on {project.path} instead."
            )
        # Check up front so a second apply leaves the first registration untouched
        if DependabotConfiguration.NAME in project.extensions:
            raise DuplicateRegistrationError(
                "extension", DependabotConfiguration.NAME, repr(project)
            )
        if TASK_NAME in project.tasks:
            raise DuplicateRegistrationError("task", TASK_NAME, repr(project))

        configuration = DependabotConfiguration()
        self._configure_check_task(project, configuration)
        self._register_extension(project, configuration)
        self._register_task(project)
        logger.debug("Applied dependabot to %r", project)

    def _configure_check_task(
        self, project: Project, configuration: DependabotConfiguration
    ) -> DependencyUpdatesTask:
        task = find_or_create(project.tasks, CHECK_TASK_NAME, DependencyUpdatesTask)
        task.check_for_gradle_update = True
        task.gradle_release_channel = RELEASE_CHANNEL
        task.resolution_strategy.component_selection(self.component_rule(configuration))
        task.output_formatter = self.outdated_dependencies.collect
        return task

    def component_rule(self, configuration: DependabotConfiguration) -> ComponentSelectionRule:
        """Selection rule rejecting ignored dependencies, then deferring to ``component_filter``.

        The configuration is read when the rule runs, so entries added after
        ``apply`` are still honoured.
        """

        def select(selection: ComponentSelection) -> None:
            if configuration.is_ignored(selection.id):
                selection.reject(f"{selection.id} is ignored by {DependabotConfiguration.NAME}")
                return
            self.component_filter(selection)

        return select

    def _register_extension(self, project: Project, configuration: DependabotConfiguration) -> None:
        project.extensions.add(DependabotConfiguration.NAME, configuration)

    def _register_task(self, project: Project) -> Task:
        return project.tasks.register(
            TASK_NAME, lambda task: task.depends_on(f"{PATH_SEPARATOR}{CHECK_TASK_NAME}")
        )


def report_outdated(
    records: Sequence[DependencyOutdated],
    format: str = "text",
    gradle: Optional[GradleReleases] = None,
    channel: str = RELEASE_CHANNEL,
) -> str:
    """Generate report of outdated dependencies and any Gradle update"""
    gradle_update = gradle.update_for_channel(channel) if gradle is not None else None
    running = gradle.running.version if gradle is not None and gradle.running else None

    if format == "json":
        return json.dumps(
            {
                "outdated": [
                    {
                        "id": record.id,
                        "currentVersion": record.current_version,
                        "availableVersion": record.available_version,
                    }
                    for record in records
                ],
                "gradle": (
                    {
                        "channel": channel,
                        "running": running,
                        "available": gradle_update.version,
                    }
                    if gradle_update
                    else None
                ),
            },
            indent=2,
        )

    # Text format
    report = []
    if records:
        report.append("The following dependencies have later versions:")
        for record in records:
            report.append(
                f" - {record.id} [{record.current_version} -> {record.available_version}]"
            )
        report.append("")

    if gradle_update:
        report.append(f"Gradle {channel} updates:")
        report.append(f" - Gradle: [{running or '?'} -> {gradle_update.version}]")
        report.append("")

    return "\n".join(report)
