"""
Command line interface for dependabot
"""

import logging
import sys
from pathlib import Path

import click

from .checkers import DEFAULT_REPORT_PATH, DependencyUpdatesTask, ReportResolver
from .configuration import DependabotConfiguration
from .core import (
    CHECK_TASK_NAME,
    RELEASE_CHANNEL,
    TASK_NAME,
    DependabotPlugin,
    find_or_create,
    report_outdated,
)
from .errors import ReportError
from .project import PATH_SEPARATOR, Project


def build_project(path: str, root_name: str = "root") -> Project:
    """Create the project tree down to ``path`` and return the project at its end"""
    if not path.startswith(PATH_SEPARATOR):
        raise click.BadParameter(
            f"Project path must start with '{PATH_SEPARATOR}'", param_hint="--project"
        )

    project = Project(root_name)
    for segment in filter(None, path.split(PATH_SEPARATOR)):
        project = project.child(segment)
    return project


@click.command(name=TASK_NAME)
@click.option(
    "--project",
    "project_path",
    default=":app",
    show_default=True,
    help="Path of the project to apply to",
)
@click.option(
    "--report",
    "report_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_REPORT_PATH,
    show_default=True,
    help="JSON report written by the dependency updates checker",
)
@click.option("--ignore", multiple=True, metavar="GROUP:ARTIFACT", help="Dependency to ignore")
@click.option("--format", type=click.Choice(["text", "json"]), default="text", help="Output format")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(project_path, report_path, ignore, format, verbose):
    """Check a project for outdated dependencies and new Gradle releases"""

    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(message)s")

    project = build_project(project_path)
    resolver = ReportResolver(report_path)
    plugin = DependabotPlugin()

    try:
        plugin.apply(project)

        root_task = find_or_create(
            project.root_project.tasks, CHECK_TASK_NAME, DependencyUpdatesTask
        )
        root_task.resolver = resolver
        project.tasks.get_by_name(CHECK_TASK_NAME).resolver = resolver

        configuration = project.extensions.get_by_name(DependabotConfiguration.NAME)
        configuration.ignore.update(ignore)

        project.execute(CHECK_TASK_NAME, TASK_NAME)
    except (ValueError, LookupError, ReportError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    outdated = plugin.outdated_dependencies
    report = report_outdated(list(outdated), format, outdated.gradle, RELEASE_CHANNEL)

    if format == "json" or report.strip():
        click.echo(report)
    else:
        click.echo("✅ All dependencies are up to date!")


if __name__ == "__main__":
    main()
