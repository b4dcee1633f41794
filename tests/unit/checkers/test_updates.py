"""
Tests for the dependencyUpdates task
"""

import pytest

from dependabot import DependencyOutdated, GradleRelease, GradleReleases, Project, Result
from dependabot.checkers import DependencyUpdatesTask, ResultResolver


class StaticResolver(ResultResolver):
    def __init__(self, result):
        self.result = result
        self.calls = 0

    @property
    def name(self):
        return "static"

    def resolve(self, task):
        self.calls += 1
        return self.result


def outdated(group, name, current="1.0", available="2.0"):
    return DependencyOutdated(group, name, current, available)


@pytest.fixture
def task():
    return Project("root").tasks.maybe_create("dependencyUpdates", DependencyUpdatesTask)


def test_defaults(task):
    assert task.check_for_gradle_update is True
    assert task.gradle_release_channel == "release-candidate"
    assert task.resolution_strategy.rules == []
    assert task.resolver is None


def test_release_channel_validation(task):
    task.gradle_release_channel = "nightly"
    assert task.gradle_release_channel == "nightly"

    with pytest.raises(ValueError, match="Unknown release channel 'beta'"):
        task.gradle_release_channel = "beta"


def test_execute_without_resolver(task):
    with pytest.raises(ValueError, match="No resolver configured"):
        task.execute()


def test_execute_passes_result_to_formatter(task):
    results = []
    task.resolver = StaticResolver(Result(outdated=[outdated("a", "b")]))
    task.output_formatter = results.append

    task.execute()

    assert len(results) == 1
    assert [d.id for d in results[0].outdated] == ["a:b"]


def test_rejected_components_are_dropped(task):
    results = []
    task.resolver = StaticResolver(
        Result(outdated=[outdated("a", "keep"), outdated("a", "alpha", available="2.0-alpha01")])
    )
    task.output_formatter = results.append

    def no_alphas(selection):
        if "alpha" in selection.version:
            selection.reject("pre-release")

    task.resolution_strategy.component_selection(no_alphas)
    task.execute()

    assert [d.id for d in results[0].outdated] == ["a:keep"]


def test_selection_stops_at_first_rejection(task):
    seen = []
    task.resolver = StaticResolver(Result(outdated=[outdated("a", "b")]))
    task.output_formatter = lambda result: None

    task.resolution_strategy.component_selection(lambda s: s.reject("first"))
    task.resolution_strategy.component_selection(seen.append)
    task.execute()

    assert seen == []


def test_gradle_section_dropped_when_not_checking(task):
    gradle = GradleReleases(current=GradleRelease("8.6", is_update_available=True))
    results = []
    task.resolver = StaticResolver(Result(gradle=gradle))
    task.output_formatter = results.append

    task.execute()
    task.check_for_gradle_update = False
    task.execute()

    assert results[0].gradle is gradle
    assert results[1].gradle is None


def test_do_last_actions_run_after_formatter(task):
    order = []
    task.resolver = StaticResolver(Result())
    task.output_formatter = lambda result: order.append("formatter")
    task.do_last(lambda t: order.append("action"))

    task.execute()

    assert order == ["formatter", "action"]


def test_resolver_errors_propagate(task):
    class FailingResolver(StaticResolver):
        def resolve(self, task):
            raise ConnectionError("repository unreachable")

    task.resolver = FailingResolver(None)

    with pytest.raises(ConnectionError, match="unreachable"):
        task.execute()


def test_default_formatter_logs_summary(task, caplog):
    task.resolver = StaticResolver(Result(outdated=[outdated("a", "b")]))

    with caplog.at_level("INFO", logger="dependabot.checkers.updates"):
        task.execute()

    assert "1 dependencies checked" in caplog.text
    assert "1 outdated" in caplog.text
