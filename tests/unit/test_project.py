"""
Tests for project contexts, task/extension registries and the scheduler
"""

import pytest

from dependabot import DuplicateRegistrationError, Project, Task, UnknownTaskError


@pytest.fixture
def root():
    return Project("root")


class TestProjectTree:
    def test_root_project_paths(self, root):
        assert root.is_root
        assert root.path == ":"
        assert root.root_project is root

    def test_nested_project_paths(self, root):
        app = root.child("app")
        lib = app.child("lib")

        assert app.path == ":app"
        assert lib.path == ":app:lib"
        assert lib.root_project is root
        assert not lib.is_root

    def test_find_project(self, root):
        lib = root.child("app").child("lib")

        assert lib.find_project(":") is root
        assert root.find_project(":app:lib") is lib

    def test_find_project_unknown_path(self, root):
        with pytest.raises(LookupError, match=":missing"):
            root.find_project(":missing")

    def test_find_project_requires_absolute_path(self, root):
        with pytest.raises(ValueError, match="absolute"):
            root.find_project("app")

    def test_invalid_child_names(self, root):
        with pytest.raises(ValueError):
            root.child("")
        with pytest.raises(ValueError):
            root.child("a:b")

    def test_duplicate_child(self, root):
        root.child("app")
        with pytest.raises(DuplicateRegistrationError):
            root.child("app")


class TestTaskContainer:
    def test_register_creates_and_configures_task(self, root):
        app = root.child("app")
        configured = []

        task = app.tasks.register("build", configured.append)

        assert configured == [task]
        assert task.path == ":app:build"
        assert "build" in app.tasks
        assert app.tasks.get_by_name("build") is task

    def test_register_duplicate_name_fails(self, root):
        root.tasks.register("build")

        with pytest.raises(DuplicateRegistrationError, match="build"):
            root.tasks.register("build")

    def test_maybe_create_returns_existing_task(self, root):
        first = root.tasks.maybe_create("build", Task)
        second = root.tasks.maybe_create("build", Task)

        assert first is second
        assert len(root.tasks) == 1

    def test_maybe_create_type_mismatch(self, root):
        class OtherTask(Task):
            pass

        root.tasks.register("build")

        with pytest.raises(TypeError, match="OtherTask"):
            root.tasks.maybe_create("build", OtherTask)

    def test_get_by_name_unknown(self, root):
        assert root.tasks.find_by_name("missing") is None
        with pytest.raises(UnknownTaskError):
            root.tasks.get_by_name("missing")

    def test_names_are_sorted(self, root):
        root.tasks.register("zeta")
        root.tasks.register("alpha")

        assert root.tasks.names == ["alpha", "zeta"]
        assert [t.name for t in root.tasks] == ["zeta", "alpha"]


class TestExtensionContainer:
    def test_add_and_lookup(self, root):
        config = object()
        root.extensions.add("Config", config)

        assert "Config" in root.extensions
        assert root.extensions.get_by_name("Config") is config
        assert root.extensions.find_by_name("Other") is None

    def test_add_duplicate_fails(self, root):
        root.extensions.add("Config", object())

        with pytest.raises(DuplicateRegistrationError, match="extension 'Config'"):
            root.extensions.add("Config", object())

    def test_get_unknown_extension(self, root):
        with pytest.raises(LookupError, match="Missing"):
            root.extensions.get_by_name("Missing")


class TestTaskResolution:
    def test_relative_and_absolute_references(self, root):
        app = root.child("app")
        root_task = root.tasks.register("check")
        app_task = app.tasks.register("check")

        assert app.resolve_task("check") is app_task
        assert app.resolve_task(":check") is root_task
        assert root.resolve_task(":app:check") is app_task
        assert root.resolve_task("app:check") is app_task
        assert app.resolve_task(app_task) is app_task

    def test_unknown_project_in_reference(self, root):
        with pytest.raises(UnknownTaskError, match=":missing:check"):
            root.resolve_task(":missing:check")


class TestScheduler:
    def test_dependencies_run_first(self, root):
        app = root.child("app")
        order = []

        root.tasks.register("check").do_last(lambda t: order.append(t.path))
        app.tasks.register("report", lambda t: t.depends_on(":check")).do_last(
            lambda t: order.append(t.path)
        )

        executed = app.execute("report")

        assert order == [":check", ":app:report"]
        assert [t.path for t in executed] == order

    def test_each_task_runs_once(self, root):
        runs = []
        base = root.tasks.register("base").do_last(lambda t: runs.append(t.name))
        root.tasks.register("a").depends_on(base)
        root.tasks.register("b").depends_on("base", "a")

        root.execute("a", "b", "base")

        assert runs == ["base"]

    def test_cycle_detection(self, root):
        root.tasks.register("a").depends_on("b")
        root.tasks.register("b").depends_on("a")

        with pytest.raises(ValueError, match="Circular dependency"):
            root.execute("a")

    def test_unknown_dependency(self, root):
        root.tasks.register("a").depends_on(":missing")

        with pytest.raises(UnknownTaskError):
            root.execute("a")
