"""
Project contexts, their task and extension registries, and the task scheduler
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Type, TypeVar, Union

from .errors import DuplicateRegistrationError, UnknownTaskError

logger = logging.getLogger(__name__)

PATH_SEPARATOR = ":"

T = TypeVar("T", bound="Task")
TaskReference = Union[str, "Task"]


class Task:
    """A named unit of work with dependency edges to other tasks"""

    def __init__(self, name: str, project: "Project"):
        self.name = name
        self.project = project
        self.dependencies: List[TaskReference] = []
        self.actions: List[Callable[["Task"], None]] = []

    @property
    def path(self) -> str:
        if self.project.is_root:
            return f"{PATH_SEPARATOR}{self.name}"
        return f"{self.project.path}{PATH_SEPARATOR}{self.name}"

    def depends_on(self, *references: TaskReference) -> "Task":
        self.dependencies.extend(references)
        return self

    def do_last(self, action: Callable[["Task"], None]) -> "Task":
        self.actions.append(action)
        return self

    def execute(self) -> None:
        for action in self.actions:
            action(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class TaskContainer:
    """Registry of the tasks owned by one project"""

    def __init__(self, project: "Project"):
        self.project = project
        self._tasks: Dict[str, Task] = {}

    def maybe_create(self, name: str, task_type: Type[T]) -> T:
        """Return the task with this name, creating it if it does not exist yet"""
        existing = self._tasks.get(name)
        if existing is not None:
            if not isinstance(existing, task_type):
                raise TypeError(
                    f"Task '{existing.path}' has type {type(existing).__name__}, "
                    f"expected {task_type.__name__}"
                )
            return existing
        return self._add(task_type(name, self.project))

    def add(self, task: T) -> T:
        """Add an already constructed task, failing if the name is already taken"""
        if task.name in self._tasks:
            raise DuplicateRegistrationError("task", task.name, repr(self.project))
        return self._add(task)

    def register(self, name: str, configure: Optional[Callable[[Task], Any]] = None) -> Task:
        """Create a plain task, failing if the name is already taken"""
        if name in self._tasks:
            raise DuplicateRegistrationError("task", name, repr(self.project))
        task = self._add(Task(name, self.project))
        if configure is not None:
            configure(task)
        return task

    def _add(self, task: T) -> T:
        self._tasks[task.name] = task
        logger.debug("Registered task %s", task.path)
        return task

    def find_by_name(self, name: str) -> Optional[Task]:
        return self._tasks.get(name)

    def get_by_name(self, name: str) -> Task:
        task = self._tasks.get(name)
        if task is None:
            raise UnknownTaskError(f"Task '{name}' not found in {self.project!r}")
        return task

    @property
    def names(self) -> List[str]:
        return sorted(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)


class ExtensionContainer:
    """Named configuration objects contributed to a project"""

    def __init__(self, project: "Project"):
        self.project = project
        self._extensions: Dict[str, Any] = {}

    def add(self, name: str, instance: Any) -> None:
        if name in self._extensions:
            raise DuplicateRegistrationError("extension", name, repr(self.project))
        self._extensions[name] = instance

    def find_by_name(self, name: str) -> Optional[Any]:
        return self._extensions.get(name)

    def get_by_name(self, name: str) -> Any:
        try:
            return self._extensions[name]
        except KeyError:
            raise LookupError(f"Extension '{name}' not found in {self.project!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._extensions

    def __len__(self) -> int:
        return len(self._extensions)


class Project:
    """A build context. The root project has no parent and the path ``:``"""

    def __init__(self, name: str, parent: Optional["Project"] = None):
        self.name = name
        self.parent = parent
        self.children: Dict[str, "Project"] = {}
        self.tasks = TaskContainer(self)
        self.extensions = ExtensionContainer(self)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def root_project(self) -> "Project":
        project = self
        while project.parent is not None:
            project = project.parent
        return project

    @property
    def path(self) -> str:
        if self.parent is None:
            return PATH_SEPARATOR
        if self.parent.is_root:
            return f"{PATH_SEPARATOR}{self.name}"
        return f"{self.parent.path}{PATH_SEPARATOR}{self.name}"

    def child(self, name: str) -> "Project":
        if not name or PATH_SEPARATOR in name:
            raise ValueError(f"Invalid project name: {name!r}")
        if name in self.children:
            raise DuplicateRegistrationError("project", name, repr(self))
        project = Project(name, parent=self)
        self.children[name] = project
        return project

    def find_project(self, path: str) -> "Project":
        """Resolve an absolute project path such as ``:app:lib``"""
        if not path.startswith(PATH_SEPARATOR):
            raise ValueError(f"Project path must be absolute: {path!r}")
        project = self.root_project
        for segment in filter(None, path.split(PATH_SEPARATOR)):
            if segment not in project.children:
                raise LookupError(f"Project '{path}' not found")
            project = project.children[segment]
        return project

    def resolve_task(self, reference: TaskReference) -> Task:
        """Resolve a task or task path relative to this project.

        ``:name`` and ``:app:name`` are addressed from the root project; a bare
        name is looked up in this project.
        """
        if isinstance(reference, Task):
            return reference
        if PATH_SEPARATOR not in reference:
            return self.tasks.get_by_name(reference)

        project_path, _, task_name = reference.rpartition(PATH_SEPARATOR)
        if not reference.startswith(PATH_SEPARATOR):
            prefix = "" if self.is_root else self.path
            project_path = f"{prefix}{PATH_SEPARATOR}{project_path}"
        try:
            project = self.find_project(project_path or PATH_SEPARATOR)
        except LookupError as e:
            raise UnknownTaskError(f"Task '{reference}' not found: {e}") from None
        return project.tasks.get_by_name(task_name)

    def execute(self, *references: TaskReference) -> List[Task]:
        """Run the requested tasks and everything they depend on.

        Each task runs at most once, after all of its dependencies. Returns
        the tasks in the order they were executed.
        """
        executed: List[Task] = []
        done: set = set()
        visiting: List[Task] = []

        def visit(task: Task) -> None:
            if id(task) in done:
                return
            if task in visiting:
                cycle = " -> ".join(t.path for t in visiting[visiting.index(task) :])
                raise ValueError(f"Circular dependency between tasks: {cycle} -> {task.path}")
            visiting.append(task)
            for dependency in task.dependencies:
                visit(task.project.resolve_task(dependency))
            visiting.pop()

            logger.info("> Task %s", task.path)
            task.execute()
            done.add(id(task))
            executed.append(task)

        for task in [self.resolve_task(reference) for reference in references]:
            visit(task)
        return executed

    def __repr__(self) -> str:
        if self.is_root:
            return f"root project '{self.name}'"
        return f"project '{self.path}'"
