"""
Abstract base classes and component selection for the update checker
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

from ..types import Result

if TYPE_CHECKING:  # pragma: no cover
    from .updates import DependencyUpdatesTask


class ResultResolver(ABC):  # pragma: no cover
    """Abstract base class for sources of dependency update results"""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return human-readable name of this resolver"""
        pass

    @abstractmethod
    def resolve(self, task: "DependencyUpdatesTask") -> Result:
        """Resolve the dependency update result for the given task"""
        pass


@dataclass
class ComponentSelection:
    """A candidate version offered to the component selection rules"""

    group: str
    module: str
    version: str
    rejection_reason: Optional[str] = field(default=None, init=False)

    @property
    def id(self) -> str:
        return f"{self.group}:{self.module}"

    @property
    def rejected(self) -> bool:
        return self.rejection_reason is not None

    def reject(self, reason: str) -> None:
        self.rejection_reason = reason


ComponentSelectionRule = Callable[[ComponentSelection], None]


def accept_all(selection: ComponentSelection) -> None:
    """Default component filter: every candidate version is acceptable"""


class ResolutionStrategy:
    """Holds the component selection rules applied to candidate versions"""

    def __init__(self) -> None:
        self.rules: List[ComponentSelectionRule] = []

    def component_selection(self, rule: ComponentSelectionRule) -> None:
        self.rules.append(rule)

    def select(self, selection: ComponentSelection) -> ComponentSelection:
        """Run every rule against the candidate, stopping at the first rejection"""
        for rule in self.rules:
            rule(selection)
            if selection.rejected:
                break
        return selection
