"""
User-facing configuration published by the dependabot plugin
"""

from dataclasses import dataclass, field
from typing import ClassVar, Set


@dataclass
class DependabotConfiguration:
    """Extension holding the dependencies excluded from update checks.

    Entries use the ``group:artifact`` format, eg ``org.jetbrains.kotlin:kotlin-stdlib``.
    They are passed through as-is; nothing here validates them.
    """

    NAME: ClassVar[str] = "Dependabot"

    ignore: Set[str] = field(default_factory=set)

    def is_ignored(self, dependency_id: str) -> bool:
        return dependency_id in self.ignore
