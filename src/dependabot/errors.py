"""
Exceptions raised while wiring and running the dependency check
"""


class PreconditionViolation(ValueError):
    """The plugin was applied to a context it must not be applied to"""


class DuplicateRegistrationError(ValueError):
    """A task or extension name is already registered in a container"""

    def __init__(self, kind: str, name: str, owner: str):
        self.kind = kind
        self.name = name
        self.owner = owner
        super().__init__(
            f"Cannot add {kind} '{name}' as a {kind} with that name already exists in {owner}"
        )


class UnknownTaskError(LookupError):
    """A task path could not be resolved against the project tree"""


class ReportError(Exception):
    """A checker report could not be read or parsed"""
