"""Task provider capability interface.

A provider exposes exactly two operations: perform (the primary task) and
perform_alternate (the secondary task). Both must be implemented; a
provider that cannot do one of them raises UnsupportedTaskError from it
instead of silently doing nothing.
"""

from abc import ABC, abstractmethod


class TaskError(Exception):
    """Error dispatching a task."""
    pass


class UnsupportedTaskError(TaskError):
    """The provider does not support the requested task."""

    def __init__(self, provider: str, action: str):
        super().__init__(f"{provider} does not support '{action}'")
        self.provider = provider
        self.action = action


class CapabilityError(TaskError):
    """An object does not implement the TaskProvider interface."""
    pass


class TaskProvider(ABC):
    """Capability interface invoked by the TaskDispatcher."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def perform(self, action: str, target: str) -> str:
        """Run the primary task on target and return a status line."""
        ...

    @abstractmethod
    def perform_alternate(self, action: str, target: str) -> str:
        """Run the secondary task on target and return a status line."""
        ...
