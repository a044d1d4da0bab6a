"""Task provider registry and dispatcher.

Providers must be explicitly registered before they can be dispatched to
by name. Registration rejects any object that is not a TaskProvider, so an
incompatible object fails at startup rather than on first use.
"""

import logging

from validforge.dispatch.providers import PRINT, SCAN, Printer, PrintScanner, Scanner
from validforge.dispatch.types import CapabilityError, TaskProvider

logger = logging.getLogger(__name__)


class TaskProviderRegistry:
    """Registry for task providers.

    Example:
        TaskProviderRegistry.register("printer", Printer())
        provider = TaskProviderRegistry.get("printer")
    """

    _providers: dict[str, TaskProvider] = {}

    @classmethod
    def register(cls, name: str, provider: TaskProvider) -> None:
        """Register a provider instance by name.

        Idempotent - re-registering the same name is a no-op.

        Raises:
            CapabilityError: If provider does not implement TaskProvider
        """
        if not isinstance(provider, TaskProvider):
            raise CapabilityError(
                f"Provider '{name}' ({type(provider).__name__}) does not implement "
                "TaskProvider (perform, perform_alternate)"
            )
        if name in cls._providers:
            return
        cls._providers[name] = provider

    @classmethod
    def get(cls, name: str) -> TaskProvider:
        """Get a registered provider by name.

        Raises:
            ValueError: If provider is not registered
        """
        if name not in cls._providers:
            raise ValueError(
                f"Task provider '{name}' is not registered. "
                "Available providers: " + ", ".join(cls.list_registered())
            )
        return cls._providers[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._providers

    @classmethod
    def list_registered(cls) -> list[str]:
        return sorted(cls._providers.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._providers.clear()


def register_builtin_providers() -> None:
    """Register the built-in providers. Safe to call more than once."""
    TaskProviderRegistry.register("printer", Printer())
    TaskProviderRegistry.register("scanner", Scanner())
    TaskProviderRegistry.register("print-scanner", PrintScanner())


class TaskDispatcher:
    """Forwards print and scan tasks to a provider.

    The dispatcher knows only the TaskProvider interface: print tasks go to
    perform(), scan tasks to perform_alternate(). UnsupportedTaskError
    from the provider propagates to the caller.
    """

    TASKS = (PRINT, SCAN)

    def execute_print_task(self, provider: TaskProvider, document_path: str) -> str:
        return provider.perform(PRINT, document_path)

    def execute_scan_task(self, provider: TaskProvider, document_path: str) -> str:
        return provider.perform_alternate(SCAN, document_path)

    def dispatch(self, task: str, provider_name: str, target: str) -> str:
        """Run a task on a registered provider.

        Args:
            task: "print" or "scan"
            provider_name: Registered provider name
            target: Document or image path

        Raises:
            ValueError: If the task or provider is unknown
            UnsupportedTaskError: If the provider cannot run the task
        """
        provider = TaskProviderRegistry.get(provider_name)
        logger.debug("Dispatching %s task to '%s'", task, provider_name)
        if task == PRINT:
            return self.execute_print_task(provider, target)
        if task == SCAN:
            return self.execute_scan_task(provider, target)
        raise ValueError(f"Unknown task '{task}'. Expected one of: {', '.join(self.TASKS)}")
