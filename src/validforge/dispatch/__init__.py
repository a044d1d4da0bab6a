"""Task dispatch: print and scan tasks routed through a capability interface.

Usage:
    from validforge.dispatch import TaskDispatcher, register_builtin_providers

    register_builtin_providers()
    TaskDispatcher().dispatch("print", "printer", "Test.doc")
"""

from validforge.dispatch.providers import PRINT, SCAN, Printer, PrintScanner, Scanner
from validforge.dispatch.registry import (
    TaskDispatcher,
    TaskProviderRegistry,
    register_builtin_providers,
)
from validforge.dispatch.types import (
    CapabilityError,
    TaskError,
    TaskProvider,
    UnsupportedTaskError,
)

__all__ = [
    # Types
    "CapabilityError",
    "TaskError",
    "TaskProvider",
    "UnsupportedTaskError",
    # Providers
    "PRINT",
    "SCAN",
    "Printer",
    "PrintScanner",
    "Scanner",
    # Registry
    "TaskDispatcher",
    "TaskProviderRegistry",
    "register_builtin_providers",
]
