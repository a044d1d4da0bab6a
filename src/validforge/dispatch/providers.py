"""Built-in task providers: printer, scanner and the combined device."""

import logging

from validforge.dispatch.types import TaskProvider, UnsupportedTaskError

logger = logging.getLogger(__name__)

PRINT = "print"
SCAN = "scan"


def _print(target: str) -> str:
    message = f"Printing .....{target}"
    logger.info("Printing %s", target)
    return message


def _scan(target: str) -> str:
    message = f"Scanning .....{target}"
    logger.info("Scanning %s", target)
    return message


class Printer(TaskProvider):
    def perform(self, action: str, target: str) -> str:
        if action != PRINT:
            raise UnsupportedTaskError(self.name, action)
        return _print(target)

    def perform_alternate(self, action: str, target: str) -> str:
        raise UnsupportedTaskError(self.name, action)


class Scanner(TaskProvider):
    def perform(self, action: str, target: str) -> str:
        raise UnsupportedTaskError(self.name, action)

    def perform_alternate(self, action: str, target: str) -> str:
        if action != SCAN:
            raise UnsupportedTaskError(self.name, action)
        return _scan(target)


class PrintScanner(TaskProvider):
    """Device that can both print and scan."""

    def perform(self, action: str, target: str) -> str:
        if action != PRINT:
            raise UnsupportedTaskError(self.name, action)
        return _print(target)

    def perform_alternate(self, action: str, target: str) -> str:
        if action != SCAN:
            raise UnsupportedTaskError(self.name, action)
        return _scan(target)
