"""Runtime configuration for ValidForge."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Settings for the CLI and the HTTP responder.

    Resolved from environment variables:
    - VALIDFORGE_HOST (default 127.0.0.1)
    - VALIDFORGE_PORT (default 3000)
    - VALIDFORGE_LOG_LEVEL (default info)
    """

    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> Settings:
        """Create settings from environment variables.

        Raises:
            ValueError: If VALIDFORGE_PORT is not an integer
        """
        port = os.environ.get("VALIDFORGE_PORT", "3000")
        try:
            port_number = int(port)
        except ValueError:
            raise ValueError(f"VALIDFORGE_PORT must be an integer, got '{port}'") from None

        return cls(
            host=os.environ.get("VALIDFORGE_HOST", "127.0.0.1"),
            port=port_number,
            log_level=os.environ.get("VALIDFORGE_LOG_LEVEL", "info").lower(),
        )


def configure_logging(level: str = "info") -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
