"""HTTP responder for ValidForge."""

from validforge.api.app import app, status_message

__all__ = ["app", "status_message"]
