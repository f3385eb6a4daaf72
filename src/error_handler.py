"""Error handling helpers for console views.

Views never show raw exception text. Every failure is logged with its
diagnostic and mapped to a short, static message for display.
"""
from typing import Any, Dict, Optional
import logging

from src.integrations.errors import NotFoundError

logger = logging.getLogger(__name__)

_MESSAGES = {
    "load": "Failed to load {plural}. Please try again later.",
    "load_one": "Failed to load {singular} data. Please try again later.",
    "create": "Failed to create {singular}. Please try again.",
    "update": "Failed to update {singular}. Please try again.",
    "delete": "Failed to delete {singular}. Please try again later.",
}
_NOT_FOUND = "{title} not found."
_FALLBACK = "An unexpected error occurred. Please try again later."


class ErrorHandler:
    def user_message(
        self,
        exc: Exception,
        action: str,
        singular: str,
        plural: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> str:
        logger.error(
            "Console %s of %s failed: %s (context=%s)",
            action,
            plural or singular,
            exc,
            context or {},
            exc_info=True,
        )
        if isinstance(exc, NotFoundError) and action in ("load_one", "update"):
            return _NOT_FOUND.format(title=singular.capitalize())
        template = _MESSAGES.get(action)
        if template is None:
            return _FALLBACK
        return template.format(singular=singular, plural=plural or f"{singular}s")
