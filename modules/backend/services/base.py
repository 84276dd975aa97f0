"""
Base Service.

Shared plumbing for board services: a module logger whose records name
the service, and a check for parameters limited to a fixed set of keys.
"""

from typing import Any

from modules.backend.core.exceptions import ValidationError
from modules.backend.core.logging import get_logger


class BaseService:
    """Logging and choice validation for services."""

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    def _require_choice(self, value: str, field_name: str, choices: tuple[str, ...]) -> str:
        """Return ``value`` if it is one of ``choices``, else raise ValidationError."""
        if value not in choices:
            raise ValidationError(
                f"Invalid {field_name}",
                details={field_name: f"Must be one of: {', '.join(choices)}", "received": value},
            )
        return value

    def _log_operation(self, event: str, **context: Any) -> None:
        """Info record for a change to the board."""
        self._emit("info", event, context)

    def _log_debug(self, event: str, **context: Any) -> None:
        """Debug record for a no-op or a drag step."""
        self._emit("debug", event, context)

    def _emit(self, level: str, event: str, context: dict[str, Any]) -> None:
        getattr(self._logger, level)(event, extra={"service": type(self).__name__, **context})
