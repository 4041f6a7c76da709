"""
Typed results returned by role operations to the boundary layers.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from ..core.enums import AuditAction
from ..core.exceptions import LMSException

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Result of a role operation."""
    success: bool
    message: str
    action: Optional[AuditAction] = None
    value: Any = None
    error: Optional[LMSException] = None

    @property
    def error_code(self) -> Optional[str]:
        return self.error.error_code if self.error is not None else None

    def unwrap(self) -> Any:
        """Return the value, re-raising the error of a failed result."""
        if self.error is not None:
            raise self.error
        return self.value


def run_operation(action: AuditAction, actor: str, operation: Callable[[], Any],
                  success_message: Union[str, Callable[[Any], str]]) -> OperationResult:
    """Run ``operation`` and turn its outcome into an ``OperationResult``.

    Business-rule violations (``LMSException``) become failed results; any
    other exception propagates. ``success_message`` may be a callable that
    builds the message from the returned value.
    """
    try:
        value = operation()
    except LMSException as e:
        logger.warning("%s rejected for %s: %s", action.value, actor, e.message)
        return OperationResult(success=False, message=e.message, action=action, error=e)
    message = success_message(value) if callable(success_message) else success_message
    logger.info("%s by %s: %s", action.value, actor, message)
    return OperationResult(success=True, message=message, action=action, value=value)
