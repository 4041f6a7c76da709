"""
Role sessions: LoggedOut -> LoggedIn(role) -> LoggedOut.
"""

import logging
from typing import Any, Dict, Optional, Tuple, Type

from ..core.entities import Identity
from ..core.enums import Role, SessionState
from ..core.exceptions import AuthorizationError
from .admin_service import AdministratorService
from .base_service import RoleService
from .context import LMSContext
from .results import OperationResult
from .student_service import StudentService
from .teacher_service import TeacherService

logger = logging.getLogger(__name__)


ROLE_SERVICES: Dict[Role, Type[RoleService]] = {
    Role.ADMINISTRATOR: AdministratorService,
    Role.TEACHER: TeacherService,
    Role.STUDENT: StudentService,
}


def operations_for(identity: Identity, context: LMSContext) -> RoleService:
    """Build the operation set for the identity's role."""
    return ROLE_SERVICES[identity.role](identity, context)


class Session:
    """A single user's role session against a shared context."""

    def __init__(self, context: LMSContext):
        self._context = context
        self._operations: Optional[RoleService] = None

    @property
    def state(self) -> SessionState:
        return SessionState.LOGGED_IN if self._operations is not None else SessionState.LOGGED_OUT

    @property
    def is_logged_in(self) -> bool:
        return self._operations is not None

    @property
    def identity(self) -> Optional[Identity]:
        return self._operations.identity if self._operations is not None else None

    @property
    def role(self) -> Optional[Role]:
        return self._operations.ROLE if self._operations is not None else None

    @property
    def operations(self) -> RoleService:
        """The logged-in role's operation set."""
        if self._operations is None:
            raise AuthorizationError("Not logged in", error_code="not_logged_in")
        return self._operations

    def login(self, email: str, password: str) -> RoleService:
        """Authenticate and enter the LOGGED_IN state.

        Any previous session ends first, so a mismatch raises
        ``InvalidCredentials`` and leaves the session logged out.
        """
        self.logout()
        identity = self._context.directory.authenticate(email, password)
        self._operations = operations_for(identity, self._context)
        logger.info("%s logged in as %s", identity.email, identity.role.value)
        return self._operations

    def logout(self) -> None:
        if self._operations is not None:
            logger.info("%s logged out", self._operations.email)
        self._operations = None

    def available_operations(self) -> Tuple[str, ...]:
        if self._operations is None:
            return ()
        return self._operations.OPERATIONS

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> OperationResult:
        """Call a named operation of the logged-in role.

        Raises ``AuthorizationError`` when the role has no such operation.
        """
        operations = self.operations
        if name not in operations.OPERATIONS:
            raise AuthorizationError(
                f"Operation '{name}' is not available to a {operations.ROLE.value}",
                error_code="operation_not_permitted",
                details={'operation': name, 'role': operations.ROLE.value})
        return getattr(operations, name)(*args, **kwargs)
