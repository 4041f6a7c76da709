"""
User directory: every registered identity, used for login and for
duplicate-account detection.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from ..core.entities import Identity
from ..core.enums import Role
from ..core.exceptions import DuplicateAccountError, InvalidCredentials

logger = logging.getLogger(__name__)


class UserDirectory:
    """Ordered, append-only list of identities keyed by email."""

    def __init__(self, identities: Optional[Iterable[Identity]] = None):
        self._identities: List[Identity] = []
        for identity in identities or ():
            self.add(identity)

    def __len__(self) -> int:
        return len(self._identities)

    def __iter__(self) -> Iterator[Identity]:
        return iter(list(self._identities))

    def exists(self, email: str) -> bool:
        return self.find(email) is not None

    def find(self, email: str) -> Optional[Identity]:
        for identity in self._identities:
            if identity.email == email:
                return identity
        return None

    def add(self, identity: Identity) -> Identity:
        """Register an identity; emails are unique across the directory."""
        if self.exists(identity.email):
            raise DuplicateAccountError(
                "Account with this email already exists. Cannot create a duplicate account.",
                error_code="duplicate_account", details={'email': identity.email})
        self._identities.append(identity)
        logger.debug("Registered %s account %s", identity.role.value, identity.email)
        return identity

    def create(self, username: str, email: str, password: str, role: Role) -> Identity:
        return self.add(Identity(username, email, password, role))

    def discard(self, identity: Identity) -> None:
        """Drop an identity created by an operation that is being rolled back."""
        if identity in self._identities:
            self._identities.remove(identity)
            logger.debug("Rolled back account %s", identity.email)

    def authenticate(self, email: str, password: str) -> Identity:
        """Look up the identity matching both email and password.

        Has no side effects; raises ``InvalidCredentials`` when nothing matches.
        """
        for identity in self._identities:
            if identity.email == email and identity.check_password(password):
                return identity
        raise InvalidCredentials("Invalid login credentials", error_code="invalid_credentials")
