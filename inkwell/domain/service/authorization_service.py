"""Authorization gate."""

from collections.abc import Iterable

import logfire

from inkwell.domain.error import ForbiddenError, NotAuthenticatedError
from inkwell.domain.value import Principal, Privilege

from .base import Service


class AuthorizationService(Service):
    """Decides whether a principal holds a set of privileges."""

    def authorize(
        self, principal: Principal | None, required: Iterable[Privilege]
    ) -> bool:
        """Check a principal against required privileges.

        Anonymous callers are always denied. Superuser roles are always
        allowed. Everyone else needs every required privilege.
        """
        if principal is None:
            return False
        if principal.is_superuser:
            return True
        return all(p.value in principal.privileges for p in required)

    def require(
        self, principal: Principal | None, required: Iterable[Privilege]
    ) -> Principal:
        """Return the principal if authorized.

        Raises:
            NotAuthenticatedError: No principal
            ForbiddenError: Principal lacks a required privilege
        """
        required = list(required)
        if principal is None:
            raise NotAuthenticatedError()
        if not self.authorize(principal, required):
            logfire.warn(
                "Authorization denied",
                user_id=str(principal.user_id),
                role=principal.role_name,
                required=[p.value for p in required],
            )
            raise ForbiddenError()
        return principal
