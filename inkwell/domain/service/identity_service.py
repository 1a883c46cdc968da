"""Identity resolution domain service."""

from uuid import UUID

import logfire

from inkwell.domain.error import ForbiddenError, NotAuthenticatedError
from inkwell.domain.repository import RoleRepository, UserRepository
from inkwell.domain.value import Principal, UserId
from inkwell.util.jwt import JWTError

from .base import Service
from .jwt_service import JWTService


class IdentityService(Service):
    """Resolves a bearer credential into a principal.

    Absence of a credential is a valid outcome (anonymous caller) and never
    raises. A credential that is present but unusable does raise, so
    endpoints that require a principal can fail fast while endpoints with
    optional authentication call :meth:`resolve_optional` instead.
    """

    def __init__(
        self,
        jwt_service: JWTService,
        user_repository: UserRepository,
        role_repository: RoleRepository,
    ) -> None:
        self.jwt_service = jwt_service
        self.user_repository = user_repository
        self.role_repository = role_repository

    async def resolve(self, credential: str | None) -> Principal | None:
        """Resolve a bearer token.

        Args:
            credential: Raw bearer token, or None when the request carried none

        Returns:
            The principal, or None for an anonymous caller

        Raises:
            NotAuthenticatedError: Token invalid, or user/role unknown
            ForbiddenError: User account is deactivated
        """
        if not credential:
            return None

        with logfire.span("identity_service.resolve"):
            try:
                payload = self.jwt_service.verify_token(credential)
                user_id = UserId(UUID(payload.user_id))
            except (JWTError, ValueError) as e:
                logfire.warn("Bearer token rejected", error=str(e))
                raise NotAuthenticatedError("Invalid token")

            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("Token user not found", user_id=str(user_id))
                raise NotAuthenticatedError("User not found")

            role = await self.role_repository.find_by_id(user.role_id)
            if role is None:
                logfire.error(
                    "User role not found",
                    user_id=str(user_id),
                    role_id=str(user.role_id),
                )
                raise NotAuthenticatedError("User role not found")

            if not user.is_active:
                logfire.warn("Deactivated user rejected", user_id=str(user_id))
                raise ForbiddenError(
                    "Your account has been deactivated. Please contact the administrator."
                )

            return Principal(
                user_id=user.id,
                username=user.username,
                role_id=role.id,
                role_name=role.name,
                privileges=role.privileges,
                is_superuser=role.is_superuser,
            )

    async def resolve_optional(self, credential: str | None) -> Principal | None:
        """Resolve a bearer token, degrading to anonymous on any credential problem."""
        try:
            return await self.resolve(credential)
        except (NotAuthenticatedError, ForbiddenError) as e:
            logfire.info("Optional credential ignored, continuing anonymously", error=str(e))
            return None
