"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotAuthenticatedError(DomainError):
    """Raised when a privileged operation has no principal, or a credential is invalid."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when a principal lacks the privileges an operation requires."""

    def __init__(self, message: str = "Insufficient privileges"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class RateLimitedError(DomainError):
    """Raised when a client exceeds the submission rate."""

    def __init__(
        self,
        message: str = "Too many comments submitted. Please wait before commenting again.",
    ):
        super().__init__(message)


class InvalidChallengeError(DomainError):
    """Raised when a required CAPTCHA is missing or does not verify."""

    def __init__(self, message: str = "Invalid CAPTCHA"):
        super().__init__(message)


class UnavailableError(DomainError):
    """Raised when a downstream dependency fails or times out."""

    def __init__(self, dependency: str, detail: str | None = None):
        self.dependency = dependency
        self.detail = detail
        super().__init__(f"{dependency} unavailable")
