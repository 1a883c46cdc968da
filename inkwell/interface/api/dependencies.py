"""Request-derived values shared by routes."""

from fastapi import Header, Request


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Credential from the ``Authorization`` header.

    Returns None when the header is absent. A header that isn't a bearer
    credential is passed through as-is so identity resolution rejects it.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return authorization


def client_address(request: Request) -> str | None:
    """Peer address of the client (proxy headers are applied by the server)."""
    return request.client.host if request.client else None


def user_agent(user_agent: str | None = Header(default=None)) -> str | None:
    return user_agent
