"""CAPTCHA service clients.

The real client talks to an external CAPTCHA HTTP service:

    POST /challenges                      -> {"session_id", "image_data_url"}
    POST /challenges/{session_id}/verify  {"text"}  -> {"valid"}
    POST /tokens/verify                   {"token"} -> {"valid"}
"""

import base64
import secrets

import httpx
import logfire

from inkwell.adapter.error import CaptchaProtocolError
from inkwell.domain.error import UnavailableError
from inkwell.domain.service.captcha_service import CaptchaChallenge, CaptchaClient


class CaptchaServiceClient(CaptchaClient):
    """Base class for CAPTCHA service clients.

    Provides type distinction for dependency injection.
    """

    pass


class HttpCaptchaClient(CaptchaServiceClient):
    """CAPTCHA client backed by the external HTTP service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize CAPTCHA HTTP client.

        Args:
            base_url: Root URL of the CAPTCHA service
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used to stub the service)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _post(self, path: str, payload: dict | None = None) -> dict:
        """POST to the service and return the decoded JSON body.

        Raises:
            UnavailableError: Transport failure, timeout, 5xx or malformed body
        """
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=payload or {})

                if response.status_code >= 500:
                    logfire.error(
                        "CAPTCHA service error",
                        path=path,
                        status_code=response.status_code,
                    )
                    raise UnavailableError(
                        "captcha service", f"status {response.status_code}"
                    )

                if response.status_code >= 400:
                    logfire.warn(
                        "CAPTCHA service rejected request",
                        path=path,
                        status_code=response.status_code,
                    )
                    return {}

                body = response.json()
                if not isinstance(body, dict):
                    raise CaptchaProtocolError(f"Unexpected body from {path}")
                return body

        except httpx.TimeoutException as e:
            logfire.error("CAPTCHA service timeout", path=path, error=str(e))
            raise UnavailableError("captcha service", "timeout") from e
        except httpx.HTTPError as e:
            logfire.error("CAPTCHA service HTTP error", path=path, error=str(e))
            raise UnavailableError("captcha service", str(e)) from e
        except (ValueError, CaptchaProtocolError) as e:
            logfire.error("CAPTCHA service returned invalid JSON", path=path)
            raise UnavailableError("captcha service", "invalid response") from e

    async def create_challenge(self) -> CaptchaChallenge:
        body = await self._post("/challenges")
        try:
            return CaptchaChallenge(
                session_id=body["session_id"],
                image_data_url=body["image_data_url"],
            )
        except KeyError as e:
            logfire.error("CAPTCHA challenge response missing field", field=str(e))
            raise UnavailableError("captcha service", "invalid response") from e

    async def verify(self, session_id: str, text: str) -> bool:
        # An unknown or spent session comes back as 4xx and reads as invalid
        body = await self._post(f"/challenges/{session_id}/verify", {"text": text})
        return body.get("valid") is True

    async def verify_token(self, token: str) -> bool:
        body = await self._post("/tokens/verify", {"token": token})
        return body.get("valid") is True


class MockCaptchaClient(CaptchaServiceClient):
    """Mock CAPTCHA client for testing.

    Every challenge has the solution ``"123456"``. Sessions and tokens are
    single use, like the real service.
    """

    SOLUTION = "123456"

    def __init__(self) -> None:
        self._sessions: set[str] = set()
        self._tokens: set[str] = set()

    def register_token(self, token: str) -> None:
        """Make a validation token acceptable (once)."""
        self._tokens.add(token)

    async def create_challenge(self) -> CaptchaChallenge:
        session_id = secrets.token_urlsafe(16)
        self._sessions.add(session_id)
        svg = (
            '<svg xmlns="http://www.w3.org/2000/svg" width="120" height="40">'
            f'<text x="10" y="28">{self.SOLUTION}</text></svg>'
        )
        encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
        return CaptchaChallenge(
            session_id=session_id,
            image_data_url=f"data:image/svg+xml;base64,{encoded}",
        )

    async def verify(self, session_id: str, text: str) -> bool:
        if session_id not in self._sessions:
            return False
        self._sessions.discard(session_id)
        return text.strip() == self.SOLUTION

    async def verify_token(self, token: str) -> bool:
        if token not in self._tokens:
            return False
        self._tokens.discard(token)
        return True
