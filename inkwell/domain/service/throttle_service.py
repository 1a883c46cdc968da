"""Submission throttle domain service."""

import logfire

from inkwell.domain.error import RateLimitedError

from .base import Service


class SubmissionThrottle:
    """Rate limiter interface keyed by client.

    Implementations must make :meth:`hit` atomic per key: two concurrent
    hits from one client may not both observe "under limit".
    """

    async def hit(self, key: str) -> bool:
        """Record an attempt and report whether it is within the limit.

        A rejected attempt is not recorded.
        """
        raise NotImplementedError

    async def sweep(self) -> int:
        """Drop keys whose window is empty. Returns the number dropped."""
        raise NotImplementedError


class ThrottleService(Service):
    """Applies the submission throttle to anonymous writes."""

    def __init__(self, throttle: SubmissionThrottle, enabled: bool = True) -> None:
        self.throttle = throttle
        self.enabled = enabled

    async def check(self, client_key: str) -> None:
        """Count a submission from this client.

        Raises:
            RateLimitedError: Client exceeded the window limit
        """
        if not self.enabled:
            return
        if not await self.throttle.hit(client_key):
            logfire.warn("Comment submission rate limited", client=client_key)
            raise RateLimitedError()
