"""Submission throttle provider."""

from dishka import Scope, provide

from inkwell.adapter.throttle import InMemorySlidingWindowThrottle
from inkwell.config import Settings
from inkwell.domain.service import SubmissionThrottle
from inkwell.util.di.base import ProviderBase


class ThrottleProvider(ProviderBase):
    """Throttle provider - concrete, one instance per process (APP scope)."""

    @provide(scope=Scope.APP)
    def get_submission_throttle(self, settings: Settings) -> SubmissionThrottle:
        """Provide in-process sliding-window throttle."""
        throttle = settings.comments.throttle
        return InMemorySlidingWindowThrottle(
            window_seconds=throttle.window_seconds,
            max_submissions=throttle.max_submissions,
            sweep_interval=throttle.sweep_interval,
        )
