"""Submission throttle adapter."""

from .memory import InMemorySlidingWindowThrottle

__all__ = ["InMemorySlidingWindowThrottle"]
