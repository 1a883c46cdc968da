"""Content safety check for user-submitted text."""

import re

# Markup and script vectors rejected in comment text
_UNSAFE_PATTERNS = [
    re.compile(r"<\s*[a-zA-Z/!?][^>]*>"),
    re.compile(r"javascript\s*:", re.IGNORECASE),
    re.compile(r"vbscript\s*:", re.IGNORECASE),
]


class ContentSafetyChecker:
    """XSS-safety check interface."""

    def is_safe(self, text: str) -> bool:
        raise NotImplementedError


class PatternContentSafetyChecker(ContentSafetyChecker):
    """Rejects HTML tags and script protocols.

    Comments are stored as plain text, so any markup at all is refused
    rather than sanitized. A bare ``<`` (as in "a < b") is still allowed.
    """

    def is_safe(self, text: str) -> bool:
        return not any(pattern.search(text) for pattern in _UNSAFE_PATTERNS)
