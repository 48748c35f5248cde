"""Error types and error-message rewriting for GHL API failures.

GoHighLevel answers with terse messages ("Forbidden", "Unprocessable Entity")
that leave an agent guessing. Tools attach a list of ``ErrorHint`` rules that
turn a known status code / keyword combination into an actionable message
while keeping the upstream text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple


class GHLAPIError(Exception):
    """Raised when the GHL API answers with a non-2xx status or cannot be reached.

    Attributes:
        status_code: HTTP status, or None for timeouts and connection failures.
        message: Message extracted from the response body.
        body: Decoded response body (dict, str or None).
    """

    def __init__(self, status_code: Optional[int], message: str, body: Any = None):
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status_code is None:
            return f"GHL API Error: {self.message}"
        return f"GHL API Error ({self.status_code}): {self.message}"


def extract_error_message(body: Any, default: str = "Unknown API error") -> str:
    """Pull a readable message out of a GHL error body.

    GHL uses ``message`` (a string, or a list of validation messages) and
    sometimes ``error``.
    """
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or body.get("msg")
        if isinstance(message, list):
            return ", ".join(str(m) for m in message)
        if isinstance(message, dict):
            return str(message.get("message") or message)
        if message:
            return str(message)
        return default
    if isinstance(body, str) and body.strip():
        return body.strip()
    return default


@dataclass(frozen=True)
class ErrorHint:
    """Rewrite rule: when ``status`` and any of ``keywords`` match, show ``message``.

    Leaving ``status`` as None matches any status; an empty ``keywords``
    tuple matches any text.
    """
    message: str
    status: Optional[int] = None
    keywords: Tuple[str, ...] = ()

    def matches(self, error: Exception) -> bool:
        status = getattr(error, "status_code", None)
        if self.status is not None and status != self.status:
            return False
        if self.keywords:
            text = str(error).lower()
            return any(k.lower() in text for k in self.keywords)
        return True


def explain(error: Exception, hints: Iterable[ErrorHint] = (), action: Optional[str] = None) -> str:
    """Build the message an agent sees for a failed tool call.

    Args:
        error: The exception raised while calling GHL.
        hints: Rewrite rules, checked in order.
        action: Verb phrase for the fallback, e.g. "create contact".

    Returns:
        ``"<hint> Original error: <error>"`` for the first matching hint,
        otherwise ``"Failed to <action>: <error>"``.
    """
    for hint in hints:
        if hint.matches(error):
            return f"{hint.message} Original error: {error}"
    if action:
        return f"Failed to {action}: {error}"
    return str(error)


PERMISSION_HINT = ErrorHint(
    "Permission denied. Check that your private integration token has the scopes this tool needs.",
    status=403,
)
AUTH_HINT = ErrorHint(
    "Authentication failed. Verify GHL_API_KEY is valid and has not been revoked.",
    status=401,
)
