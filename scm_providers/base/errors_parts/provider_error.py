"""
Structured provider error exception type.

Every failure that leaves a vendor adapter is a `ProviderError`: a
human-readable message, an HTTP-style status and a normalized `ErrorCode`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a normalized SCM provider failure.

    Attributes:
        code: Normalized :class:`ErrorCode` for programmatic branching.
        message: Human-readable error message.
        status_code: HTTP-style status (400, 401, 404 or 500).
        provider: Provider key where the error originated (e.g., ``"github"``).
        action: Optional external action name that failed.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    status_code: int = 500
    provider: str = "unknown"
    action: Optional[str] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, action, status, code and message."""
        return f"{self.provider}:{self.action or '-'} {self.status_code} {self.code.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape ``{message, statusCode, errorCode}``."""
        return {
            "message": self.message,
            "statusCode": self.status_code,
            "errorCode": self.code.value,
        }


__all__ = ["ProviderError"]
