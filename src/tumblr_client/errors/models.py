"""Response envelope model.

Every API response is wrapped as ``{"meta": {"status", "msg"}, "response": ...}``.
Error responses may drop ``response`` and some only carry a top-level ``error``.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ResponseEnvelope:
    """Parsed ``{meta, response}`` wrapper."""

    status: int | None = None  # meta.status
    msg: str | None = None  # meta.msg
    response: Any = None
    has_response: bool = False
    error: str | None = None  # top-level "error" fallback

    @classmethod
    def from_payload(cls, payload: Any) -> "ResponseEnvelope | None":
        """Build an envelope from decoded JSON.

        Args:
            payload: Decoded response body

        Returns:
            ResponseEnvelope, or None when the payload is not a JSON object
        """
        if not isinstance(payload, dict):
            return None

        meta = payload.get("meta")
        status = None
        msg = None
        if isinstance(meta, dict):
            raw_status = meta.get("status")
            # bool is an int subclass, it is never a status
            if isinstance(raw_status, int) and not isinstance(raw_status, bool):
                status = raw_status
            raw_msg = meta.get("msg")
            msg = str(raw_msg) if raw_msg is not None else None

        error = payload.get("error")

        return cls(
            status=status,
            msg=msg,
            response=payload.get("response"),
            has_response="response" in payload,
            error=str(error) if error is not None else None,
        )

    def error_message(self) -> str:
        """Human-readable reason, preferring ``meta.msg`` over ``error``."""
        if self.msg:
            return self.msg
        if self.error:
            return self.error
        return "unknown"
