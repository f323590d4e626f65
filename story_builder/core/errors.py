"""
Error taxonomy for upstream-facing failures.

Each error knows the HTTP status and JSON body it is rendered as; the
application registers a single handler for ``StoryError``.
"""
from typing import Any, Dict

# Substrings DeepInfra uses when the account cannot pay for inference.
# Heuristic: unrelated upstream errors mentioning these words are misread as billing failures.
BALANCE_MARKERS = ("balance", "top-up")


class StoryError(Exception):
    status_code: int = 500
    code: str = "server_error"

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.code, "message": str(self)}


class InsufficientBalanceError(StoryError):
    status_code = 402
    code = "insufficient_balance"

    def __init__(self, detail: str):
        super().__init__("DeepInfra account has insufficient balance. Top up to enable inference.")
        self.detail = detail

    def to_payload(self) -> Dict[str, Any]:
        return {"code": self.code, "message": str(self), "detail": self.detail}


class UpstreamError(StoryError):
    """The upstream answered with a non-2xx status for a non-billing reason."""
    status_code = 502
    code = "upstream_error"

    def __init__(self, upstream_status: int, detail: str):
        super().__init__(f"Upstream returned HTTP {upstream_status}")
        self.upstream_status = upstream_status
        self.detail = detail

    def to_payload(self) -> Dict[str, Any]:
        return {"code": self.code, "status": self.upstream_status, "detail": self.detail}


class UpstreamUnavailableError(StoryError):
    """Connection failure, timeout or unreadable body."""
    status_code = 502
    code = "network_or_upstream"


def is_balance_failure(body: str) -> bool:
    lowered = (body or "").lower()
    return any(marker in lowered for marker in BALANCE_MARKERS)
