from enum import Enum


class FetchState(Enum):
    """Lifecycle of a single poll cycle.

    The fetcher is IDLE between cycles and AWAITING_RESPONSE while the
    request issued by the latest tick has not come back yet. A new tick
    while awaiting keeps the state and supersedes the pending request.
    """

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class FailureKind(Enum):
    """Category reported alongside a failed poll cycle."""

    NETWORK = "network"  # transport failure or non-200 status
    DECODE = "decode"  # malformed JSON or missing "list" array
