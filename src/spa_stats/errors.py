"""Error taxonomy shared by the fetcher, binder, provider and HTTP layer."""

from __future__ import annotations


class StatsError(Exception):
    """Base class for failures the HTTP layer knows how to report."""

    status = 500
    kind = "internal_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.kind, "message": self.message}


class UpstreamError(StatsError):
    """The explorer API answered with a non-success status or not at all."""

    status = 502
    kind = "upstream_error"


class ParseError(StatsError):
    """The explorer API returned a payload that is not valid JSON."""

    status = 502
    kind = "parse_error"


class NodeError(StatsError):
    """The blockchain node failed or rejected a contract call."""

    status = 502
    kind = "node_error"


class NotReadyError(StatsError):
    """A contract read was attempted before the provider finished loading."""

    status = 503
    kind = "not_ready"

    def __init__(self, state: str) -> None:
        super().__init__(f"contracts not loaded (state: {state})")
        self.state = state
