"""Exceptions raised while relaying prompts to the LLM provider."""


class SnapshotRelayError(Exception):
    """Base exception for snapshot generation."""

    pass


class InvalidSnapshotRequest(SnapshotRelayError):
    """Raised when the request body does not describe a usable set of sections."""

    pass


class ProviderNotConfigured(SnapshotRelayError):
    """Raised when no provider credential is available to the server."""

    def __init__(self, message: str = "OpenAI API key is not configured.") -> None:
        super().__init__(message)


class UpstreamError(SnapshotRelayError):
    """Raised when the provider fails or returns an unusable completion."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
