"""Exceptions raised by push delivery back ends."""


class PushConfigurationError(RuntimeError):
    """Raised when VAPID credentials are missing."""


class PushDeliveryError(Exception):
    """Raised when push delivery fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class PushGoneError(PushDeliveryError):
    """Raised when the push service reports the endpoint no longer exists (404/410)."""

    def __init__(self, endpoint: str, *, status_code: int | None = None) -> None:
        self.endpoint = endpoint
        super().__init__(f"Push subscription gone: {endpoint[:60]}", status_code=status_code)


__all__ = ["PushConfigurationError", "PushDeliveryError", "PushGoneError"]
