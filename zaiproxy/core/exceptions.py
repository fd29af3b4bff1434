"""Core exceptions for the proxy."""


class ProxyError(Exception):
    """Base exception for proxy errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ProxyError):
    """Raised when the backend credential or settings are unusable."""
    pass


class InvalidBackendResponse(ProxyError):
    """Raised when the backend answers 2xx with a body we cannot translate."""
    pass
