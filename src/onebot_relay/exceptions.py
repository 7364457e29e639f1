"""Custom exception hierarchy for the relay."""


class RelayError(Exception):
    """Base exception for all relay errors."""


class ParseError(RelayError):
    """Inbound event body is not a valid group message event."""


class CompletionFailure(RelayError):
    """A single completion call failed."""

    def __init__(self, message: str, model: str | None = None) -> None:
        super().__init__(message)
        self.model = model


class DeliveryFailure(RelayError):
    """A single delivery attempt to the messaging gateway failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(RelayError):
    """Error in system configuration."""
