"""Errors raised while relaying a webhook."""


class RelayError(Exception):
    """Base class for every error the relay logs and drops."""

    status_code = 500


class MethodNotAllowedError(RelayError):
    status_code = 405

    def __init__(self, method: str):
        super().__init__(f"Method error: {method}")
        self.method = method


class EmptyBodyError(RelayError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Empty request body")


class PayloadDecodeError(RelayError):
    """Body could not be decoded into the configured payload type."""

    status_code = 400


class DeliveryError(RelayError):
    """Outbound POST to the robot failed."""

    status_code = 502
