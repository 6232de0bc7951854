"""Order service exceptions.

Raised by the translator, the store adapter and the HTTP handlers.
``main.py`` registers handlers that turn the HTTP-facing ones into
``{"error": ...}`` JSON responses; the GraphQL layer reports the others
in its ``errors`` envelope.
"""


class OrderServiceError(Exception):
    """Base class for errors raised by this service."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFilterError(OrderServiceError):
    """A filter bound could not be parsed as a date."""

    status_code = 400

    def __init__(self, field: str, value):
        super().__init__(f"Invalid date for {field}: {value!r}")
        self.field = field
        self.value = value


class StoreUnavailableError(OrderServiceError):
    """The order store could not be reached or the query failed."""


class BridgeFailure(OrderServiceError):
    """No usable GraphQL query came back from the completion API."""


class MissingInputError(OrderServiceError):
    """A required request field is absent."""

    status_code = 400
