"""
Error types raised by the content engine and its client.

Server-side errors carry the HTTP status the /generate route answers with.
Client-side errors are what the request composer raises to its caller.
"""


class AdCraftError(Exception):
    """Base error with a human-readable message and an HTTP status"""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnauthorizedError(AdCraftError):
    """No caller identity was attached to the request"""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ProviderConfigError(AdCraftError):
    """The model provider credential is missing or a placeholder"""


class GenerationError(AdCraftError):
    """The provider returned nothing usable"""


class MalformedOutputError(GenerationError):
    """The provider's text output is not valid JSON"""


class SchemaMismatchError(GenerationError):
    """A result does not match the schema registered for its tool"""


class InvalidRequestError(AdCraftError):
    """The composer refused to send a request with missing or bad inputs"""

    status_code = 400


class GenerationFailedError(AdCraftError):
    """A generation call came back as a failure (provider or transport)"""


class GenerationTimeoutError(GenerationFailedError):
    """The client-side time budget ran out and the call was cancelled"""

    status_code = 504
