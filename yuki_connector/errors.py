"""Exception hierarchy for the Yuki connector.

Every failure the connector reports derives from YukiError so callers can
catch the whole family, or pick the specific kind they know how to handle.
"""

from typing import Optional


class YukiError(Exception):
    """Base exception for Yuki connector errors."""
    pass


class ConfigurationError(YukiError):
    """Raised when the connector is missing required configuration (e.g. API key)."""
    pass


class AuthenticationError(YukiError):
    """Raised when the access key does not yield a usable session."""
    pass


class SessionNotEstablishedError(AuthenticationError):
    """Raised when an operation needs a session before login() has completed."""
    pass


class AdministrationAccessError(YukiError):
    """Raised when the access key works but grants access to no administration."""
    pass


class RemoteCallError(YukiError):
    """Raised when a remote operation fails at transport or protocol level."""

    def __init__(
        self,
        message: str,
        operation: str,
        fault_code: Optional[str] = None,
        fault_message: Optional[str] = None,
    ):
        self.operation = operation
        self.fault_code = fault_code
        self.fault_message = fault_message
        super().__init__(message)


class InvoiceRejectedError(YukiError):
    """Raised when Yuki processed the request but accepted none of the invoices.

    The raw response document is kept for auditing duplicate or partial
    submissions.
    """

    def __init__(self, message: str, response: str):
        self.response = response
        super().__init__(message)
