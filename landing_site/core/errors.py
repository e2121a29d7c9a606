"""
Error types raised by the contact relay and the startup checks.
"""

from typing import List, Optional


class ContactValidationError(Exception):
    """A submission was rejected before any delivery attempt."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DeliveryError(Exception):
    """The mail transport failed to deliver a message."""

    def __init__(self, message: str, code: Optional[int] = None, response: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response

    def details(self) -> dict:
        return {"message": self.message, "code": self.code, "response": self.response}


class ConfigurationError(Exception):
    """Required settings are missing at startup."""

    def __init__(self, missing: List[str]):
        super().__init__(f"Missing required environment variables: {missing}")
        self.missing = list(missing)
