"""
Error taxonomy shared by the request handlers and service clients.
"""

from __future__ import annotations

from typing import Optional


class PortfolioError(Exception):
    """Base error translated to a JSON response at the handler boundary."""

    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def as_dict(self) -> dict:
        body = {"message": self.message}
        if self.detail is not None:
            body["error"] = self.detail
        return body


class ValidationError(PortfolioError):
    """The client omitted a required field."""

    status_code = 400


class StorageError(PortfolioError):
    """A record store read or write failed."""

    status_code = 500


class MailError(PortfolioError):
    """The mail transport rejected or failed to send a message."""

    status_code = 500
