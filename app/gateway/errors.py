# app/gateway/errors.py
from __future__ import annotations

from typing import Optional


class UpstreamError(Exception):
    """Provider could not be used (transport or protocol level)."""

    def __init__(self, message: str, *, provider: str, op: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.op = op
        self.status_code = status_code

    def __str__(self) -> str:
        return f"[{self.provider}:{self.op}] {self.message}"


class UpstreamUnavailable(UpstreamError):
    """Network failure or timeout."""


class UpstreamProtocolError(UpstreamError):
    """Response is not JSON or does not have the expected envelope shape."""


class UpstreamRejected(UpstreamError):
    """Provider envelope carries a non-success code on a listing call."""
