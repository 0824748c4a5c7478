"""Exceptions raised by the Splunk search client."""

from __future__ import annotations

from typing import Optional


class SplunkError(Exception):
    """Base class for all client errors."""


class TransportError(SplunkError):
    def __init__(self, status_line: str, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(status_line)
        self.status_line = status_line
        self.status_code = status_code
        self.url = url


class DecodeError(SplunkError):
    def __init__(self, message: str, excerpt: str = "") -> None:
        super().__init__(message)
        self.excerpt = excerpt


class JobFailedError(SplunkError):
    def __init__(self, job_id: str, reason: str) -> None:
        super().__init__(f"job {job_id} failed: {reason}")
        self.job_id = job_id
        self.reason = reason


class PollTimeoutError(SplunkError):
    def __init__(self, job_id: str, attempts: int) -> None:
        super().__init__(f"job {job_id} not ready after {attempts} poll attempts")
        self.job_id = job_id
        self.attempts = attempts
