"""Splunk search-job client."""

from splunk_query.client import SplunkClient
from splunk_query.config import Credentials, SplunkConfig
from splunk_query.errors import DecodeError, JobFailedError, PollTimeoutError, SplunkError, TransportError
from splunk_query.jobs import JobPoller, JobSubmitter, PollMode, PollPolicy, normalize_query
from splunk_query.session import SessionManager
from splunk_query.transport import RequestsTransport, TLSConfig

__all__ = [
    "SplunkClient",
    "SplunkConfig",
    "Credentials",
    "SessionManager",
    "JobSubmitter",
    "JobPoller",
    "PollMode",
    "PollPolicy",
    "normalize_query",
    "RequestsTransport",
    "TLSConfig",
    "SplunkError",
    "TransportError",
    "DecodeError",
    "JobFailedError",
    "PollTimeoutError",
]
