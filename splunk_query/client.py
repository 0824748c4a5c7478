from __future__ import annotations

import logging
from typing import Optional

from splunk_query.api import SplunkApi
from splunk_query.config import Credentials, SplunkConfig
from splunk_query.jobs import JobPoller, JobSubmitter, PollPolicy
from splunk_query.schemas import ResultSet, Session
from splunk_query.session import SessionManager
from splunk_query.transport import RequestsTransport, TLSConfig, Transport

logger = logging.getLogger(__name__)


class SplunkClient:
    """Run SPL searches as asynchronous jobs and return their results.

    Each ``query`` call logs in once and reuses that session for both the
    job submission and every poll request. Sessions are never shared
    between calls, so concurrent ``query`` calls are independent.
    """

    def __init__(
        self,
        config: SplunkConfig,
        credentials: Credentials,
        transport: Optional[Transport] = None,
        poll_policy: Optional[PollPolicy] = None,
    ) -> None:
        self.config = config
        self.credentials = credentials
        self._owns_transport = transport is None
        self.transport = transport or RequestsTransport(
            tls=TLSConfig(verify=not config.allow_insecure_tls),
            user_agent=config.user_agent,
            timeout=config.timeout_sec,
        )
        self.api = SplunkApi(config, self.transport)
        self.sessions = SessionManager(self.api)
        self.submitter = JobSubmitter(self.api, self.sessions, credentials)
        self.poller = JobPoller(self.api, poll_policy)

    @classmethod
    def connect(
        cls,
        hostname: str,
        username: str,
        password: str,
        port: int = 8089,
        allow_insecure_tls: bool = False,
        transport: Optional[Transport] = None,
        poll_policy: Optional[PollPolicy] = None,
        timeout_sec: Optional[float] = None,
    ) -> "SplunkClient":
        config = SplunkConfig(
            hostname=hostname,
            port=port,
            allow_insecure_tls=allow_insecure_tls,
            timeout_sec=timeout_sec,
        )
        credentials = Credentials(username=username, password=password)
        return cls(config, credentials, transport=transport, poll_policy=poll_policy)

    def login(self) -> Optional[Session]:
        return self.sessions.authenticate(self.credentials.username, self.credentials.password)

    def query(self, query: str) -> Optional[ResultSet]:
        """Run ``query`` and return the decoded result set.

        ``None`` means no session, no job id, or no results; errors are
        raised only for transport, decode, or job failures.
        """
        session = self.login()
        if session is None:
            return None
        job_id = self.submitter.submit(query, session=session)
        if job_id is None:
            return None
        results = self.poller.poll(job_id, session=session)
        return results or None

    def close(self) -> None:
        if self._owns_transport and isinstance(self.transport, RequestsTransport):
            self.transport.close()

    def __enter__(self) -> "SplunkClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
