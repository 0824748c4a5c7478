from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from splunk_query.api import SplunkApi
from splunk_query.codec import join_params
from splunk_query.config import Credentials
from splunk_query.errors import JobFailedError, PollTimeoutError
from splunk_query.schemas import DispatchState, JobCreated, JobStatusResponse, PollOutcome, PollStatus, ResultSet, Session, parse_payload
from splunk_query.session import SessionManager

logger = logging.getLogger(__name__)

SEARCH_KEYWORD = "search"


def normalize_query(query: str) -> str:
    """Prefix ``search `` unless the query already starts with the keyword."""
    query = query.strip()
    if query.startswith(SEARCH_KEYWORD):
        return query
    return f"{SEARCH_KEYWORD} {query}".rstrip()


class JobSubmitter:
    def __init__(self, api: SplunkApi, sessions: SessionManager, credentials: Credentials) -> None:
        self.api = api
        self.sessions = sessions
        self.credentials = credentials

    def submit(self, query: str, session: Optional[Session] = None) -> Optional[str]:
        """Create a search job and return its id, or ``None`` if none was issued."""
        if session is None:
            session = self.sessions.authenticate(self.credentials.username, self.credentials.password)
        if session is None:
            logger.warning("no session; search job not submitted")
            return None

        search = normalize_query(query)
        content = join_params(f"search={search}", "required_field_list=*")
        payload = self.api.post(self.api.config.jobs_url, content, session=session)
        if not isinstance(payload, dict):
            logger.warning("job submission returned no body", extra={"search": search})
            return None
        job = parse_payload(JobCreated, payload)
        if job.sid is None:
            logger.warning("job submission response has no sid", extra={"search": search})
            return None
        logger.info("search job submitted", extra={"sid": job.sid})
        return job.sid


class PollMode(str, Enum):
    CONTENT = "content"
    STATUS = "status"


@dataclass(frozen=True)
class PollPolicy:
    """How the poller waits for a job.

    The defaults keep the reference behaviour: no pause between requests,
    no attempt limit, no deadline, and readiness judged by a non-empty
    results body. ``STATUS`` mode reads ``dispatchState`` from the job
    endpoint instead.
    """

    interval_sec: float = 0.0
    max_attempts: Optional[int] = None
    timeout_sec: Optional[float] = None
    mode: PollMode = PollMode.CONTENT

    def __post_init__(self) -> None:
        if self.interval_sec < 0:
            raise ValueError("interval_sec must not be negative")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.timeout_sec is not None and self.timeout_sec < 0:
            raise ValueError("timeout_sec must not be negative")


class JobPoller:
    def __init__(
        self,
        api: SplunkApi,
        policy: Optional[PollPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.api = api
        self.policy = policy or PollPolicy()
        self._sleep = sleep
        self._clock = clock

    def job_url(self, job_id: str) -> str:
        return f"{self.api.config.jobs_url}/{job_id}"

    def results_url(self, job_id: str) -> str:
        return f"{self.job_url(job_id)}/results"

    def check(self, job_id: str, session: Optional[Session] = None) -> PollOutcome:
        if self.policy.mode is PollMode.STATUS:
            return self._check_status(job_id, session)
        results = self.api.get(self.results_url(job_id), session=session)
        if results:
            return PollOutcome.ready(results)
        return PollOutcome.pending()

    def _check_status(self, job_id: str, session: Optional[Session]) -> PollOutcome:
        payload = self.api.get(self.job_url(job_id), session=session)
        content = parse_payload(JobStatusResponse, payload).content() if isinstance(payload, dict) else None
        if content is None:
            return PollOutcome.pending()
        if content.is_failed or content.dispatch_state == DispatchState.FAILED.value:
            return PollOutcome.failed(content.failure_reason())
        if content.dispatch_state == DispatchState.DONE.value or content.is_done:
            results = self.api.get(self.results_url(job_id), session=session)
            return PollOutcome.ready(results)
        return PollOutcome.pending()

    def poll(self, job_id: str, session: Optional[Session] = None) -> Optional[ResultSet]:
        """Block until the job reports results and return them.

        Transport and decode errors propagate on the first occurrence.
        """
        started = self._clock()
        attempts = 0
        while True:
            attempts += 1
            outcome = self.check(job_id, session)
            if outcome.status is PollStatus.READY:
                logger.info("search job ready", extra={"sid": job_id, "attempts": attempts})
                return outcome.results
            if outcome.status is PollStatus.FAILED:
                raise JobFailedError(job_id, outcome.reason or "unknown")
            if self.policy.max_attempts is not None and attempts >= self.policy.max_attempts:
                raise PollTimeoutError(job_id, attempts)
            if self.policy.timeout_sec is not None and self._clock() - started >= self.policy.timeout_sec:
                raise PollTimeoutError(job_id, attempts)
            if self.policy.interval_sec > 0:
                self._sleep(self.policy.interval_sec)
