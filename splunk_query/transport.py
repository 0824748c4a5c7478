from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

import requests

from splunk_query.errors import TransportError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class TLSConfig:
    verify: bool = True


@dataclass
class TransportResponse:
    status_code: int
    reason: str
    body: bytes

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class Transport(Protocol):
    """Sends one HTTP request and returns the status and raw body.

    Implementations may raise ``TransportError`` themselves; any response
    they return with a non-2xx status is turned into one by ``SplunkApi``.
    """

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> TransportResponse:
        ...


class RequestsTransport:
    """Blocking HTTPS transport backed by a single ``requests.Session``.

    The session only pools connections; it holds no Splunk session state,
    so one instance may be shared between clients.
    """

    def __init__(
        self,
        tls: Optional[TLSConfig] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.tls = tls or TLSConfig()
        self.timeout = timeout
        self.session = requests.Session()
        self.session.verify = self.tls.verify
        if user_agent:
            self.session.headers["User-Agent"] = user_agent
        if not self.tls.verify:
            logger.warning("TLS certificate verification disabled")

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> TransportResponse:
        method = method.upper()
        request_headers = dict(headers or {})
        if method == "POST":
            request_headers["Content-Type"] = FORM_CONTENT_TYPE
        try:
            response = self.session.request(
                method,
                url,
                headers=request_headers,
                data=body.encode("utf-8") if body else None,
                timeout=self.timeout,
                verify=self.tls.verify,
            )
        except requests.RequestException as exc:
            raise TransportError(str(exc), url=url) from exc

        result = TransportResponse(status_code=response.status_code, reason=response.reason or "", body=response.content)
        logger.debug("splunk response", extra={"method": method, "url": url, "status": result.status_code})
        if not 200 <= response.status_code < 300:
            raise TransportError(result.status_line, status_code=result.status_code, url=url)
        return result

    def close(self) -> None:
        self.session.close()
