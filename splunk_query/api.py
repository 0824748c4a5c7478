from __future__ import annotations

import logging
from typing import Optional

from splunk_query.codec import append_output_mode, decode_body, join_params
from splunk_query.config import SplunkConfig
from splunk_query.errors import TransportError
from splunk_query.schemas import ResultSet, Session
from splunk_query.transport import Transport

logger = logging.getLogger(__name__)


class SplunkApi:
    """Issues one request against the service and decodes the JSON reply.

    Every request carries the output-format directive: appended to the body
    of a POST, to the query string of a GET.
    """

    def __init__(self, config: SplunkConfig, transport: Transport) -> None:
        self.config = config
        self.transport = transport

    def request(
        self,
        method: str,
        url: str,
        content: Optional[str] = None,
        session: Optional[Session] = None,
    ) -> Optional[ResultSet]:
        method = method.upper()
        body = None
        if method == "POST":
            body = join_params(content or "", self.config.output_mode)
        else:
            url = append_output_mode(url, self.config.output_mode)

        headers = session.header if session else None
        response = self.transport.send(method, url, headers=headers, body=body)
        if not 200 <= response.status_code < 300:
            raise TransportError(response.status_line, status_code=response.status_code, url=url)
        return decode_body(response.body)

    def post(self, url: str, content: str, session: Optional[Session] = None) -> Optional[ResultSet]:
        return self.request("POST", url, content=content, session=session)

    def get(self, url: str, session: Optional[Session] = None) -> Optional[ResultSet]:
        return self.request("GET", url, session=session)
