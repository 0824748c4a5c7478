from __future__ import annotations

import logging
from typing import Optional

from splunk_query.api import SplunkApi
from splunk_query.codec import join_params
from splunk_query.schemas import LoginResponse, Session, parse_payload

logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(self, api: SplunkApi) -> None:
        self.api = api

    def authenticate(self, username: str, password: str) -> Optional[Session]:
        """Exchange credentials for a session.

        Returns ``None`` when the login succeeded at the HTTP level but the
        reply carried no session key. HTTP failures raise ``TransportError``.
        """
        content = join_params(f"username={username}", f"password={password}")
        payload = self.api.post(self.api.config.login_url, content)
        if not isinstance(payload, dict):
            logger.warning("login returned no body", extra={"username": username})
            return None
        login = parse_payload(LoginResponse, payload)
        if not login.session_key:
            logger.warning("login response has no session key", extra={"username": username})
            return None
        logger.info("authenticated", extra={"username": username})
        return Session(token=login.session_key)
