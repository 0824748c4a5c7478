from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_PORT = 8089
LOGIN_PATH = "/servicesNS/admin/search/auth/login"
JOBS_PATH = "/servicesNS/admin/search/search/jobs"
OUTPUT_MODE = "output_mode=json"


@dataclass(frozen=True)
class SplunkConfig:
    hostname: str
    port: int = DEFAULT_PORT
    login_path: str = LOGIN_PATH
    jobs_path: str = JOBS_PATH
    output_mode: str = OUTPUT_MODE
    user_agent: str = "SAPortal"
    allow_insecure_tls: bool = False
    timeout_sec: Optional[float] = None
    login_url: str = field(init=False)
    jobs_url: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.hostname:
            raise ValueError("hostname is required")
        object.__setattr__(self, "login_url", self._url(self.login_path))
        object.__setattr__(self, "jobs_url", self._url(self.jobs_path))

    def _url(self, path: str) -> str:
        return f"https://{self.hostname}:{self.port}{path}"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() == "true"


def config_from_env() -> SplunkConfig:
    timeout = os.environ.get("SPLUNK_TIMEOUT_SEC")
    return SplunkConfig(
        hostname=os.environ["SPLUNK_HOST"],
        port=int(os.environ.get("SPLUNK_PORT", str(DEFAULT_PORT))),
        allow_insecure_tls=_env_bool("SPLUNK_INSECURE_TLS"),
        timeout_sec=float(timeout) if timeout else None,
    )


def credentials_from_env() -> Credentials:
    return Credentials(
        username=os.environ["SPLUNK_USERNAME"],
        password=os.environ["SPLUNK_PASSWORD"],
    )
