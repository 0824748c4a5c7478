from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from splunk_query.errors import DecodeError

AUTH_SCHEME = "Splunk"

# Decoded JSON value handed back to callers untouched.
ResultSet = Any

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_payload(model: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"unexpected {model.__name__} shape: {exc.error_count()} error(s)", excerpt=str(payload)[:200]) from exc


@dataclass(frozen=True)
class Session:
    token: str = field(repr=False)

    @property
    def header(self) -> Dict[str, str]:
        return {"Authorization": f"{AUTH_SCHEME} {self.token}"}


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    session_key: Optional[str] = Field(default=None, alias="sessionKey")

    @field_validator("session_key", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Optional[str]:
        if value is None or not isinstance(value, str) or not value.strip():
            return None
        return value


class JobCreated(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sid: Optional[str] = None

    @field_validator("sid", mode="before")
    @classmethod
    def coerce_sid(cls, value: Any) -> Optional[str]:
        if isinstance(value, bool) or not isinstance(value, (str, int)) or value == "":
            return None
        return str(value)


class DispatchState(str, Enum):
    QUEUED = "QUEUED"
    PARSING = "PARSING"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    FINALIZING = "FINALIZING"
    DONE = "DONE"
    FAILED = "FAILED"


class JobContent(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    dispatch_state: Optional[str] = Field(default=None, alias="dispatchState")
    is_done: bool = Field(default=False, alias="isDone")
    is_failed: bool = Field(default=False, alias="isFailed")
    messages: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("messages", mode="before")
    @classmethod
    def flatten_messages(cls, value: Any) -> List[Dict[str, Any]]:
        if not value:
            return []
        if isinstance(value, dict):
            # {"fatal": ["..."]} form used by some Splunk versions
            flattened: List[Dict[str, Any]] = []
            for kind, texts in value.items():
                for text in texts if isinstance(texts, list) else [texts]:
                    flattened.append({"type": str(kind).upper(), "text": text})
            return flattened
        if isinstance(value, list):
            return [item if isinstance(item, dict) else {"type": "INFO", "text": str(item)} for item in value]
        return value

    def failure_reason(self) -> str:
        texts = [str(message.get("text", "")) for message in self.messages if message.get("type") in {"FATAL", "ERROR"}]
        return "; ".join(text for text in texts if text) or f"dispatchState={self.dispatch_state}"


class JobEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    content: JobContent = Field(default_factory=JobContent)


class JobStatusResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    entry: List[JobEntry] = Field(default_factory=list)

    def content(self) -> Optional[JobContent]:
        return self.entry[0].content if self.entry else None


class PollStatus(str, Enum):
    PENDING = "PENDING"
    READY = "READY"
    FAILED = "FAILED"


@dataclass
class PollOutcome:
    status: PollStatus
    results: Optional[ResultSet] = None
    reason: Optional[str] = None

    @classmethod
    def pending(cls) -> "PollOutcome":
        return cls(status=PollStatus.PENDING)

    @classmethod
    def ready(cls, results: ResultSet) -> "PollOutcome":
        return cls(status=PollStatus.READY, results=results)

    @classmethod
    def failed(cls, reason: str) -> "PollOutcome":
        return cls(status=PollStatus.FAILED, reason=reason)
