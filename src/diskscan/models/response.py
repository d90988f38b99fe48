"""Response envelope returned by every scan, summary and clear operation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence, Union

from diskscan.models.records import FileRecord
from diskscan.models.scan import AggregateSummary


class ResponseStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class RecordList:
    """Ordered file records."""

    items: tuple[FileRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class ObjectPayload:
    """A single JSON object, e.g. a summary or a file preview."""

    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TextPayload:
    text: str = ""


@dataclass(frozen=True, slots=True)
class EmptyPayload:
    pass


Payload = Union[RecordList, ObjectPayload, TextPayload, EmptyPayload]


@dataclass(frozen=True, slots=True)
class Response:
    """Tagged result with a human-readable message and a payload."""

    status: ResponseStatus
    message: str
    data: Payload = field(default_factory=EmptyPayload)

    @classmethod
    def success(cls, message: str, data: Payload | None = None) -> Response:
        return cls(ResponseStatus.SUCCESS, message, data if data is not None else EmptyPayload())

    @classmethod
    def error(cls, message: str, data: Payload | None = None) -> Response:
        return cls(ResponseStatus.ERROR, message, data if data is not None else EmptyPayload())

    @classmethod
    def info(cls, message: str, data: Payload | None = None) -> Response:
        return cls(ResponseStatus.INFO, message, data if data is not None else EmptyPayload())

    @classmethod
    def records(cls, message: str, records: Sequence[FileRecord]) -> Response:
        return cls.success(message, RecordList(tuple(records)))

    @classmethod
    def summary(cls, message: str, summary: AggregateSummary) -> Response:
        return cls.success(message, ObjectPayload(summary.to_dict()))

    @property
    def ok(self) -> bool:
        return self.status is not ResponseStatus.ERROR

    def payload_to_json(self) -> Any:
        """Return the payload as plain JSON-compatible data."""
        match self.data:
            case RecordList(items=items):
                return [record.to_dict() for record in items]
            case ObjectPayload(fields=fields):
                return dict(fields)
            case TextPayload(text=text):
                return text
            case EmptyPayload():
                return None
        raise TypeError(f"Unknown payload type: {type(self.data).__name__}")

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value, "message": self.message, "data": self.payload_to_json()}

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
