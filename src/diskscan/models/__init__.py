"""diskscan data models."""

from diskscan.models.clear_result import ClearResult
from diskscan.models.records import (
    CacheFileRecord,
    FileRecord,
    LargeFileRecord,
    LogFileRecord,
    TrashFileRecord,
)
from diskscan.models.response import (
    EmptyPayload,
    ObjectPayload,
    Payload,
    RecordList,
    Response,
    ResponseStatus,
    TextPayload,
)
from diskscan.models.scan import AggregateSummary, FileEntry, ScanRoot, WalkEntry

__all__ = [
    "AggregateSummary",
    "CacheFileRecord",
    "ClearResult",
    "EmptyPayload",
    "FileEntry",
    "FileRecord",
    "LargeFileRecord",
    "LogFileRecord",
    "ObjectPayload",
    "Payload",
    "RecordList",
    "Response",
    "ResponseStatus",
    "ScanRoot",
    "TextPayload",
    "TrashFileRecord",
    "WalkEntry",
]
