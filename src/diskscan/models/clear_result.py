"""Clearing result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field

from diskscan.models.response import Response, TextPayload


@dataclass(slots=True)
class ClearResult:
    """Outcome of a batch removal: what was cleared and what failed."""

    noun: str
    cleared: int = 0
    freed_bytes: int = 0
    errors: list[str] = field(default_factory=list)

    def merge(self, freed_bytes: int, cleared: int, errors: list[str]) -> None:
        self.freed_bytes += freed_bytes
        self.cleared += cleared
        self.errors.extend(errors)

    def to_response(self, success_message: str | None = None, *, count_payload: bool = False) -> Response:
        """Convert to a response envelope.

        Any failure turns the whole result into an error whose message
        reports the successful count and every failure reason.
        """
        data = TextPayload(str(self.cleared)) if count_payload else TextPayload()
        if self.errors:
            return Response.error(
                f"Cleared {self.cleared} files, failed on: {'; '.join(self.errors)}",
                data,
            )
        message = success_message or f"Successfully cleared {self.cleared} {self.noun} files"
        return Response.success(message, data)
