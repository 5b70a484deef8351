from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class UtteranceError(Exception):
    """Base error envelope. Reports collect these; strict callers raise them."""

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.file:
            parts.append(self.file)
        if self.path:
            parts.append(self.path)
        loc = ":".join(parts) if parts else "<intents>"
        return f"{loc}: {self.code}: {self.message}"

    def located(self, file: Optional[str], path: Optional[str]) -> UtteranceError:
        """Copy of this error pinned to an intents file and a path like intents.Greet[1].

        Location already set by the raiser wins.
        """
        return replace(self, file=self.file or file, path=self.path or path)


class IntentLoadError(UtteranceError):
    pass


class InvalidInputError(UtteranceError):
    pass


class MalformedTemplateError(UtteranceError):
    pass


def sort_errors(errors: list[UtteranceError]) -> list[UtteranceError]:
    return sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
