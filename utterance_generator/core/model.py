from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from utterance_generator.core.errors import UtteranceError


TokenKind = Literal["word", "alternation", "slot"]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    @property
    def expandable(self) -> bool:
        return self.kind != "word"


@dataclass(frozen=True)
class CorpusReport:
    corpus: str
    line_count: int
    phrase_counts: dict[str, int] = field(default_factory=dict)
    errors: list[UtteranceError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
