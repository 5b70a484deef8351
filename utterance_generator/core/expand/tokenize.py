from __future__ import annotations

import re

from utterance_generator.core.errors import MalformedTemplateError
from utterance_generator.core.model import Token


# (word) -> word, also inside slot groups: {(one)|Size} -> {one|Size}
_SINGLE_WORD_GROUP = re.compile(r"\(([^\s|(){}]+)\)")

_OPENERS = {"(": ")", "{": "}"}
_CLOSERS = {")": "(", "}": "{"}


def normalize(template: str) -> str:
    """Strip bare single-word groups. They never branch."""
    return _SINGLE_WORD_GROUP.sub(r"\1", template)


def tokenize(template: str) -> list[Token]:
    """Split a (normalized) template into tokens, left to right.

    Whitespace separates tokens except inside a group: a balanced ``(...)``
    or ``{...}`` run is always one token, and it never shares a token with
    adjacent word characters (``go(left|right)`` is ``go`` + ``(left|right)``).
    """

    tokens: list[Token] = []
    buf: list[str] = []
    stack: list[tuple[str, int]] = []

    def flush() -> None:
        if buf:
            tokens.append(_classify("".join(buf), template))
            buf.clear()

    for i, ch in enumerate(template):
        if ch in _OPENERS:
            if not stack:
                flush()
            stack.append((ch, i))
            buf.append(ch)
        elif ch in _CLOSERS:
            if not stack or stack[-1][0] != _CLOSERS[ch]:
                raise MalformedTemplateError(
                    code="E_UNBALANCED_GROUP",
                    message=f"unexpected '{ch}' at column {i + 1} in {template!r}",
                )
            stack.pop()
            buf.append(ch)
            if not stack:
                flush()
        elif ch.isspace() and not stack:
            flush()
        else:
            buf.append(ch)

    if stack:
        opener, col = stack[-1]
        raise MalformedTemplateError(
            code="E_UNBALANCED_GROUP",
            message=f"'{opener}' at column {col + 1} is never closed in {template!r}",
        )

    flush()
    return tokens


def _classify(text: str, template: str) -> Token:
    if text.startswith("("):
        inner = text[1:-1]
        if _has_group_chars(inner):
            raise MalformedTemplateError(
                code="E_MALFORMED_GROUP",
                message=f"nested group {text!r} in {template!r}; only {{(...)|Slot}} may nest",
            )
        return Token(kind="alternation", text=text)

    if text.startswith("{"):
        inner = text[1:-1]
        if "(" not in inner:
            # {Slot} / {value|Slot}: already resolved, nothing to expand
            return Token(kind="word", text=text)
        close = inner.find(")")
        if not inner.startswith("(") or _has_group_chars(inner[1:close]) or _has_group_chars(inner[close + 1 :]):
            raise MalformedTemplateError(
                code="E_MALFORMED_SLOT",
                message=f"slot group {text!r} must look like {{(a|b)|SlotName}} in {template!r}",
            )
        return Token(kind="slot", text=text)

    return Token(kind="word", text=text)


def _has_group_chars(s: str) -> bool:
    return any(c in s for c in "(){}")
