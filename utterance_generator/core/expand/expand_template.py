from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Iterator, Optional

from utterance_generator.core.errors import InvalidInputError, MalformedTemplateError
from utterance_generator.core.expand.tokenize import normalize, tokenize
from utterance_generator.core.model import Token


def expand(template: Any) -> list[str]:
    """Return every phrase a template (or a sequence of templates) denotes.

    Sequences are expanded element by element and concatenated in order.
    Duplicates are kept. Raises InvalidInputError for anything that is not a
    string or a sequence of strings, MalformedTemplateError for templates
    that cannot be parsed.
    """
    return list(iter_expand(template))


def iter_expand(template: Any) -> Iterator[str]:
    """Lazy version of expand(); yields phrases in the same order."""

    if isinstance(template, str):
        yield from _expand_one(template)
        return

    if isinstance(template, Sequence) and not isinstance(template, (bytes, bytearray)):
        for item in _templates_of(template):
            yield from _expand_one(item)
        return

    raise InvalidInputError(
        code="E_INVALID_INPUT",
        message=f"template must be a string or a list of strings, got {type(template).__name__}",
    )


def count_expansions(template: Any) -> int:
    """Number of phrases expand() would return, without building them."""

    if isinstance(template, str):
        total = 1
        for tok in tokenize(normalize(template)):
            if tok.expandable:
                total *= len(resolve_token(tok))
        return total

    if isinstance(template, Sequence) and not isinstance(template, (bytes, bytearray)):
        return sum(count_expansions(item) for item in _templates_of(template))

    raise InvalidInputError(
        code="E_INVALID_INPUT",
        message=f"template must be a string or a list of strings, got {type(template).__name__}",
    )


def _templates_of(templates: Sequence[Any]) -> list[str]:
    for item in templates:
        if not isinstance(item, str):
            raise InvalidInputError(
                code="E_INVALID_INPUT",
                message=f"template list items must be strings, got {type(item).__name__}",
            )
    return list(templates)


def resolve_token(token: Token) -> list[Optional[str]]:
    """Substitutions for one expandable token, in branch order.

    None stands for the omission branch of an optional group like (|the).
    """

    if token.kind == "slot":
        inner = token.text[1:-1]
        close = inner.find(")")
        suffix = inner[close + 1 :]
        words = _alternatives(inner[1:close], token)
        # slots never get an omission branch
        return ["{" + w + suffix + "}" for w in words]

    if token.kind == "alternation":
        raw = token.text[1:-1].split("|")
        words = _alternatives(token.text[1:-1], token)
        if len(words) == 1 and len(raw) > 1:
            return [words[0], None]
        return list(words)

    return [token.text]


def _alternatives(content: str, token: Token) -> list[str]:
    words = [w.strip() for w in content.split("|")]
    words = [w for w in words if w]
    if not words:
        raise MalformedTemplateError(
            code="E_EMPTY_ALTERNATION",
            message=f"group {token.text!r} has no non-empty alternative",
        )
    return words


def _expand_one(template: str) -> Iterator[str]:
    phrase = normalize(template)
    tokens = tokenize(phrase)

    idx = _first_expandable(tokens)
    if idx is None:
        yield phrase
        return

    head = [t.text for t in tokens[:idx]]
    tail = [t.text for t in tokens[idx + 1 :]]
    for sub in resolve_token(tokens[idx]):
        middle = [sub] if sub is not None else []
        yield from _expand_one(" ".join(head + middle + tail))


def _first_expandable(tokens: list[Token]) -> Optional[int]:
    for i, tok in enumerate(tokens):
        if tok.expandable:
            return i
    return None
