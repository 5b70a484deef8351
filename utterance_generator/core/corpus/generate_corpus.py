from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from utterance_generator.core.errors import InvalidInputError, MalformedTemplateError, UtteranceError
from utterance_generator.core.expand.expand_template import expand
from utterance_generator.core.model import CorpusReport


logger = logging.getLogger(__name__)


def generate(intents: Any, *, strict: bool = False) -> str:
    """Build the utterance corpus for an intents mapping.

    Each phrase becomes a line ``"<intent> <phrase>\\n"``. Intent blocks follow
    mapping order and are separated by one extra newline; the last block has
    none.

    Lenient (default): bad intents and templates are skipped and the rest of
    the corpus is still produced; invalid top-level input yields "".
    Strict: the first error is raised instead.
    """

    report = build_corpus(intents)
    if strict and report.errors:
        raise report.errors[0]
    return report.corpus


def build_corpus(intents: Any, *, file: Optional[str] = None) -> CorpusReport:
    """Best-effort corpus build. Returns the corpus plus every error hit, in order."""

    if not isinstance(intents, Mapping):
        err = InvalidInputError(
            code="E_INVALID_TOP_LEVEL",
            message=f"intents must be a mapping of intent -> template(s), got {type(intents).__name__}",
            file=file,
            path="intents",
        )
        logger.warning("%s", err)
        return CorpusReport(corpus="", line_count=0, errors=[err])

    if not intents:
        err = InvalidInputError(
            code="E_NO_INTENTS",
            message="intents mapping is empty",
            file=file,
            path="intents",
        )
        logger.warning("%s", err)
        return CorpusReport(corpus="", line_count=0, errors=[err])

    errors: list[UtteranceError] = []
    blocks: list[str] = []
    phrase_counts: dict[str, int] = {}
    line_count = 0
    size = len(intents)

    for i, (intent, value) in enumerate(intents.items(), start=1):
        separator = "\n" if i < size else ""
        intent_path = f"intents.{intent}"

        if not isinstance(intent, str):
            errors.append(
                InvalidInputError(
                    code="E_INVALID_INTENT_NAME",
                    message=f"intent name must be a string, got {type(intent).__name__}",
                    file=file,
                    path=intent_path,
                )
            )
            logger.warning("skipping intent: %s", errors[-1])
            continue

        templates = intent_templates(value)
        if templates is None:
            errors.append(
                InvalidInputError(
                    code="E_INVALID_TEMPLATES",
                    message=f"templates must be a string or a list of strings, got {type(value).__name__}",
                    file=file,
                    path=intent_path,
                )
            )
            logger.warning("skipping intent: %s", errors[-1])
            continue

        lines: list[str] = []
        for j, template in enumerate(templates):
            path = intent_path if isinstance(value, str) else f"{intent_path}[{j}]"
            if not isinstance(template, str):
                errors.append(
                    InvalidInputError(
                        code="E_INVALID_TEMPLATE",
                        message=f"template must be a string, got {type(template).__name__}",
                        file=file,
                        path=path,
                    )
                )
                logger.warning("skipping template: %s", errors[-1])
                continue
            try:
                phrases = expand(template)
            except MalformedTemplateError as e:
                errors.append(e.located(file, path))
                logger.warning("skipping template: %s", errors[-1])
                continue
            lines.extend(f"{intent} {phrase}\n" for phrase in phrases)

        logger.debug("intent %s: %d phrases from %d templates", intent, len(lines), len(templates))
        phrase_counts[intent] = len(lines)
        line_count += len(lines)
        blocks.append("".join(lines) + separator)

    return CorpusReport(
        corpus="".join(blocks),
        line_count=line_count,
        phrase_counts=phrase_counts,
        errors=errors,
    )


def intent_templates(value: Any) -> Optional[list[Any]]:
    """Templates of one intent as a list, or None when the value has the wrong shape."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return list(value)
    return None
