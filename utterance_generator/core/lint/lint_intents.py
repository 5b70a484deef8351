from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from typing import Any, Optional

from utterance_generator.core.corpus.generate_corpus import intent_templates
from utterance_generator.core.errors import UtteranceError, sort_errors
from utterance_generator.core.expand.expand_template import expand


# Corpus lint rules, run on top of the corpus build errors:
# - L_EMPTY_INTENT: intent maps to an empty template list (contributes no lines)
# - L_DUPLICATE_PHRASE: the same phrase is generated more than once for one intent
# - L_AMBIGUOUS_PHRASE: the same phrase is generated for more than one intent
# - L_INTENT_NAME_WHITESPACE: intent name is empty or contains whitespace, so corpus
#   lines cannot be split back into intent and phrase on the first space


def lint_intents(intents: Any, *, file: Optional[str] = None) -> list[UtteranceError]:
    """Lint an intents mapping.

    Best effort: intents and templates that cannot be expanded are ignored
    here, build_corpus() reports those. The CLI prints both together.
    """

    if not isinstance(intents, Mapping):
        return []

    errors: list[UtteranceError] = []
    owners: dict[str, list[str]] = {}

    for intent, value in intents.items():
        if not isinstance(intent, str):
            continue
        templates = intent_templates(value)
        if templates is None:
            continue

        path = f"intents.{intent}"
        if not intent or any(c.isspace() for c in intent):
            errors.append(
                UtteranceError(
                    code="L_INTENT_NAME_WHITESPACE",
                    message=f"intent name {intent!r} is empty or contains whitespace",
                    file=file,
                    path=path,
                )
            )

        if not templates:
            errors.append(
                UtteranceError(
                    code="L_EMPTY_INTENT",
                    message="intent has no templates and contributes no lines",
                    file=file,
                    path=path,
                )
            )
            continue

        phrases: list[str] = []
        for template in templates:
            try:
                phrases.extend(expand(template))
            except UtteranceError:
                continue

        counts = Counter(phrases)
        for phrase, n in counts.items():
            if n > 1:
                errors.append(
                    UtteranceError(
                        code="L_DUPLICATE_PHRASE",
                        message=f"phrase {phrase!r} is generated {n} times",
                        file=file,
                        path=path,
                    )
                )
            owners.setdefault(phrase, []).append(intent)

    for phrase, names in owners.items():
        if len(names) > 1:
            errors.append(
                UtteranceError(
                    code="L_AMBIGUOUS_PHRASE",
                    message=f"phrase {phrase!r} is generated for intents: {', '.join(names)}",
                    file=file,
                    path=f"intents.{names[1]}",
                )
            )

    return sort_errors(errors)
