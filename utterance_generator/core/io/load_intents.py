from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from utterance_generator.core.errors import IntentLoadError


def load_intents(path: str) -> dict[str, Any]:
    """Load a YAML/JSON intents file.

    Two layouts are accepted:

      PlayMusic: play (rock|jazz)
      TurnOnLight: ["turn (|the) light on", "lights on"]

    or the same mapping under a single top-level ``intents`` key. Intent order
    in the file is the corpus order, so key order is preserved. An empty file
    is E_EMPTY_FILE; an ``intents`` key holding anything but a mapping is
    E_INVALID_INTENTS_KEY. Template shapes are not checked here; the corpus
    builder and linter own that.
    """

    p = Path(path)
    if not p.exists():
        raise IntentLoadError(
            code="E_FILE_NOT_FOUND",
            message="file does not exist",
            file=str(p),
        )

    suffix = p.suffix.lower()
    try:
        raw_text = p.read_text(encoding="utf-8")
    except Exception as e:  # pragma: no cover
        raise IntentLoadError(code="E_FILE_READ", message=str(e), file=str(p)) from e

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(raw_text)
        elif suffix == ".json":
            data = json.loads(raw_text)
        else:
            raise IntentLoadError(
                code="E_UNSUPPORTED_FORMAT",
                message="supported formats are .yaml/.yml and .json",
                file=str(p),
            )
    except IntentLoadError:
        raise
    except Exception as e:
        code = "E_YAML_PARSE" if suffix in {".yaml", ".yml"} else "E_JSON_PARSE"
        raise IntentLoadError(code=code, message=str(e), file=str(p)) from e

    if data is None:
        raise IntentLoadError(
            code="E_EMPTY_FILE",
            message="intents file is empty; expected intent -> template(s)",
            file=str(p),
        )

    if isinstance(data, dict) and list(data.keys()) == ["intents"]:
        if not isinstance(data["intents"], dict):
            raise IntentLoadError(
                code="E_INVALID_INTENTS_KEY",
                message=f"'intents' must map intent names to templates, got {type(data['intents']).__name__}",
                file=str(p),
                path="intents",
            )
        data = data["intents"]

    if not isinstance(data, dict):
        raise IntentLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="top-level document must be a mapping of intent -> template(s)",
            file=str(p),
        )

    return data
