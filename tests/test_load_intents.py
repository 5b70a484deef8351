from pathlib import Path

import pytest

from utterance_generator.core.errors import IntentLoadError
from utterance_generator.core.io.load_intents import load_intents

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def test_load_yaml_success():
    intents = load_intents(str(EXAMPLES / "intents.yaml"))
    assert list(intents) == ["PlayMusic", "TurnOnLight", "BookTable"]
    assert intents["TurnOnLight"] == "turn (|the) light on"
    assert isinstance(intents["PlayMusic"], list)


def test_load_json_success():
    intents = load_intents(str(EXAMPLES / "intents.json"))
    assert list(intents) == ["Greet", "Goodbye"]


def test_load_wrapped_mapping():
    assert load_intents(str(EXAMPLES / "intents-wrapped.yaml")) == {"Greet": "(hi|hello)"}


def test_load_missing_file():
    with pytest.raises(IntentLoadError) as excinfo:
        load_intents(str(EXAMPLES / "does-not-exist.yaml"))
    assert excinfo.value.code == "E_FILE_NOT_FOUND"


def test_load_unsupported_format(tmp_path):
    p = tmp_path / "intents.txt"
    p.write_text("Greet: hi", encoding="utf-8")
    with pytest.raises(IntentLoadError) as excinfo:
        load_intents(str(p))
    assert excinfo.value.code == "E_UNSUPPORTED_FORMAT"


def test_load_bad_json(tmp_path):
    p = tmp_path / "intents.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(IntentLoadError) as excinfo:
        load_intents(str(p))
    assert excinfo.value.code == "E_JSON_PARSE"


def test_load_bad_yaml(tmp_path):
    p = tmp_path / "intents.yaml"
    p.write_text("Greet: [hi\n", encoding="utf-8")
    with pytest.raises(IntentLoadError) as excinfo:
        load_intents(str(p))
    assert excinfo.value.code == "E_YAML_PARSE"


def test_load_top_level_must_be_mapping():
    with pytest.raises(IntentLoadError) as excinfo:
        load_intents(str(EXAMPLES / "intents-not-mapping.yaml"))
    assert excinfo.value.code == "E_INVALID_TOP_LEVEL"
    assert str(excinfo.value).endswith("E_INVALID_TOP_LEVEL: top-level document must be a mapping of intent -> template(s)")


def test_load_rejects_non_mapping_intents_key(tmp_path):
    p = tmp_path / "intents.yaml"
    p.write_text("intents:\n  - play music\n", encoding="utf-8")
    with pytest.raises(IntentLoadError) as excinfo:
        load_intents(str(p))
    assert excinfo.value.code == "E_INVALID_INTENTS_KEY"
    assert excinfo.value.path == "intents"


def test_load_empty_file(tmp_path):
    p = tmp_path / "intents.yaml"
    p.write_text("", encoding="utf-8")
    with pytest.raises(IntentLoadError) as excinfo:
        load_intents(str(p))
    assert excinfo.value.code == "E_EMPTY_FILE"
