"""Tests for cuke_report/models.py"""

import json
from pathlib import Path

import pytest

from cuke_report.models import (
    Feature,
    Hook,
    ResultsError,
    Scenario,
    StepDefinition,
    SuiteResults,
    load_results,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def write_results(tmp_path: Path, data) -> Path:
    p = tmp_path / "results.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return p


VALID_RESULTS = {
    "features": [{"location": "a.feature", "score": 3, "rules_hash": {"No description": 1}}],
    "scenarios": [{"location": "a.feature:4", "score": 1, "name": "Logs in"}],
    "step_definitions": [{"location": "steps/a.rb:2", "score": 0, "rules_hash": {}}],
    "hooks": [],
    "rules": [{"phrase": "No description", "score": 3, "enabled": True}],
}


# ---------------------------------------------------------------------------
# load_results()
# ---------------------------------------------------------------------------

def test_load_valid_results(tmp_path):
    results = load_results(str(write_results(tmp_path, VALID_RESULTS)))

    assert isinstance(results.features[0], Feature)
    assert isinstance(results.scenarios[0], Scenario)
    assert isinstance(results.step_definitions[0], StepDefinition)
    assert results.hooks == []
    assert results.features[0].rules_hash == {"No description": 1}
    assert results.scenarios[0].rules_hash == {}
    assert results.scenarios[0].name == "Logs in"
    assert results.rules[0].phrase == "No description"


def test_load_missing_collections_are_empty(tmp_path):
    results = load_results(str(write_results(tmp_path, {"features": []})))
    assert results.all_entities() == []
    assert results.rules == []


def test_load_missing_file(tmp_path):
    with pytest.raises(ResultsError, match="not found"):
        load_results(str(tmp_path / "nope.json"))


def test_load_invalid_json(tmp_path):
    p = tmp_path / "results.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ResultsError, match="Failed to parse"):
        load_results(str(p))


def test_load_directory_path(tmp_path):
    with pytest.raises(ResultsError, match="Unable to read"):
        load_results(str(tmp_path))


def test_load_invalid_utf8(tmp_path):
    p = tmp_path / "results.json"
    p.write_bytes(b'{"features": [{"location": "\xff", "score": 1}]}')
    with pytest.raises(ResultsError, match="Failed to parse"):
        load_results(str(p))


def test_load_top_level_must_be_object(tmp_path):
    with pytest.raises(ResultsError, match="JSON object"):
        load_results(str(write_results(tmp_path, [1, 2])))


def test_load_entity_without_location(tmp_path):
    with pytest.raises(ResultsError, match="location"):
        load_results(str(write_results(tmp_path, {"hooks": [{"score": 1}]})))


def test_load_rule_without_phrase(tmp_path):
    with pytest.raises(ResultsError, match="phrase"):
        load_results(str(write_results(tmp_path, {"rules": [{"score": 1}]})))


# ---------------------------------------------------------------------------
# SuiteResults
# ---------------------------------------------------------------------------

def test_all_entities_concatenation_order():
    results = SuiteResults(
        features=[Feature(location="f")],
        scenarios=[Scenario(location="s")],
        step_definitions=[StepDefinition(location="d")],
        hooks=[Hook(location="h")],
    )
    assert [e.location for e in results.all_entities()] == ["f", "s", "d", "h"]


def test_all_entities_returns_new_list():
    results = SuiteResults(features=[Feature(location="f")])
    entities = results.all_entities()
    entities.append(Hook(location="h"))
    assert len(results.features) == 1
    assert results.hooks == []


def test_entity_kinds():
    assert Feature(location="f").to_xml().tag == "feature"
    assert StepDefinition(location="d").to_xml().tag == "step_definition"


# ---------------------------------------------------------------------------
# from_dict() — malformed entries
# ---------------------------------------------------------------------------

def test_load_entity_that_is_not_an_object(tmp_path):
    with pytest.raises(ResultsError, match="must be a JSON object"):
        load_results(str(write_results(tmp_path, {"features": [1]})))


def test_load_entity_given_as_string(tmp_path):
    with pytest.raises(ResultsError, match="must be a JSON object"):
        load_results(str(write_results(tmp_path, {"scenarios": ["a.feature:3"]})))


def test_load_rule_that_is_not_an_object(tmp_path):
    with pytest.raises(ResultsError, match="must be a JSON object"):
        load_results(str(write_results(tmp_path, {"rules": [["No steps", 3]]})))
