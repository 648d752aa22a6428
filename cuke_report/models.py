"""Data models for analyzed suite results.

Contains the dataclasses the reports are built from:
    - AnalyzedEntity   (Feature, Scenario, StepDefinition, Hook)
    - Rule
    - SuiteResults     aggregate of all collections, with ``to_xml()``

Results are produced by the rule engine and loaded with ``load_results()``.
"""

import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

COLLECTIONS = ("features", "scenarios", "step_definitions", "hooks")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ResultsError(Exception):
    """Raised when a results document is missing or malformed."""


def _require_object(raw: Any, kind: str) -> None:
    if not isinstance(raw, dict):
        raise ResultsError(f"{kind} entry must be a JSON object, got {raw!r}")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass
class AnalyzedEntity:
    location: str
    score: int | float = 0
    rules_hash: dict[str, int] = field(default_factory=dict)
    name: str | None = None

    kind = "entity"

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "AnalyzedEntity":
        """Build an entity from one item of a results document.

        Raises:
            ResultsError: if the item is not an object, or ``location`` or
                          ``score`` is absent.
        """
        _require_object(raw, cls.kind)
        missing = [key for key in ("location", "score") if key not in raw]
        if missing:
            raise ResultsError(
                f"{cls.kind} entry is missing {', '.join(missing)}: {raw!r}"
            )
        return cls(
            location=str(raw["location"]),
            score=raw["score"],
            rules_hash=dict(raw.get("rules_hash") or {}),
            name=raw.get("name"),
        )

    def to_xml(self) -> ET.Element:
        element = ET.Element(self.kind, location=self.location, score=str(self.score))
        if self.name:
            element.set("name", self.name)
        rules = ET.SubElement(element, "rules")
        for phrase, count in self.rules_hash.items():
            ET.SubElement(rules, "rule", phrase=phrase, count=str(count))
        return element


class Feature(AnalyzedEntity):
    kind = "feature"


class Scenario(AnalyzedEntity):
    kind = "scenario"


class StepDefinition(AnalyzedEntity):
    kind = "step_definition"


class Hook(AnalyzedEntity):
    kind = "hook"


_ENTITY_TYPES = {
    "features":         Feature,
    "scenarios":        Scenario,
    "step_definitions": StepDefinition,
    "hooks":            Hook,
}


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

@dataclass
class Rule:
    phrase: str
    score: int | float = 0
    enabled: bool = True
    reason: str | None = None
    conditions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Rule":
        _require_object(raw, "rule")
        if "phrase" not in raw:
            raise ResultsError(f"rule entry is missing phrase: {raw!r}")
        return cls(
            phrase=str(raw["phrase"]),
            score=raw.get("score", 0),
            enabled=bool(raw.get("enabled", True)),
            reason=raw.get("reason"),
            conditions=dict(raw.get("conditions") or {}),
        )

    def to_xml(self) -> ET.Element:
        element = ET.Element(
            "rule",
            phrase=self.phrase,
            score=str(self.score),
            enabled=str(self.enabled).lower(),
        )
        if self.reason:
            element.set("reason", self.reason)
        return element


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

@dataclass
class SuiteResults:
    features: list[Feature] = field(default_factory=list)
    scenarios: list[Scenario] = field(default_factory=list)
    step_definitions: list[StepDefinition] = field(default_factory=list)
    hooks: list[Hook] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)

    def all_entities(self) -> list[AnalyzedEntity]:
        """Return features, scenarios, step definitions and hooks as one new list."""
        entities: list[AnalyzedEntity] = []
        for name in COLLECTIONS:
            entities.extend(getattr(self, name))
        return entities

    def to_xml(self) -> ET.Element:
        """Return the generic XML representation rooted at ``<cuke_sniffer>``."""
        root = ET.Element("cuke_sniffer")
        rules = ET.SubElement(root, "rules")
        for rule in self.rules:
            rules.append(rule.to_xml())
        for name in COLLECTIONS:
            section = ET.SubElement(root, name)
            for entity in getattr(self, name):
                section.append(entity.to_xml())
        return root

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SuiteResults":
        if not isinstance(raw, dict):
            raise ResultsError("Results document must be a JSON object at the top level.")
        collections = {
            name: [entity_type.from_dict(item) for item in raw.get(name) or []]
            for name, entity_type in _ENTITY_TYPES.items()
        }
        rules = [Rule.from_dict(item) for item in raw.get("rules") or []]
        return cls(rules=rules, **collections)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load_results(results_path: str) -> SuiteResults:
    """Load a results document written by the rule engine.

    Raises:
        ResultsError: if the file is missing, is not valid JSON, or an entry
                      lacks a required field.
    """
    path = Path(results_path)

    if not path.exists():
        raise ResultsError(f"Results file not found: '{results_path}'")

    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as exc:
        raise ResultsError(f"Unable to read '{results_path}': {exc}") from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ResultsError(f"Failed to parse '{results_path}': {exc}") from exc

    return SuiteResults.from_dict(raw)
