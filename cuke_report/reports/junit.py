"""JUnit XML export, with violations collated by file.

Every file becomes a ``testsuite``; every rule violated by an entity in that
file becomes a failing ``testcase``. Entities without violations contribute
one passing ``testcase`` per location, so a clean file is reported as a pass
by Jenkins and other JUnit consumers.

Functions:
    collect_failures(entities, working_dir=None)        -> (dict, int)
    build_junit_tree(entities, working_dir=None)        -> Element
    junit_xml(entities, working_dir=None)               -> str
    output_junit_xml(results, file_name, working_dir)   -> str
"""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Iterable

from cuke_report import DEFAULT_OUTPUT_FILE_NAME
from cuke_report.models import AnalyzedEntity, SuiteResults
from cuke_report.reports.output import format_file_name, write_report
from cuke_report.reports.xml_report import serialize

logger = logging.getLogger(__name__)

FULL_FILE = "full_file"

_LINE_SUFFIX_RE = re.compile(r":(\d+)$")


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

@dataclass
class JUnitCase:
    name: str
    location: str
    rule: str | None = None
    instances: int = 0

    @property
    def failed(self) -> bool:
        return self.rule is not None

    @property
    def formatted(self) -> str:
        return f"Location: {self.location}"

    @property
    def message(self) -> str:
        return f"{self.rule} Instances: {self.instances}"


@dataclass
class JUnitSuite:
    name: str
    cases: list[JUnitCase] = field(default_factory=list)

    @property
    def failures(self) -> int:
        return sum(1 for case in self.cases if case.failed)


def strip_working_dir(location: str, working_dir: str | None) -> str:
    if not working_dir:
        return location
    prefix = working_dir.rstrip("/") + "/"
    if location.startswith(prefix):
        return location[len(prefix):]
    return location


def split_location(location: str) -> tuple[str, str]:
    """Return ``(location_no_line, label)`` for a location string.

    ``"a.feature:12"`` -> ``("a.feature", "line: 12")``;
    ``"a.feature"``    -> ``("a.feature", "full_file")``.
    """
    match = _LINE_SUFFIX_RE.search(location)
    if match is None:
        return location, FULL_FILE
    return location[:match.start()], f"line: {match.group(1)}"


def collect_failures(
    entities: Iterable[AnalyzedEntity],
    working_dir: str | None = None,
) -> tuple[dict[str, JUnitSuite], int]:
    """Group every entity's violations by file.

    Returns the suites keyed by location without line number, in first-seen
    order, and the global failure count (one per entity/rule pair).
    """
    suites: dict[str, JUnitSuite] = {}
    failures = 0

    for entity in entities:
        location = strip_working_dir(entity.location, working_dir)
        location_no_line, label = split_location(location)
        suite = suites.setdefault(location_no_line, JUnitSuite(location_no_line))

        if not entity.rules_hash:
            name = location if label == FULL_FILE else label
            if not any(c.location == location and not c.failed for c in suite.cases):
                suite.cases.append(JUnitCase(name=name, location=location))
            continue

        for rule, count in entity.rules_hash.items():
            suite.cases.append(JUnitCase(
                name=label, location=location, rule=rule, instances=count,
            ))
        failures += len(entity.rules_hash)

    return suites, failures


# ---------------------------------------------------------------------------
# Tree construction
# ---------------------------------------------------------------------------

def build_junit_tree(
    entities: Iterable[AnalyzedEntity],
    working_dir: str | None = None,
) -> ET.Element:
    suites, failures = collect_failures(entities, working_dir)

    root = ET.Element("testsuites", tests=str(len(suites)), failures=str(failures))
    for location, suite in suites.items():
        suite_el = ET.SubElement(
            root, "testsuite",
            name=location, tests="1", failures=str(suite.failures),
        )
        for case in suite.cases:
            case_el = ET.SubElement(
                suite_el, "testcase",
                classname=location,
                name=case.name,
                time="0",
                status=str(case.instances),
            )
            if case.failed:
                failure_el = ET.SubElement(
                    case_el, "failure", type="failure", message=case.message,
                )
                failure_el.text = case.formatted
    return root


def junit_xml(entities: Iterable[AnalyzedEntity], working_dir: str | None = None) -> str:
    return serialize(build_junit_tree(entities, working_dir))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def output_junit_xml(
    results: SuiteResults,
    file_name: str = DEFAULT_OUTPUT_FILE_NAME,
    working_dir: str | None = None,
) -> str:
    """Write the JUnit report for every entity in *results* and return the XML.

    ``file_name`` gets a ``.xml`` extension when it has none. Locations
    starting with ``working_dir`` are reported relative to it.
    """
    entities = results.all_entities()
    output = junit_xml(entities, working_dir)
    path = format_file_name(file_name, ".xml")
    logger.debug("Writing JUnit report for %d entities to %s", len(entities), path)
    write_report(path, output)
    return output
