"""Generic XML export of the whole results aggregate."""

import logging
import xml.etree.ElementTree as ET

from cuke_report import DEFAULT_OUTPUT_FILE_NAME
from cuke_report.models import SuiteResults
from cuke_report.reports.output import format_file_name, write_report

logger = logging.getLogger(__name__)


def serialize(root: ET.Element) -> str:
    """Return *root* as an indented XML document with a declaration."""
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode", xml_declaration=True) + "\n"


def output_xml(results: SuiteResults, file_name: str = DEFAULT_OUTPUT_FILE_NAME) -> str:
    """Write ``results.to_xml()`` to *file_name* (``.xml`` enforced) and return the path."""
    path = format_file_name(file_name, ".xml")
    logger.debug("Writing XML report to %s", path)
    return write_report(path, serialize(results.to_xml()))
