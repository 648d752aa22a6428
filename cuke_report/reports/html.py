"""HTML report rendering.

Functions:
    render_template(template_name, context, markup_source=None)  -> str
    build_context(results)                                        -> dict
    output_html(results, file_name, template_name, markup_source) -> str
    output_min_html(results, file_name, markup_source)            -> str

Templates are ``<template_name>.html.j2`` files rendered with Jinja2 against
an explicit context of ``results``, ``summary`` and ``rules``. The bundled
templates live in ``cuke_report/templates``; ``markup_source`` points at a
directory of replacements.
"""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from cuke_report import DEFAULT_OUTPUT_FILE_NAME
from cuke_report.models import SuiteResults
from cuke_report.reports.output import format_file_name, write_report
from cuke_report.reports.summary import build_summary, sort_results

logger = logging.getLogger(__name__)

MARKUP_SOURCE = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_SUFFIX = ".html.j2"

STANDARD_TEMPLATE = "standard_template"
MIN_TEMPLATE = "min_template"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ReportError(Exception):
    """Raised when a report template cannot be found or rendered."""


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _environment(markup_source: str | Path | None) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(markup_source or MARKUP_SOURCE)),
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(
    template_name: str,
    context: dict,
    markup_source: str | Path | None = None,
) -> str:
    """Render ``<template_name>.html.j2`` against *context* and return the text.

    Raises:
        ReportError: if the template does not exist in *markup_source*.
    """
    env = _environment(markup_source)
    file_name = template_name + TEMPLATE_SUFFIX
    try:
        template = env.get_template(file_name)
    except TemplateNotFound as exc:
        raise ReportError(
            f"Template '{file_name}' not found in '{markup_source or MARKUP_SOURCE}'"
        ) from exc
    return template.render(**context)


def build_context(results: SuiteResults) -> dict:
    """Sort *results* in place and return the data context the templates see."""
    sort_results(results)
    return {
        "results": results,
        "summary": build_summary(results),
        "rules":   results.rules,
    }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def output_html(
    results: SuiteResults,
    file_name: str = DEFAULT_OUTPUT_FILE_NAME,
    template_name: str = STANDARD_TEMPLATE,
    markup_source: str | Path | None = None,
) -> str:
    """Write an HTML report and return the path it was written to.

    ``file_name`` gets a ``.html`` extension when it has none.
    """
    output = render_template(template_name, build_context(results), markup_source)
    path = format_file_name(file_name, ".html")
    logger.debug("Rendering %s into %s", template_name, path)
    return write_report(path, output)


def output_min_html(
    results: SuiteResults,
    file_name: str = DEFAULT_OUTPUT_FILE_NAME,
    markup_source: str | Path | None = None,
) -> str:
    """Write the minimal HTML report: summary, rules and improvement list."""
    return output_html(results, file_name, MIN_TEMPLATE, markup_source)
