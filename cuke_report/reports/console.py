"""Plain-text suite summary printed by the ``console`` command."""

from cuke_report.models import COLLECTIONS, SuiteResults
from cuke_report.reports.summary import build_summary


def format_console(results: SuiteResults) -> str:
    """Return the summary and improvement list as a fixed-layout text block."""
    return format_summary(build_summary(results))


def format_summary(summary: dict) -> str:
    output = "Suite Summary\n"
    output += f"  Total Score: {summary['total_score']}\n"
    for name in COLLECTIONS:
        output += _format_section(_section_label(name), summary[name])
    output += _format_improvement_list(summary["improvement_list"])
    return output


def _section_label(name: str) -> str:
    # "step_definitions" -> "Step definitions"
    return name.replace("_", " ").capitalize()


def _format_section(label: str, section: dict) -> str:
    return (
        f"  {label}\n"
        f"    Min: {section['min']}\n"
        f"    Max: {section['max']}\n"
        f"    Average: {section['average']}\n"
    )


def _format_improvement_list(improvement_list: dict[str, int]) -> str:
    output = "  Improvements to make:\n"
    for improvement, count in improvement_list.items():
        output += f"    ({count}) {improvement}\n"
    return output
