"""CLI entry point — command definitions using Click.

Commands:
    init      Generate a template config file
    console   Print the suite summary and improvement list
    html      Write the standard (or --min) HTML report
    xml       Write the generic XML report
    junit     Write the JUnit XML report, violations collated by file
"""

import functools
import logging
import os
import sys

import click

from cuke_report import __version__


# ---------------------------------------------------------------------------
# Helpers shared by all report commands
# ---------------------------------------------------------------------------

def _load_inputs(ctx: click.Context):
    """Load config and results. Exits on error."""
    from cuke_report.config import Config, ConfigError, load
    from cuke_report.models import ResultsError, load_results

    obj = ctx.obj
    try:
        config = load(obj["config_path"]) if obj["config_path"] else Config.from_env()
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    if config.working_dir is None:
        config.working_dir = os.getcwd()

    if obj["verbose"]:
        click.echo(f"[verbose] Loading results from '{obj['results_path']}'", err=True)

    try:
        results = load_results(obj["results_path"])
    except ResultsError as exc:
        click.echo(f"Results error: {exc}", err=True)
        sys.exit(1)

    return config, results


def _handle_report_errors(func):
    """Decorator that catches report-writing exceptions and exits cleanly."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from cuke_report.reports.html import ReportError

        try:
            return func(*args, **kwargs)
        except ReportError as exc:
            click.echo(f"Template error: {exc}", err=True)
            sys.exit(1)
        except OSError as exc:
            click.echo(f"Write error: {exc}", err=True)
            sys.exit(1)

    return wrapper


def _report_written(path: str) -> None:
    click.echo(f"Report written to '{path}'", err=True)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default=None,
              help="Path to the configuration file (defaults + environment when omitted).")
@click.option("--results", "results_path", default="cuke_sniffer_results.json", show_default=True,
              help="JSON results document produced by the rule engine.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="cuke-report")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, results_path: str, verbose: bool) -> None:
    """Cucumber suite quality reports — console, HTML, XML and JUnit."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["results_path"] = results_path
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="[%(levelname)s] %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="cuke-report.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template cuke-report.yaml file."""
    from cuke_report.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# console
# ---------------------------------------------------------------------------

@cli.command("console")
@click.pass_context
def console_command(ctx: click.Context) -> None:
    """Print the suite summary and the improvements to make."""
    from cuke_report.reports.console import format_console

    _, results = _load_inputs(ctx)
    click.echo(format_console(results), nl=False)


# ---------------------------------------------------------------------------
# html
# ---------------------------------------------------------------------------

@cli.command("html")
@click.option("--output", "file_name", default=None,
              help="Output file name; '.html' is appended when missing.")
@click.option("--min", "minimal", is_flag=True, default=False,
              help="Only summary, rules and improvement list.")
@click.pass_context
@_handle_report_errors
def html_command(ctx: click.Context, file_name: str | None, minimal: bool) -> None:
    """Write the HTML report."""
    from cuke_report.reports.html import MIN_TEMPLATE, STANDARD_TEMPLATE, output_html

    config, results = _load_inputs(ctx)
    template_name = MIN_TEMPLATE if minimal else STANDARD_TEMPLATE

    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Rendering template '{template_name}'", err=True)

    path = output_html(
        results,
        file_name or config.output_file_name,
        template_name,
        config.markup_source,
    )
    _report_written(path)


# ---------------------------------------------------------------------------
# xml
# ---------------------------------------------------------------------------

@cli.command("xml")
@click.option("--output", "file_name", default=None,
              help="Output file name; '.xml' is appended when missing.")
@click.pass_context
@_handle_report_errors
def xml_command(ctx: click.Context, file_name: str | None) -> None:
    """Write the generic XML report."""
    from cuke_report.reports.xml_report import output_xml

    config, results = _load_inputs(ctx)
    path = output_xml(results, file_name or config.output_file_name)
    _report_written(path)


# ---------------------------------------------------------------------------
# junit
# ---------------------------------------------------------------------------

@cli.command("junit")
@click.option("--output", "file_name", default=None,
              help="Output file name; '.xml' is appended when missing.")
@click.pass_context
@_handle_report_errors
def junit_command(ctx: click.Context, file_name: str | None) -> None:
    """Write the JUnit XML report, one testsuite per file."""
    from cuke_report.reports.junit import output_junit_xml
    from cuke_report.reports.output import format_file_name

    config, results = _load_inputs(ctx)
    file_name = file_name or config.output_file_name

    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Stripping working directory '{config.working_dir}'", err=True)

    output_junit_xml(results, file_name, config.working_dir)
    _report_written(format_file_name(file_name, ".xml"))
