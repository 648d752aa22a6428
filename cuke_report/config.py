"""Configuration loading and validation.

Usage:
    config = load("cuke-report.yaml")        # raises ConfigError on bad config
    config = Config.from_env()               # defaults + environment overrides
    generate_template("cuke-report.yaml")    # writes example file to disk
"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from cuke_report import DEFAULT_OUTPUT_FILE_NAME

ENV_WORKING_DIR = "CUKE_REPORT_WORKING_DIR"
ENV_MARKUP_SOURCE = "CUKE_REPORT_MARKUP_SOURCE"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass
class Config:
    output_file_name: str = DEFAULT_OUTPUT_FILE_NAME
    working_dir: str | None = None
    markup_source: str | None = None

    @classmethod
    def from_env(cls) -> "Config":
        """Return a default config with environment overrides applied."""
        config = cls(
            working_dir=os.environ.get(ENV_WORKING_DIR) or None,
            markup_source=os.environ.get(ENV_MARKUP_SOURCE) or None,
        )
        _validate(config)
        return config


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str = "cuke-report.yaml") -> Config:
    """Load and validate configuration from a YAML file.

    Environment variables CUKE_REPORT_WORKING_DIR and CUKE_REPORT_MARKUP_SOURCE
    override file values.

    Raises:
        ConfigError: if the file is missing, malformed, or a field is invalid.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `cuke-report init` to generate a template."
        )

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")

    output = raw.get("output") or {}
    if not isinstance(output, dict):
        raise ConfigError(f"'output' in '{config_path}' must be a mapping.")

    file_name = output.get("file_name", DEFAULT_OUTPUT_FILE_NAME)
    working_dir = os.environ.get(ENV_WORKING_DIR) or raw.get("working_dir")
    markup_source = os.environ.get(ENV_MARKUP_SOURCE) or raw.get("markup_source")

    config = Config(
        output_file_name=str(file_name or "").strip(),
        working_dir=str(working_dir).rstrip("/") if working_dir else None,
        markup_source=str(markup_source) if markup_source else None,
    )
    _validate(config)
    return config


def _validate(config: Config) -> None:
    """Raise ConfigError if a field holds an unusable value."""
    errors: list[str] = []

    if not config.output_file_name:
        errors.append("  - 'output.file_name' must not be empty")
    if config.markup_source and not Path(config.markup_source).is_dir():
        errors.append(
            f"  - 'markup_source' is not a directory: '{config.markup_source}'"
        )

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = f"""\
output:
  # Extension (.html / .xml) is appended per report when missing
  file_name: "{DEFAULT_OUTPUT_FILE_NAME}"

# Prefix stripped from entity locations in JUnit reports (defaults to the cwd)
working_dir: null

# Directory holding custom *.html.j2 templates (defaults to the bundled ones)
markup_source: null
"""


def generate_template(output_path: str = "cuke-report.yaml") -> None:
    """Write a template cuke-report.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists.
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
