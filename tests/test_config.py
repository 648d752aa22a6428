"""Tests for cuke_report/config.py"""

import textwrap
from pathlib import Path

import pytest

from cuke_report import DEFAULT_OUTPUT_FILE_NAME
from cuke_report.config import (
    Config,
    ConfigError,
    generate_template,
    load,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def write_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "cuke-report.yaml"
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


VALID_YAML = """\
    output:
      file_name: "nightly"
    working_dir: "/home/ci/project/"
    """


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv("CUKE_REPORT_WORKING_DIR", raising=False)
    monkeypatch.delenv("CUKE_REPORT_MARKUP_SOURCE", raising=False)


# ---------------------------------------------------------------------------
# load() — happy path
# ---------------------------------------------------------------------------

def test_load_valid_config(tmp_path):
    config = load(str(write_config(tmp_path, VALID_YAML)))
    assert config.output_file_name == "nightly"
    assert config.working_dir == "/home/ci/project"
    assert config.markup_source is None


def test_load_empty_file_gives_defaults(tmp_path):
    config = load(str(write_config(tmp_path, "")))
    assert config == Config()
    assert config.output_file_name == DEFAULT_OUTPUT_FILE_NAME


def test_load_markup_source_directory(tmp_path):
    markup = tmp_path / "markup"
    markup.mkdir()
    config = load(str(write_config(tmp_path, f"markup_source: '{markup}'\n")))
    assert config.markup_source == str(markup)


# ---------------------------------------------------------------------------
# load() — errors
# ---------------------------------------------------------------------------

def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load(str(tmp_path / "no-such-file.yaml"))


def test_load_malformed_yaml(tmp_path):
    p = write_config(tmp_path, "output: [unclosed\n")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load(str(p))


def test_load_top_level_not_mapping(tmp_path):
    p = write_config(tmp_path, "- a\n- b\n")
    with pytest.raises(ConfigError, match="mapping"):
        load(str(p))


def test_load_empty_file_name(tmp_path):
    p = write_config(tmp_path, """\
        output:
          file_name: ""
        """)
    with pytest.raises(ConfigError, match="output.file_name"):
        load(str(p))


def test_load_output_section_not_mapping(tmp_path):
    p = write_config(tmp_path, "output: foo\n")
    with pytest.raises(ConfigError, match="must be a mapping"):
        load(str(p))


def test_load_markup_source_not_a_directory(tmp_path):
    p = write_config(tmp_path, "markup_source: '/no/such/dir'\n")
    with pytest.raises(ConfigError, match="markup_source"):
        load(str(p))


# ---------------------------------------------------------------------------
# Environment variable overrides
# ---------------------------------------------------------------------------

def test_env_working_dir_overrides_config(tmp_path, monkeypatch):
    monkeypatch.setenv("CUKE_REPORT_WORKING_DIR", "/override")
    config = load(str(write_config(tmp_path, VALID_YAML)))
    assert config.working_dir == "/override"


def test_from_env_defaults():
    config = Config.from_env()
    assert config.working_dir is None
    assert config.output_file_name == DEFAULT_OUTPUT_FILE_NAME


def test_from_env_reads_variables(tmp_path, monkeypatch):
    monkeypatch.setenv("CUKE_REPORT_WORKING_DIR", "/ci")
    monkeypatch.setenv("CUKE_REPORT_MARKUP_SOURCE", str(tmp_path))
    config = Config.from_env()
    assert config.working_dir == "/ci"
    assert config.markup_source == str(tmp_path)


# ---------------------------------------------------------------------------
# generate_template()
# ---------------------------------------------------------------------------

def test_generate_template_creates_loadable_file(tmp_path):
    out = tmp_path / "cuke-report.yaml"
    generate_template(str(out))
    assert out.exists()
    assert load(str(out)) == Config()


def test_generate_template_refuses_to_overwrite(tmp_path):
    out = tmp_path / "cuke-report.yaml"
    out.write_text("existing content")
    with pytest.raises(ConfigError, match="already exists"):
        generate_template(str(out))
