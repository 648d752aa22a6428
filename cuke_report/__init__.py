"""cuke-report: render analyzed Cucumber suite results as console, HTML, XML and JUnit reports."""

__version__ = "0.1.0"

DEFAULT_OUTPUT_FILE_NAME = "cuke_sniffer_results"
