"""Report renderers: console, HTML, generic XML and JUnit."""
