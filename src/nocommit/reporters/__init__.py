"""Check result reporters for nocommit."""

from nocommit.reporters.json_reporter import JSONReporter
from nocommit.reporters.text_reporter import TextReporter

__all__ = ["JSONReporter", "TextReporter"]
