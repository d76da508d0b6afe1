"""Apply forbidden patterns to the added lines of staged files."""

from __future__ import annotations

import re
from fnmatch import fnmatch

from nocommit.models import Action, CheckResult, DiffSegment, ForbiddenPattern, Violation


def _matched_text(match: re.Match) -> str:
    """The first capture group if the pattern has one and it took part, else the whole match."""
    if match.re.groups and match.group(1) is not None:
        return match.group(1)
    return match.group(0)


class RuleMatcher:
    """Checks diff segments against a fixed list of forbidden patterns.

    Patterns are tried in list order and the first one that matches a
    segment's added text is that segment's violation. By default checking
    stops at the first offending segment; with ``report_all`` every segment
    is checked and each contributes at most one violation.
    """

    def __init__(
        self,
        patterns: list[ForbiddenPattern],
        report_all: bool = False,
        excluded_paths: list[str] | None = None,
    ) -> None:
        self.patterns = list(patterns)
        self.report_all = report_all
        self.excluded_paths = list(excluded_paths or [])

    def is_path_excluded(self, file_path: str) -> bool:
        """Check if a file path is excluded by glob patterns."""
        return any(fnmatch(file_path, pattern) for pattern in self.excluded_paths)

    def check(self, segments: list[DiffSegment]) -> CheckResult:
        """Check segments in order and produce an ALLOW/BLOCK result."""
        violations: list[Violation] = []
        scanned = 0

        for segment in segments:
            if self.is_path_excluded(segment.path):
                continue
            scanned += 1

            violation = self.check_segment(segment)
            if violation is None:
                continue
            violations.append(violation)
            if not self.report_all:
                break

        action = Action.BLOCK if violations else Action.ALLOW
        return CheckResult(action=action, violations=violations, files_scanned=scanned)

    def check_segment(self, segment: DiffSegment) -> Violation | None:
        """Return the first pattern violation in a segment's added lines, if any."""
        if not segment.added_lines:
            return None

        text = segment.added_text
        for pattern in self.patterns:
            match = pattern.regex.search(text)
            if match is None:
                continue
            return Violation(
                path=segment.path,
                text=_matched_text(match),
                pattern=pattern.source,
                line=self._line_number(segment, text, match.start()),
                description=pattern.description,
            )
        return None

    @staticmethod
    def _line_number(segment: DiffSegment, text: str, offset: int) -> int:
        index = text.count("\n", 0, offset)
        return segment.added_lines[index][0]
