"""Plain-text reporter printed by the git hook."""

from __future__ import annotations

from nocommit.models import CheckResult, Violation

BYPASS_HINT = "To commit anyway, use --no-verify"


class TextReporter:
    """Render a CheckResult as the human-readable hook message."""

    def render(self, result: CheckResult) -> str:
        """One line per violation followed by the bypass hint; empty when allowed."""
        if not result.blocked:
            return ""
        lines = [self.format_violation(v) for v in result.violations]
        lines.append(BYPASS_HINT)
        return "\n".join(lines)

    @staticmethod
    def format_violation(violation: Violation) -> str:
        message = f'Git hook forbids adding "{violation.text}" to {violation.path}'
        if violation.line is not None:
            message += f" (line {violation.line})"
        return message
