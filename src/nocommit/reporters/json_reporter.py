"""JSON check result reporter for nocommit."""

from __future__ import annotations

import json

from nocommit.models import CheckResult


class JSONReporter:
    """Serialize a CheckResult to JSON format."""

    def render(self, result: CheckResult) -> str:
        """Render the result as a JSON string.

        Args:
            result: The check result to serialize.

        Returns:
            A formatted JSON string with the action, file count and violations.
        """
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
