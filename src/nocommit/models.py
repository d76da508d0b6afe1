"""Data models for nocommit."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class Action(str, Enum):
    """Verdict of a check run."""

    ALLOW = "ALLOW"
    BLOCK = "BLOCK"


@dataclass
class DiffSegment:
    """The staged changes to a single file."""

    path: str
    added_lines: list[tuple[int, str]] = field(default_factory=list)
    old_path: str | None = None
    is_new: bool = False
    is_deleted: bool = False
    is_renamed: bool = False
    is_binary: bool = False

    @property
    def added_text(self) -> str:
        """Get the added lines joined with newlines."""
        return "\n".join(line for _, line in self.added_lines)


@dataclass(frozen=True)
class ForbiddenPattern:
    """A compiled regular expression that must not appear in added lines."""

    regex: re.Pattern
    description: str = ""

    @classmethod
    def compile(
        cls, pattern: str, ignore_case: bool = False, description: str = ""
    ) -> ForbiddenPattern:
        flags = re.MULTILINE
        if ignore_case:
            flags |= re.IGNORECASE
        return cls(regex=re.compile(pattern, flags), description=description)

    @property
    def source(self) -> str:
        return self.regex.pattern


@dataclass
class Violation:
    """A forbidden pattern found in the added lines of a file."""

    path: str
    text: str
    pattern: str
    line: int | None = None
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "text": self.text,
            "pattern": self.pattern,
            "line": self.line,
            "description": self.description,
        }


@dataclass
class CheckResult:
    """The outcome of checking a staged change set."""

    action: Action
    violations: list[Violation] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def blocked(self) -> bool:
        return self.action == Action.BLOCK

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "files_scanned": self.files_scanned,
            "violations": [v.to_dict() for v in self.violations],
        }
