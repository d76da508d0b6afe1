"""Git diff parser for nocommit."""

from __future__ import annotations

import re

from nocommit.models import DiffSegment

# Regex patterns for parsing unified diff format
_DIFF_HEADER = re.compile(r'^diff --git (?:a/.*|"a/(?:[^"\\]|\\.)*") ("b/(?:[^"\\]|\\.)*"|b/.*)$')
_NEW_FILE = re.compile(r"^new file mode")
_DELETED_FILE = re.compile(r"^deleted file mode")
_RENAME_FROM = re.compile(r"^rename from (.*)")
_RENAME_TO = re.compile(r"^rename to (.*)")
_BINARY = re.compile(r"^Binary files .* differ$")
_OLD_HEADER = re.compile(r"^--- (.*)")
_NEW_HEADER = re.compile(r"^\+\+\+ (.*)")
_HUNK_HEADER = re.compile(r"^@@ -\d+(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

_DEV_NULL = "/dev/null"


def _unquote(path: str) -> str:
    """Undo git's C-style quoting of unusual file names."""
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        raw = path[1:-1].encode("utf-8").decode("unicode_escape")
        return raw.encode("latin-1").decode("utf-8", errors="replace")
    return path


def _header_path(value: str) -> str | None:
    """Extract the file path from a ``---``/``+++`` header value."""
    # `diff -u` appends a tab and a timestamp
    value = value.split("\t", 1)[0].rstrip()
    value = _unquote(value)
    if value == _DEV_NULL:
        return None
    if value.startswith(("a/", "b/")):
        return value[2:]
    return value


def parse_diff(diff_text: str) -> list[DiffSegment]:
    """Parse unified diff text into a list of DiffSegment objects.

    Every added line in the diff ends up in exactly one segment, in the
    order it appears. Hunk bodies are consumed using the line counts from
    the hunk header, so added lines that happen to start with ``++`` or
    ``--`` are not mistaken for file headers.

    Args:
        diff_text: Raw output from `git diff --cached` (unified diff format).

    Returns:
        One DiffSegment per file in the diff. An empty diff gives an empty list.
    """
    segments: list[DiffSegment] = []
    current: DiffSegment | None = None
    in_hunks = False
    old_left = 0
    new_left = 0
    line_no = 0

    for raw_line in diff_text.split("\n"):
        raw_line = raw_line.removesuffix("\r")
        # Hunk body
        if current is not None and (old_left > 0 or new_left > 0):
            marker = raw_line[:1]
            if marker == "+":
                current.added_lines.append((line_no, raw_line[1:]))
                new_left -= 1
                line_no += 1
                continue
            if marker == "-":
                old_left -= 1
                continue
            if marker == "\\":
                continue
            if marker in (" ", ""):
                old_left -= 1
                new_left -= 1
                line_no += 1
                continue
            # Truncated hunk; fall through and treat as a header line
            old_left = new_left = 0

        header_match = _DIFF_HEADER.match(raw_line)
        if header_match:
            current = DiffSegment(path=_header_path(header_match.group(1)) or "")
            segments.append(current)
            in_hunks = False
            continue

        # Plain unified diff without a `diff --git` line
        old_header = _OLD_HEADER.match(raw_line)
        if old_header and (current is None or in_hunks):
            old_path = _header_path(old_header.group(1))
            current = DiffSegment(path=old_path or "", old_path=old_path, is_new=old_path is None)
            segments.append(current)
            in_hunks = False
            continue

        if current is None:
            continue

        if old_header:
            continue

        new_header = _NEW_HEADER.match(raw_line)
        if new_header:
            new_path = _header_path(new_header.group(1))
            if new_path is not None:
                current.path = new_path
            elif current.old_path is not None:
                current.is_deleted = True
            continue

        if _NEW_FILE.match(raw_line):
            current.is_new = True
            continue

        if _DELETED_FILE.match(raw_line):
            current.is_deleted = True
            continue

        rename_from = _RENAME_FROM.match(raw_line)
        if rename_from:
            current.is_renamed = True
            current.old_path = _unquote(rename_from.group(1))
            continue

        rename_to = _RENAME_TO.match(raw_line)
        if rename_to:
            current.path = _unquote(rename_to.group(1))
            continue

        if _BINARY.match(raw_line):
            current.is_binary = True
            continue

        hunk_match = _HUNK_HEADER.match(raw_line)
        if hunk_match:
            old_left = int(hunk_match.group(1)) if hunk_match.group(1) is not None else 1
            line_no = int(hunk_match.group(2))
            new_left = int(hunk_match.group(3)) if hunk_match.group(3) is not None else 1
            in_hunks = True
            continue

        # Anything else (index line, mode change, similarity) is skipped

    return segments
