"""Retrieve the staged diff from git."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

# Pin the output format regardless of the user's git config
STAGED_DIFF_CMD = [
    "git",
    "diff",
    "--cached",
    "--no-color",
    "--no-ext-diff",
    "--src-prefix=a/",
    "--dst-prefix=b/",
    "--",
]


class DiffSourceError(Exception):
    """Raised when the staged diff cannot be obtained."""


def _decode(data: bytes) -> str:
    # Decoded by hand: text mode would turn a lone CR inside a line into a newline
    return data.decode("utf-8", errors="replace")


def get_staged_diff(cwd: str | Path | None = None) -> str:
    """Get the diff of the staged change set from git.

    Args:
        cwd: Directory to run git in; defaults to the current directory.

    Returns:
        The unified diff text, verbatim.

    Raises:
        DiffSourceError: If git is not available or exits non-zero.
    """
    try:
        result = subprocess.run(STAGED_DIFF_CMD, capture_output=True, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        detail = _decode(e.stderr or b"").strip() or f"git exited with status {e.returncode}"
        raise DiffSourceError(detail) from e
    except FileNotFoundError as e:
        raise DiffSourceError("git is not installed or not in PATH") from e
    return _decode(result.stdout)


def read_diff_file(path: str) -> str:
    """Read a saved diff from ``path``, or from stdin when ``path`` is ``-``."""
    if path == "-":
        return _decode(sys.stdin.buffer.read())
    try:
        return _decode(Path(path).read_bytes())
    except OSError as e:
        raise DiffSourceError(f"cannot read diff file {path}: {e.strerror}") from e
