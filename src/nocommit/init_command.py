"""nocommit init command: write a default config and install the git hook."""

from __future__ import annotations

import stat
import subprocess
import sys
from pathlib import Path

from nocommit.config import CONFIG_FILENAME

HOOK_MARKER = "installed by `nocommit init`"

# ---------------------------------------------------------------------------
# Template builders
# ---------------------------------------------------------------------------


def _build_nocommit_yml() -> str:
    return """\
# .nocommit.yml: forbidden patterns for the nocommit pre-commit hook
#
# A commit is blocked when a line it adds matches any pattern below.
# The message shows the first capture group of the pattern if it has one,
# otherwise the whole match. Patterns use Python `re` syntax; ^ and $ match
# at the start and end of each added line.
patterns:
  - pattern: '\\bnocommit\\b'
    ignore_case: true
    description: nocommit marker
  # - '(console\\.log)\\('
  # - pattern: '\\b(binding\\.pry)\\b'
  #   description: leftover debugger

# Optional text file with one regex per line ('#' starts a comment),
# relative to this file.
# patterns_file: .nocommit-patterns

# Report every offending file instead of stopping at the first one.
report_all: false

exclusions:
  paths: []
  # - "vendor/**"
"""


def _build_hook_script(python: str) -> str:
    return f"""\
#!/usr/bin/env python3
# Git pre-commit hook {HOOK_MARKER}.
# To commit anyway, use --no-verify.
import subprocess
import sys

sys.exit(subprocess.run([{python!r}, "-m", "nocommit", "check"]).returncode)
"""


def _build_precommit_config() -> str:
    return """\
# .pre-commit-config.yaml: nocommit hook
# Install: pip install pre-commit && pre-commit install
repos:
  - repo: local
    hooks:
      - id: nocommit
        name: Block forbidden patterns in staged changes
        entry: python -m nocommit check
        language: system
        pass_filenames: false
        always_run: true
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _prompt_yn(question: str, default: bool = False) -> bool:
    """Yes/no prompt."""
    default_str = "Y/n" if default else "y/N"
    answer = input(f"  {question} [{default_str}]: ").strip().lower()
    if not answer:
        return default
    return answer.startswith("y")


def _write_file(path: Path, content: str, force: bool = False) -> bool:
    """Write file, prompting if it already exists. Returns True if written."""
    if path.exists() and not force and not _prompt_yn(f"{path} already exists. Overwrite?"):
        print(f"  Skipped: {path}")
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    print(f"  Creating {path} ... done")
    return True


def _hooks_dir(root: Path) -> Path | None:
    """Locate the hooks directory, honoring core.hooksPath and worktrees."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--git-path", "hooks"],
            capture_output=True,
            text=True,
            check=True,
            cwd=root,
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
    hooks = Path(result.stdout.strip())
    if not hooks.is_absolute():
        hooks = root / hooks
    return hooks


def install_hook(root: Path, force: bool = False, python: str | None = None) -> Path | None:
    """Install the pre-commit hook for the repository at ``root``.

    Returns:
        The hook path, or None if ``root`` is not inside a git repository or
        the user declined to overwrite an existing hook.
    """
    hooks = _hooks_dir(root)
    if hooks is None:
        return None

    hook_path = hooks / "pre-commit"
    # Our own hook is always refreshed without asking
    if hook_path.exists() and HOOK_MARKER in hook_path.read_text(encoding="utf-8", errors="replace"):
        force = True

    if not _write_file(hook_path, _build_hook_script(python or sys.executable), force=force):
        return None
    mode = hook_path.stat().st_mode
    hook_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return hook_path


# ---------------------------------------------------------------------------
# Main command
# ---------------------------------------------------------------------------


def init_command(args: object) -> int:
    """Execute the init command.

    Args:
        args: Parsed CLI arguments with optional ``path``, ``force`` and
              ``pre_commit_config`` attributes.

    Returns:
        0 on success, 1 if the target is not a git repository.
    """
    root = Path(getattr(args, "path", None) or ".").resolve()
    force = getattr(args, "force", False)
    use_framework = getattr(args, "pre_commit_config", False)

    if not use_framework and _hooks_dir(root) is None:
        print(f"Error: {root} is not inside a git repository", file=sys.stderr)
        return 1

    print()
    print("nocommit init")
    print("-" * 50)

    _write_file(root / CONFIG_FILENAME, _build_nocommit_yml(), force=force)

    if use_framework:
        _write_file(root / ".pre-commit-config.yaml", _build_precommit_config(), force=force)
    else:
        install_hook(root, force=force)

    print("-" * 50)
    print("Done! Edit .nocommit.yml to change the forbidden patterns.")
    print()
    return 0
