"""Shared test fixtures for nocommit tests."""

import pytest

from nocommit.config import NoCommitConfig, compile_patterns
from nocommit.matcher import RuleMatcher


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    """Run every test in an empty directory so no stray .nocommit.yml is picked up."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def default_patterns():
    """The built-in forbidden patterns."""
    return compile_patterns(NoCommitConfig.load().pattern_specs())


@pytest.fixture
def matcher(default_patterns):
    return RuleMatcher(default_patterns)
