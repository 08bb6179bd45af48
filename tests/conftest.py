"""
Pytest configuration and fixtures for test isolation.
"""
import json

import pytest

from mediaflow.config.environment import EnvironmentVariables
from mediaflow.parser import PipelineParser
from mediaflow.steps import STEP_REGISTRY
from mediaflow.utils.files import MediaPredicates
from mediaflow.validation.rules import RuleContext
from mediaflow.validation.tracker import ReferenceTracker


@pytest.fixture(autouse=True)
def isolate_tests(tmp_path, monkeypatch):
    """
    Automatically isolate each test by:
    1. Running from an empty working directory
    2. Pointing the home directory at it (no user config)
    3. Clearing mediaflow environment variables
    """
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    for name in EnvironmentVariables.get_all_variables():
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def parser():
    return PipelineParser()


@pytest.fixture
def tracker():
    return ReferenceTracker()


@pytest.fixture
def make_context(tracker):
    """Build a RuleContext over the given sibling values."""
    def _make(siblings=None, key=None, step_id=None):
        return RuleContext(
            siblings=siblings or {},
            tracker=tracker,
            predicates=MediaPredicates(),
            registry=STEP_REGISTRY,
            key=key,
            step_id=step_id,
        )
    return _make


@pytest.fixture
def document():
    """Serialize a list of raw steps into a JSON pipeline document."""
    def _document(*steps):
        return json.dumps({"steps": list(steps)})
    return _document
