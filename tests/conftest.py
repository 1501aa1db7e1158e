import sys

import pytest

from timeshell.session import SessionState


@pytest.fixture
def state(tmp_path):
    return SessionState.create(tmp_path)


@pytest.fixture
def py():
    """Argv prefix that runs an inline Python snippet in a child process"""
    return [sys.executable, "-c"]
