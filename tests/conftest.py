import os
import sys

import pytest


# Ensure the repository root is on sys.path for `from src...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


class CallCounter:
    """Wraps a function and records every argument it was called with."""

    def __init__(self, fn):
        self.fn = fn
        self.calls = []

    def __call__(self, arg):
        self.calls.append(arg)
        return self.fn(arg)


@pytest.fixture
def counter():
    return CallCounter
