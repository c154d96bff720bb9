"""
Shared fixtures.
"""

import os

import pytest

from nexaform.core.config import reset_config
from nexaform.core.request import Request
from nexaform.forms.binding import ValueBinder
from nexaform.forms.registry import FieldRegistry
from nexaform.utils.logger import Logger, LogLevel, MemoryHandler


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Each test sees package defaults, not the developer's environment."""
    for key in list(os.environ):
        if key.startswith("NEXAFORM_"):
            monkeypatch.delenv(key)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_request():
    """Build a request from nested payloads."""
    def factory(post=None, query=None, method=None, headers=None, path="/form"):
        return Request.from_data(query=query, post=post, method=method, headers=headers, path=path)
    return factory


@pytest.fixture
def registry():
    """Field registry with nothing submitted."""
    return FieldRegistry(ValueBinder("POST", None, lambda: {}))


@pytest.fixture
def memory_handler():
    return MemoryHandler()


@pytest.fixture
def memory_logger(memory_handler):
    return Logger(name="tests", level=LogLevel.DEBUG, handlers=[memory_handler])
