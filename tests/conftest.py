"""Setups common fixtures for tests."""

import logging
from typing import Any, Generator

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from src.logs import reset_handlers
from src.registry import AliasRegistry

REGISTRY_ROOT = "/home/user/.ss"


@pytest.fixture(autouse=True)
def reset_logger(request: pytest.FixtureRequest) -> Generator[None, Any, None]:
    """Use the fake filesystem unless marked otherwise, and close log handlers opened on it.

    Requesting ``fs`` from here means it is torn down after the handlers are closed.
    """
    if request.node.get_closest_marker("real_filesystem") is None:
        request.getfixturevalue("fs")
    yield
    reset_handlers(logging.getLogger("ss"))


@pytest.fixture(name="registry")
def fixture_registry(fs: FakeFilesystem) -> AliasRegistry:
    """Return an initialised registry on the fake filesystem."""
    registry = AliasRegistry(REGISTRY_ROOT)
    registry.init()
    return registry
