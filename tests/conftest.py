"""Shared fixtures for the selection engine tests."""

import pytest

from updir.core.selection import SelectionModel

HOME_SEGMENTS = ("/", "home/", "user/", "project")


@pytest.fixture
def segments() -> tuple[str, ...]:
    """Segments of /home/user/project."""
    return HOME_SEGMENTS


@pytest.fixture
def model(segments: tuple[str, ...]) -> SelectionModel:
    """Selection over /home/user/project, last segment selected."""
    return SelectionModel(segments)


@pytest.fixture
def deep_model() -> SelectionModel:
    """Selection over a 20-segment path, last segment selected."""
    return SelectionModel(["/"] + [f"d{i}/" for i in range(18)] + ["leaf"])
