"""Shared fixtures: the classic ten-valve example network."""

import os

import pytest

SAMPLE_PATH = os.path.join(
    os.path.dirname(__file__), "..", "samples", "example_valves.txt"
)


def _load_sample_lines() -> list[str]:
    with open(SAMPLE_PATH) as f:
        return f.read().splitlines()


@pytest.fixture
def sample_path() -> str:
    return SAMPLE_PATH


@pytest.fixture
def sample_lines() -> list[str]:
    return _load_sample_lines()
