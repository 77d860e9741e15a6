import pytest

from moderation_fakes import World


@pytest.fixture
def world() -> World:
    return World()
