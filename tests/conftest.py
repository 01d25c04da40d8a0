"""Shared test fixtures."""

import pytest

from infected.domain.character import create_character
from infected.models.state import Attributes, GameSession, Skills
from infected.modules.dice.source import ScriptedSource


@pytest.fixture
def scripted():
    """Factory for draw sources that replay the given faces in order."""

    def _make(*draws: int) -> ScriptedSource:
        return ScriptedSource(draws)

    return _make


@pytest.fixture
def attributes() -> Attributes:
    return Attributes(grit=3, reflex=3, wits=3, nerve=3)


@pytest.fixture
def skills() -> Skills:
    # Sums to 12 with no skill above 3
    return Skills(brawl=2, endure=2, shoot=3, notice=2, resolve=2, stealth=1)


@pytest.fixture
def character(attributes, skills):
    return create_character("Sam", "survivor", attributes, skills, motivation="Find my sister")


@pytest.fixture
def session(character) -> GameSession:
    return GameSession(title="Day One", character=character)
