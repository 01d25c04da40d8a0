"""Tests for character creation rules and dice pools."""

import pytest

from infected.domain.character import (
    BACKGROUNDS,
    SKILL_ATTRIBUTES,
    CharacterCreationError,
    create_character,
    dice_pool,
    validate_attributes,
    validate_background,
    validate_skills,
)
from infected.models.state import Attributes, Skills, Wounds


class TestAttributes:
    def test_valid_spread(self):
        assert validate_attributes(Attributes(grit=4, reflex=3, wits=3, nerve=2)) == []

    def test_wrong_sum(self):
        errors = validate_attributes(Attributes(grit=4, reflex=4, wits=4, nerve=4))
        assert errors == ["Attributes must sum to 12, got 16"]

    def test_out_of_range_values(self):
        errors = validate_attributes(Attributes(grit=5, reflex=0, wits=4, nerve=3))
        assert len(errors) == 2
        assert any(e.startswith("grit") for e in errors)
        assert any(e.startswith("reflex") for e in errors)


class TestSkills:
    def test_valid_skills(self, skills):
        assert validate_skills(skills) == []

    def test_all_zeros_fail_budget(self):
        assert validate_skills(Skills()) == ["Skills must sum to 12, got 0"]

    def test_bonus_skill_may_reach_four(self):
        skills = Skills(endure=4, brawl=3, shoot=3, notice=2)
        assert validate_skills(skills, bonus_skill="endure") == []
        assert validate_skills(skills) == ["endure must be between 0-3, got 4"]

    def test_negative_skill(self):
        skills = Skills(brawl=-1, endure=3, shoot=3, notice=3, resolve=3, stealth=1)
        assert "brawl must be between 0-3, got -1" in validate_skills(skills)


class TestBackgrounds:
    def test_known_backgrounds(self):
        assert len(BACKGROUNDS) == 12
        assert validate_background("medic") is True
        assert validate_background("wizard") is False

    def test_every_bonus_is_a_real_skill(self):
        for background in BACKGROUNDS.values():
            assert background.bonus in SKILL_ATTRIBUTES
            assert background.gear

    def test_seventeen_skills_over_four_attributes(self):
        assert len(SKILL_ATTRIBUTES) == 17
        assert set(SKILL_ATTRIBUTES.values()) == {"grit", "reflex", "wits", "nerve"}


class TestCreateCharacter:
    def test_derived_stats(self, character):
        assert character.skills.endure == 3  # survivor bonus applied
        assert character.max_stress == 6
        assert character.carrying_capacity == 7
        assert character.wound_capacity.bruised == 5
        assert character.guts == 3
        assert character.stress == 0
        assert [i.name for i in character.inventory] == list(BACKGROUNDS["survivor"].gear)

    def test_bonus_capped_at_four(self, attributes):
        skills = Skills(shoot=4, brawl=3, notice=3, stealth=2)
        soldier = create_character("Ray", "soldier", attributes, skills)
        assert soldier.skills.shoot == 4

    def test_collects_every_error(self, skills):
        with pytest.raises(CharacterCreationError) as exc_info:
            create_character("Bad", "survivor", Attributes(grit=5, reflex=1, wits=1, nerve=1), Skills())
        assert len(exc_info.value.errors) == 3

    def test_unknown_background(self, attributes, skills):
        with pytest.raises(CharacterCreationError, match="Unknown background"):
            create_character("X", "wizard", attributes, skills)

    def test_creation_error_is_value_error(self):
        assert issubclass(CharacterCreationError, ValueError)


class TestDicePool:
    def test_attribute_plus_skill(self, character):
        assert dice_pool(character, "shoot") == 3 + 3

    def test_modifier_and_override(self, character):
        assert dice_pool(character, "athletics", modifier=1, attribute="reflex") == 3 + 0 + 1

    def test_wound_penalty_applies(self, character):
        hurt = character.model_copy(update={"wounds": Wounds(broken=1)})
        assert dice_pool(hurt, "shoot") == 4
        assert dice_pool(hurt, "shoot", apply_wounds=False) == 6

    def test_never_below_one(self, character):
        assert dice_pool(character, "drive", modifier=-10) == 1

    def test_unknown_names(self, character):
        with pytest.raises(ValueError):
            dice_pool(character, "juggling")
        with pytest.raises(ValueError):
            dice_pool(character, "shoot", attribute="luck")
