"""Character creation rules — budgets, backgrounds, derived stats and dice pools."""

from __future__ import annotations

from dataclasses import dataclass

from infected.domain import wounds as wounds_mod
from infected.models.state import Attributes, CharacterState, Item, Skills

ATTRIBUTE_BUDGET = 12
SKILL_BUDGET = 12
ATTRIBUTE_MIN = 1
ATTRIBUTE_MAX = 4
SKILL_MAX = 3
BONUS_SKILL_MAX = 4
STARTING_GUTS = 3
STARTING_FOOD = 3
STARTING_WATER = 3

ATTRIBUTE_NAMES = ("grit", "reflex", "wits", "nerve")

SKILL_ATTRIBUTES: dict[str, str] = {
    "brawl": "grit",
    "endure": "grit",
    "athletics": "grit",
    "shoot": "reflex",
    "stealth": "reflex",
    "drive": "reflex",
    "notice": "wits",
    "craft": "wits",
    "tech": "wits",
    "medicine": "wits",
    "survival": "wits",
    "knowledge": "wits",
    "persuade": "nerve",
    "deceive": "nerve",
    "resolve": "nerve",
    "intimidate": "nerve",
    "animals": "nerve",
}


class CharacterCreationError(ValueError):
    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class Background:
    name: str
    bonus: str
    gear: tuple[str, ...]
    description: str


BACKGROUNDS: dict[str, Background] = {
    "survivor": Background(
        "Survivor", "endure",
        ("Backpack", "Knife", "3 days food", "Lighter", "Crowbar"),
        "You've made it this far on instinct and grit.",
    ),
    "soldier": Background(
        "Soldier", "shoot",
        ("Pistol (12 rounds)", "Light armor", "Combat knife", "Radio"),
        "You were trained for war. This isn't what you trained for.",
    ),
    "medic": Background(
        "Medic", "medicine",
        ("First aid kit (5 uses)", "Antibiotics (2)", "Flashlight", "Surgical tools"),
        "You took an oath to do no harm. Now harm is everywhere.",
    ),
    "mechanic": Background(
        "Mechanic", "craft",
        ("Tool kit", "Duct tape", "Parts (5)", "Crowbar", "Work gloves"),
        "If it's broken, you can fix it. Most things are broken now.",
    ),
    "scout": Background(
        "Scout", "stealth",
        ("Binoculars", "Rope (50ft)", "Suppressed pistol (8 rounds)", "Map"),
        "You move unseen. In this world, that's how you stay alive.",
    ),
    "leader": Background(
        "Leader", "persuade",
        ("Radio", "Map", "Flare gun (3 flares)", "Notebook"),
        "People look to you for answers. You hope you have them.",
    ),
    "hunter": Background(
        "Hunter", "survival",
        ("Bow (12 arrows)", "Hunting knife", "3 days food", "Camo clothing"),
        "The wilderness was your home. Now it's everyone's.",
    ),
    "criminal": Background(
        "Criminal", "deceive",
        ("Lockpicks", "Pistol (6 rounds)", "2 days food", "Fake ID"),
        "You lived outside the law. Now there is no law.",
    ),
    "veterinarian": Background(
        "Veterinarian", "animals",
        ("Medical kit (animal)", "Leash/muzzle", "2 days food", "Sedatives (3)"),
        "You healed creatures who couldn't speak. Now everyone screams.",
    ),
    "professor": Background(
        "Professor", "knowledge",
        ("Notebook", "Reference books", "Flashlight", "Reading glasses", "Pen"),
        "You studied history. Now you're living through it.",
    ),
    "enforcer": Background(
        "Enforcer", "intimidate",
        ("Baseball bat", "Leather jacket", "Brass knuckles", "Cigarettes", "Switchblade"),
        "You made people afraid. Fear is useful now.",
    ),
    "ranger": Background(
        "Ranger", "survival",
        ("Rifle (10 rounds)", "Compass", "Water filter", "3 days food", "Fire starter"),
        "You protected the wild places. Now you protect yourself.",
    ),
}


# --- Validation ---


def validate_attributes(attrs: Attributes) -> list[str]:
    """Return the list of rule violations; empty when the spread is legal."""
    errors = []
    total = sum(getattr(attrs, name) for name in ATTRIBUTE_NAMES)
    if total != ATTRIBUTE_BUDGET:
        errors.append(f"Attributes must sum to {ATTRIBUTE_BUDGET}, got {total}")
    for name in ATTRIBUTE_NAMES:
        value = getattr(attrs, name)
        if not ATTRIBUTE_MIN <= value <= ATTRIBUTE_MAX:
            errors.append(
                f"{name} must be between {ATTRIBUTE_MIN}-{ATTRIBUTE_MAX}, got {value}"
            )
    return errors


def validate_skills(skills: Skills, bonus_skill: str | None = None) -> list[str]:
    errors = []
    total = 0
    for name in SKILL_ATTRIBUTES:
        value = getattr(skills, name)
        total += value
        maximum = BONUS_SKILL_MAX if name == bonus_skill else SKILL_MAX
        if not 0 <= value <= maximum:
            errors.append(f"{name} must be between 0-{maximum}, got {value}")
    if total != SKILL_BUDGET:
        errors.append(f"Skills must sum to {SKILL_BUDGET}, got {total}")
    return errors


def validate_background(background: str) -> bool:
    return background in BACKGROUNDS


# --- Derived stats ---


def max_stress_for(nerve: int) -> int:
    return nerve + 3


def carrying_capacity_for(grit: int) -> int:
    return grit + 4


def apply_background_bonus(skills: Skills, background: str) -> Skills:
    bonus = BACKGROUNDS[background].bonus
    value = min(BONUS_SKILL_MAX, getattr(skills, bonus) + 1)
    return skills.model_copy(update={bonus: value})


def create_character(
    name: str,
    background: str,
    attributes: Attributes,
    skills: Skills,
    motivation: str = "",
) -> CharacterState:
    """Validate a build and return a fresh character ready for play.

    Raises:
        CharacterCreationError: If the background, attributes or skills break
            the creation rules. All violations are reported together.
    """
    if not validate_background(background):
        raise CharacterCreationError([f"Unknown background: {background}"])
    bg = BACKGROUNDS[background]
    errors = validate_attributes(attributes) + validate_skills(skills, bg.bonus)
    if errors:
        raise CharacterCreationError(errors)

    return CharacterState(
        name=name,
        background=background,
        motivation=motivation,
        attributes=attributes,
        skills=apply_background_bonus(skills, background),
        wound_capacity=wounds_mod.wound_capacity_for(attributes.grit),
        stress=0,
        max_stress=max_stress_for(attributes.nerve),
        guts=STARTING_GUTS,
        inventory=[Item(id=f"item-{i}", name=gear) for i, gear in enumerate(bg.gear)],
        carrying_capacity=carrying_capacity_for(attributes.grit),
        food=STARTING_FOOD,
        water=STARTING_WATER,
    )


def dice_pool(
    character: CharacterState,
    skill: str,
    modifier: int = 0,
    attribute: str | None = None,
    apply_wounds: bool = True,
) -> int:
    """Attribute + skill + modifier + wound penalty, never below one die.

    ``attribute`` overrides the governing attribute for rolls such as
    REFLEX + Athletics dodges or NERVE + Medicine surgery.
    """
    if skill not in SKILL_ATTRIBUTES:
        raise ValueError(f"Unknown skill: {skill}")
    attribute = attribute or SKILL_ATTRIBUTES[skill]
    if attribute not in ATTRIBUTE_NAMES:
        raise ValueError(f"Unknown attribute: {attribute}")
    pool = getattr(character.attributes, attribute) + getattr(character.skills, skill) + modifier
    if apply_wounds:
        pool += wounds_mod.wound_penalty(character.wounds)
    return max(pool, 1)
