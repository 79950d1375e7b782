"""Shared pytest fixtures."""

import pytest

from handsim.core.settings import clear_settings_cache
from handsim.models.card import Card
from handsim.models.deck import CardAnnotations, DeckEntry, expand_deck


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make every test read the environment afresh."""
    clear_settings_cache()
    yield
    clear_settings_cache()


class StaticRng:
    """Stand-in for random.Random whose shuffle keeps the order."""

    def shuffle(self, seq):
        return None


@pytest.fixture
def static_rng():
    return StaticRng()


def make_card(name: str, **fields) -> Card:
    return Card(name=name, **fields)


def _entry(count, name, code, record, **annotations):
    return DeckEntry(
        count=count,
        name=name,
        code=code,
        annotations=CardAnnotations(**annotations),
        record={"code": code, "name": name, **record},
    )


@pytest.fixture
def sample_entries():
    """A 30-card Guardian deck with two basic weaknesses and one permanent."""
    return [
        _entry(2, "Machete", "01020", {"cost": 3, "traits": "Item. Weapon. Melee.", "slot": "Hand"}, weapon=True),
        _entry(2, "Beat Cop", "01018", {"cost": 4, "traits": "Ally. Police.", "slot": "Ally"}),
        _entry(2, "Emergency Cache", "01088", {"cost": 0, "traits": "Supply."}, resources=3),
        _entry(2, "Flashlight", "01087", {"cost": 2, "traits": "Item. Tool.", "slot": "Hand"}),
        _entry(2, "Knife", "01086", {"cost": 1, "traits": "Item. Weapon. Melee.", "slot": "Hand"}, keywords=["Weapon"]),
        _entry(2, "Vicious Blow", "01025", {"cost": None, "traits": "Practiced."}),
        _entry(2, "Preposterous Sketches", "01038", {"cost": 2, "traits": "Insight."}, draw=3),
        _entry(2, "Dr. Milan Christopher", "01033", {"cost": 4, "traits": "Ally. Miskatonic.", "slot": "Ally"}, resources_per_turn=1),
        _entry(2, "Lucky Cigarette Case", "02030", {"cost": 2, "traits": "Item. Charm.", "slot": "Accessory"}, draw_per_turn=1),
        _entry(2, "Guard Dog", "01021", {"cost": 3, "traits": "Ally. Creature.", "slot": "Ally"}),
        _entry(2, "Overpower", "01091", {"cost": None, "traits": "Practiced."}),
        _entry(2, "Shrivelling", "01060", {"cost": 3, "traits": "Spell.", "slot": "Arcane"}),
        _entry(2, "Lightning Gun", "02301", {"cost": 6, "traits": "Item. Weapon. Firearm.", "slot": "Hand x2"}, weapon=True),
        _entry(2, "Working a Hunch", "01037", {"cost": 2, "traits": "Insight."}),
        _entry(1, "Amnesia", "01096", {"cost": None, "traits": "Madness.", "subtype_code": "basicweakness"}),
        _entry(1, "Paranoia", "01097", {"cost": None, "traits": "Madness.", "subtype_code": "basicweakness"}),
        _entry(1, "Charisma", "07305", {"cost": None, "traits": "Talent."}, permanent=True),
    ]


@pytest.fixture
def sample_deck(sample_entries):
    """The sample entries expanded to 30 physical cards."""
    return expand_deck(sample_entries)


@pytest.fixture
def ten_card_deck():
    """Ten distinct non-weakness cards; 'Item' is on exactly two of them."""
    cards = [make_card(f"Card {i}", code=f"9{i:04d}") for i in range(8)]
    cards.append(make_card("Flashlight", code="01087", traits=frozenset({"Item", "Tool"})))
    cards.append(make_card("Knife", code="01086", traits=frozenset({"Item", "Weapon"}), weapon=True))
    return cards
