"""Pydantic models for cards as the draw engine sees them.

A ``Card`` is one physical copy in a shuffled deck. It carries only the
fields the simulator needs: draw/resource bonuses from deck-list
annotations, the printed cost, traits and equipment slots.
"""

from __future__ import annotations

import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_SLOT_MULTIPLIER = re.compile(r"^(?P<name>.*?)\s*x(?P<count>\d+)$", re.IGNORECASE)


class CardSlot(BaseModel):
    """An equipment slot occupied by a card (e.g. ``Hand x2``)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Slot category, e.g. Hand, Arcane, Accessory")
    label: str = Field(description="Slot text as printed, e.g. 'Hand x2'")
    count: int = Field(default=1, ge=1, description="Number of slots of this kind used")


class Card(BaseModel):
    """A single physical card in the deck.

    Attributes:
        name: Display name.
        code: ArkhamDB code, used as the identity key when present.
        weapon: True if the deck list tagged this card as a weapon.
        weakness: True for weaknesses (never kept in the opening hand).
        resources: Resources gained once when the card is seen.
        draw: Extra cards drawn once when the card is seen.
        resources_per_turn: Resources gained every turn after it is seen.
        draw_per_turn: Extra draws every turn after it is seen.
        cost: Printed resource cost (0 for skills and X costs).
        traits: Printed traits.
        slots: Equipment slots, in printed order.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    code: str | None = None
    weapon: bool = False
    weakness: bool = False
    resources: float = 0
    draw: float = 0
    resources_per_turn: float = 0
    draw_per_turn: float = 0
    cost: float = 0
    traits: frozenset[str] = Field(default_factory=frozenset)
    slots: tuple[CardSlot, ...] = Field(default_factory=tuple)

    @property
    def key(self) -> str:
        """Stable identity shared by every copy of this card."""
        return self.code or self.name

    def describe(self) -> str:
        """Name followed by the non-zero annotations, e.g. ``Knife (weapon, cost 1)``."""
        tags: list[str] = []
        if self.weapon:
            tags.append("weapon")
        if self.weakness:
            tags.append("weakness")
        if self.resources:
            tags.append(f"res+{_fmt(self.resources)}")
        if self.resources_per_turn:
            tags.append(f"res/turn+{_fmt(self.resources_per_turn)}")
        if self.draw:
            tags.append(f"draw+{_fmt(self.draw)}")
        if self.draw_per_turn:
            tags.append(f"draw/turn+{_fmt(self.draw_per_turn)}")
        if self.cost:
            tags.append(f"cost {_fmt(self.cost)}")
        suffix = f" ({', '.join(tags)})" if tags else ""
        return f"{self.name}{suffix}"


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def card_key(card: Card) -> str:
    """Identity key for per-card bookkeeping (code, else name)."""
    return card.key


def normalize_cost(cost: Any) -> float:
    """Return the printed cost, or 0 for skills, ``X`` costs and junk."""
    if isinstance(cost, bool) or not isinstance(cost, (int, float)):
        return 0
    if not math.isfinite(cost):
        return 0
    return cost


def extract_traits(traits_text: str | None) -> tuple[str, ...]:
    """Split ArkhamDB trait text (``"Item. Weapon. Melee."``) into names."""
    if not traits_text or not isinstance(traits_text, str):
        return ()
    return tuple(t.strip() for t in traits_text.split(".") if t.strip())


def parse_slots(slot_text: str | None) -> tuple[CardSlot, ...]:
    """Parse ArkhamDB slot text such as ``"Hand x2. Arcane"``."""
    if not slot_text or not isinstance(slot_text, str):
        return ()
    slots: list[CardSlot] = []
    for raw in slot_text.split("."):
        label = " ".join(raw.split())
        if not label:
            continue
        match = _SLOT_MULTIPLIER.match(label)
        if match and match.group("name"):
            slots.append(
                CardSlot(name=match.group("name"), label=label, count=int(match.group("count")))
            )
        else:
            slots.append(CardSlot(name=label, label=label))
    return tuple(slots)
