"""Dice expressions for timers and one-off rolls — NdM, dM, NdM±X and NdM×F."""

from __future__ import annotations

import re
from dataclasses import dataclass

from infected.modules.dice.source import DrawSource, RandomSource

_EXPRESSION = re.compile(
    r"^(?P<count>\d*)d(?P<sides>\d+)"
    r"(?:\s*[x×*]\s*(?P<factor>\d+))?"
    r"(?:\s*(?P<sign>[+-])\s*(?P<bonus>\d+))?$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class DiceExpression:
    text: str
    count: int
    sides: int
    factor: int = 1
    bonus: int = 0

    @classmethod
    def parse(cls, text: str) -> DiceExpression:
        """Parse ``1d6``, ``d6``, ``2d6+3`` or ``1d6x10``.

        The factor multiplies the dice sum before the flat bonus is added,
        so ``1d6x10`` reads as "one to six tens of minutes".

        Raises:
            ValueError: If the text is empty or not a dice expression.
        """
        text = text.strip()
        if not text:
            raise ValueError("Empty dice expression")
        m = _EXPRESSION.match(text)
        if m is None:
            raise ValueError(f"Invalid dice expression: {text}")

        sides = int(m["sides"])
        if sides < 1:
            raise ValueError(f"Dice must have at least one side: {text}")
        bonus = int(m["bonus"]) if m["bonus"] else 0
        if m["sign"] == "-":
            bonus = -bonus

        return cls(
            text=text,
            count=int(m["count"]) if m["count"] else 1,
            sides=sides,
            factor=int(m["factor"]) if m["factor"] else 1,
            bonus=bonus,
        )

    def roll(self, source: DrawSource | None = None) -> ExpressionRoll:
        source = source or RandomSource()
        faces = tuple(source.randint(1, self.sides) for _ in range(self.count))
        return ExpressionRoll(expression=self, faces=faces)


@dataclass(frozen=True)
class ExpressionRoll:
    expression: DiceExpression
    faces: tuple[int, ...]

    @property
    def subtotal(self) -> int:
        return sum(self.faces)

    @property
    def total(self) -> int:
        return self.subtotal * self.expression.factor + self.expression.bonus


def parse_expression(text: str) -> DiceExpression:
    return DiceExpression.parse(text)


def roll_expression(text: str, source: DrawSource | None = None) -> ExpressionRoll:
    return DiceExpression.parse(text).roll(source)
