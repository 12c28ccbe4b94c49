"""Dice rolling utilities."""

import random
import re

_DICE_TERM = re.compile(r"(?P<count>\d*)d(?P<sides>\d+)", re.I)


def roll_dice_string(formula: str, rng=None) -> int:
    """Roll dice defined by ``formula``.

    The formula may contain dice expressions like ``'2d6'`` mixed with
    integer values separated by ``+`` or ``-``. Missing counts default
    to one die. ``rng`` is a :class:`random.Random`; the module level
    generator is used when omitted.
    """
    if not formula:
        return 0

    randint = (rng or random).randint
    expr = str(formula).replace(" ", "")
    total = 0
    for term in re.finditer(r"([+-]?[^+-]+)", expr):
        piece = term.group(0)
        sign = 1
        if piece[0] in "+-":
            if piece[0] == "-":
                sign = -1
            piece = piece[1:]
        match = _DICE_TERM.fullmatch(piece)
        if match:
            count = int(match.group("count") or 1)
            sides = int(match.group("sides"))
            if sides < 1:
                raise ValueError(f"Invalid die size in {formula!r}")
            value = sum(randint(1, sides) for _ in range(count))
        else:
            try:
                value = int(piece)
            except ValueError:
                raise ValueError(f"Invalid dice term {piece!r} in {formula!r}") from None
        total += sign * value
    return total


class DiceRoller:
    """Random source rolling dice expressions from its own generator.

    Pass a ``seed`` to get a repeatable sequence.
    """

    def __init__(self, seed=None) -> None:
        self._rng = random.Random(seed)

    def roll(self, expression: str) -> int:
        return roll_dice_string(expression, self._rng)

    def d10(self) -> int:
        return self.roll("1d10")
