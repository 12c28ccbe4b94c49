from .dice import roll_dice_string, DiceRoller

__all__ = ["roll_dice_string", "DiceRoller"]
