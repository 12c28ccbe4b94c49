from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class Effect:
    """Definition for a temporary effect."""

    key: str
    name: str
    desc: str
    type: str = "status"  # "buff" or "status"
    mods: Optional[Dict[str, int]] = field(default_factory=dict)


EFFECTS: Dict[str, Effect] = {
    "poisoned": Effect(
        key="poisoned",
        name="Poisoned",
        desc="Toxins burn through your veins.",
        type="status",
    ),
    "incapacitated": Effect(
        key="incapacitated",
        name="Incapacitated",
        desc="You are unable to act.",
        type="status",
    ),
    "unconscious": Effect(
        key="unconscious",
        name="Unconscious",
        desc="You are knocked out.",
        type="status",
    ),
    "prone": Effect(
        key="prone",
        name="Prone",
        desc="You are sprawled on the ground.",
        type="status",
    ),
    "mild_impairment": Effect(
        key="mild_impairment",
        name="Mild Impairment",
        desc="Lingering toxins dull your reflexes.",
        type="status",
        mods={"ability_checks": -1, "attack_rolls": -1},
    ),
}
