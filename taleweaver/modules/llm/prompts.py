"""Prompt and description templates handed to the narrative (LLM) layer."""

from __future__ import annotations

from string import Template

# --- Roll descriptions (inserted verbatim into the adventure log) ---
CHECK_DESCRIPTION = Template(
    "$actor_name attempts $skill: $detail. Result $result ($outcome)."
)

DAMAGE_DESCRIPTION = Template(
    "$actor_name rolls $expression for damage: $breakdown = $total."
)

# --- Narration prompt for a resolved check ---
CHECK_NARRATION = Template(
    "You are the narrator of a tabletop role-playing adventure.\n\n"
    "Character: $actor_name\n"
    "Action: $skill\n"
    "Dice: $detail\n"
    "Outcome: $outcome\n"
    "Scene: $context\n\n"
    "Describe what happens in 1-2 sentences. Do not contradict the outcome."
)

ROLL_FALLBACK = "The roll couldn't be resolved."

OUTCOME_LABELS = {
    "full": "full success",
    "partial": "partial success",
    "miss": "miss",
}


def outcome_label(success: bool, tier: str | None = None) -> str:
    """Human-readable outcome, using the degree of success when there is one."""
    if tier is not None:
        return OUTCOME_LABELS.get(tier, tier)
    return "success" if success else "failure"
