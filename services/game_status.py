"""
Game lifecycle rules.

A game moves through its statuses along VALID_TRANSITIONS only; final and
cancelled are terminal. The can_* helpers return the reason an action is
not allowed, or None when it is.
"""

from typing import Optional, Tuple

from utils.constants import STANDARD_INNINGS

VALID_TRANSITIONS = {
    'scheduled': ('warmup', 'in_progress', 'postponed', 'cancelled'),
    'warmup': ('in_progress', 'postponed', 'cancelled'),
    'in_progress': ('final', 'suspended'),
    'suspended': ('in_progress', 'cancelled'),
    'postponed': ('scheduled', 'cancelled'),
    'final': (),
    'cancelled': (),
}

STARTABLE_STATUSES = ('scheduled', 'warmup', 'suspended')
POSTPONABLE_STATUSES = ('scheduled', 'warmup', 'suspended')


def can_transition(current: str, target: str) -> bool:
    return target in VALID_TRANSITIONS.get(current, ())


def can_start(status: str) -> Optional[str]:
    if status == 'in_progress':
        return "Game is already in progress"
    if status == 'final':
        return "Game has already ended"
    if status == 'cancelled':
        return "Game has been cancelled"
    if status not in STARTABLE_STATUSES:
        return f"Cannot start game with status '{status}'"
    return None


def can_score(status: str) -> Optional[str]:
    if status != 'in_progress':
        return "Can only score games that are in progress"
    return None


def can_end(status: str) -> Optional[str]:
    if status != 'in_progress':
        return "Can only end games that are in progress"
    return None


def next_half_inning(inning: int, half: str) -> Tuple[int, str]:
    if half == 'top':
        return inning, 'bottom'
    return inning + 1, 'top'


def is_extra_innings(inning: Optional[int]) -> bool:
    return (inning or 0) > STANDARD_INNINGS
