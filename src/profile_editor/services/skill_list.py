"""Set-like editing of the ordered skill list.

Every operation returns a new tuple; the input sequence is never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def can_add_skill(candidate: str | None) -> bool:
    """Return True when the add trigger should be enabled for ``candidate``."""
    return bool(candidate and candidate.strip())


def add_skill(skills: Sequence[str], candidate: str) -> tuple[str, ...]:
    """Append a trimmed skill unless it is blank or already present.

    Args:
        skills: Current skills in display order.
        candidate: Raw user input.

    Returns:
        A new tuple; equal to ``skills`` when nothing was added.
    """
    value = candidate.strip()
    if not value or value in skills:
        return tuple(skills)
    return (*skills, value)


def remove_skill(skills: Sequence[str], value: str) -> tuple[str, ...]:
    """Remove the first exact match of ``value``; no-op if absent."""
    result = list(skills)
    if value in result:
        result.remove(value)
    return tuple(result)


def normalize_skills(values: Iterable[str] | None) -> tuple[str, ...]:
    """Build a skill tuple from arbitrary input using the add rules."""
    skills: tuple[str, ...] = ()
    for value in values or ():
        if isinstance(value, str):
            skills = add_skill(skills, value)
    return skills
