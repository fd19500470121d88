# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Near-match suggestions for unknown sub-commands.

Used only when dispatch fails outright: the resolved command cannot run and
the leftover positional token names none of its children. A child is
suggested when its name is within `minimum_distance` edits of the typed
token (case-insensitive Levenshtein distance), when its name starts with the
token, or when it lists the token in its `suggest_for`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdtree.command import Command


def levenshtein_distance(first: str, second: str, ignore_case: bool = False) -> int:
    """Edit distance between two strings."""
    if ignore_case:
        first, second = first.lower(), second.lower()
    if len(first) > len(second):
        first, second = second, first

    distances = list(range(len(first) + 1))
    for index2, char2 in enumerate(second):
        row = [index2 + 1]
        for index1, char1 in enumerate(first):
            if char1 == char2:
                row.append(distances[index1])
            else:
                row.append(1 + min(distances[index1], distances[index1 + 1], row[-1]))
        distances = row
    return distances[-1]


class SuggestionEngine:
    """
    Suggests sub-command names for a mistyped token.

    Args:
        minimum_distance (int): Largest edit distance still suggested. Must be > 0.
        enabled (bool): When False, `suggest()` always returns an empty list.
    """

    def __init__(self, minimum_distance: int = 2, enabled: bool = True) -> None:
        if minimum_distance <= 0:
            raise ValueError("minimum_distance must be greater than 0")
        self.minimum_distance = minimum_distance
        self.enabled = enabled

    @classmethod
    def for_command(cls, command: Command) -> SuggestionEngine:
        """Engine configured from a command's suggestion settings."""
        return cls(
            minimum_distance=command.suggestions_minimum_distance,
            enabled=not command.disable_suggestions,
        )

    def suggest(self, command: Command, typed: str) -> list[str]:
        """Names of `command`'s available children that resemble `typed`."""
        if not self.enabled:
            return []
        suggestions: list[str] = []
        for child in command.commands():
            if not child.is_available_command():
                continue
            distance = levenshtein_distance(typed, child.name, ignore_case=True)
            close = distance <= self.minimum_distance
            prefix = child.name.lower().startswith(typed.lower())
            if close or prefix or typed in child.suggest_for:
                suggestions.append(child.name)
        return suggestions
