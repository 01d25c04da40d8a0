"""Objective reconciliation — add new goals, complete them by fuzzy text match."""

from __future__ import annotations

from typing import Iterable

from infected.models.state import Objective


def _matches(objective_text: str, wanted: str) -> bool:
    a = objective_text.lower()
    b = wanted.lower()
    return b in a or a in b


def apply_objectives(
    objectives: list[Objective],
    add: Iterable[str] | None = None,
    complete: Iterable[str] | None = None,
) -> list[Objective]:
    """Return a new objective list with ``add`` and then ``complete`` applied.

    Adds skip texts already present (case-insensitive). A completion marks the
    first objective whose text contains the given text, or is contained by it.
    """
    result = list(objectives)

    for text in add or ():
        if any(o.text.lower() == text.lower() for o in result):
            continue
        result.append(Objective(text=text))

    for text in complete or ():
        for idx, objective in enumerate(result):
            if _matches(objective.text, text):
                result[idx] = objective.model_copy(update={"completed": True})
                break

    return result


def open_objectives(objectives: list[Objective]) -> list[Objective]:
    return [o for o in objectives if not o.completed]
