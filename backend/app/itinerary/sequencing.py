"""Deterministic re-sequencing transforms for the stop list being edited.

Stops are a dense ordered sequence addressed by 0-based index; every
structural edit returns a new list whose ``order`` values are 1..N.
"""

from collections.abc import Sequence

from backend.app.errors import ValidationError
from backend.app.models.itinerary import MoveDirection, StopInput


def renumber(stops: Sequence[StopInput]) -> list[StopInput]:
    """Assign order 1..N following list position."""
    return [stop.model_copy(update={"order": position}) for position, stop in enumerate(stops, start=1)]


def _check_index(stops: Sequence[StopInput], index: int) -> None:
    if not 0 <= index < len(stops):
        raise ValidationError(f"Stop index {index} out of range", field="index", index=index)


def move_stop(stops: Sequence[StopInput], index: int, direction: MoveDirection) -> list[StopInput]:
    """Swap a stop with its neighbour and renumber.

    Moving the first stop up or the last stop down leaves the order as is.

    Args:
        stops: Current stop list
        index: 0-based position of the stop to move
        direction: MoveDirection.up or MoveDirection.down

    Returns:
        New renumbered list

    Raises:
        ValidationError: If index is out of range
    """
    _check_index(stops, index)
    items = list(stops)
    target = index - 1 if direction == MoveDirection.up else index + 1

    if 0 <= target < len(items):
        items[index], items[target] = items[target], items[index]

    return renumber(items)


def remove_stop(stops: Sequence[StopInput], index: int) -> list[StopInput]:
    """Drop one stop and renumber the rest with no gaps.

    Raises:
        ValidationError: If index is out of range
    """
    _check_index(stops, index)
    return renumber([stop for position, stop in enumerate(stops) if position != index])
