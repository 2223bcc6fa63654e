"""Ride status values and the transition table that governs them.

A ride moves forward along a single path::

    scheduled --pick_up--> picked_up --drop_off--> dropped_off

``cancelled`` is a valid stored value but no event leads to it.
"""

import enum

from schoolride.errors import InvalidTransitionError


class RideStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    PICKED_UP = "picked_up"
    DROPPED_OFF = "dropped_off"
    CANCELLED = "cancelled"


class RideEvent(str, enum.Enum):
    PICK_UP = "pick_up"
    DROP_OFF = "drop_off"


# event -> (required source status, resulting status)
TRANSITIONS: dict[RideEvent, tuple[RideStatus, RideStatus]] = {
    RideEvent.PICK_UP: (RideStatus.SCHEDULED, RideStatus.PICKED_UP),
    RideEvent.DROP_OFF: (RideStatus.PICKED_UP, RideStatus.DROPPED_OFF),
}

TERMINAL_STATUSES = frozenset({RideStatus.DROPPED_OFF, RideStatus.CANCELLED})


def check_transition(current: str, event: RideEvent, ride_id=None) -> RideStatus:
    """Return the status ``event`` leads to from ``current``.

    Raises :class:`InvalidTransitionError` when ``current`` is not the
    source status of ``event``.
    """
    source, target = TRANSITIONS[event]
    if RideStatus(current) != source:
        raise InvalidTransitionError(
            ride_id, RideStatus(current).value, source.value, target.value
        )
    return target


def available_events(current: str) -> list[RideEvent]:
    """Events a driver may trigger on a ride in status ``current``."""
    if RideStatus(current) in TERMINAL_STATUSES:
        return []
    return [
        event
        for event, (source, _) in TRANSITIONS.items()
        if source == RideStatus(current)
    ]
