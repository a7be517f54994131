# appointments/lifecycle.py

from core.exceptions import InvalidStatusTransition

SCHEDULED = 'Scheduled'
CHECKED_IN = 'Checked-In'
COMPLETED = 'Completed'
CANCELLED = 'Cancelled'
NO_SHOW = 'No-Show'

STATUS_CHOICES = [
    (SCHEDULED, 'Scheduled'),
    (CHECKED_IN, 'Checked-In'),
    (COMPLETED, 'Completed'),
    (CANCELLED, 'Cancelled'),
    (NO_SHOW, 'No-Show'),
]

# Allowed status transitions; an empty list marks a terminal status.
ALLOWED_TRANSITIONS = {
    SCHEDULED: [CHECKED_IN, CANCELLED, NO_SHOW],
    CHECKED_IN: [COMPLETED],
    COMPLETED: [],
    CANCELLED: [],
    NO_SHOW: [],
}

TERMINAL_STATUSES = [status for status, targets in ALLOWED_TRANSITIONS.items() if not targets]


def is_known_status(status):
    return status in ALLOWED_TRANSITIONS


def can_transition(current, target):
    return target in ALLOWED_TRANSITIONS.get(current, [])


def check_transition(current, target):
    """
    Raises InvalidStatusTransition unless `current -> target` is an edge of
    the lifecycle graph.
    """
    if not is_known_status(target):
        valid = ', '.join(ALLOWED_TRANSITIONS)
        raise InvalidStatusTransition(f'Unknown status "{target}". Valid statuses: {valid}')

    if can_transition(current, target):
        return

    allowed = ALLOWED_TRANSITIONS.get(current, [])
    if not allowed:
        raise InvalidStatusTransition(f'Status "{current}" is terminal and cannot be changed')
    raise InvalidStatusTransition(
        f'Cannot change status from "{current}" to "{target}". '
        f'Allowed transitions: {", ".join(allowed)}'
    )
