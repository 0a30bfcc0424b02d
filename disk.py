"""
Disk head scheduling: SSTF, LOOK and CLOOK.

Each policy turns a starting head position and a set of pending cylinder
requests into a visiting order. Total head movement is always the sum of the
distances between consecutive positions, starting from the head.

Note that CLOOK counts the jump from the highest request back to the lowest
one, unlike textbook variants that treat the return sweep as free.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from errors import InvalidRangeError, ValidationError

logger = logging.getLogger(__name__)


class DiskPolicy:
    """
    Available disk scheduling policies.

    SSTF:  Shortest Seek Time First - always service the nearest request
    LOOK:  Sweep up to the last request, then reverse
    CLOOK: Sweep up to the last request, then jump back to the lowest one
    """
    SSTF = "SSTF"
    LOOK = "LOOK"
    CLOOK = "CLOOK"

    ALL = (SSTF, LOOK, CLOOK)


@dataclass(frozen=True)
class HeadMovement:
    position: int
    visit_order: int


@dataclass
class ScheduleResult:
    """
    Outcome of one scheduling run.

    Attributes:
        policy (str): The policy used
        movements (List[HeadMovement]): Head first (visit_order 0), then one entry per request
        total_movement (int): Cylinders travelled in total
    """
    policy: str
    movements: List[HeadMovement] = field(default_factory=list)
    total_movement: int = 0

    @property
    def visit_order(self) -> List[int]:
        return [m.position for m in self.movements]

    def seek_distances(self) -> List[int]:
        positions = self.visit_order
        return [abs(b - a) for a, b in zip(positions, positions[1:])]

    @property
    def average_seek(self) -> float:
        serviced = len(self.movements) - 1
        return self.total_movement / serviced if serviced > 0 else 0.0


# -----------------------------
# Policies
# -----------------------------
def sstf(head: int, requests: Sequence[int]) -> List[int]:
    """Greedy nearest-first order; equal distances go to the earlier request."""
    pending = list(requests)
    order = []
    current = head

    while pending:
        nearest = 0
        nearest_distance = abs(pending[0] - current)
        for i in range(1, len(pending)):
            distance = abs(pending[i] - current)
            if distance < nearest_distance:
                nearest_distance = distance
                nearest = i

        current = pending.pop(nearest)
        order.append(current)

    return order


def _split_at_head(head: int, requests: Sequence[int]):
    ordered = sorted(requests)
    index = next((i for i, pos in enumerate(ordered) if pos >= head), len(ordered))
    return ordered[index:], ordered[:index]


def look(head: int, requests: Sequence[int]) -> List[int]:
    right, left = _split_at_head(head, requests)
    return right + left[::-1]


def clook(head: int, requests: Sequence[int]) -> List[int]:
    right, left = _split_at_head(head, requests)
    return right + left


_POLICIES = {
    DiskPolicy.SSTF: sstf,
    DiskPolicy.LOOK: look,
    DiskPolicy.CLOOK: clook,
}


# -----------------------------
# Dispatcher
# -----------------------------
def validate(head: int, disk_size: int, requests: Sequence[int]):
    """
    Check the head and every request lie on the disk.

    Raises:
        ValidationError: If disk_size is not a positive integer
        InvalidRangeError: If head or a request is outside [0, disk_size)
    """
    if not isinstance(disk_size, int) or isinstance(disk_size, bool) or disk_size <= 0:
        raise ValidationError("Disk size must be a positive integer")
    if not isinstance(head, int) or not 0 <= head < disk_size:
        raise InvalidRangeError(f"Head position must be between 0 and {disk_size - 1}.")
    for pos in requests:
        if not isinstance(pos, int) or not 0 <= pos < disk_size:
            raise InvalidRangeError(f"All positions must be between 0 and {disk_size - 1}.")


def schedule(policy: str, head: int, disk_size: int, requests: Sequence[int]) -> ScheduleResult:
    """
    Compute the visiting order and total head movement for a policy.

    Args:
        policy (str): One of DiskPolicy.ALL (case-insensitive)
        head (int): Starting head position
        disk_size (int): Number of cylinders
        requests (Sequence[int]): Pending request positions

    Returns:
        ScheduleResult: Head movements and total movement
    """
    key = str(policy).upper()
    if key not in _POLICIES:
        raise ValidationError(f"Unknown disk scheduling policy: {policy}")
    requests = list(requests)
    validate(head, disk_size, requests)

    result = ScheduleResult(key, [HeadMovement(head, 0)])
    current = head
    for order, position in enumerate(_POLICIES[key](head, requests), start=1):
        result.movements.append(HeadMovement(position, order))
        result.total_movement += abs(position - current)
        current = position

    logger.info("%s from %d over %d requests: total movement %d",
                key, head, len(requests), result.total_movement)
    return result


def compare_policies(head: int, disk_size: int, requests: Sequence[int]) -> Dict[str, ScheduleResult]:
    return {policy: schedule(policy, head, disk_size, requests) for policy in DiskPolicy.ALL}
