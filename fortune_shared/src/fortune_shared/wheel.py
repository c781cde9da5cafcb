import random
from typing import List, NamedTuple, Sequence

from .animals import Animal
from .constants import BASE_ROTATIONS, SECTOR_JITTER


class Sector(NamedTuple):
    animal: Animal
    start: float
    sweep: float

    @property
    def middle(self) -> float:
        return self.start + self.sweep / 2


def total_weight(animals: Sequence[Animal]) -> float:
    if not animals:
        raise ValueError("cannot spin a wheel with no animals")
    total = 0.0
    for a in animals:
        if a.weight <= 0:
            raise ValueError(f"animal {a.id!r} has non-positive weight {a.weight}")
        total += a.weight
    return total


def select(animals: Sequence[Animal], rng=random) -> Animal:
    """Pick one animal with probability proportional to its weight.

    Uses a single draw from ``rng.random()`` scaled to the total weight and
    walks the wheel in order. If float drift leaves the draw past every
    wedge, the last animal is returned.
    """
    total = total_weight(animals)
    r = rng.random() * total
    for a in animals:
        if r < a.weight:
            return a
        r -= a.weight
    return animals[-1]


def sectors(animals: Sequence[Animal]) -> List[Sector]:
    """Return the wheel wedges in order, sized by weight over 360 degrees."""
    total = total_weight(animals)
    out: List[Sector] = []
    start = 0.0
    for a in animals:
        sweep = a.weight / total * 360
        out.append(Sector(a, start, sweep))
        start += sweep
    return out


def landing_angle(
    animals: Sequence[Animal],
    winner: Animal,
    rng=random,
    base_rotations: int = BASE_ROTATIONS,
) -> float:
    """Rotation that brings the winner's wedge under the pointer at 0 degrees.

    A few full turns are added for show, plus a small offset so the pointer
    does not always stop dead in the middle of the wedge.
    """
    for sector in sectors(animals):
        if sector.animal.id == winner.id:
            break
    else:
        raise ValueError(f"winner {winner.id!r} is not on the wheel")
    offset = (rng.random() - 0.5) * sector.sweep * SECTOR_JITTER
    return 360 * base_rotations + (360 - sector.middle) + offset


def normalize_angle(angle: float) -> float:
    return angle % 360
