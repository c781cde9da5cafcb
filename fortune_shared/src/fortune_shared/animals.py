from functools import lru_cache
from typing import List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from . import read_asset


class UnknownAnimal(KeyError):
    """Raised when an animal id is not part of the option set."""


class Animal(BaseModel):
    """One selectable wedge of the wheel."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    label: str
    emoji: str = ""
    weight: float = Field(gt=0)
    multiplier: float = Field(gt=0)

    @property
    def display_name(self) -> str:
        return f"{self.label} {self.emoji}".strip()


_ANIMAL_LIST = TypeAdapter(List[Animal])


def parse_animals(raw: str) -> Tuple[Animal, ...]:
    """Validate a JSON array of animals; order is kept as the wheel order."""
    animals = tuple(_ANIMAL_LIST.validate_json(raw))
    if not animals:
        raise ValueError("animal set must not be empty")
    seen = set()
    for a in animals:
        if a.id in seen:
            raise ValueError(f"duplicate animal id: {a.id}")
        seen.add(a.id)
    return animals


@lru_cache(maxsize=1)
def load_animals() -> Tuple[Animal, ...]:
    return parse_animals(read_asset("animals.json"))


def find_animal(animal_id: str, animals: Sequence[Animal]) -> Animal:
    for a in animals:
        if a.id == animal_id:
            return a
    raise UnknownAnimal(animal_id)
