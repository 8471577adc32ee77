"""Nutrient vector value type."""

from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass

NUTRIENT_FIELDS: tuple[str, ...] = (
    "calories",
    "protein",
    "carbohydrate",
    "fat_total",
    "fiber",
    "sodium",
    "cholesterol",
    "potassium",
    "vitamin_a",
    "vitamin_c",
    "vitamin_d",
    "calcium",
    "iron",
    "magnesium",
)


@dataclass(frozen=True)
class NutrientVector:
    """Fixed set of tracked nutrients.

    Used for food item nutrient blocks (per 100 units), aggregated intake,
    goal targets and percentage-of-goal figures. Every field is always
    present, so arithmetic between vectors never needs missing-key checks.
    """

    calories: float = 0.0
    protein: float = 0.0
    carbohydrate: float = 0.0
    fat_total: float = 0.0
    fiber: float = 0.0
    sodium: float = 0.0
    cholesterol: float = 0.0
    potassium: float = 0.0
    vitamin_a: float = 0.0
    vitamin_c: float = 0.0
    vitamin_d: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    magnesium: float = 0.0

    @classmethod
    def zero(cls) -> "NutrientVector":
        """Return a vector with every nutrient set to zero."""
        return cls()

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "NutrientVector":
        """Build a vector from a mapping, zero-filling absent or null fields."""
        parsed: dict[str, float] = {}
        for name in NUTRIENT_FIELDS:
            raw = values.get(name)
            parsed[name] = float(raw) if isinstance(raw, int | float) else 0.0
        return cls(**parsed)

    def to_dict(self) -> dict[str, float]:
        """Return the vector as a plain dict."""
        return asdict(self)

    def __add__(self, other: "NutrientVector") -> "NutrientVector":
        return self.combine(other, lambda left, right: left + right)

    def scale(self, factor: float) -> "NutrientVector":
        """Multiply every nutrient by a factor."""
        return self.map(lambda value: value * factor)

    def map(self, func: Callable[[float], float]) -> "NutrientVector":
        """Apply a function to every nutrient."""
        return NutrientVector(
            **{name: func(getattr(self, name)) for name in NUTRIENT_FIELDS}
        )

    def combine(
        self,
        other: "NutrientVector",
        func: Callable[[float, float], float],
    ) -> "NutrientVector":
        """Combine two vectors field by field."""
        return NutrientVector(
            **{
                name: func(getattr(self, name), getattr(other, name))
                for name in NUTRIENT_FIELDS
            }
        )

    def rounded(self, digits: int = 1) -> "NutrientVector":
        """Return a copy rounded to the given number of decimals."""
        return self.map(lambda value: round(value, digits))


def sum_vectors(vectors: list[NutrientVector]) -> NutrientVector:
    """Sum a list of vectors, returning zero for an empty list."""
    total = NutrientVector.zero()
    for vector in vectors:
        total = total + vector
    return total

