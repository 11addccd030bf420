"""Domain models for food biodiversity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BiodiversitySummary:
    """Unique whole foods eaten, bucketed by food group."""

    fruits: list[str] = field(default_factory=list)
    vegetables: list[str] = field(default_factory=list)
    nuts: list[str] = field(default_factory=list)
    legumes: list[str] = field(default_factory=list)
    whole_grains: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.fruits)
            + len(self.vegetables)
            + len(self.nuts)
            + len(self.legumes)
            + len(self.whole_grains)
        )
