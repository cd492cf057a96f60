from __future__ import annotations
from dataclasses import dataclass
from .image import Image


@dataclass(frozen=True)
class ComparisonResult:
    """
    Data object holding a dimension-matched image pair and its similarity.
    Produced once per comparison and never mutated.
    """
    first: Image
    second: Image
    similarity: float  # Fraction of bytes within tolerance (0-1)
    threshold: float   # Acceptance threshold the score is checked against

    @property
    def is_similar(self) -> bool:
        return self.similarity >= self.threshold

    @property
    def percentage(self) -> float:
        return self.similarity * 100
