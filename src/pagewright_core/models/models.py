from datetime import datetime
from pathlib import Path
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageRange(BaseModel):
    """One ascending group of zero-based page indices."""

    model_config = ConfigDict(frozen=True)

    indices: List[int] = Field(min_length=1)

    @field_validator('indices')
    @classmethod
    def _ascending(cls, value: List[int]) -> List[int]:
        if value[0] < 0:
            raise ValueError('page indices must not be negative')
        if any(b <= a for a, b in zip(value, value[1:])):
            raise ValueError('page indices must be strictly ascending')
        return value

    @property
    def first(self) -> int:
        return self.indices[0]

    @property
    def last(self) -> int:
        return self.indices[-1]

    @property
    def label(self) -> str:
        """1-based ``first-last`` label used in artifact names."""
        return f'{self.first + 1}-{self.last + 1}'

    def __len__(self) -> int:
        return len(self.indices)


class RangeSpecification(BaseModel):
    """A validated page range expression.

    Groups follow the order in which they were written, every index is
    within ``[0, page_count)``.
    """

    model_config = ConfigDict(frozen=True)

    expression: str
    page_count: int
    groups: List[PageRange] = Field(min_length=1)


class InvalidRangeExpression(BaseModel):
    """Outcome of parsing an expression that cannot be accepted."""

    model_config = ConfigDict(frozen=True)

    expression: str | None
    reason: str


ArtifactKind = Literal['merged', 'split', 'bundle']


class Artifact(BaseModel):
    """A generated file in the output directory, deleted once it expires."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    kind: ArtifactKind
    created_at: datetime
    expires_at: datetime
    members: List['Artifact'] = Field(default_factory=list)
    """Split artifacts packed in a bundle, in archive order. Empty for other kinds."""


Artifact.model_rebuild()
