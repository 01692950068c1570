# Use an explicit re-export https://github.com/astral-sh/ruff/issues/5697#issuecomment-1631647211

from pagewright_core.models.models import (
    PageRange as PageRange,
    RangeSpecification as RangeSpecification,
    InvalidRangeExpression as InvalidRangeExpression,
    Artifact as Artifact,
    ArtifactKind as ArtifactKind,
)

from pagewright_core.models.config import (
    PagewrightConfig as PagewrightConfig,
)
