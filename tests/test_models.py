from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from pagewright_core.models import Artifact, PageRange, RangeSpecification


class TestPageRange:
    def test_label_and_bounds(self):
        group = PageRange(indices=[2, 3, 4])

        assert group.first == 2
        assert group.last == 4
        assert group.label == '3-5'
        assert len(group) == 3

    @pytest.mark.parametrize('indices', [[], [-1], [2, 1], [1, 1]])
    def test_invalid_indices(self, indices):
        with pytest.raises(ValidationError):
            PageRange(indices=indices)


class TestRangeSpecification:
    def test_requires_groups(self):
        with pytest.raises(ValidationError):
            RangeSpecification(expression='', page_count=3, groups=[])


class TestArtifact:
    def test_bundle_members(self):
        now = datetime.now(timezone.utc)
        member = Artifact(
            name='split_1-1_1.pdf', path=Path('split_1-1_1.pdf'), kind='split',
            created_at=now, expires_at=now + timedelta(hours=1),
        )
        bundle = Artifact(
            name='split_results_2.zip', path=Path('split_results_2.zip'), kind='bundle',
            created_at=now, expires_at=now + timedelta(hours=1), members=[member],
        )

        assert bundle.members[0].name == 'split_1-1_1.pdf'

    def test_unknown_kind(self):
        now = datetime.now(timezone.utc)
        with pytest.raises(ValidationError):
            Artifact(name='x', path=Path('x'), kind='other', created_at=now, expires_at=now)
