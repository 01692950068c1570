"""Test suite for page range parsing."""

import pytest

from pagewright_core.models import InvalidRangeExpression, RangeSpecification
from pagewright_core.services.range_parser import parse_page_ranges


def groups_of(result):
    assert isinstance(result, RangeSpecification)
    return [group.indices for group in result.groups]


class TestValidExpressions:
    """Expressions that fit the document."""

    def test_single_page(self):
        assert groups_of(parse_page_ranges('3', 5)) == [[2]]

    def test_span(self):
        assert groups_of(parse_page_ranges('2-4', 5)) == [[1, 2, 3]]

    def test_groups_keep_token_order(self):
        assert groups_of(parse_page_ranges('3,1-2', 5)) == [[2], [0, 1]]

    def test_whitespace_around_tokens_is_ignored(self):
        assert groups_of(parse_page_ranges(' 1 , 3 - 4 ', 5)) == [[0], [2, 3]]

    def test_full_document_span(self):
        assert groups_of(parse_page_ranges('1-5', 5)) == [[0, 1, 2, 3, 4]]

    def test_span_with_equal_bounds(self):
        assert groups_of(parse_page_ranges('2-2', 5)) == [[1]]

    def test_overlapping_groups_are_kept(self):
        assert groups_of(parse_page_ranges('1-3,2', 5)) == [[0, 1, 2], [1]]

    def test_specification_records_expression_and_page_count(self):
        spec = parse_page_ranges('1,3-4', 5)
        assert spec.expression == '1,3-4'
        assert spec.page_count == 5

    def test_labels_are_one_based(self):
        spec = parse_page_ranges('1,3-4', 5)
        assert [group.label for group in spec.groups] == ['1-1', '3-4']


class TestInvalidExpressions:
    """Expressions rejected as a whole."""

    @pytest.mark.parametrize(
        'expression',
        [
            '1-10',
            '0',
            '6',
            '0-2',
            '2-1',
            'abc',
            '1-a',
            'a-2',
            '1,,2',
            '1,',
            '2a',
            '-1',
            '1-',
            '1.5',
            '+2',
        ],
    )
    def test_invalid_expression(self, expression):
        result = parse_page_ranges(expression, 5)
        assert isinstance(result, InvalidRangeExpression)
        assert result.expression == expression
        assert result.reason

    @pytest.mark.parametrize('expression', ['1-2-3', '2a', '1.5', '3-4x'])
    def test_trailing_characters_are_rejected(self, expression):
        """
        Bounds must be whole integers.

        A parser reading the leading digits of each bound would accept
        "1-2-3" as 1-2, "2a" as 2 and "1.5" as 1. These are rejected
        on purpose rather than silently producing different pages.
        """
        result = parse_page_ranges(expression, 5)
        assert isinstance(result, InvalidRangeExpression)

    @pytest.mark.parametrize('expression', [None, '', '   '])
    def test_missing_expression(self, expression):
        result = parse_page_ranges(expression, 5)
        assert isinstance(result, InvalidRangeExpression)

    def test_one_bad_token_invalidates_everything(self):
        result = parse_page_ranges('1,2,9,3', 5)
        assert isinstance(result, InvalidRangeExpression)
        assert '9' in result.reason

    def test_start_after_end_reason(self):
        result = parse_page_ranges('2-1', 5)
        assert isinstance(result, InvalidRangeExpression)
        assert 'starts after it ends' in result.reason

    def test_empty_document_rejects_any_page(self):
        assert isinstance(parse_page_ranges('1', 0), InvalidRangeExpression)
