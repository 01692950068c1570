"""Parsing of page range expressions such as ``"1,3-4"``."""

import re
from typing import List, Optional, Union

from pagewright_core.models import (
    InvalidRangeExpression,
    PageRange,
    RangeSpecification,
)

_INTEGER_RE = re.compile(r'^[0-9]+$')


def _to_index(value: str) -> Optional[int]:
    """Convert a 1-based page number to a zero-based index, None if not a number."""
    value = value.strip()
    if not _INTEGER_RE.match(value):
        return None
    return int(value) - 1


def parse_page_ranges(
    expression: Optional[str],
    page_count: int,
) -> Union[RangeSpecification, InvalidRangeExpression]:
    """
    Parse a comma separated page range expression.

    Supports formats:
    - "3" - a single page (1-based)
    - "2-5" - pages 2 to 5 (1-based, inclusive)
    - "1,3-4,7" - one group per comma separated token

    The expression is accepted as a whole or not at all: the first token
    that is malformed or falls outside the document invalidates it.

    Args:
        expression: The expression as typed by the user
        page_count: Number of pages in the document the ranges refer to

    Returns:
        A RangeSpecification with one group per token, in token order, or an
        InvalidRangeExpression explaining the first problem found.
    """
    if expression is None or not expression.strip():
        return InvalidRangeExpression(expression=expression, reason='No page range given')

    groups: List[PageRange] = []

    for token in expression.split(','):
        token = token.strip()

        if '-' in token:
            start_str, end_str = token.split('-', 1)
            start = _to_index(start_str)
            end = _to_index(end_str)

            if start is None or end is None:
                return InvalidRangeExpression(
                    expression=expression, reason=f'Malformed range "{token}"'
                )
            if start < 0 or end >= page_count:
                return InvalidRangeExpression(
                    expression=expression,
                    reason=f'Range "{token}" is outside the document (1-{page_count})',
                )
            if start > end:
                return InvalidRangeExpression(
                    expression=expression,
                    reason=f'Range "{token}" starts after it ends',
                )

            groups.append(PageRange(indices=list(range(start, end + 1))))
        else:
            index = _to_index(token)

            if index is None:
                return InvalidRangeExpression(
                    expression=expression, reason=f'Malformed page "{token}"'
                )
            if index < 0 or index >= page_count:
                return InvalidRangeExpression(
                    expression=expression,
                    reason=f'Page "{token}" is outside the document (1-{page_count})',
                )

            groups.append(PageRange(indices=[index]))

    return RangeSpecification(expression=expression, page_count=page_count, groups=groups)
