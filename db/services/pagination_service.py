"""
Service for handling pagination logic.

Provides pure, testable pagination functions independent of HTTP/Flask context.
Follows Single Responsibility Principle - only handles pagination math.
"""

from dataclasses import dataclass
from typing import List, Union


@dataclass(frozen=True)
class PageIndex:
    """Page arithmetic for one collection size."""

    total_items: int
    page_size: int
    page_count: int

    @property
    def valid_page_range(self) -> range:
        """Valid 1-based page numbers; empty when there are no items."""
        return range(1, self.page_count + 1)


@dataclass(frozen=True)
class Valid:
    page: int


@dataclass(frozen=True)
class OutOfRange:
    page: int


PageValidation = Union[Valid, OutOfRange]


class PaginationService:
    """Service for pagination calculations."""

    def compute_page_index(self, total_items: int, page_size: int) -> PageIndex:
        """
        Calculate the page index for a collection.

        Args:
            total_items: Number of items in the collection
            page_size: Items per page

        Returns:
            PageIndex with page_count = ceil(total_items / page_size)

        Raises:
            ValueError: If page_size < 1 or total_items < 0
        """
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        if total_items < 0:
            raise ValueError(f"total_items must be >= 0, got {total_items}")

        # Integer ceiling division; float ceil drifts on large counts
        page_count = total_items // page_size
        if total_items % page_size != 0:
            page_count += 1

        return PageIndex(
            total_items=total_items,
            page_size=page_size,
            page_count=page_count
        )

    def validate_page(self, requested_page: int, page_index: PageIndex) -> PageValidation:
        """
        Check a requested page number against the page index.

        Args:
            requested_page: Requested page number (0 for malformed input)
            page_index: Result of compute_page_index

        Returns:
            Valid(page) if 1 <= page <= page_count, otherwise OutOfRange(page).
            An empty collection has no valid pages at all.
        """
        if 1 <= requested_page <= page_index.page_count:
            return Valid(requested_page)
        return OutOfRange(requested_page)

    def page_links(self, page_index: PageIndex) -> List[int]:
        """Page numbers to render in the pager, in order."""
        return list(page_index.valid_page_range)

    def page_offset(self, page: int, page_size: int) -> int:
        """Row offset of the first item on ``page``."""
        return (page - 1) * page_size


def parse_page_number(raw) -> int:
    """
    Convert a raw URL segment into a page number.

    Anything that is not a plain ASCII decimal integer becomes 0, which
    validate_page always rejects.
    """
    if isinstance(raw, int):
        return raw
    if raw is None:
        return 0
    text = str(raw).strip()
    if not (text.isascii() and text.isdigit()):
        return 0
    return int(text)
