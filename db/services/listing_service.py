"""
Service that assembles paginated admin listings.

Runs the listing state machine for one request:
count -> validate requested page -> fetch the page slice -> drain notices.
Out-of-range pages end in a redirect to the canonical first page of the
same scope instead of a render.

Count and fetch are separate queries with no shared transaction. A row
inserted or deleted between them can shift the page boundary by one item;
the next request sees a consistent view again.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Union
import logging

from db.services.notice_service import NoticeChannel
from db.services.pagination_service import PaginationService, PageIndex, OutOfRange

logger = logging.getLogger(__name__)


class ListingSource(Protocol):
    """Storage contract for a listable collection (implemented by repositories)."""

    def count(self, filter_key: Optional[Any] = None) -> int:
        ...

    def fetch_slice(self, filter_key: Optional[Any], offset: int, limit: int) -> List[Any]:
        ...


@dataclass(frozen=True)
class PageRequest:
    """One listing request: which collection, which page, which scope."""

    resource: str
    requested_page: int
    page_size: int
    filter_key: Optional[Any] = None

    @property
    def base_path(self) -> str:
        """URL prefix of the listing's pages, e.g. ``/admin/categories/3``."""
        path = f"/{self.resource.strip('/')}"
        if self.filter_key is not None:
            path = f"{path}/{self.filter_key}"
        return path

    @property
    def canonical_url(self) -> str:
        return f"{self.base_path}/page/1"


@dataclass
class ListingResult:
    """Everything a listing template needs."""

    items: List[Any]
    page_index: PageIndex
    page_links: List[int]
    notices: List[str]
    current_page: int
    base_path: str

    @property
    def page_count(self) -> int:
        return self.page_index.page_count

    def page_url(self, page: int) -> str:
        return f"{self.base_path}/page/{page}"


@dataclass(frozen=True)
class Redirect:
    """Terminal outcome for out-of-range pages: no body is rendered."""

    location: str
    # Set when page 1 of an empty collection was requested; redirecting
    # would loop, so the caller renders assemble_empty() instead.
    empty_collection: bool = False


AssembleOutcome = Union[ListingResult, Redirect]


class ListingService:
    """Composes counting, pagination and page fetching into a listing."""

    def __init__(self, source: ListingSource, notices: NoticeChannel,
                 pagination_service: Optional[PaginationService] = None):
        self.source = source
        self.notices = notices
        self.pagination_service = pagination_service or PaginationService()

    def count_items(self, filter_key: Optional[Any] = None) -> int:
        """Total items in scope; recomputed on every request."""
        return self.source.count(filter_key)

    def fetch_page(self, filter_key: Optional[Any], page: int, page_size: int) -> List[Any]:
        """Items of one already-validated page."""
        offset = self.pagination_service.page_offset(page, page_size)
        return self.source.fetch_slice(filter_key, offset, page_size)

    def assemble(self, page_request: PageRequest) -> AssembleOutcome:
        """
        Build the listing for ``page_request``.

        Returns:
            ListingResult when the page exists, otherwise a Redirect to the
            canonical first page.

        Raises:
            StorageError: If counting or fetching fails; nothing is retried.
        """
        total_items = self.count_items(page_request.filter_key)
        page_index = self.pagination_service.compute_page_index(total_items, page_request.page_size)

        validation = self.pagination_service.validate_page(page_request.requested_page, page_index)
        if isinstance(validation, OutOfRange):
            logger.info(
                f"Page {validation.page} out of range for {page_request.base_path} "
                f"({page_index.page_count} pages), redirecting"
            )
            return Redirect(
                location=page_request.canonical_url,
                empty_collection=page_index.page_count == 0 and validation.page == 1
            )

        items = self.fetch_page(page_request.filter_key, validation.page, page_request.page_size)

        return ListingResult(
            items=items,
            page_index=page_index,
            page_links=self.pagination_service.page_links(page_index),
            notices=self.notices.drain(),
            current_page=validation.page,
            base_path=page_request.base_path
        )

    def assemble_empty(self, page_request: PageRequest) -> ListingResult:
        """Canonical first page of an empty collection."""
        page_index = self.pagination_service.compute_page_index(0, page_request.page_size)
        return ListingResult(
            items=[],
            page_index=page_index,
            page_links=[],
            notices=self.notices.drain(),
            current_page=1,
            base_path=page_request.base_path
        )
