"""Shared plumbing for admin controllers.

Controllers handle only HTTP concerns: build a PageRequest or read a form,
delegate to a service inside a Unit of Work, then redirect or render.
Storage and NotFound errors are left to the app's error handlers.
"""

import logging
from typing import Any, Optional

from flask import redirect, render_template
from sqlalchemy.orm import sessionmaker

from config import AppConfig
from db.repositories.unit_of_work import get_unit_of_work
from db.services.listing_service import ListingService, PageRequest, Redirect
from db.services.notice_service import NoticeChannel
from db.services.pagination_service import parse_page_number
from forms import ActionForm

logger = logging.getLogger(__name__)


class AdminController:
    """Base class for the category and post controllers."""

    resource = "admin"

    def __init__(self, config: AppConfig, session_factory: sessionmaker, notices: NoticeChannel):
        self.config = config
        self.session_factory = session_factory
        self.notices = notices

    @property
    def canonical_url(self) -> str:
        return f"/{self.resource}/page/1"

    def unit_of_work(self):
        return get_unit_of_work(self.session_factory)

    def page_request(self, raw_page, filter_key: Optional[Any] = None,
                     resource: Optional[str] = None) -> PageRequest:
        return PageRequest(
            resource=resource or self.resource,
            requested_page=parse_page_number(raw_page),
            page_size=self.config.posts_per_page,
            filter_key=filter_key
        )

    def redirect_to(self, location: str):
        return redirect(location, code=303)

    def reject(self, notice: str, location: Optional[str] = None):
        """Record a validation notice and send the operator back to page 1."""
        logger.info(f"Rejected {self.resource} mutation: {notice}")
        self.notices.push(notice)
        return self.redirect_to(location or self.canonical_url)

    def render_listing(self, template: str, repository_name: str, page_request: PageRequest,
                       context_loader=None):
        """
        Run the listing pipeline and render ``template``.

        Args:
            template: Template name
            repository_name: Unit of Work attribute providing count/fetch_slice
            page_request: Requested page and scope
            context_loader: Optional callable(uow) -> dict of extra template
                context; may raise NotFoundError for a missing scope
        """
        with self.unit_of_work() as uow:
            # Load everything that can fail before assembling: assembly
            # drains the pending notices
            extra = context_loader(uow) if context_loader else {}
            all_categories = uow.categories.get_all_ordered()

            service = ListingService(getattr(uow, repository_name), self.notices)
            outcome = service.assemble(page_request)
            if isinstance(outcome, Redirect):
                if not outcome.empty_collection:
                    return self.redirect_to(outcome.location)
                outcome = service.assemble_empty(page_request)

        return render_template(
            template,
            listing=outcome,
            all_categories=all_categories,
            action_form=ActionForm(),
            **extra
        )

    def render_page(self, template: str, **context):
        """Render a non-listing admin page with the navigation categories."""
        context.setdefault("action_form", ActionForm())
        with self.unit_of_work() as uow:
            all_categories = uow.categories.get_all_ordered()
        return render_template(template, all_categories=all_categories, **context)
