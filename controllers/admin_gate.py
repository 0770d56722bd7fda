"""
Authorization gate for the admin area.

Installed once as a ``before_request`` hook so every ``/admin`` route is
covered without per-handler checks. Unauthenticated requests are sent to
the public landing page before any controller (and so any query) runs.
"""

import logging
from flask import redirect, request, session

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


class AdminGate:
    """Session capability check for administrative routes."""

    def __init__(self, protected_prefix: str = "/admin", landing_page: str = "/"):
        self.protected_prefix = protected_prefix.rstrip("/")
        self.landing_page = landing_page

    def authorize(self, user_session) -> bool:
        """True when the session carries a logged-in user."""
        return user_session.get(SESSION_USER_KEY) is not None

    def protects(self, path: str) -> bool:
        return path == self.protected_prefix or path.startswith(self.protected_prefix + "/")

    def check_request(self):
        """before_request hook: None lets the request through."""
        if not self.protects(request.path):
            return None
        if self.authorize(session):
            return None
        logger.info(f"Unauthenticated request to {request.path}, redirecting to {self.landing_page}")
        return redirect(self.landing_page, code=303)

    def install(self, app):
        app.before_request(self.check_request)
