"""Controller for the public pages: landing, registration, login and logout."""

import logging

from flask import redirect, render_template, session
from sqlalchemy.orm import sessionmaker

from controllers.admin_gate import SESSION_USER_KEY
from db.errors import ValidationFailed
from db.repositories.unit_of_work import get_unit_of_work
from db.services.auth_service import AuthService
from db.services.notice_service import NoticeChannel, describe_form_errors
from forms import LoginForm, RegisterForm, ActionForm

logger = logging.getLogger(__name__)

ADMIN_HOME = "/admin/categories/page/1"


class AuthController:
    """Handles operator identity; the only writer of the session user."""

    def __init__(self, session_factory: sessionmaker, notices: NoticeChannel):
        self.session_factory = session_factory
        self.notices = notices

    def landing(self):
        """GET /"""
        return render_template(
            "index.html",
            logged_in=session.get(SESSION_USER_KEY) is not None,
            action_form=ActionForm()
        )

    def register_form(self):
        """GET /register"""
        return render_template("auth_register.html", form=RegisterForm(), notices=self.notices.drain())

    def register(self):
        """POST /register"""
        form = RegisterForm()
        if not form.validate_on_submit():
            self.notices.push(describe_form_errors(form))
            return redirect("/register", code=303)

        try:
            with get_unit_of_work(self.session_factory) as uow:
                AuthService(uow).register(form.username.data, form.password.data)
        except ValidationFailed as e:
            self.notices.push(e.notice)
            return redirect("/register", code=303)

        return redirect("/login", code=303)

    def login_form(self):
        """GET /login"""
        return render_template("auth_login.html", form=LoginForm(), notices=self.notices.drain())

    def login(self):
        """POST /login"""
        form = LoginForm()
        if not form.validate_on_submit():
            self.notices.push(describe_form_errors(form))
            return redirect("/login", code=303)

        with get_unit_of_work(self.session_factory) as uow:
            user = AuthService(uow).authenticate(form.username.data, form.password.data)
            user_id = user.id if user else None

        if user_id is None:
            self.notices.push("Invalid username or password.")
            return redirect("/login", code=303)

        session.clear()
        session[SESSION_USER_KEY] = user_id
        logger.info(f"User {user_id} logged in")
        return redirect(ADMIN_HOME, code=303)

    def logout(self):
        """POST /logout"""
        form = ActionForm()
        if form.validate_on_submit():
            session.pop(SESSION_USER_KEY, None)
        return redirect("/", code=303)
