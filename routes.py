from flask import redirect, request
from sqlalchemy.orm import sessionmaker

from config import AppConfig
from controllers.auth_controller import AuthController
from controllers.category_controller import CategoryController
from controllers.post_controller import PostController
from db.services.notice_service import FlashNoticeChannel


def init_routes(app, config: AppConfig, session_factory: sessionmaker):
    """Initialize all Flask routes using MVC pattern"""

    notices = FlashNoticeChannel()
    auth_controller = AuthController(session_factory, notices)
    category_controller = CategoryController(config, session_factory, notices)
    post_controller = PostController(config, session_factory, notices)

    # ===== PUBLIC PAGES =====

    @app.route("/", methods=["GET"])
    def index():
        return auth_controller.landing()

    @app.route("/register", methods=["GET", "POST"])
    def register():
        if request.method == "POST":
            return auth_controller.register()
        return auth_controller.register_form()

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if request.method == "POST":
            return auth_controller.login()
        return auth_controller.login_form()

    @app.route("/logout", methods=["POST"])
    def logout():
        return auth_controller.logout()

    # ===== CATEGORIES =====

    @app.route("/admin", methods=["GET"])
    def admin_home():
        return redirect(category_controller.canonical_url, code=303)

    @app.route("/admin/categories/page/<page>", methods=["GET"])
    def admin_categories(page):
        """Paginated category table"""
        return category_controller.index(page)

    @app.route("/admin/categories/new", methods=["GET", "POST"])
    def new_category():
        if request.method == "POST":
            return category_controller.create()
        return category_controller.new()

    @app.route("/admin/categories/<int:category_id>/edit", methods=["GET", "POST"])
    def edit_category(category_id):
        if request.method == "POST":
            return category_controller.update(category_id)
        return category_controller.edit(category_id)

    @app.route("/admin/categories/<int:category_id>/delete", methods=["POST"])
    def delete_category(category_id):
        return category_controller.destroy(category_id)

    @app.route("/admin/categories/<int:category_id>/page/<page>", methods=["GET"])
    def admin_category_posts(category_id, page):
        """Paginated posts of a single category"""
        return category_controller.category_posts(category_id, page)

    # ===== POSTS =====

    @app.route("/admin/posts/page/<page>", methods=["GET"])
    def admin_posts(page):
        """Paginated post table"""
        return post_controller.index(page)

    @app.route("/admin/posts/new", methods=["GET", "POST"])
    def new_post():
        if request.method == "POST":
            return post_controller.create()
        return post_controller.new()

    @app.route("/admin/posts/<int:post_id>", methods=["GET"])
    def show_post(post_id):
        return post_controller.show(post_id)

    @app.route("/admin/posts/<int:post_id>/edit", methods=["GET", "POST"])
    def edit_post(post_id):
        if request.method == "POST":
            return post_controller.update(post_id)
        return post_controller.edit(post_id)

    @app.route("/admin/posts/<int:post_id>/delete", methods=["POST"])
    def delete_post(post_id):
        return post_controller.destroy(post_id)
