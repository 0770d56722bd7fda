"""Controller for the category admin pages."""

from controllers.admin_controller import AdminController
from db.errors import ValidationFailed
from db.services.category_service import CategoryService
from db.services.notice_service import describe_form_errors
from db.services.post_service import PostService
from forms import CategoryForm, ActionForm


class CategoryController(AdminController):
    """Listing and CRUD handlers for categories."""

    resource = "admin/categories"

    def index(self, page):
        """GET /admin/categories/page/<page>"""
        return self.render_listing(
            "admin_category_table.html",
            "categories",
            self.page_request(page)
        )

    def category_posts(self, category_id: int, page):
        """GET /admin/categories/<id>/page/<page> - posts of one category."""
        def load_category(uow):
            return {"category": CategoryService(uow).get(category_id)}

        return self.render_listing(
            "admin_category_posts.html",
            "posts",
            self.page_request(page, filter_key=category_id),
            context_loader=load_category
        )

    def new(self):
        """GET /admin/categories/new"""
        return self.render_page("new_category.html", form=CategoryForm())

    def create(self):
        """POST /admin/categories/new"""
        form = CategoryForm()
        if not form.validate_on_submit():
            return self.reject(describe_form_errors(form))

        try:
            with self.unit_of_work() as uow:
                CategoryService(uow).create(form.name.data)
        except ValidationFailed as e:
            return self.reject(e.notice)

        return self.redirect_to(self.canonical_url)

    def edit(self, category_id: int):
        """GET /admin/categories/<id>/edit"""
        with self.unit_of_work() as uow:
            category = CategoryService(uow).get(category_id)
            post_count = PostService(uow).count_in_category(category_id)
        form = CategoryForm(obj=category)
        return self.render_page(
            "update_category.html",
            form=form,
            category=category,
            post_count=post_count
        )

    def update(self, category_id: int):
        """POST /admin/categories/<id>/edit"""
        form = CategoryForm()
        if not form.validate_on_submit():
            return self.reject(describe_form_errors(form))

        try:
            with self.unit_of_work() as uow:
                CategoryService(uow).update(category_id, form.name.data)
        except ValidationFailed as e:
            return self.reject(e.notice)

        return self.redirect_to(self.canonical_url)

    def destroy(self, category_id: int):
        """POST /admin/categories/<id>/delete"""
        form = ActionForm()
        if not form.validate_on_submit():
            return self.reject(describe_form_errors(form))

        with self.unit_of_work() as uow:
            CategoryService(uow).delete(category_id)

        return self.redirect_to(self.canonical_url)
