"""Controller for the post admin pages."""

from controllers.admin_controller import AdminController
from db.errors import ValidationFailed
from db.services.notice_service import describe_form_errors
from db.services.post_service import PostService
from forms import PostForm, ActionForm


class PostController(AdminController):
    """Listing, detail and CRUD handlers for posts."""

    resource = "admin/posts"

    def _post_form(self, all_categories, **kwargs) -> PostForm:
        form = PostForm(**kwargs)
        form.category_id.choices = [("", "(no category)")] + [
            (category.id, category.name) for category in all_categories
        ]
        return form

    def index(self, page):
        """GET /admin/posts/page/<page>"""
        return self.render_listing(
            "admin_posts_table.html",
            "posts",
            self.page_request(page)
        )

    def show(self, post_id: int):
        """GET /admin/posts/<id>"""
        with self.unit_of_work() as uow:
            post = PostService(uow).get(post_id)
        return self.render_page("admin_single_post.html", post=post)

    def new(self):
        """GET /admin/posts/new"""
        with self.unit_of_work() as uow:
            all_categories = uow.categories.get_all_ordered()
        return self.render_page("new_post.html", form=self._post_form(all_categories))

    def create(self):
        """POST /admin/posts/new"""
        with self.unit_of_work() as uow:
            all_categories = uow.categories.get_all_ordered()
        form = self._post_form(all_categories)
        if not form.validate_on_submit():
            return self.reject(describe_form_errors(form))

        try:
            with self.unit_of_work() as uow:
                PostService(uow).create(
                    form.title.data,
                    form.description.data,
                    form.category_id.data
                )
        except ValidationFailed as e:
            return self.reject(e.notice)

        return self.redirect_to(self.canonical_url)

    def edit(self, post_id: int):
        """GET /admin/posts/<id>/edit"""
        with self.unit_of_work() as uow:
            post = PostService(uow).get(post_id)
            all_categories = uow.categories.get_all_ordered()
        form = self._post_form(all_categories, obj=post)
        return self.render_page("update_post.html", form=form, post=post)

    def update(self, post_id: int):
        """POST /admin/posts/<id>/edit"""
        with self.unit_of_work() as uow:
            all_categories = uow.categories.get_all_ordered()
        form = self._post_form(all_categories)
        if not form.validate_on_submit():
            return self.reject(describe_form_errors(form))

        try:
            with self.unit_of_work() as uow:
                PostService(uow).update(
                    post_id,
                    form.title.data,
                    form.description.data,
                    form.category_id.data
                )
        except ValidationFailed as e:
            return self.reject(e.notice)

        return self.redirect_to(self.canonical_url)

    def destroy(self, post_id: int):
        """POST /admin/posts/<id>/delete"""
        form = ActionForm()
        if not form.validate_on_submit():
            return self.reject(describe_form_errors(form))

        with self.unit_of_work() as uow:
            PostService(uow).delete(post_id)

        return self.redirect_to(self.canonical_url)
