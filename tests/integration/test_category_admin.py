"""
HTTP tests for the category admin pages.
"""

import pytest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query

from tests.utils.seed import TEST_PAGE_SIZE, create_category, seed_categories, seed_posts

CANONICAL = "/admin/categories/page/1"


@pytest.fixture
def seeded(make_uow):
    """25 categories: pages of 10, 10 and 5."""
    uow = make_uow()
    categories = seed_categories(uow, 25)
    uow.commit()
    return categories


class TestCategoryListing:

    def test_admin_root_redirects_to_first_page(self, logged_in_client):
        response = logged_in_client.get("/admin")

        assert response.status_code == 303
        assert response.headers["Location"] == CANONICAL

    def test_first_page(self, logged_in_client, seeded):
        response = logged_in_client.get(CANONICAL)

        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert "News 1" in html
        assert f'href="/admin/categories/{seeded[TEST_PAGE_SIZE].id}/edit"' not in html
        assert "Page 1 of 3" in html

    def test_last_partial_page(self, logged_in_client, seeded):
        response = logged_in_client.get("/admin/categories/page/3")

        assert response.status_code == 200
        html = response.get_data(as_text=True)
        for category in seeded[20:]:
            assert f'href="/admin/categories/{category.id}/edit"' in html
        assert f'href="/admin/categories/{seeded[19].id}/edit"' not in html
        assert "Page 3 of 3" in html

    @pytest.mark.parametrize("page", ["0", "4", "999", "abc", "-1", "1.5"])
    def test_out_of_range_and_malformed_pages_redirect(self, logged_in_client, seeded, page):
        response = logged_in_client.get(f"/admin/categories/page/{page}")

        assert response.status_code == 303
        assert response.headers["Location"] == CANONICAL

    def test_empty_table_renders_first_page(self, logged_in_client):
        response = logged_in_client.get(CANONICAL)

        assert response.status_code == 200
        assert "No categories." in response.get_data(as_text=True)

    def test_empty_table_redirects_other_pages(self, logged_in_client):
        response = logged_in_client.get("/admin/categories/page/2")

        assert response.status_code == 303
        assert response.headers["Location"] == CANONICAL

    def test_storage_failure_renders_error_page(self, logged_in_client, seeded):
        failure = OperationalError("SELECT count(*)", {}, Exception("connection refused"))

        with patch.object(Query, "count", side_effect=failure):
            response = logged_in_client.get(CANONICAL)

        assert response.status_code == 500
        assert "Something went wrong" in response.get_data(as_text=True)


class TestCategoryMutations:

    def test_create(self, logged_in_client, make_uow):
        response = logged_in_client.post("/admin/categories/new", data={"name": "Tutorials"})

        assert response.status_code == 303
        assert response.headers["Location"] == CANONICAL
        assert make_uow().categories.get_by_name("Tutorials") is not None

    def test_invalid_create_shows_notice_once(self, logged_in_client, make_uow):
        response = logged_in_client.post("/admin/categories/new", data={"name": "x" * 51})

        assert response.status_code == 303
        assert response.headers["Location"] == CANONICAL
        assert make_uow().categories.count() == 0

        first = logged_in_client.get(CANONICAL).get_data(as_text=True)
        assert "name: Field must be between 1 and 50 characters long." in first

        second = logged_in_client.get(CANONICAL).get_data(as_text=True)
        assert "Field must be between" not in second

    def test_blank_name_is_rejected(self, logged_in_client, make_uow):
        logged_in_client.post("/admin/categories/new", data={"name": ""})

        html = logged_in_client.get(CANONICAL).get_data(as_text=True)
        assert "name: This field is required." in html
        assert make_uow().categories.count() == 0

    def test_duplicate_name_is_rejected(self, logged_in_client, make_uow):
        uow = make_uow()
        create_category(uow, "News")
        uow.commit()

        response = logged_in_client.post("/admin/categories/new", data={"name": "News"})

        assert response.status_code == 303
        assert "already exists" in logged_in_client.get(CANONICAL).get_data(as_text=True)
        assert make_uow().categories.count() == 1

    def test_edit_form_prefills_name(self, logged_in_client, make_uow):
        uow = make_uow()
        category = create_category(uow, "Drafts")
        seed_posts(uow, 2, category=category)
        uow.commit()

        response = logged_in_client.get(f"/admin/categories/{category.id}/edit")

        assert response.status_code == 200
        assert 'value="Drafts"' in response.get_data(as_text=True)

    def test_update(self, logged_in_client, make_uow):
        uow = make_uow()
        category = create_category(uow, "Old name")
        uow.commit()

        response = logged_in_client.post(
            f"/admin/categories/{category.id}/edit",
            data={"name": "New name"}
        )

        assert response.status_code == 303
        assert response.headers["Location"] == CANONICAL
        assert make_uow().categories.get_by_id(category.id).name == "New name"

    def test_update_missing_category_is_a_server_error(self, logged_in_client):
        response = logged_in_client.post("/admin/categories/404/edit", data={"name": "Ghost"})

        assert response.status_code == 500

    def test_delete(self, logged_in_client, make_uow):
        uow = make_uow()
        category = create_category(uow, "Doomed")
        posts = seed_posts(uow, 2, category=category)
        uow.commit()

        response = logged_in_client.post(f"/admin/categories/{category.id}/delete")

        assert response.status_code == 303
        check = make_uow()
        assert check.categories.get_by_id(category.id) is None
        assert all(check.posts.get_by_id(post.id).category_id is None for post in posts)

    def test_delete_missing_category_is_a_server_error(self, logged_in_client):
        assert logged_in_client.post("/admin/categories/404/delete").status_code == 500


class TestCategoryPosts:

    def test_lists_only_the_categorys_posts(self, logged_in_client, make_uow):
        uow = make_uow()
        news = create_category(uow, "News")
        seed_posts(uow, 3, category=news, title_prefix="Headline")
        seed_posts(uow, 3, title_prefix="Elsewhere")
        uow.commit()

        response = logged_in_client.get(f"/admin/categories/{news.id}/page/1")

        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert "Posts in News" in html
        assert "Headline 3" in html
        assert "Elsewhere" not in html

    def test_pages_past_the_end_redirect_within_the_category(self, logged_in_client, make_uow):
        uow = make_uow()
        news = create_category(uow, "News")
        seed_posts(uow, TEST_PAGE_SIZE + 1, category=news)
        uow.commit()

        assert logged_in_client.get(f"/admin/categories/{news.id}/page/2").status_code == 200
        response = logged_in_client.get(f"/admin/categories/{news.id}/page/3")

        assert response.status_code == 303
        assert response.headers["Location"] == f"/admin/categories/{news.id}/page/1"

    def test_empty_category_renders(self, logged_in_client, make_uow):
        uow = make_uow()
        empty = create_category(uow, "Empty")
        uow.commit()

        response = logged_in_client.get(f"/admin/categories/{empty.id}/page/1")

        assert response.status_code == 200
        assert "No posts." in response.get_data(as_text=True)

    def test_missing_category_is_a_server_error(self, logged_in_client):
        assert logged_in_client.get("/admin/categories/404/page/1").status_code == 500

    def test_missing_category_keeps_pending_notice(self, logged_in_client):
        logged_in_client.post("/admin/categories/new", data={"name": ""})

        assert logged_in_client.get("/admin/categories/999/page/1").status_code == 500

        html = logged_in_client.get(CANONICAL).get_data(as_text=True)
        assert "name: This field is required." in html

    def test_missing_category_past_first_page_is_a_server_error(self, logged_in_client):
        assert logged_in_client.get("/admin/categories/999/page/2").status_code == 500
