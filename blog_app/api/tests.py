from pathlib import Path
from django.urls import reverse
from django.test import override_settings
from rest_framework.test import APITestCase
from unittest.mock import patch
from pages.models import PageDetails


TESTDATA_DIR = Path(__file__).resolve().parent.parent / "testdata"


@override_settings(BLOG_CONTENT_DIR=TESTDATA_DIR, SHOW_UNPUBLISHED_POSTS=False, TRACKED_PAGE_SLUGS=["home"])
class PageDetailsViewTest(APITestCase):
    def test_unseen_page_reports_zeros(self):
        response = self.client.get(reverse("page-details", args=["hello-world"]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"slug": "hello-world", "view_count": 0, "likes": 0})
        # Reading does not create a row
        self.assertFalse(PageDetails.objects.exists())

    def test_existing_counts(self):
        PageDetails.objects.create(slug="hello-world", view_count=7, likes=2)
        response = self.client.get(reverse("page-details", args=["hello-world"]))
        self.assertEqual(response.data["view_count"], 7)
        self.assertEqual(response.data["likes"], 2)

    def test_unknown_slug(self):
        response = self.client.get(reverse("page-details", args=["nope"]))
        self.assertEqual(response.status_code, 404)

    def test_draft_is_unknown_when_hidden(self):
        response = self.client.get(reverse("page-details", args=["draft-post"]))
        self.assertEqual(response.status_code, 404)


@override_settings(BLOG_CONTENT_DIR=TESTDATA_DIR, SHOW_UNPUBLISHED_POSTS=False, TRACKED_PAGE_SLUGS=["home"])
class PageViewViewTest(APITestCase):
    def test_views_accumulate(self):
        url = reverse("page-view", args=["hello-world"])
        self.client.post(url)
        response = self.client.post(url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["view_count"], 2)
        self.assertEqual(PageDetails.objects.get(slug="hello-world").view_count, 2)

    def test_tracked_non_post_page(self):
        response = self.client.post(reverse("page-view", args=["home"]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["view_count"], 1)

    def test_unknown_slug_not_created(self):
        response = self.client.post(reverse("page-view", args=["nope"]))
        self.assertEqual(response.status_code, 404)
        self.assertFalse(PageDetails.objects.filter(slug="nope").exists())

    @patch("api.views.record_page_view", side_effect=RuntimeError("registry down"))
    def test_metrics_failure_does_not_fail_request(self, _mock_record):
        with self.assertLogs("api.views", level="ERROR"):
            response = self.client.post(reverse("page-view", args=["hello-world"]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["view_count"], 1)


@override_settings(BLOG_CONTENT_DIR=TESTDATA_DIR, SHOW_UNPUBLISHED_POSTS=False, MAX_LIKES_PER_REQUEST=5)
class PageLikeViewTest(APITestCase):
    def test_default_single_like(self):
        response = self.client.post(reverse("page-like", args=["hello-world"]), {}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["likes"], 1)
        self.assertEqual(response.data["view_count"], 0)

    def test_increment(self):
        url = reverse("page-like", args=["hello-world"])
        self.client.post(url, {"increment": 2}, format="json")
        response = self.client.post(url, {"increment": 3})
        self.assertEqual(response.data["likes"], 5)

    def test_increment_over_limit(self):
        response = self.client.post(reverse("page-like", args=["hello-world"]), {"increment": 6}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertFalse(PageDetails.objects.exists())

    def test_non_integer(self):
        response = self.client.post(reverse("page-like", args=["hello-world"]), {"increment": "lots"})
        self.assertEqual(response.status_code, 400)

    def test_unknown_slug(self):
        response = self.client.post(reverse("page-like", args=["nope"]), {}, format="json")
        self.assertEqual(response.status_code, 404)


class MetricsEndpointTest(APITestCase):
    def test_exposes_counters(self):
        response = self.client.get(reverse("metrics"))
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"blog_page_views_total", response.content)


class SchemaTest(APITestCase):
    def test_schema_lists_counter_routes(self):
        response = self.client.get(reverse("schema"))
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"/api/page/{slug}/like/", response.content)
