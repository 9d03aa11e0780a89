from datetime import timedelta
from django.test import TestCase
from rest_framework.test import APIClient
from .models import PageDetails


class PageDetailsModelTest(TestCase):
    def test_increment_creates_row(self):
        page = PageDetails.objects.increment("hello-world", "view_count")
        self.assertEqual(page.view_count, 1)
        self.assertEqual(page.likes, 0)
        self.assertEqual(PageDetails.objects.count(), 1)

    def test_increment_accumulates(self):
        PageDetails.objects.increment("hello-world", "likes", 2)
        page = PageDetails.objects.increment("hello-world", "likes", 3)
        self.assertEqual(page.likes, 5)
        self.assertEqual(PageDetails.objects.filter(slug="hello-world").count(), 1)

    def test_increment_refreshes_updated_at(self):
        page = PageDetails.objects.increment("home", "view_count")
        stale = page.updated_at - timedelta(hours=1)
        PageDetails.objects.filter(pk=page.pk).update(updated_at=stale)
        page = PageDetails.objects.increment("home", "view_count")
        self.assertEqual(page.view_count, 2)
        self.assertGreater(page.updated_at, stale)

    def test_increment_rejects_unknown_field(self):
        with self.assertRaises(ValueError):
            PageDetails.objects.increment("hello-world", "slug")


class PageDetailsViewSetTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        # Seed some counters
        PageDetails.objects.create(slug="first-post", view_count=4, likes=1)
        PageDetails.objects.create(slug="second-post", view_count=2)

    def test_list_pages(self):
        resp = self.client.get("/api/pages/")
        self.assertEqual(resp.status_code, 200)
        self.assertIsInstance(resp.data, list)
        self.assertEqual([p["slug"] for p in resp.data], ["first-post", "second-post"])

    def test_retrieve_by_slug(self):
        resp = self.client.get("/api/pages/first-post/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["view_count"], 4)
        self.assertEqual(resp.data["likes"], 1)

    def test_read_only(self):
        resp = self.client.post("/api/pages/", {"slug": "new"})
        self.assertEqual(resp.status_code, 405)
