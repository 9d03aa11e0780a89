from django.test import SimpleTestCase
from prometheus_client import REGISTRY
from .metrics import record_page_like, record_page_view, record_theme_resolution, record_theme_toggle


def sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class MetricsRecordingTests(SimpleTestCase):
    def test_page_view_increments(self):
        before = sample("blog_page_views_total", slug="metrics-test")
        record_page_view("metrics-test")
        self.assertEqual(sample("blog_page_views_total", slug="metrics-test"), before + 1)

    def test_page_like_increment_and_ignore_non_positive(self):
        before = sample("blog_page_likes_total", slug="metrics-test")
        record_page_like("metrics-test", 3)
        record_page_like("metrics-test", 0)
        self.assertEqual(sample("blog_page_likes_total", slug="metrics-test"), before + 3)

    def test_theme_counters(self):
        before_res = sample("blog_theme_resolutions_total", source="default")
        before_tog = sample("blog_theme_toggles_total", theme="dark")
        record_theme_resolution("default")
        record_theme_toggle("dark")
        self.assertEqual(sample("blog_theme_resolutions_total", source="default"), before_res + 1)
        self.assertEqual(sample("blog_theme_toggles_total", theme="dark"), before_tog + 1)
