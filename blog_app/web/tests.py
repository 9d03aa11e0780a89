import json
from pathlib import Path
from django.test import TestCase, override_settings
from django.urls import reverse


TESTDATA_DIR = Path(__file__).resolve().parent.parent / "testdata"


@override_settings(BLOG_CONTENT_DIR=TESTDATA_DIR, SHOW_UNPUBLISHED_POSTS=False)
class WebViewsTest(TestCase):
    def test_index_renders(self):
        resp = self.client.get(reverse("home"))
        self.assertEqual(resp.status_code, 200)
        self.assertIn("posts", resp.context)
        self.assertEqual([p.slug for p in resp.context["posts"]], ["second-post", "hello-world"])

    def test_blog_post_renders(self):
        resp = self.client.get(reverse("blog_post", args=["hello-world"]))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Hello, world")
        self.assertContains(resp, "March 14, 2021")
        self.assertContains(resp, 'class="heading-anchor"')
        self.assertNotContains(resp, "This post is not published yet.")

    def test_unknown_post_404(self):
        resp = self.client.get(reverse("blog_post", args=["does-not-exist"]))
        self.assertEqual(resp.status_code, 404)

    def test_draft_hidden(self):
        resp = self.client.get(reverse("blog_post", args=["draft-post"]))
        self.assertEqual(resp.status_code, 404)

    @override_settings(SHOW_UNPUBLISHED_POSTS=True)
    def test_draft_shown_with_warning(self):
        resp = self.client.get(reverse("blog_post", args=["draft-post"]))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "This post is not published yet.")


@override_settings(BLOG_CONTENT_DIR=TESTDATA_DIR)
class ThemeRenderingTest(TestCase):
    def test_default_theme_is_light(self):
        resp = self.client.get(reverse("home"))
        self.assertContains(resp, 'data-theme="light"')
        self.assertContains(resp, 'data-theme-source="default"')

    def test_default_theme_left_to_head_script(self):
        # Browsers without the client hint still get localStorage and matchMedia checked
        resp = self.client.get(reverse("home"))
        self.assertNotContains(resp, 'data-theme-resolved="server"')

    def test_system_signal_applies(self):
        resp = self.client.get(reverse("home"), HTTP_SEC_CH_PREFERS_COLOR_SCHEME='"dark"')
        self.assertContains(resp, 'data-theme="dark"')
        self.assertContains(resp, 'data-theme-source="system-setting"')
        self.assertContains(resp, 'data-theme-resolved="server"')

    def test_explicit_cookie_is_final(self):
        self.client.cookies["theme"] = "dark"
        resp = self.client.get(reverse("home"))
        self.assertContains(resp, 'data-theme-source="explicit-user-choice"')
        self.assertContains(resp, 'data-theme-resolved="server"')

    def test_bootstrap_script_precedes_body(self):
        html = self.client.get(reverse("home")).content.decode()
        script_at = html.index("localStorage.getItem")
        self.assertLess(script_at, html.index("</head>"))
        self.assertLess(script_at, html.index("<body"))
        self.assertLess(html.index("data-theme="), script_at)


@override_settings(BLOG_CONTENT_DIR=TESTDATA_DIR)
class SetThemeTest(TestCase):
    def test_set_theme_valid(self):
        resp = self.client.post(reverse("set_theme"), {"theme": "dark"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"theme": "dark"})
        self.assertEqual(resp.cookies["theme"].value, "dark")

    def test_set_theme_json(self):
        resp = self.client.post(
            reverse("set_theme"), json.dumps({"theme": "light"}), content_type="application/json"
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.cookies["theme"].value, "light")

    def test_set_theme_invalid(self):
        resp = self.client.post(reverse("set_theme"), {"theme": "invalid_theme"})
        self.assertEqual(resp.status_code, 400)
        self.assertNotIn("theme", resp.cookies)

    def test_set_theme_missing(self):
        resp = self.client.post(reverse("set_theme"), {})
        self.assertEqual(resp.status_code, 400)

    def test_set_theme_bad_json(self):
        resp = self.client.post(reverse("set_theme"), "{not json", content_type="application/json")
        self.assertEqual(resp.status_code, 400)

    def test_set_theme_requires_post(self):
        resp = self.client.get(reverse("set_theme"))
        self.assertEqual(resp.status_code, 405)

    def test_choice_survives_reload(self):
        self.client.post(reverse("set_theme"), {"theme": "dark"})
        # Light system setting loses to the explicit choice
        resp = self.client.get(reverse("home"), HTTP_SEC_CH_PREFERS_COLOR_SCHEME='"light"')
        self.assertContains(resp, 'data-theme="dark"')
        self.assertContains(resp, 'data-theme-source="explicit-user-choice"')

    def test_set_theme_idempotent(self):
        first = self.client.post(reverse("set_theme"), {"theme": "dark"})
        second = self.client.post(reverse("set_theme"), {"theme": "dark"})
        self.assertEqual(first.json(), second.json())
        self.assertEqual(self.client.cookies["theme"].value, "dark")
