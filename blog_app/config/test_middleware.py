from django.test import SimpleTestCase, override_settings
from django.http import HttpResponse, JsonResponse
from prometheus_client import REGISTRY
from django.test.client import RequestFactory
from .middleware import RestrictAPIAccessMiddleware, ThemeMiddleware


def ok_response(_):
    return HttpResponse("ok")


def resolutions(source):
    return REGISTRY.get_sample_value("blog_theme_resolutions_total", {"source": source}) or 0.0


class RestrictAPIAccessMiddlewareTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    @override_settings(ENFORCE_FRONTEND_ORIGIN=True, FRONTEND_ALLOWED_ORIGINS=["http://allowed.com"])
    def test_allows_allowed_origin(self):
        mw = RestrictAPIAccessMiddleware(ok_response)
        req = self.factory.post("/api/page/hello/view/", HTTP_ORIGIN="http://allowed.com")
        resp = mw(req)
        self.assertEqual(resp.status_code, 200)

    @override_settings(ENFORCE_FRONTEND_ORIGIN=True, FRONTEND_ALLOWED_ORIGINS=["http://allowed.com"])
    def test_blocks_disallowed_origin(self):
        mw = RestrictAPIAccessMiddleware(ok_response)
        req = self.factory.post("/api/page/hello/view/", HTTP_ORIGIN="http://evil.com")
        resp = mw(req)
        self.assertEqual(resp.status_code, 403)

    @override_settings(ENFORCE_FRONTEND_ORIGIN=True, FRONTEND_ALLOWED_ORIGINS=["http://allowed.com/"])
    def test_falls_back_to_referer(self):
        mw = RestrictAPIAccessMiddleware(ok_response)
        req = self.factory.post("/api/page/hello/like/", HTTP_REFERER="http://allowed.com/blog/hello/")
        resp = mw(req)
        self.assertEqual(resp.status_code, 200)

    @override_settings(ENFORCE_FRONTEND_ORIGIN=True, FRONTEND_ALLOWED_ORIGINS=["http://allowed.com"])
    def test_reads_are_not_restricted(self):
        mw = RestrictAPIAccessMiddleware(ok_response)
        req = self.factory.get("/api/page/hello/", HTTP_ORIGIN="http://evil.com")
        resp = mw(req)
        self.assertEqual(resp.status_code, 200)

    @override_settings(ENFORCE_FRONTEND_ORIGIN=False, FRONTEND_ALLOWED_ORIGINS=["http://allowed.com"])
    def test_disabled_enforcement(self):
        mw = RestrictAPIAccessMiddleware(ok_response)
        req = self.factory.post("/api/page/hello/view/", HTTP_ORIGIN="http://evil.com")
        resp = mw(req)
        self.assertEqual(resp.status_code, 200)

    @override_settings(ENFORCE_FRONTEND_ORIGIN=True, FRONTEND_ALLOWED_ORIGINS=["http://allowed.com"])
    def test_non_api_paths_untouched(self):
        mw = RestrictAPIAccessMiddleware(ok_response)
        req = self.factory.post("/set-theme/", HTTP_ORIGIN="http://evil.com")
        resp = mw(req)
        self.assertEqual(resp.status_code, 200)


class ThemeMiddlewareTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_resolves_before_view_runs(self):
        seen = {}

        def get_response(request):
            seen["theme"] = (request.theme.value, request.theme.source)
            return HttpResponse("ok")

        mw = ThemeMiddleware(get_response)
        req = self.factory.get("/", HTTP_SEC_CH_PREFERS_COLOR_SCHEME='"dark"')
        mw(req)
        self.assertEqual(seen["theme"], ("dark", "system-setting"))

    def test_cookie_beats_client_hint(self):
        mw = ThemeMiddleware(ok_response)
        req = self.factory.get("/", HTTP_SEC_CH_PREFERS_COLOR_SCHEME='"light"')
        req.COOKIES["theme"] = "dark"
        mw(req)
        self.assertEqual(req.theme.value, "dark")
        self.assertEqual(req.theme.source, "explicit-user-choice")

    def test_requests_client_hint(self):
        mw = ThemeMiddleware(ok_response)
        resp = mw(self.factory.get("/"))
        self.assertEqual(resp["Accept-CH"], "Sec-CH-Prefers-Color-Scheme")
        self.assertEqual(resp["Critical-CH"], "Sec-CH-Prefers-Color-Scheme")
        self.assertIn("Sec-CH-Prefers-Color-Scheme", resp["Vary"])
        self.assertIn("Cookie", resp["Vary"])

    def test_toggle_during_request_sets_cookie(self):
        def get_response(request):
            request.theme.toggle("dark")
            return HttpResponse("ok")

        mw = ThemeMiddleware(get_response)
        resp = mw(self.factory.post("/set-theme/"))
        self.assertEqual(resp.cookies["theme"].value, "dark")

    def test_no_cookie_without_toggle(self):
        mw = ThemeMiddleware(ok_response)
        resp = mw(self.factory.get("/"))
        self.assertNotIn("theme", resp.cookies)

    def test_json_response_gets_cookie_but_no_client_hint(self):
        def get_response(request):
            request.theme.toggle("light")
            return JsonResponse({"theme": "light"})

        mw = ThemeMiddleware(get_response)
        resp = mw(self.factory.post("/set-theme/"))
        self.assertEqual(resp.cookies["theme"].value, "light")
        self.assertFalse(resp.has_header("Accept-CH"))
        self.assertFalse(resp.has_header("Critical-CH"))

    @override_settings(STATIC_URL="/static/", THEME_SKIP_PATH_PREFIXES=["/admin/"])
    def test_assets_and_admin_are_not_pages(self):
        before = resolutions("default")
        mw = ThemeMiddleware(ok_response)
        for path in ("/static/web/site.css", "/admin/"):
            resp = mw(self.factory.get(path))
            self.assertFalse(resp.has_header("Accept-CH"), path)
        plain = ThemeMiddleware(lambda _: HttpResponse("# HELP", content_type="text/plain; version=0.0.4"))
        resp = plain(self.factory.get("/metrics/"))
        self.assertFalse(resp.has_header("Accept-CH"))
        self.assertEqual(resolutions("default"), before)

    def test_html_page_counts_resolution(self):
        before = resolutions("default")
        ThemeMiddleware(ok_response)(self.factory.get("/"))
        self.assertEqual(resolutions("default"), before + 1)
