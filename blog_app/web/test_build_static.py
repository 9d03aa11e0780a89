import tempfile
from io import StringIO
from pathlib import Path
from django.core.management import call_command
from django.test import TestCase, override_settings


TESTDATA_DIR = Path(__file__).resolve().parent.parent / "testdata"


@override_settings(BLOG_CONTENT_DIR=TESTDATA_DIR, SHOW_UNPUBLISHED_POSTS=False)
class BuildStaticTest(TestCase):
    def test_writes_index_and_posts(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            out = StringIO()
            call_command("build_static", output=tmpdir, stdout=out)
            root = Path(tmpdir)
            self.assertTrue((root / "index.html").exists())
            self.assertTrue((root / "blog" / "hello-world" / "index.html").exists())
            self.assertTrue((root / "blog" / "second-post" / "index.html").exists())
            self.assertFalse((root / "blog" / "draft-post").exists())
            page = (root / "blog" / "hello-world" / "index.html").read_text(encoding="utf-8")
            self.assertIn("Built 3 pages", out.getvalue())

        # No visitor at build time: the head script decides the theme
        self.assertNotIn('data-theme-resolved="server"', page)
        self.assertLess(page.index("localStorage.getItem"), page.index("<body"))
