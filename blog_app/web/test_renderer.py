from django.test import SimpleTestCase
from sitegen.renderer import is_internal_link, render_markdown


class RendererTests(SimpleTestCase):
    def test_headings_get_anchor_links(self):
        html = render_markdown("## Getting started\n").html
        self.assertIn('id="getting-started"', html)
        self.assertIn('href="#getting-started"', html)
        self.assertIn('aria-label="getting-started"', html)
        self.assertIn("linked-heading", html)
        self.assertIn("Getting started</h2>", html)

    def test_h4_not_linked(self):
        html = render_markdown("#### Small\n").html
        self.assertNotIn("heading-anchor", html)

    def test_external_links_open_new_tab(self):
        html = render_markdown("[x](https://example.com)").html
        self.assertIn('target="_blank"', html)
        self.assertIn('rel="noopener noreferrer"', html)

    def test_internal_links_stay(self):
        for href in ("/about/", "#setup"):
            html = render_markdown(f"[x]({href})").html
            self.assertNotIn("target=", html)

    def test_is_internal_link(self):
        self.assertTrue(is_internal_link("/blog/"))
        self.assertTrue(is_internal_link("#top"))
        self.assertFalse(is_internal_link("mailto:me@example.com"))
        self.assertFalse(is_internal_link(""))
        self.assertFalse(is_internal_link(None))

    def test_images_and_lists(self):
        html = render_markdown("![alt](/a.png)\n\n- a\n- b\n\n1. one\n").html
        self.assertIn('loading="lazy"', html)
        self.assertIn("post-image", html)
        self.assertIn("post-list-unordered", html)
        self.assertIn("post-list-ordered", html)

    def test_code_blocks_highlighted(self):
        html = render_markdown('```python\nprint("hi")\n```\n').html
        self.assertIn('class="code-block"', html)
        self.assertIn("<span", html)

    def test_toc_tokens(self):
        rendered = render_markdown("# One\n\n## Two\n")
        self.assertEqual(rendered.toc_tokens[0]["id"], "one")
        self.assertEqual(rendered.toc_tokens[0]["children"][0]["id"], "two")
