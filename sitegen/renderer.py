"""
Markdown rendering for blog posts.

The post body is plain Markdown; the element mapping below gives headings,
links, images, lists and code blocks the same markup the site templates style:

- h1-h3 carry a self-link anchor so readers can share a section
- off-site links open in a new tab
- images load lazily
- fenced code is highlighted by Pygments
"""
import xml.etree.ElementTree as etree
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from sitegen.config import ContentConstants
from sitegen.posts import BlogPost


@dataclass(frozen=True)
class RenderedPost:
    html: str
    toc_tokens: List[Dict[str, Any]]


def is_internal_link(href: Optional[str]) -> bool:
    return bool(href) and href[0] in "".join(ContentConstants.INTERNAL_LINK_PREFIXES)


def _add_class(el: etree.Element, css_class: str) -> None:
    existing = el.get("class")
    el.set("class", f"{existing} {css_class}" if existing else css_class)


class BlogComponentsTreeprocessor(Treeprocessor):
    def run(self, root: etree.Element) -> None:
        for el in list(root.iter()):
            tag = el.tag
            if tag in ContentConstants.LINKED_HEADING_TAGS:
                self._link_heading(el)
            elif tag == "a":
                self._external_link(el)
            elif tag == "img":
                el.set("loading", "lazy")
                _add_class(el, "post-image")
            elif tag == "ul":
                _add_class(el, "post-list post-list-unordered")
            elif tag == "ol":
                _add_class(el, "post-list post-list-ordered")
            elif tag == "p":
                _add_class(el, "post-paragraph")

    @staticmethod
    def _link_heading(el: etree.Element) -> None:
        heading_id = el.get("id")
        if not heading_id:
            return
        _add_class(el, "linked-heading")
        anchor = etree.Element("a")
        anchor.set("class", "heading-anchor")
        anchor.set("href", f"#{heading_id}")
        anchor.set("aria-label", heading_id)
        anchor.text = "#"
        # Anchor goes before the heading text
        anchor.tail = el.text
        el.text = None
        el.insert(0, anchor)

    @staticmethod
    def _external_link(el: etree.Element) -> None:
        if el.get("class") == "heading-anchor" or is_internal_link(el.get("href")):
            return
        el.set("target", "_blank")
        el.set("rel", "noopener noreferrer")


class BlogComponentsExtension(Extension):
    def extendMarkdown(self, md):
        # toc assigns heading ids at priority 5; this has to run after it
        md.treeprocessors.register(BlogComponentsTreeprocessor(md), "blog_components", 4)


def _markdown_renderer() -> markdown.Markdown:
    return markdown.Markdown(
        extensions=[*ContentConstants.MARKDOWN_EXTENSIONS, BlogComponentsExtension()],
        extension_configs={
            "codehilite": {
                "css_class": ContentConstants.CODE_BLOCK_CLASS,
                "guess_lang": False,
                "pygments_style": ContentConstants.PYGMENTS_STYLE,
            },
        },
    )


def render_markdown(text: str) -> RenderedPost:
    md = _markdown_renderer()
    html = md.convert(text)
    return RenderedPost(html=html, toc_tokens=list(getattr(md, "toc_tokens", [])))


def render_post(post: BlogPost) -> RenderedPost:
    return render_markdown(post.read_body())
