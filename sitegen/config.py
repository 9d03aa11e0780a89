from pathlib import Path
from typing import List, Tuple


class ContentConstants:
    # Repository-level directory holding post sources under ``blog/``.
    CONTENT_DIR: Path = Path(__file__).resolve().parent.parent / "content"
    POSTS_SUBDIR: str = "blog"
    POST_EXTENSIONS: Tuple[str, ...] = (".md", ".mdx")

    SITE_TITLE: str = "Blog"
    AUTHOR_NAME: str = "Sreetam Das"
    AUTHOR_AVATAR: str = "SreetamDas.jpg"

    # "Month D, YYYY" as rendered under each post title.
    DATE_FORMAT: str = "%B {day}, %Y"

    MARKDOWN_EXTENSIONS: List[str] = [
        "fenced_code",
        "codehilite",
        "tables",
        "toc",
        "sane_lists",
    ]
    CODE_BLOCK_CLASS: str = "code-block"
    PYGMENTS_STYLE: str = "monokai"

    # Heading levels that receive a self-link anchor.
    LINKED_HEADING_TAGS: Tuple[str, ...] = ("h1", "h2", "h3")
    # First characters of an href that keep the link in the current tab.
    INTERNAL_LINK_PREFIXES: Tuple[str, ...] = ("/", "#")
