import datetime as dt
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from sitegen.config import ContentConstants


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class PostMetadataError(ValueError):
    """Raised when a post source has missing or malformed front matter."""


@dataclass(frozen=True)
class BlogPost:
    slug: str
    title: str
    published_at: dt.date
    published: bool
    summary: str
    source_path: Path

    @property
    def url(self) -> str:
        return f"/blog/{self.slug}/"

    @property
    def display_date(self) -> str:
        return format_published_date(self.published_at)

    def read_body(self) -> str:
        _, body = parse_front_matter(self.source_path.read_text(encoding="utf-8"))
        return body


def format_published_date(value: dt.date) -> str:
    # strftime has no portable unpadded day, so it is substituted first
    return value.strftime(ContentConstants.DATE_FORMAT.replace("{day}", str(value.day)))


def parse_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split a ``---`` delimited YAML header from the post body.

    Text without a header yields an empty mapping and the text unchanged.
    """
    clean = text.lstrip("\ufeff")
    lines = clean.splitlines(keepends=True)
    if not lines or lines[0].strip() != "---":
        return {}, clean

    for idx in range(1, len(lines)):
        if lines[idx].strip() == "---":
            header = "".join(lines[1:idx])
            body = "".join(lines[idx + 1:])
            break
    else:
        raise PostMetadataError("Front matter is not closed with '---'")

    try:
        meta = yaml.safe_load(header) or {}
    except yaml.YAMLError as exc:
        raise PostMetadataError(f"Invalid YAML front matter: {exc}") from exc
    if not isinstance(meta, dict):
        raise PostMetadataError("Front matter must be a mapping")
    return meta, body


def _coerce_date(value: Any, path: Path) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise PostMetadataError(f"{path.name}: 'publishedAt' must be an ISO date, got {value!r}")


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "y", "on"}


def load_post(path: PathLike) -> BlogPost:
    path = Path(path)
    meta, _ = parse_front_matter(path.read_text(encoding="utf-8"))

    title = meta.get("title")
    if not title:
        raise PostMetadataError(f"{path.name}: missing 'title'")
    published_raw = meta.get("publishedAt", meta.get("published_at", meta.get("date")))
    if published_raw is None:
        raise PostMetadataError(f"{path.name}: missing 'publishedAt'")

    return BlogPost(
        slug=path.stem,
        title=str(title),
        published_at=_coerce_date(published_raw, path),
        published=_coerce_bool(meta.get("published", True)),
        summary=str(meta.get("summary") or ""),
        source_path=path,
    )


def _posts_dir(content_dir: Optional[PathLike]) -> Path:
    base = Path(content_dir) if content_dir is not None else ContentConstants.CONTENT_DIR
    return base / ContentConstants.POSTS_SUBDIR


def get_blog_posts_data(
    content_dir: Optional[PathLike] = None,
    include_unpublished: bool = False,
) -> List[BlogPost]:
    """Load every post under ``<content_dir>/blog``, newest first."""
    posts_dir = _posts_dir(content_dir)
    if not posts_dir.is_dir():
        logger.warning("Posts directory %s does not exist", posts_dir)
        return []

    posts = [
        load_post(path)
        for path in sorted(posts_dir.iterdir())
        if path.is_file() and path.suffix in ContentConstants.POST_EXTENSIONS
    ]
    if not include_unpublished:
        posts = [post for post in posts if post.published]
    # Stable on slug for posts sharing a date
    posts.sort(key=lambda post: (post.published_at, post.slug), reverse=True)
    return posts


def get_post(
    slug: str,
    content_dir: Optional[PathLike] = None,
    include_unpublished: bool = False,
) -> Optional[BlogPost]:
    for post in get_blog_posts_data(content_dir, include_unpublished=include_unpublished):
        if post.slug == slug:
            return post
    return None


def get_static_paths(
    content_dir: Optional[PathLike] = None,
    include_unpublished: bool = False,
) -> List[Dict[str, Dict[str, str]]]:
    return [
        {"params": {"slug": post.slug}}
        for post in get_blog_posts_data(content_dir, include_unpublished=include_unpublished)
    ]
