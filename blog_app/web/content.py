from typing import Dict, List, Optional

from django.conf import settings

from sitegen.config import ContentConstants
from sitegen.posts import BlogPost, get_blog_posts_data, get_post, get_static_paths


def content_dir():
    return getattr(settings, "BLOG_CONTENT_DIR", ContentConstants.CONTENT_DIR)


def show_unpublished() -> bool:
    # Drafts are visible while developing, hidden on the live site
    return bool(getattr(settings, "SHOW_UNPUBLISHED_POSTS", settings.DEBUG))


def blog_posts() -> List[BlogPost]:
    return get_blog_posts_data(content_dir(), include_unpublished=show_unpublished())


def blog_post(slug: str) -> Optional[BlogPost]:
    return get_post(slug, content_dir(), include_unpublished=show_unpublished())


def static_paths() -> List[Dict[str, Dict[str, str]]]:
    return get_static_paths(content_dir(), include_unpublished=show_unpublished())


def is_tracked_page(slug: str) -> bool:
    """Counters exist for every post and for the extra pages listed in settings."""
    if slug in getattr(settings, "TRACKED_PAGE_SLUGS", []):
        return True
    return blog_post(slug) is not None
