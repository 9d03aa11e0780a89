from sitegen.config import ContentConstants


def site(request):
    """Expose the request's resolved theme and site identity to templates.

    ``theme`` is None when rendering outside a request cycle (static builds);
    templates then leave resolution to the bootstrap script.
    """
    return {
        "theme": getattr(request, "theme", None),
        "site_title": ContentConstants.SITE_TITLE,
        "author_name": ContentConstants.AUTHOR_NAME,
        "author_avatar": ContentConstants.AUTHOR_AVATAR,
    }
