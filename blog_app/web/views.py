import json
import logging
from django.shortcuts import render
from django.http import Http404, JsonResponse, HttpResponseBadRequest
from django.views.decorators.http import require_POST
from django.middleware.csrf import get_token
from api.metrics import record_theme_toggle
from sitegen.renderer import render_post
from .content import blog_posts, blog_post as find_blog_post


logger = logging.getLogger(__name__)


def index(request):
    posts = blog_posts()
    # Ensure CSRF token present for the theme toggle's fetch call
    get_token(request)
    return render(
        request,
        "web/index.html",
        {"posts": posts, "page_slug": "home"},
    )


def blog_post(request, slug):
    post = find_blog_post(slug)
    if post is None:
        raise Http404(f"No post named {slug!r}")
    rendered = render_post(post)
    get_token(request)
    return render(
        request,
        "web/blog_post.html",
        {
            "post": post,
            "content": rendered.html,
            "toc": rendered.toc_tokens,
            "page_slug": post.slug,
        },
    )


@require_POST
def set_theme(request):
    theme = request.POST.get("theme")
    if theme is None and request.headers.get("Content-Type", "").startswith("application/json"):
        try:
            payload = json.loads((request.body or b"").decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            return HttpResponseBadRequest("Invalid JSON")
        theme = payload.get("theme") if isinstance(payload, dict) else None

    resolver = getattr(request, "theme", None)
    if resolver is None:
        logger.error("set_theme called without ThemeMiddleware installed")
        return HttpResponseBadRequest("Theme resolution unavailable")
    try:
        value = resolver.toggle(theme)
    except ValueError:
        return HttpResponseBadRequest("Invalid theme")

    try:
        record_theme_toggle(value)
    except Exception:
        logger.exception("Failed to record Prometheus metrics for theme toggle")
    return JsonResponse({"theme": value})
