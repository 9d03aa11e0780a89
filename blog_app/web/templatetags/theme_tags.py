from django import template
from django.utils.html import format_html
from django.utils.safestring import mark_safe

from web.theme import SOURCE_DEFAULT, bootstrap_script

register = template.Library()


@register.simple_tag
def theme_bootstrap_script():
    """Inline, render-blocking script; must sit in <head> before any stylesheet-dependent markup."""
    return format_html("<script>{}</script>", mark_safe(bootstrap_script()))


@register.simple_tag
def theme_root_attrs(theme):
    """
    ``data-theme`` attributes for <html> when rendering inside a request.

    A default-tier result only means the server saw neither a cookie nor a
    client hint, so it is written as provisional and the head script still
    checks localStorage and matchMedia.
    """
    if theme is None:
        return ""
    if theme.source == SOURCE_DEFAULT:
        return format_html(
            ' data-theme="{}" data-theme-source="{}"',
            theme.value,
            theme.source,
        )
    return format_html(
        ' data-theme="{}" data-theme-source="{}" data-theme-resolved="server"',
        theme.value,
        theme.source,
    )
