import logging
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.http import Http404
from django.test.client import RequestFactory

from web.content import static_paths
from web.views import blog_post, index


logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = (
        "Render the index and every blog post to static HTML. Pages are rendered "
        "without a visitor, so the theme is resolved by the inline head script."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--output",
            default=None,
            help="Directory to write pages to (default: settings.STATIC_BUILD_DIR).",
        )

    def handle(self, *args, **options):
        output = Path(options["output"] or getattr(settings, "STATIC_BUILD_DIR", "out"))
        factory = RequestFactory()

        pages = [("/", index, {})]
        for entry in static_paths():
            slug = entry["params"]["slug"]
            pages.append((f"/blog/{slug}/", blog_post, {"slug": slug}))

        for url, view, kwargs in pages:
            request = factory.get(url)
            try:
                response = view(request, **kwargs)
            except Http404 as exc:
                raise CommandError(f"Could not render {url}: {exc}") from exc
            if response.status_code != 200:
                raise CommandError(f"Rendering {url} returned HTTP {response.status_code}")

            target = output / url.strip("/") / "index.html" if url != "/" else output / "index.html"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(response.content)
            logger.debug("Wrote %s", target)
            self.stdout.write(f"Wrote {target}")

        self.stdout.write(self.style.SUCCESS(f"Built {len(pages)} pages into {output}"))
