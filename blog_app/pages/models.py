from django.db import models, transaction
from django.db.models import F
from django.utils import timezone


class PageDetailsQuerySet(models.QuerySet):
    def increment(self, slug: str, field: str, amount: int = 1) -> "PageDetails":
        """Create the row for ``slug`` if needed and add ``amount`` to ``field`` in the database."""
        if field not in PageDetails.COUNTER_FIELDS:
            raise ValueError(f"Unknown counter field {field!r}")
        with transaction.atomic():
            page, _ = self.get_or_create(slug=slug)
            # update() bypasses auto_now
            self.filter(pk=page.pk).update(**{field: F(field) + amount, "updated_at": timezone.now()})
        page.refresh_from_db()
        return page


class PageDetails(models.Model):
    """View and like counters for one page of the site."""
    COUNTER_FIELDS = ("view_count", "likes")

    slug = models.SlugField(max_length=200, unique=True)
    view_count = models.PositiveIntegerField(default=0)
    likes = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PageDetailsQuerySet.as_manager()

    class Meta:
        ordering = ["slug"]
        verbose_name_plural = "page details"

    def __str__(self):
        return f"{self.slug} | views={self.view_count} likes={self.likes}"
