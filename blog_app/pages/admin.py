from django.contrib import admin
from .models import PageDetails

@admin.register(PageDetails)
class PageDetailsAdmin(admin.ModelAdmin):
    list_display = ("slug", "view_count", "likes", "updated_at")
    search_fields = ("slug",)
    readonly_fields = ("created_at", "updated_at")
