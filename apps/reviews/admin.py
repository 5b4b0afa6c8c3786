"""Admin registration for reviews."""

from __future__ import annotations

from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "property", "reviewer", "review_type", "overall_rating", "status", "created_at")
    list_filter = ("status", "review_type", "overall_rating")
    search_fields = ("property__title", "reviewer__email", "comment")
    list_editable = ("status",)
    readonly_fields = ("booking", "property", "reviewer", "reviewee", "review_type", "created_at", "updated_at")
