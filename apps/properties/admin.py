"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Amenity, Property, PropertyPhoto


@admin.register(Amenity)
class AmenityAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "icon")
    list_filter = ("category",)
    search_fields = ("name",)


class PropertyPhotoInline(admin.TabularInline):
    model = PropertyPhoto
    extra = 0
    fields = ("url", "caption", "display_order")


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "city",
        "property_type",
        "status",
        "monthly_price_cents",
        "max_guests",
        "host",
        "created_at",
    )
    list_filter = ("status", "property_type", "city", "instant_book", "cancellation_policy")
    search_fields = ("title", "city", "address_line1", "host__email")
    filter_horizontal = ("amenities",)
    inlines = [PropertyPhotoInline]
    readonly_fields = ("published_at", "created_at", "updated_at")
