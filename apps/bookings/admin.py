"""Admin registration for bookings.

Status, dates and parties change only through the booking services, which
keep the calendar in step. The admin shows them read-only.
"""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, BookingCalendar


class BookingCalendarInline(admin.TabularInline):
    model = BookingCalendar
    extra = 0
    fields = ("date", "status", "note")
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "property",
        "guest",
        "status",
        "payment_status",
        "check_in",
        "check_out",
        "total_cents",
        "created_at",
    )
    list_filter = ("status", "payment_status", "check_in")
    search_fields = ("property__title", "guest__email", "host__email")
    inlines = [BookingCalendarInline]
    readonly_fields = (
        "property",
        "guest",
        "host",
        "check_in",
        "check_out",
        "status",
        "payment_status",
        "confirmed_at",
        "cancelled_by",
        "cancelled_at",
        "nights",
        "subtotal_cents",
        "service_fee_cents",
        "cleaning_fee_cents",
        "security_deposit_cents",
        "total_cents",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request):
        return False


@admin.register(BookingCalendar)
class BookingCalendarAdmin(admin.ModelAdmin):
    list_display = ("property", "date", "status", "booking")
    list_filter = ("status",)
    search_fields = ("property__title",)
    date_hierarchy = "date"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
