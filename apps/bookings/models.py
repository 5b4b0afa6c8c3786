"""Booking domain models for StudentStay."""

from __future__ import annotations

import builtins

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange


class Booking(models.Model):
    """A guest's stay at a property for the nights `[check_in, check_out)`."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending host approval")
        CONFIRMED = "confirmed", _("Confirmed")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Awaiting payment")
        PAID = "paid", _("Paid")
        REFUNDED = "refunded", _("Refunded")

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    guest = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings_as_guest",
    )
    # Copied from the property at creation time
    host = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings_as_host",
    )
    check_in = models.DateField()
    check_out = models.DateField()
    nights = models.PositiveIntegerField()
    guest_count = models.PositiveSmallIntegerField(default=1)
    subtotal_cents = models.PositiveIntegerField()
    service_fee_cents = models.PositiveIntegerField()
    cleaning_fee_cents = models.PositiveIntegerField(default=0)
    security_deposit_cents = models.PositiveIntegerField(default=0)
    total_cents = models.PositiveIntegerField()
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    special_requests = models.TextField(blank=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    cancelled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
            models.CheckConstraint(
                condition=models.Q(
                    total_cents=models.F("subtotal_cents")
                    + models.F("service_fee_cents")
                    + models.F("cleaning_fee_cents")
                ),
                name="booking_total_matches_breakdown",
            ),
        ]
        indexes = [
            models.Index(fields=["property", "check_in", "check_out"], name="booking_property_dates_idx"),
            models.Index(fields=["guest", "-created_at"], name="booking_guest_created_idx"),
            models.Index(fields=["host", "-created_at"], name="booking_host_created_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for property {self.property_id} ({self.check_in} - {self.check_out})"

    @builtins.property
    def date_range(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)

    @builtins.property
    def is_active(self) -> bool:
        return self.status != self.Status.CANCELLED

    def is_participant(self, user) -> bool:
        return user is not None and user.pk in (self.guest_id, self.host_id)

    def mark_cancelled(self, user, reason: str = "") -> None:
        self.status = self.Status.CANCELLED
        self.cancelled_by = user
        self.cancelled_at = timezone.now()
        self.cancellation_reason = reason
        update_fields = ["status", "cancelled_by", "cancelled_at", "cancellation_reason", "updated_at"]
        if self.payment_status == self.PaymentStatus.PAID:
            self.payment_status = self.PaymentStatus.REFUNDED
            update_fields.append("payment_status")
        self.save(update_fields=update_fields)

    def mark_confirmed(self) -> None:
        self.status = self.Status.CONFIRMED
        self.confirmed_at = timezone.now()
        self.save(update_fields=["status", "confirmed_at", "updated_at"])

    def mark_paid(self) -> None:
        self.payment_status = self.PaymentStatus.PAID
        self.save(update_fields=["payment_status", "updated_at"])


class BookingCalendar(models.Model):
    """One row per property and night; the source of truth for availability.

    A row is `booked` exactly when an active booking references it.
    `available` rows never carry a booking.
    """

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        BOOKED = "booked", _("Booked")
        BLOCKED = "blocked", _("Blocked by host")

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="calendar",
    )
    date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.AVAILABLE,
    )
    booking = models.ForeignKey(
        Booking,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="calendar_days",
    )
    note = models.CharField(max_length=255, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Calendar day")
        verbose_name_plural = _("Calendar days")
        ordering = ["property", "date"]
        constraints = [
            models.UniqueConstraint(fields=["property", "date"], name="calendar_unique_property_date"),
            models.CheckConstraint(
                condition=~models.Q(status="available") | models.Q(booking__isnull=True),
                name="calendar_available_has_no_booking",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.property_id} {self.date}: {self.status}"
