"""Property domain models for StudentStay.

Listings are priced per month in integer minor units (cents). Bookings copy
the relevant amounts at creation time, so editing a listing never changes
existing bookings.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Amenity(models.Model):
    """Amenity that can be attached to a listing."""

    class Category(models.TextChoices):
        BASIC = "basic", _("Basic")
        STUDY = "study", _("Study")
        SAFETY = "safety", _("Safety")
        EXTRA = "extra", _("Extra")

    name = models.CharField(max_length=100, unique=True)
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.BASIC,
    )
    icon = models.CharField(max_length=100, blank=True)

    class Meta:
        verbose_name = _("Amenity")
        verbose_name_plural = _("Amenities")
        ordering = ["category", "name"]

    def __str__(self) -> str:
        return self.name


class Property(models.Model):
    """A room or home listed for medium-term student stays."""

    class Status(models.TextChoices):
        DRAFT = "draft", _("Draft")
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")

    class PropertyType(models.TextChoices):
        APARTMENT = "apartment", _("Apartment")
        HOUSE = "house", _("House")
        ROOM = "room", _("Private room")
        STUDIO = "studio", _("Studio")
        DORMITORY = "dormitory", _("Dormitory")

    class CancellationPolicy(models.TextChoices):
        FLEXIBLE = "flexible", _("Flexible")
        MODERATE = "moderate", _("Moderate")
        STRICT = "strict", _("Strict")

    host = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    property_type = models.CharField(
        max_length=20,
        choices=PropertyType.choices,
        default=PropertyType.APARTMENT,
    )
    address_line1 = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    bedrooms = models.PositiveSmallIntegerField(default=1)
    bathrooms = models.PositiveSmallIntegerField(default=1)
    max_guests = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    monthly_price_cents = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    cleaning_fee_cents = models.PositiveIntegerField(default=0)
    security_deposit_cents = models.PositiveIntegerField(default=0)
    minimum_stay_weeks = models.PositiveSmallIntegerField(
        default=0,
        help_text=_("0 means no minimum."),
    )
    maximum_stay_months = models.PositiveSmallIntegerField(
        default=12,
        validators=[MinValueValidator(1), MaxValueValidator(60)],
    )
    instant_book = models.BooleanField(
        default=False,
        help_text=_("Bookings are confirmed immediately without host approval."),
    )
    cancellation_policy = models.CharField(
        max_length=20,
        choices=CancellationPolicy.choices,
        default=CancellationPolicy.MODERATE,
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.DRAFT,
    )
    amenities = models.ManyToManyField(Amenity, blank=True, related_name="properties")
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "city"], name="property_status_city_idx"),
            models.Index(fields=["monthly_price_cents"], name="property_monthly_price_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.city})"

    @property
    def is_bookable(self) -> bool:
        return self.status == self.Status.ACTIVE

    def save(self, *args, **kwargs):  # type: ignore
        if self.status == self.Status.ACTIVE and self.published_at is None:
            self.published_at = timezone.now()
        super().save(*args, **kwargs)


class PropertyPhoto(models.Model):
    """Photo of a listing; files live in external object storage."""

    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name="photos",
    )
    url = models.URLField(max_length=500)
    caption = models.CharField(max_length=255, blank=True)
    display_order = models.PositiveSmallIntegerField(default=0)

    class Meta:
        verbose_name = _("Property photo")
        verbose_name_plural = _("Property photos")
        ordering = ["display_order", "id"]

    def __str__(self) -> str:
        return f"Photo {self.display_order} of {self.property_id}"
