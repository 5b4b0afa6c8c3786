import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def rating_field(**kwargs):
    return models.PositiveSmallIntegerField(
        validators=[
            django.core.validators.MinValueValidator(1),
            django.core.validators.MaxValueValidator(5),
        ],
        **kwargs,
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("bookings", "0001_initial"),
        ("properties", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Review",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "review_type",
                    models.CharField(
                        choices=[("guest_to_host", "Guest to host"), ("host_to_guest", "Host to guest")],
                        max_length=20,
                    ),
                ),
                ("overall_rating", rating_field(help_text="Rating from 1 to 5")),
                ("cleanliness_rating", rating_field(blank=True, null=True)),
                ("communication_rating", rating_field(blank=True, null=True)),
                ("location_rating", rating_field(blank=True, null=True)),
                ("value_rating", rating_field(blank=True, null=True)),
                ("comment", models.TextField(blank=True)),
                ("host_response", models.TextField(blank=True)),
                ("host_response_at", models.DateTimeField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("published", "Published"), ("hidden", "Hidden")],
                        default="published",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reviews",
                        to="bookings.booking",
                    ),
                ),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reviews",
                        to="properties.property",
                    ),
                ),
                (
                    "reviewee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reviews_received",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "reviewer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reviews_written",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Review",
                "verbose_name_plural": "Reviews",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("booking", "reviewer"), name="review_unique_booking_reviewer"),
                ],
                "indexes": [
                    models.Index(fields=["property", "-created_at"], name="review_property_created_idx"),
                    models.Index(fields=["reviewee"], name="review_reviewee_idx"),
                    models.Index(fields=["overall_rating"], name="review_rating_idx"),
                ],
            },
        ),
    ]
