"""Serializers for the properties domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer

from .models import Amenity, Property, PropertyPhoto


class AmenitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Amenity
        fields = ["id", "name", "category", "icon"]


class PropertyPhotoSerializer(serializers.ModelSerializer):
    class Meta:
        model = PropertyPhoto
        fields = ["id", "url", "caption", "display_order"]


class PropertySummarySerializer(serializers.ModelSerializer):
    """Compact listing card embedded in bookings, wishlists and chats."""

    class Meta:
        model = Property
        fields = ["id", "title", "city", "country", "property_type", "monthly_price_cents"]
        read_only_fields = fields


class PropertySerializer(serializers.ModelSerializer):
    """Full read representation of a listing."""

    host = UserSummarySerializer(read_only=True)
    amenities = AmenitySerializer(many=True, read_only=True)
    photos = PropertyPhotoSerializer(many=True, read_only=True)

    class Meta:
        model = Property
        fields = [
            "id",
            "host",
            "title",
            "description",
            "property_type",
            "address_line1",
            "city",
            "country",
            "bedrooms",
            "bathrooms",
            "max_guests",
            "monthly_price_cents",
            "cleaning_fee_cents",
            "security_deposit_cents",
            "minimum_stay_weeks",
            "maximum_stay_months",
            "instant_book",
            "cancellation_policy",
            "status",
            "amenities",
            "photos",
            "published_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PropertyWriteSerializer(serializers.ModelSerializer):
    """Serializer for create/update operations."""

    amenities = serializers.PrimaryKeyRelatedField(
        many=True,
        queryset=Amenity.objects.all(),
        required=False,
    )
    photos = PropertyPhotoSerializer(many=True, required=False)
    status = serializers.ChoiceField(
        choices=[Property.Status.DRAFT, Property.Status.ACTIVE],
        required=False,
    )

    class Meta:
        model = Property
        fields = [
            "title",
            "description",
            "property_type",
            "address_line1",
            "city",
            "country",
            "bedrooms",
            "bathrooms",
            "max_guests",
            "monthly_price_cents",
            "cleaning_fee_cents",
            "security_deposit_cents",
            "minimum_stay_weeks",
            "maximum_stay_months",
            "instant_book",
            "cancellation_policy",
            "status",
            "amenities",
            "photos",
        ]

    def create(self, validated_data):  # type: ignore
        amenities = validated_data.pop("amenities", [])
        photos = validated_data.pop("photos", [])
        property_instance = Property.objects.create(
            host=self.context["request"].user,
            **validated_data,
        )
        if amenities:
            property_instance.amenities.set(amenities)
        for photo in photos:
            PropertyPhoto.objects.create(property=property_instance, **photo)
        return property_instance

    def update(self, instance: Property, validated_data):  # type: ignore
        amenities = validated_data.pop("amenities", None)
        photos = validated_data.pop("photos", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        if amenities is not None:
            instance.amenities.set(amenities)
        if photos is not None:
            instance.photos.all().delete()
            for photo in photos:
                PropertyPhoto.objects.create(property=instance, **photo)
        return instance
