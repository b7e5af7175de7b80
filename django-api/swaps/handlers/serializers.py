"""Serializers for request parsing and for rendering domain models.

Input serializers check shape only (required fields, ISO datetimes, UUIDs).
Business rules stay in the services.
"""

from rest_framework import serializers


class UserRegistrationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, allow_blank=True)
    email = serializers.CharField(max_length=255, allow_blank=True)
    password = serializers.CharField(write_only=True, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(max_length=255, allow_blank=True)
    password = serializers.CharField(write_only=True, allow_blank=True)


class EventCreateSerializer(serializers.Serializer):
    title = serializers.CharField(allow_blank=True, trim_whitespace=False)
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()


class EventStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class SwapRequestCreateSerializer(serializers.Serializer):
    requester_event_id = serializers.CharField()
    target_event_id = serializers.CharField()


class SwapResponseSerializer(serializers.Serializer):
    accept = serializers.BooleanField()


class UserSerializer(serializers.Serializer):
    """Serializer for the public fields of a User domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    email = serializers.CharField(source="email.value")


class OwnerSerializer(serializers.Serializer):
    name = serializers.CharField()
    email = serializers.CharField()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    owner_id = serializers.UUIDField(source="owner_id.value")
    status = serializers.CharField(source="status.value")


class DetailedEventSerializer(serializers.Serializer):
    """Serializer for marketplace entries: event fields plus owner."""

    def to_representation(self, instance):
        data = EventSerializer(instance.event).data
        data["owner"] = OwnerSerializer(instance.owner).data
        return data


class SwapRequestSerializer(serializers.Serializer):
    """Serializer for SwapRequest domain model."""

    id = serializers.UUIDField(source="id.value")
    requester_id = serializers.UUIDField(source="requester_id.value")
    requester_event_id = serializers.UUIDField(source="requester_event_id.value")
    target_user_id = serializers.UUIDField(source="target_user_id.value")
    target_event_id = serializers.UUIDField(source="target_event_id.value")
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()


class DetailedSwapRequestSerializer(serializers.Serializer):
    """Serializer for request lists: the request plus both parties and slots."""

    def to_representation(self, instance):
        data = SwapRequestSerializer(instance.request).data
        data["requester"] = UserSerializer(instance.requester).data
        data["target_user"] = UserSerializer(instance.target_user).data
        data["requester_event"] = EventSerializer(instance.requester_event).data
        data["target_event"] = EventSerializer(instance.target_event).data
        return data


class SwapRequestListsSerializer(serializers.Serializer):
    incoming = DetailedSwapRequestSerializer(many=True)
    outgoing = DetailedSwapRequestSerializer(many=True)
