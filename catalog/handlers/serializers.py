"""Serializers for filter input and domain model output."""

from rest_framework import serializers

from catalog.domain import City, FilterState, Range
from catalog.domain.errors import InvalidFilterError
from catalog.domain.models import DEFAULT_COST_RANGE, DEFAULT_DURATION_RANGE
from catalog.handlers.presentation import category_icon


class EventSerializer(serializers.Serializer):
    """Serializer for the Event domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    category = serializers.CharField()
    icon = serializers.SerializerMethodField()
    description = serializers.CharField()
    city = serializers.CharField(source="city.value")
    ideal_group_size = serializers.CharField()
    duration_hours = serializers.FloatField()
    cost_per_person = serializers.FloatField()
    meeting_point = serializers.CharField()
    transit_tips = serializers.CharField(allow_null=True)
    booking_link = serializers.CharField(allow_null=True)
    best_months = serializers.CharField()
    accessibility_notes = serializers.CharField(allow_null=True)
    image_url = serializers.CharField()

    def get_icon(self, event) -> str:
        return category_icon(event.category)


class DataQualitySerializer(serializers.Serializer):
    event_id = serializers.CharField()
    field = serializers.CharField()


class FilterQuerySerializer(serializers.Serializer):
    """Validates catalog query parameters and builds a FilterState."""

    city = serializers.ChoiceField(choices=[city.value for city in City], required=False)
    q = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False, default="")
    category = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    cost_min = serializers.FloatField(required=False, min_value=0, default=DEFAULT_COST_RANGE.low)
    cost_max = serializers.FloatField(required=False, min_value=0, default=DEFAULT_COST_RANGE.high)
    duration_min = serializers.FloatField(required=False, min_value=0, default=DEFAULT_DURATION_RANGE.low)
    duration_max = serializers.FloatField(required=False, min_value=0, default=DEFAULT_DURATION_RANGE.high)

    def validate(self, attrs):
        if attrs["cost_min"] > attrs["cost_max"]:
            raise serializers.ValidationError({"cost_min": "Must not exceed cost_max."})
        if attrs["duration_min"] > attrs["duration_max"]:
            raise serializers.ValidationError({"duration_min": "Must not exceed duration_max."})
        return attrs

    def to_filter_state(self) -> FilterState:
        data = self.validated_data
        try:
            return FilterState(
                search_query=data["q"],
                selected_categories=set(data["category"]),
                cost_range=Range(low=data["cost_min"], high=data["cost_max"]),
                duration_range=Range(low=data["duration_min"], high=data["duration_max"]),
            )
        except ValueError as exc:
            raise InvalidFilterError(str(exc)) from exc
