from rest_framework import serializers
from rest_framework.validators import UniqueValidator
from .models import Route, Marker, RouteState


class PointField(serializers.Field):
    """
    {"lat": float, "lng": float}. Range is not checked, the map accepts
    whatever the directions provider accepted.
    """
    default_error_messages = {
        'invalid': 'Expected an object with numeric "lat" and "lng".',
    }

    def to_representation(self, value):
        return {'lat': value['lat'], 'lng': value['lng']}

    def to_internal_value(self, data):
        # Older clients stored an unset start as {}
        if data == {} and self.allow_null:
            return None
        if not isinstance(data, dict):
            self.fail('invalid')
        try:
            return {'lat': float(data['lat']), 'lng': float(data['lng'])}
        except (KeyError, TypeError, ValueError):
            self.fail('invalid')


class RouteSerializer(serializers.ModelSerializer):
    start = PointField()
    end = PointField()
    waypoints = serializers.ListField(child=PointField(), required=False)
    # A route is only stored once the provider has drawn it
    overviewPath = serializers.ListField(child=PointField(), source='overview_path', allow_empty=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Route
        fields = ['id', 'start', 'end', 'waypoints', 'overviewPath', 'distance', 'duration', 'color', 'createdAt', 'updatedAt']


class MarkerSerializer(serializers.ModelSerializer):
    position = PointField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Marker
        fields = ['id', 'position', 'createdAt', 'updatedAt']


class RouteStateSerializer(serializers.ModelSerializer):
    sessionKey = serializers.CharField(
        source='session_key',
        max_length=64,
        validators=[UniqueValidator(queryset=RouteState.objects.all(), message='Route state already exists for this session.')],
    )
    routeStep = serializers.ChoiceField(source='route_step', choices=RouteState.Step.choices, required=False)
    startLocation = PointField(source='start_location', allow_null=True, required=False)
    color = serializers.ChoiceField(choices=Route.Color.choices, allow_null=True, required=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = RouteState
        fields = ['sessionKey', 'routeStep', 'startLocation', 'color', 'createdAt', 'updatedAt']
