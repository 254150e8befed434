from django.db import models


class Route(models.Model):
    """
    A saved route, stored exactly as the directions provider drew it.
    Points are kept as {"lat": ..., "lng": ...} objects.
    Only `color` is ever changed after creation.
    """
    class Color(models.TextChoices):
        BLUE = "#0000FF", "Blue"
        RED = "#FF0000", "Red"
        GREEN = "#00FF00", "Green"
        PURPLE = "#800080", "Purple"
        ORANGE = "#FFA500", "Orange"

    start = models.JSONField()
    end = models.JSONField()
    # Intermediate stops only, in the order they were chosen
    waypoints = models.JSONField(default=list, blank=True)
    # Densified polyline from the provider (not start + waypoints + end)
    overview_path = models.JSONField(default=list)

    # Provider's display text, e.g. "12.3 km" / "15 mins"
    distance = models.CharField(max_length=64, blank=True)
    duration = models.CharField(max_length=64, blank=True)

    color = models.CharField(max_length=7, choices=Color.choices, default=Color.BLUE)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Route #{self.id} ({self.get_color_display()}) {self.distance}"


class Marker(models.Model):
    """
    A pinned position. Created and deleted, never edited.
    """
    position = models.JSONField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Marker #{self.id}"


class RouteState(models.Model):
    """
    Progress of an in-progress route build, one record per session key.
    Reset by overwriting, never deleted.
    """
    class Step(models.TextChoices):
        START = "start", "Start"
        WAYPOINT = "waypoint", "Waypoint"
        END = "end", "End"
        COLOR = "color", "Color"

    session_key = models.CharField(max_length=64, unique=True)
    # "waypoint" with no start is the empty state a new session begins in
    route_step = models.CharField(max_length=10, choices=Step.choices, default=Step.WAYPOINT)
    start_location = models.JSONField(null=True, blank=True)
    color = models.CharField(max_length=7, choices=Route.Color.choices, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"RouteState {self.session_key} - {self.route_step}"
