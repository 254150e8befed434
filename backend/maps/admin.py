from django.contrib import admin
from .models import Route, Marker, RouteState


@admin.register(Route)
class RouteAdmin(admin.ModelAdmin):
    list_display = ('id', 'color', 'distance', 'duration', 'created_at')
    list_filter = ('color',)


@admin.register(Marker)
class MarkerAdmin(admin.ModelAdmin):
    list_display = ('id', 'position', 'created_at')


@admin.register(RouteState)
class RouteStateAdmin(admin.ModelAdmin):
    list_display = ('session_key', 'route_step', 'color', 'updated_at')
    search_fields = ('session_key',)
