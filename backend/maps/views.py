import logging

from rest_framework import mixins, viewsets
from rest_framework.response import Response
from .models import Route, Marker, RouteState
from .serializers import RouteSerializer, MarkerSerializer, RouteStateSerializer

logger = logging.getLogger(__name__)


class RouteViewSet(viewsets.ModelViewSet):
    """
    Saved routes, newest first.
    - PUT only replaces the fields it carries (a colour change sends just "color").
    """
    queryset = Route.objects.all()
    serializer_class = RouteSerializer

    def update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return super().update(request, *args, **kwargs)

    def perform_create(self, serializer):
        route = serializer.save()
        logger.info("Route %s created", route.id)

    def perform_destroy(self, instance):
        logger.info("Route %s deleted", instance.id)
        instance.delete()


class MarkerViewSet(mixins.CreateModelMixin,
                    mixins.ListModelMixin,
                    mixins.RetrieveModelMixin,
                    mixins.DestroyModelMixin,
                    viewsets.GenericViewSet):
    """
    Pins: list, create, delete. Markers are never edited in place.
    """
    queryset = Marker.objects.all()
    serializer_class = MarkerSerializer


class RouteStateViewSet(mixins.CreateModelMixin, viewsets.GenericViewSet):
    """
    One build-progress record per session key.
    - GET creates the empty record on first read.
    - PUT/PATCH upsert the supplied fields.
    - POST for a key that already has a record is rejected (400).
    """
    queryset = RouteState.objects.all()
    serializer_class = RouteStateSerializer
    lookup_field = 'session_key'
    lookup_value_regex = '[^/]+'

    def retrieve(self, request, session_key=None, **kwargs):
        state, created = RouteState.objects.get_or_create(session_key=session_key)
        if created:
            logger.info("Route state created for session %s", session_key)
        return Response(self.get_serializer(state).data)

    def update(self, request, session_key=None, **kwargs):
        state, _ = RouteState.objects.get_or_create(session_key=session_key)
        # the key comes from the URL, never from the body
        data = {key: value for key, value in request.data.items() if key != 'sessionKey'}
        serializer = self.get_serializer(state, data=data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    def partial_update(self, request, session_key=None, **kwargs):
        return self.update(request, session_key=session_key)
