from django.contrib import admin
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from maps.views import RouteViewSet, MarkerViewSet, RouteStateViewSet

router = DefaultRouter()
router.register(r'routes', RouteViewSet)
router.register(r'markers', MarkerViewSet)
router.register(r'route-state', RouteStateViewSet, basename='route-state')

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include(router.urls)),
]
