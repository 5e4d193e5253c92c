"""URL routing for the ratings domain."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import RatingViewSet

router = DefaultRouter()
router.register(r'', RatingViewSet, basename='rating')

urlpatterns = [path('', include(router.urls))]
