"""URL routing for bookmarks."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import BookmarkViewSet

router = DefaultRouter()
router.register(r'', BookmarkViewSet, basename='bookmark')

urlpatterns = [path('', include(router.urls))]
