"""URL routing for chat."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AttachmentUploadView, ConversationViewSet, MessageView

router = DefaultRouter()
router.register(r'conversations', ConversationViewSet, basename='conversation')

urlpatterns = [
    path('', include(router.urls)),
    path('messages/', MessageView.as_view(), name='chat-messages'),
    path('upload/', AttachmentUploadView.as_view(), name='chat-upload'),
]
