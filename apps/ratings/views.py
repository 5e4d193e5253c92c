"""API views for ratings."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Rating
from .serializers import RatingCreateSerializer, RatingDetailSerializer, RatingSerializer
from .services import RatingError, rating_summary, submit_rating


class RatingViewSet(viewsets.GenericViewSet):
    """Submit ratings and read the ratings a user received."""

    queryset = Rating.objects.select_related('rater')
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]

    def get_serializer_class(self):  # type: ignore
        if self.action == 'create':
            return RatingCreateSerializer
        return RatingDetailSerializer

    def list(self, request):  # type: ignore
        user_id = request.query_params.get('user')
        if not user_id:
            if not request.user.is_authenticated:
                return Response(
                    {'detail': 'The user query parameter is required.'},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            user_id = request.user.id
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            return Response({'detail': 'Invalid user id.'}, status=status.HTTP_400_BAD_REQUEST)

        ratings = self.get_queryset().filter(rated_id=user_id)
        data = {
            'user_id': user_id,
            **rating_summary(user_id),
            'ratings': RatingDetailSerializer(ratings, many=True).data,
        }
        return Response(data)

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            rating = submit_rating(request.user, **serializer.validated_data)
        except RatingError as exc:
            return Response({'detail': str(exc)}, status=exc.status_code)
        return Response(
            {'message': 'Rating submitted successfully', 'rating': RatingSerializer(rating).data},
            status=status.HTTP_201_CREATED,
        )
