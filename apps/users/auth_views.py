"""Views for authentication flows (OTP request, OTP verification, signup, session)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import SendOTPSerializer, SignupSerializer, VerifyOTPSerializer
from .authentication import clear_auth_cookie, set_auth_cookie
from .serializers import SessionUserSerializer, UserSerializer
from .services import OTPError, verify_otp


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


class SendOTPView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = SendOTPSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"message": "OTP sent successfully"}, status=status.HTTP_200_OK)


class VerifyOTPView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = VerifyOTPSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = verify_otp(
                serializer.validated_data["email"],
                serializer.validated_data["code"],
            )
        except OTPError as exc:
            return Response({"detail": str(exc)}, status=exc.status_code)

        tokens = _tokens_for_user(user)
        response = Response(
            {
                "message": "OTP verified successfully",
                "user": SessionUserSerializer(user).data,
                "tokens": tokens,
            },
            status=status.HTTP_200_OK,
        )
        set_auth_cookie(response, tokens["access"])
        return response


class SignupView(APIView):
    """Completes the profile after the first OTP sign-in."""

    permission_classes = [IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = SignupSerializer(
            instance=request.user, data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(
            {"message": "Account updated successfully", "user": UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response({"user": UserSerializer(request.user).data})


class LogoutView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        response = Response({"message": "Logged out"}, status=status.HTTP_200_OK)
        clear_auth_cookie(response)
        return response
