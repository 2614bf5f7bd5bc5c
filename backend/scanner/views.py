import logging

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from scanner.auth import ApiTokenPermission
from scanner.serializers import AnalyzeRequestSerializer
from scanner.services import analyze_website

logger = logging.getLogger(__name__)


def _error_response(error: str, details: str, http_status: int, **extra) -> Response:
    return Response({'error': error, 'details': details, **extra}, status=http_status)


class HealthAPIView(APIView):
    throttle_scope = 'default'
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'ok', 'version': settings.APP_VERSION})


class AnalyzeAPIView(APIView):
    throttle_scope = 'analyze'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def post(self, request):
        serializer = AnalyzeRequestSerializer(data=request.data)
        if not serializer.is_valid():
            details = (
                'Missing required website content data'
                if serializer.missing_required_content()
                else 'Malformed website content data'
            )
            return _error_response(
                'Invalid request data',
                details,
                status.HTTP_400_BAD_REQUEST,
                fields=serializer.errors,
            )

        content = serializer.to_website_content()
        try:
            payload = analyze_website(content, provider_name=serializer.provider_name())
        except Exception:
            logger.exception('Unexpected failure analyzing website (url_len=%s).', len(content.url))
            return _error_response(
                'Server error',
                'Analysis service error. Please try again.',
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(payload, status=status.HTTP_200_OK)
