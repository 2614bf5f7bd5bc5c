from django.core.exceptions import RequestDataTooBig
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

ERROR_TITLES = {
    status.HTTP_400_BAD_REQUEST: 'Invalid request data',
    status.HTTP_401_UNAUTHORIZED: 'Unauthorized',
    status.HTTP_403_FORBIDDEN: 'Forbidden',
    status.HTTP_404_NOT_FOUND: 'Not found',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'Method not allowed',
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: 'Unsupported media type',
    status.HTTP_429_TOO_MANY_REQUESTS: 'Too many requests',
}

REQUEST_TOO_LARGE_DETAILS = 'Request body is too large.'


def _detail_text(detail) -> str:
    if isinstance(detail, dict) and 'detail' in detail:
        return str(detail['detail'])
    if isinstance(detail, list) and detail:
        return str(detail[0])
    return str(detail)


def scanner_exception_handler(exc, context):
    """Render every DRF error as the ``{error, details}`` envelope used by the API."""
    if isinstance(exc, RequestDataTooBig):
        return Response(
            {'error': ERROR_TITLES[status.HTTP_400_BAD_REQUEST], 'details': REQUEST_TOO_LARGE_DETAILS},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    response.data = {
        'error': ERROR_TITLES.get(response.status_code, 'Request failed'),
        'details': _detail_text(response.data),
    }
    return response
