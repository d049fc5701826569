# smarttask/exceptions.py
from rest_framework import exceptions, status
from rest_framework.views import exception_handler


def api_exception_handler(exc, context):
    """
    Wrap DRF's default handler so error bodies share one shape:
    {"error": <code>, "message": <detail>}.

    Validation errors raised by views are returned as
    {"error": "invalid_input", "details": ...}.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.NotAuthenticated):
        response.data = {'error': 'missing_auth', 'message': str(exc.detail)}
    elif isinstance(exc, exceptions.AuthenticationFailed):
        response.data = {'error': 'invalid_token', 'message': str(exc.detail)}
    elif isinstance(exc, exceptions.ValidationError):
        response.data = {'error': 'invalid_input', 'details': response.data}
    elif isinstance(exc, exceptions.NotFound):
        response.data = {'error': 'not_found'}
    elif response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        response.data = {'error': 'method_not_allowed', 'message': str(exc.detail)}
    else:
        detail = getattr(exc, 'detail', '')
        response.data = {'error': getattr(exc, 'default_code', 'error'), 'message': str(detail)}
    return response
