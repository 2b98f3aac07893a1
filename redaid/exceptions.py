import logging

from rest_framework import status
from rest_framework.views import exception_handler

from accounts.utils import error_response

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Render every failure as the error envelope.

    DRF exceptions keep their status code. Anything else is an internal
    error: logged with the traceback, reported to the caller generically.
    """
    response = exception_handler(exc, context)
    if response is None:
        view = context.get('view')
        logger.exception('Unhandled error in %s', view.__class__.__name__ if view else 'view')
        return error_response(
            'Internal server error',
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    detail = response.data
    if isinstance(detail, dict) and set(detail) == {'detail'}:
        rendered = error_response(str(detail['detail']), status_code=response.status_code)
    else:
        rendered = error_response('Invalid data provided', errors=detail, status_code=response.status_code)

    for header in ('WWW-Authenticate', 'Retry-After'):
        if response.has_header(header):
            rendered[header] = response[header]
    return rendered
