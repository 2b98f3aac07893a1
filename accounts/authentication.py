import logging

from rest_framework import authentication, exceptions

from services.identity_service import (
    BEARER_KEYWORD,
    InvalidCredential,
    MissingCredential,
    get_identity_verifier,
)

logger = logging.getLogger(__name__)


class IdentityTokenAuthentication(authentication.BaseAuthentication):
    """Resolves the bearer credential to a verified Subject.

    A request without an Authorization header stays anonymous, so protected
    views answer 401 through their permission checks and public views still
    work.
    """

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).decode('latin-1')
        if not header:
            return None

        verifier = get_identity_verifier()
        try:
            subject = verifier.verify(header)
        except MissingCredential as exc:
            raise exceptions.NotAuthenticated('Unauthorized Access') from exc
        except InvalidCredential as exc:
            logger.info('Rejected credential: %s', exc)
            raise exceptions.AuthenticationFailed('Unauthorized Access') from exc
        return subject, header

    def authenticate_header(self, request):
        return BEARER_KEYWORD
