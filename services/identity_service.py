import base64
import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache

import firebase_admin
from django.conf import settings
from django.utils.module_loading import import_string
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin import exceptions as firebase_exceptions
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)

BEARER_KEYWORD = 'Bearer'


class IdentityError(Exception):
    pass


class MissingCredential(IdentityError):
    """No bearer credential, or a malformed Authorization header."""


class InvalidCredential(IdentityError):
    """The identity oracle rejected the credential or failed to answer."""


@dataclass(frozen=True)
class Subject:
    """Identity recovered from a verified credential."""
    email: str
    uid: str | None = None
    claims: dict = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_authenticated(self):
        return True

    @property
    def is_anonymous(self):
        return False


class FirebaseIdentityOracle:
    """Verifies Firebase ID tokens issued to the web client."""

    def __init__(self):
        try:
            firebase_admin.get_app()
        except ValueError:
            firebase_admin.initialize_app(self._credential())
            logger.info('Firebase app initialized for token verification')

    @staticmethod
    def _credential():
        encoded = settings.FB_SERVICE_KEY
        if not encoded:
            return credentials.ApplicationDefault()
        service_account = json.loads(base64.b64decode(encoded).decode('utf-8'))
        return credentials.Certificate(service_account)

    def verify(self, token):
        try:
            return firebase_auth.verify_id_token(token)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            raise InvalidCredential(str(exc)) from exc


class JWTIdentityOracle:
    """Verifies access tokens signed with the project key (local development)."""

    def verify(self, token):
        try:
            return dict(AccessToken(token).payload)
        except TokenError as exc:
            raise InvalidCredential(str(exc)) from exc


def issue_development_token(email):
    """Mint a token JWTIdentityOracle accepts for the given email."""
    token = AccessToken()
    token['email'] = email
    return str(token)


@lru_cache(maxsize=None)
def load_oracle(dotted_path):
    return import_string(dotted_path)()


class IdentityVerifier:
    def __init__(self, oracle):
        self.oracle = oracle

    @staticmethod
    def extract_credential(header):
        if not header:
            raise MissingCredential('Authorization header is missing')
        parts = header.split()
        if len(parts) != 2 or parts[0] != BEARER_KEYWORD:
            raise MissingCredential('Authorization header must be "Bearer <token>"')
        return parts[1]

    def verify(self, header):
        token = self.extract_credential(header)
        claims = self.oracle.verify(token)
        email = claims.get('email')
        if not email:
            raise InvalidCredential('Verified credential carries no email')
        return Subject(email=email, uid=claims.get('uid') or claims.get('user_id'), claims=claims)


def get_identity_verifier():
    return IdentityVerifier(load_oracle(settings.IDENTITY_ORACLE))
