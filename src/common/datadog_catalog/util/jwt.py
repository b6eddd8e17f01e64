'''JWT Authentication for the catalog API'''
import os
from time import time
from typing import Optional

from requests import PreparedRequest, post
from requests.auth import AuthBase

from aws_lambda_powertools.logging import Logger

from datadog_catalog.errors import CatalogProviderError

LOGGER = Logger(utc=True)

AUTH_ENDPOINT = os.environ.get('AUTH_ENDPOINT', 'https://auth.serverlessops.io/oauth2/token')
# Refresh tokens this many seconds before they expire
EXPIRATION_GRACE = 120
DEFAULT_EXPIRES_IN = 300


class JwtRequestException(CatalogProviderError):
    '''JWT Request Exception'''
    def __init__(self, status: Optional[int] = None):
        self.status = status
        super().__init__('Failed to request JWT token.')


class JwtAuth(AuthBase):
    '''Client credentials bearer token, fetched on first use and refreshed on expiry'''
    def __init__(self, client_id: str, client_secret: str, auth_endpoint: str = AUTH_ENDPOINT):
        self.client_id = client_id
        self.client_secret = client_secret
        self.auth_endpoint = auth_endpoint
        self.token: Optional[str] = None
        self.expiration: Optional[int] = None

    def __call__(self, r: PreparedRequest) -> PreparedRequest:
        self._validate()
        r.headers['Authorization'] = 'Bearer {}'.format(self.token)
        return r

    def _fetch_jwt(self) -> None:
        LOGGER.info('Fetching JWT token')
        response = post(
            self.auth_endpoint,
            data={
                'grant_type': 'client_credentials',
                'client_id': self.client_id,
                'client_secret': self.client_secret
            },
            timeout=10
        )

        if not response.ok:
            LOGGER.error('Failed to fetch JWT token', extra={'response': response.text})
            raise JwtRequestException(response.status_code)

        body = response.json()
        self.token = body.get('access_token')
        expires_in = body.get('expires_in') or DEFAULT_EXPIRES_IN
        self.expiration = int(time()) + int(expires_in) - EXPIRATION_GRACE

    def _validate(self) -> None:
        now = int(time())
        if (not self.expiration) or (now > self.expiration):
            LOGGER.info('JWT token expired', extra={'expiration': self.expiration, 'now': now})
            self._fetch_jwt()
