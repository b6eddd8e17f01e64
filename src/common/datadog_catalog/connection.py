'''Catalog connection the provider submits mutations to'''
from typing import Protocol

import requests
from requests.auth import AuthBase
from aws_lambda_powertools.logging import Logger

from datadog_catalog.errors import MutationError
from datadog_catalog.model.entity import EntityMutation

LOGGER = Logger(utc=True)


class EntityProviderConnection(Protocol):
    '''Destination for entity mutations'''
    def apply_mutation(self, mutation: EntityMutation) -> None: ...


class HttpCatalogConnection:
    '''Submit one provider's entity mutations to the catalog API'''

    def __init__(self, endpoint: str, location_key: str, auth: AuthBase, timeout: float = 30) -> None:
        self.endpoint = endpoint
        self.location_key = location_key
        self.auth = auth
        self.timeout = timeout

    @property
    def url(self) -> str:
        return '/'.join([
            self.endpoint.rstrip('/'),
            'providers',
            self.location_key,
            'entities'
        ])

    def apply_mutation(self, mutation: EntityMutation) -> None:
        '''Replace every entity held for this location key with the mutation's entities'''
        r = requests.put(
            self.url,
            headers={
                'Content-Type': 'application/json'
            },
            json=mutation,
            auth=self.auth,
            timeout=self.timeout
        )

        if not r.ok:
            LOGGER.error(
                'Failed to apply catalog mutation',
                extra={'response': r.text, 'location_key': self.location_key}
            )
            raise MutationError(self.location_key, r.status_code)

        LOGGER.debug(
            'Applied catalog mutation',
            extra={'location_key': self.location_key, 'entities': len(mutation['entities'])}
        )
