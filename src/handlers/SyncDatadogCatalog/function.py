'''Sync Datadog Software Catalog entities to the catalog'''
import os

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext
from aws_lambda_powertools.utilities.data_classes import (
    event_source,
    EventBridgeEvent
)

from datadog_catalog.config import ProviderConfig
from datadog_catalog.connection import HttpCatalogConnection
from datadog_catalog.fetcher import DEFAULT_PAGE_SIZE
from datadog_catalog.scheduler import ImmediateTaskRunner
from datadog_catalog.sync import CatalogSync
from datadog_catalog.util.jwt import JwtAuth

LOGGER = Logger(utc=True)

# Datadog
DD_API_KEY = os.environ.get('DD_API_KEY', 'MUST_SET_DD_API_KEY')
DD_APPLICATION_KEY = os.environ.get('DD_APPLICATION_KEY', 'MUST_SET_DD_APPLICATION_KEY')
DD_SITE = os.environ.get('DD_SITE', 'datadoghq.com')
DD_PAGE_SIZE = int(os.environ.get('DD_PAGE_SIZE', DEFAULT_PAGE_SIZE))

# Catalog
CATALOG_ENDPOINT = os.environ.get('CATALOG_ENDPOINT', 'MUST_SET_CATALOG_ENDPOINT')
CLIENT_ID = os.environ.get('CLIENT_ID', 'MUST_SET_CLIENT_ID')
CLIENT_SECRET = os.environ.get('CLIENT_SECRET', 'MUST_SET_CLIENT_SECRET')
JWT = JwtAuth(CLIENT_ID, CLIENT_SECRET)


def _get_provider() -> CatalogSync:
    '''Return the Datadog entity provider'''
    config = ProviderConfig.from_provider_block({
        'apiKey': DD_API_KEY,
        'applicationKey': DD_APPLICATION_KEY,
        'site': DD_SITE,
    })
    return CatalogSync(config, ImmediateTaskRunner(), page_size=DD_PAGE_SIZE)


def _get_connection(provider: CatalogSync, auth: JwtAuth) -> HttpCatalogConnection:
    '''Return the catalog connection for a provider'''
    return HttpCatalogConnection(CATALOG_ENDPOINT, provider.get_provider_name(), auth)


def _main() -> None:
    '''Replace the provider's catalog entities with the current Datadog catalog.'''
    provider = _get_provider()
    provider.connect(_get_connection(provider, JWT))


@LOGGER.inject_lambda_context
@event_source(data_class=EventBridgeEvent)
def handler(event: EventBridgeEvent, _: LambdaContext) -> None:
    '''Event handler'''
    LOGGER.debug('Event', extra={"message_object": event.raw_event})

    _main()

    return
