'''Backstage entity provider for the Datadog Software Catalog'''
from datadog_catalog.config import ProviderConfig
from datadog_catalog.connection import EntityProviderConnection, HttpCatalogConnection
from datadog_catalog.fetcher import PageFetcher
from datadog_catalog.mapper import EntityMapper
from datadog_catalog.scheduler import ImmediateTaskRunner, TaskRunner
from datadog_catalog.sync import CatalogSync, SyncState

__version__ = '0.0.1'
