'''Datadog catalog provider errors'''
from typing import Optional


class CatalogProviderError(Exception):
    '''Base class for catalog provider errors'''


class ConfigError(CatalogProviderError):
    '''Provider config error'''
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__('Missing required config value: {}'.format(key))


class RemoteAPIError(CatalogProviderError):
    '''Datadog API returned a non-success response'''
    def __init__(self, status: int, status_text: str, body: str = '') -> None:
        self.status = status
        self.status_text = status_text
        self.body = body
        super().__init__('Datadog API request failed: HTTP {} {}'.format(status, status_text))


class MalformedPageError(CatalogProviderError):
    '''Datadog API page could not be interpreted'''
    def __init__(self, offset: int, reason: str) -> None:
        self.offset = offset
        self.reason = reason
        super().__init__('Failed to read catalog page at offset {}: {}'.format(offset, reason))


class RecordMappingError(CatalogProviderError):
    '''A single catalog record could not be converted to an entity'''
    def __init__(self, record_id: Optional[str], reason: str) -> None:
        self.record_id = record_id
        self.reason = reason
        super().__init__('Failed to map catalog record {}: {}'.format(record_id or 'unknown', reason))


class NotConnectedError(CatalogProviderError):
    '''Provider run before a catalog connection was established'''
    def __init__(self, provider_name: str) -> None:
        super().__init__('Provider is not connected: {}'.format(provider_name))


class MutationError(CatalogProviderError):
    '''Catalog rejected the entity mutation'''
    def __init__(self, location_key: str, status: Optional[int] = None) -> None:
        self.location_key = location_key
        self.status = status
        super().__init__('Failed to apply catalog mutation: {}'.format(location_key))
