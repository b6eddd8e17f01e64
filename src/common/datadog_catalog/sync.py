'''Datadog Software Catalog entity provider'''
from enum import Enum
from typing import Any, List, Mapping, Optional

from aws_lambda_powertools.logging import Logger

from datadog_catalog.config import ProviderConfig
from datadog_catalog.connection import EntityProviderConnection
from datadog_catalog.errors import NotConnectedError, RecordMappingError
from datadog_catalog.fetcher import DEFAULT_PAGE_SIZE, PageFetcher
from datadog_catalog.mapper import EntityMapper
from datadog_catalog.model.entity import DeferredEntity, Entity, EntityMutation
from datadog_catalog.model.service import RawServiceRecord
from datadog_catalog.scheduler import TaskRunner

LOGGER = Logger(utc=True)

PROVIDER_NAME = 'DatadogServiceEntityProvider'


class SyncState(Enum):
    IDLE = 'Idle'
    CONNECTING = 'Connecting'
    RUNNING = 'Running'
    SUCCEEDED = 'Succeeded'
    FAILED = 'Failed'


class CatalogSync:
    '''Sync the Datadog Software Catalog into the Backstage catalog.

    Every run fetches the whole Datadog catalog and submits it as a single
    full mutation, so entities removed from Datadog are removed from the
    catalog on the next run. Runs are not reentrant; the task runner must not
    start a run while another is active.
    '''

    def __init__(
        self,
        config: ProviderConfig,
        schedule: TaskRunner,
        fetcher: Optional[PageFetcher] = None,
        mapper: Optional[EntityMapper] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        provider_name: str = PROVIDER_NAME
    ) -> None:
        self.config = config
        self.schedule = schedule
        self.fetcher = fetcher or PageFetcher()
        self.mapper = mapper or EntityMapper(str(config.site))
        self.page_size = page_size
        self.provider_name = provider_name
        self.connection: Optional[EntityProviderConnection] = None
        self.state = SyncState.IDLE
        self.last_state: Optional[SyncState] = None

        LOGGER.append_keys(target=self.get_provider_name())
        LOGGER.info('Datadog Service Entity Provider initialized')

    @classmethod
    def from_config(cls, config: Mapping[str, Any], schedule: TaskRunner, **kwargs: Any) -> 'CatalogSync':
        '''Return a provider for the `catalog.providers.datadog` block of an app config'''
        return cls(ProviderConfig.from_app_config(config), schedule, **kwargs)

    def get_provider_name(self) -> str:
        return self.provider_name

    def connect(self, connection: EntityProviderConnection) -> None:
        '''Store the catalog connection and schedule runs'''
        self.connection = connection
        self.state = SyncState.CONNECTING
        try:
            self.schedule.run(self.get_provider_name(), self.run)
        finally:
            self.state = SyncState.IDLE

    def run(self) -> None:
        '''Fetch all Datadog entities and replace this provider's catalog entities with them'''
        if self.connection is None:
            raise NotConnectedError(self.get_provider_name())

        LOGGER.info('Discovering entities from Datadog Software Catalog')
        self.state = SyncState.RUNNING
        try:
            entities = self.discover()
            self.connection.apply_mutation(self._full_mutation(entities))
        except Exception:
            self.last_state = SyncState.FAILED
            LOGGER.exception('Failed to discover entities from Datadog Software Catalog')
            raise
        else:
            self.last_state = SyncState.SUCCEEDED
            LOGGER.info('Discovered {} entities from Datadog Software Catalog'.format(len(entities)))
        finally:
            self.state = SyncState.IDLE

    def discover(self) -> List[Entity]:
        '''Return entities for every record in the Datadog catalog, in page order'''
        entities: List[Entity] = []
        pages = self.fetcher.fetch(self.config.base_url, self.config.headers, self.page_size)
        for records in pages:
            for record in records:
                entity = self._map_record(record)
                if entity is not None:
                    entities.append(entity)

        return entities

    def _map_record(self, record: RawServiceRecord) -> Optional[Entity]:
        '''Map one record, dropping it if it can't be mapped'''
        try:
            return self.mapper.map(record)
        except RecordMappingError as e:
            LOGGER.warning(
                'Failed to create entity for service {}'.format(e.record_id or 'unknown'),
                extra={'reason': e.reason}
            )
            return None

    def _full_mutation(self, entities: List[Entity]) -> EntityMutation:
        return EntityMutation(
            type='full',
            entities=[
                DeferredEntity(entity=entity, locationKey=self.get_provider_name())
                for entity in entities
            ]
        )
