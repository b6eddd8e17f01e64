'''Map Datadog Software Catalog records to Backstage entities'''
import re
from functools import partial
from typing import Any, Callable, List, Mapping, Optional, Sequence

from aws_lambda_powertools.logging import Logger

from datadog_catalog import relationships
from datadog_catalog.errors import RecordMappingError
from datadog_catalog.model.entity import Entity, EntityMeta, EntityMetaLinks, EntitySpec
from datadog_catalog.model.service import RawServiceRecord, ServiceRepo

LOGGER = Logger(utc=True)

SOURCE_TAG = 'datadog'
UNKNOWN_OWNER = 'unknown'
REPO_PROVIDER = 'github'

INVALID_NAME_CHARS = re.compile(r'[^a-z0-9-]')


def normalize_name(name: str) -> str:
    '''Return a Backstage-safe entity name'''
    return INVALID_NAME_CHARS.sub('-', name.lower())


def _list_attribute(attributes: Mapping[str, Any], key: str, record_id: Optional[str]) -> List[Any]:
    '''Return a list attribute, treating null as empty'''
    value = attributes.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise RecordMappingError(record_id, '`{}` is not a list'.format(key))
    return value


# Owner lookups, in precedence order
def _explicit_owner(attributes: Mapping[str, Any], contacts: Sequence[Any]) -> Optional[str]:
    return attributes.get('owner') or None


def _first_contact_of_type(contact_type: str, attributes: Mapping[str, Any], contacts: Sequence[Any]) -> Optional[str]:
    for contact in contacts:
        if isinstance(contact, Mapping) and contact.get('type') == contact_type:
            return contact.get('contact') or None
    return None


OWNER_LOOKUPS: Sequence[Callable[[Mapping[str, Any], Sequence[Any]], Optional[str]]] = (
    _explicit_owner,
    partial(_first_contact_of_type, 'squad'),
    partial(_first_contact_of_type, 'team'),
)


def resolve_owner(attributes: Mapping[str, Any], contacts: Sequence[Any]) -> str:
    '''Return the first owner found by OWNER_LOOKUPS'''
    for lookup in OWNER_LOOKUPS:
        owner = lookup(attributes, contacts)
        if owner:
            return owner
    return UNKNOWN_OWNER


# Repository lookups, in precedence order
def _first_repo_from_provider(provider: str, repos: Sequence[Any]) -> Optional[ServiceRepo]:
    for repo in repos:
        if isinstance(repo, Mapping) and repo.get('provider') == provider:
            return repo  # type: ignore[return-value]
    return None


def _first_repo(repos: Sequence[Any]) -> Optional[ServiceRepo]:
    return repos[0] if repos and isinstance(repos[0], Mapping) else None


REPO_LOOKUPS: Sequence[Callable[[Sequence[Any]], Optional[ServiceRepo]]] = (
    partial(_first_repo_from_provider, REPO_PROVIDER),
    _first_repo,
)


def select_repo(repos: Sequence[Any]) -> Optional[ServiceRepo]:
    '''Return the first repository found by REPO_LOOKUPS'''
    for lookup in REPO_LOOKUPS:
        repo = lookup(repos)
        if repo is not None:
            return repo
    return None


class EntityMapper:
    '''Build Backstage entities from Datadog catalog records'''

    def __init__(self, site: str) -> None:
        self.site = site

    def map(self, record: RawServiceRecord) -> Optional[Entity]:
        '''Return the entity for a record, or None if the record has no name.

        Raises RecordMappingError when the record's shape can't be interpreted.
        '''
        if not isinstance(record, Mapping):
            raise RecordMappingError(None, 'record is not an object')

        record_id = record.get('id')
        attributes = record.get('attributes')
        if not isinstance(attributes, Mapping) or not attributes.get('name'):
            LOGGER.debug('Skipping service without name or attributes', extra={'record_id': record_id})
            return None

        raw_name = attributes['name']
        if not isinstance(raw_name, str):
            raise RecordMappingError(record_id, '`name` is not a string')

        contacts = _list_attribute(attributes, 'contacts', record_id)
        repos = _list_attribute(attributes, 'repos', record_id)
        raw_tags = _list_attribute(attributes, 'tags', record_id)

        location = 'datadog:{}'.format(self.site)
        annotations = {
            'datadoghq.com/service-name': raw_name,
            'backstage.io/managed-by-location': location,
            'backstage.io/managed-by-origin-location': location,
        }

        tags = [SOURCE_TAG, *raw_tags]
        if attributes.get('tier'):
            tags.append('tier-{}'.format(attributes['tier']))

        links = EntityMetaLinks()
        repo = select_repo(repos)
        if repo is not None and repo.get('url'):
            annotations['backstage.io/source-location'] = 'url:{}/'.format(repo['url'])
            links.append({
                'url': repo['url'],
                'title': 'Repository',
                'icon': 'code',
            })

        if attributes.get('team'):
            annotations['datadoghq.com/team'] = attributes['team']

        if attributes.get('application'):
            annotations['datadoghq.com/application'] = attributes['application']

        entity_meta = EntityMeta({
            'namespace': 'default',
            'name': normalize_name(raw_name),
            'title': raw_name,
            'description': attributes.get('description') or 'Service {} from Datadog catalog'.format(raw_name),
            'annotations': annotations,
            'tags': tags,
            'links': links,
        })

        entity_spec = EntitySpec({
            'type': attributes.get('kind') or 'service',
            'lifecycle': attributes.get('lifecycle') or 'unknown',
            'owner': resolve_owner(attributes, contacts),
        })

        entity = Entity({
            'apiVersion': 'backstage.io/v1alpha1',
            'kind': 'System' if attributes.get('kind') == 'system' else 'Component',
            'metadata': entity_meta,
            'spec': entity_spec,
            'relations': relationships.translate(record),
        })

        return entity
