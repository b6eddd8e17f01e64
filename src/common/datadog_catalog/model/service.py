'''Datadog Software Catalog entity records'''
from typing import Any, Dict, List, NotRequired, Optional, TypedDict

class ServiceContact(TypedDict):
    type: str
    contact: str
    name: NotRequired[str]

class ServiceRepo(TypedDict):
    provider: NotRequired[str]
    url: NotRequired[str]
    name: NotRequired[str]

class ServiceAttributes(TypedDict, total=False):
    name: str
    description: Optional[str]
    kind: Optional[str]
    tier: Optional[str]
    lifecycle: Optional[str]
    owner: Optional[str]
    team: Optional[str]
    application: Optional[str]
    contacts: List[ServiceContact]
    repos: List[ServiceRepo]
    tags: List[str]

class RelatedEntity(TypedDict):
    id: str
    type: NotRequired[str]

class RelatedEntities(TypedDict):
    data: List[RelatedEntity]

class ServiceRelationships(TypedDict, total=False):
    relatedEntities: RelatedEntities
    schema: Dict[str, Any]

class RawServiceRecord(TypedDict, total=False):
    id: str
    type: str
    attributes: ServiceAttributes
    relationships: ServiceRelationships

class CatalogPageLinks(TypedDict, total=False):
    self: str
    next: str

class CatalogPage(TypedDict, total=False):
    data: List[RawServiceRecord]
    links: CatalogPageLinks
    included: List[Dict[str, Any]]
