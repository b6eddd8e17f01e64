'''Backstage Catalog entity'''
from typing import Dict, List, Literal, NotRequired, TypedDict

class EntityMetaLink(TypedDict):
    url: str
    title: NotRequired[str]
    icon: NotRequired[str]
    type: NotRequired[str]

class EntityMetaLinks(List[EntityMetaLink]): pass

class EntityMeta(TypedDict):
    name: str
    namespace: str
    title: str
    description: str
    annotations: Dict[str, str]
    tags: List[str]
    links: NotRequired[EntityMetaLinks]

class EntitySpec(TypedDict):
    owner: str
    type: str
    lifecycle: str

class EntityRelation(TypedDict):
    type: str
    targetRef: str

class Entity(TypedDict):
    apiVersion: str
    kind: Literal['System', 'Component']
    metadata: EntityMeta
    spec: EntitySpec
    relations: NotRequired[List[EntityRelation]]

class DeferredEntity(TypedDict):
    '''Entity paired with the location key of the provider that emitted it'''
    entity: Entity
    locationKey: str

class EntityMutation(TypedDict):
    '''Full-replace mutation submitted to the catalog'''
    type: Literal['full']
    entities: List[DeferredEntity]
