'''Translate Datadog relationship ids into Backstage relations'''
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from datadog_catalog.model.entity import EntityRelation

RELATION_TYPE_MARKER = 'RelationType'

# Datadog relation type -> Backstage relation type
RELATION_TYPES = {
    'RelationTypeDependsOn': 'dependsOn',
    'RelationTypeDependencyOf': 'dependencyOf',
    'RelationTypeOwnedBy': 'ownedBy',
    'RelationTypeOwnerOf': 'ownerOf',
    'RelationTypePartsOf': 'partOf',
    'RelationTypeHasPart': 'hasPart',
}


@dataclass(frozen=True)
class RelationshipReference:
    '''Target of a Datadog relationship id

    Ids look like `frontend:default/music-player-app:RelationTypeDependsOn:service:default/music-player-service`:
    source ref, relation type, target ref.
    '''
    relation_type: str
    kind: str
    namespace: str
    name: str

    @classmethod
    def parse(cls, relationship_id: str) -> Optional['RelationshipReference']:
        '''Return the parsed target reference, or None if the id has no usable target'''
        parts = relationship_id.split(':')
        marker_idx = next(
            (i for i, part in enumerate(parts) if part.startswith(RELATION_TYPE_MARKER)),
            None
        )
        if marker_idx is None:
            return None

        target = parts[marker_idx + 1:]
        if len(target) >= 2 and '/' in target[1]:
            kind = target[0]
            namespace, _, name = target[1].partition('/')
        elif len(target) >= 3:
            kind, namespace, name = target[:3]
        else:
            return None

        if not (kind and namespace and name):
            return None

        return cls(parts[marker_idx], kind, namespace, name)

    def to_entity_ref(self) -> str:
        '''Return the Backstage entity ref for the target'''
        return '{}:{}/{}'.format(self.kind.lower(), self.namespace, self.name)


def translate(record: Mapping[str, Any]) -> List[EntityRelation]:
    '''Return the Backstage relations declared by a catalog record, in input order'''
    relationships = record.get('relationships')
    if not isinstance(relationships, Mapping):
        return []

    related = relationships.get('relatedEntities')
    if not isinstance(related, Mapping) or not isinstance(related.get('data'), list):
        return []

    relations: List[EntityRelation] = []
    for descriptor in related['data']:
        relationship_id = descriptor.get('id') if isinstance(descriptor, Mapping) else None
        if not isinstance(relationship_id, str):
            continue

        reference = RelationshipReference.parse(relationship_id)
        if reference is None:
            continue

        relation_type = RELATION_TYPES.get(reference.relation_type)
        if relation_type is None:
            continue

        relations.append(EntityRelation(type=relation_type, targetRef=reference.to_entity_ref()))

    return relations
