'''Test relationship translation'''
import pytest

from datadog_catalog.relationships import RELATION_TYPES, RelationshipReference, translate

DEPENDS_ON_ID = 'frontend:default/music-player-app:RelationTypeDependsOn:service:default/music-player-service'


def _record(*ids):
    '''Return a record relating to each id'''
    return {
        'id': 'record',
        'relationships': {
            'relatedEntities': {
                'data': [{'id': i, 'type': 'relatedEntity'} for i in ids]
            }
        }
    }


def test_relation_types_are_a_bijection():
    '''Test every Datadog relation type maps to a distinct Backstage type'''
    assert len(RELATION_TYPES) == 6
    assert len(set(RELATION_TYPES.values())) == 6


def test_parse():
    '''Test parsing a relationship id'''
    ref = RelationshipReference.parse(DEPENDS_ON_ID)

    assert ref == RelationshipReference('RelationTypeDependsOn', 'service', 'default', 'music-player-service')
    assert ref.to_entity_ref() == 'service:default/music-player-service'


def test_parse_positional_target():
    '''Test parsing a target given as separate kind, namespace and name segments'''
    ref = RelationshipReference.parse('service:default/a:RelationTypeOwnedBy:Team:default:squad-a')

    assert ref == RelationshipReference('RelationTypeOwnedBy', 'Team', 'default', 'squad-a')
    assert ref.to_entity_ref() == 'team:default/squad-a'


@pytest.mark.parametrize('relationship_id', [
    'service:default/a:service:default/b',
    'service:default/a:RelationTypeDependsOn',
    'service:default/a:RelationTypeDependsOn:service',
    'service:default/a:RelationTypeDependsOn:service:default',
    'service:default/a:RelationTypeDependsOn:service:/b',
    '',
])
def test_parse_without_target(relationship_id):
    '''Test ids without a usable target'''
    assert RelationshipReference.parse(relationship_id) is None


def test_translate():
    '''Test translating a record's relationships'''
    relations = translate(_record(DEPENDS_ON_ID))

    assert relations == [{'type': 'dependsOn', 'targetRef': 'service:default/music-player-service'}]


@pytest.mark.parametrize('dd_type,backstage_type', list(RELATION_TYPES.items()))
def test_translate_relation_types(dd_type, backstage_type):
    '''Test each relation type'''
    relations = translate(_record('service:default/a:{}:System:default/b'.format(dd_type)))

    assert relations == [{'type': backstage_type, 'targetRef': 'system:default/b'}]


def test_translate_skips_unknown_and_unparseable():
    '''Test unknown types and unusable ids are skipped without error'''
    relations = translate(_record(
        'service:default/a:RelationTypeBlocks:service:default/b',
        'service:default/a:service:default/b',
        'service:default/a:RelationTypeDependsOn:service',
        DEPENDS_ON_ID,
    ))

    assert relations == [{'type': 'dependsOn', 'targetRef': 'service:default/music-player-service'}]


def test_translate_skips_malformed_descriptors():
    '''Test descriptors without a string id are skipped'''
    record = _record(DEPENDS_ON_ID)
    record['relationships']['relatedEntities']['data'][:0] = [None, 'x', {'id': 7}, {}]

    assert len(translate(record)) == 1


def test_translate_keeps_order_and_duplicates():
    '''Test output order matches input and duplicates and self references are kept'''
    ids = [
        'service:default/a:RelationTypeHasPart:service:default/b',
        DEPENDS_ON_ID,
        'service:default/a:RelationTypeHasPart:service:default/b',
        'service:default/a:RelationTypeDependsOn:service:default/a',
    ]
    record = _record(*ids)

    relations = translate(record)

    assert [r['targetRef'] for r in relations] == [
        'service:default/b',
        'service:default/music-player-service',
        'service:default/b',
        'service:default/a',
    ]
    assert translate(record) == relations


@pytest.mark.parametrize('record', [
    {},
    {'relationships': None},
    {'relationships': {}},
    {'relationships': {'relatedEntities': None}},
    {'relationships': {'relatedEntities': {}}},
    {'relationships': {'relatedEntities': {'data': None}}},
])
def test_translate_without_relationships(record):
    '''Test records without related entities'''
    assert translate(record) == []
