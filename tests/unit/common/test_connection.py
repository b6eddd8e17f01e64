'''Test HttpCatalogConnection'''
# pylint: disable=redefined-outer-name,unused-argument
from time import time
from typing import Generator

import pytest
from pytest_mock import MockerFixture
import requests_mock

from datadog_catalog.connection import HttpCatalogConnection
from datadog_catalog.errors import MutationError
from datadog_catalog.util.jwt import AUTH_ENDPOINT, JwtAuth

MUTATION = {
    'type': 'full',
    'entities': [
        {
            'entity': {
                'apiVersion': 'backstage.io/v1alpha1',
                'kind': 'Component',
                'metadata': {'namespace': 'default', 'name': 'svc', 'title': 'svc'},
                'spec': {'type': 'service', 'lifecycle': 'unknown', 'owner': 'unknown'},
            },
            'locationKey': 'DatadogServiceEntityProvider',
        }
    ]
}

### Fixtures
@pytest.fixture()
def requests_mocker() -> Generator[requests_mock.Mocker, None, None]:
    '''Yield an active requests mock'''
    with requests_mock.Mocker() as m:
        yield m

@pytest.fixture()
def mock_endpoint() -> str:
    '''Return a mock endpoint'''
    return 'https://api.example.com/catalog'

@pytest.fixture()
def mock_auth(mocker: MockerFixture) -> JwtAuth:
    '''Return a JWT Auth object holding a valid token'''
    jwt = JwtAuth('clientId', 'clientSecret')
    mocker.patch.object(jwt, 'token', 'jwt-token')
    mocker.patch.object(jwt, 'expiration', int(time()) + 600)
    return jwt

@pytest.fixture()
def connection(mock_endpoint: str, mock_auth: JwtAuth) -> HttpCatalogConnection:
    '''Return a catalog connection'''
    return HttpCatalogConnection(mock_endpoint, 'DatadogServiceEntityProvider', mock_auth)


### Code Tests
def test_url(connection: HttpCatalogConnection, mock_endpoint: str):
    '''Test the provider entities url'''
    assert connection.url == '{}/providers/DatadogServiceEntityProvider/entities'.format(mock_endpoint)


def test_apply_mutation(
    connection: HttpCatalogConnection,
    requests_mocker: requests_mock.Mocker,
):
    '''Test the mutation is PUT with the bearer token'''
    requests_mocker.register_uri(requests_mock.PUT, connection.url, status_code=200)

    connection.apply_mutation(MUTATION)

    assert requests_mocker.call_count == 1
    request = requests_mocker.last_request
    assert request.method == 'PUT'
    assert request.json() == MUTATION
    assert request.headers['Authorization'] == 'Bearer jwt-token'


def test_apply_empty_mutation(
    connection: HttpCatalogConnection,
    requests_mocker: requests_mock.Mocker,
):
    '''Test an empty full mutation is still sent'''
    requests_mocker.register_uri(requests_mock.PUT, connection.url, status_code=204)

    connection.apply_mutation({'type': 'full', 'entities': []})

    assert requests_mocker.last_request.json() == {'type': 'full', 'entities': []}


def test_apply_mutation_fails(
    connection: HttpCatalogConnection,
    requests_mocker: requests_mock.Mocker,
):
    '''Test a rejected mutation raises MutationError'''
    requests_mocker.register_uri(requests_mock.PUT, connection.url, status_code=403)

    with pytest.raises(MutationError) as e:
        connection.apply_mutation(MUTATION)

    assert e.value.status == 403
    assert str(e.value) == 'Failed to apply catalog mutation: DatadogServiceEntityProvider'


def test_apply_mutation_fetches_token(
    mock_endpoint: str,
    requests_mocker: requests_mock.Mocker,
):
    '''Test a token is fetched before the first mutation'''
    requests_mocker.register_uri(
        requests_mock.POST,
        AUTH_ENDPOINT,
        status_code=200,
        json={'access_token': 'fresh-token', 'expires_in': 3600}
    )
    requests_mocker.register_uri(requests_mock.PUT, requests_mock.ANY, status_code=200)

    connection = HttpCatalogConnection(mock_endpoint, 'DatadogServiceEntityProvider', JwtAuth('clientId', 'clientSecret'))
    connection.apply_mutation(MUTATION)

    assert [r.method for r in requests_mocker.request_history] == ['POST', 'PUT']
    assert requests_mocker.last_request.headers['Authorization'] == 'Bearer fresh-token'
