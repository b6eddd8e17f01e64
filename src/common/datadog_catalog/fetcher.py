'''Paginated fetch of the Datadog Software Catalog'''
from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import parse_qs, urlparse

import requests
from aws_lambda_powertools.logging import Logger

from datadog_catalog.errors import MalformedPageError, RemoteAPIError
from datadog_catalog.model.service import RawServiceRecord

LOGGER = Logger(utc=True)

ENTITY_PATH = '/api/v2/catalog/entity'
DEFAULT_PAGE_SIZE = 100     # Datadog default and max page size
DEFAULT_TIMEOUT = 30
OFFSET_PARAM = 'page[offset]'


def parse_next_offset(links: Any) -> Optional[int]:
    '''Return the offset encoded in a page's `next` link, or None when pagination is done'''
    if not isinstance(links, dict):
        return None

    next_link = links.get('next')
    if not isinstance(next_link, str):
        return None

    # parse_qs decodes page%5Boffset%5D to page[offset]
    values = parse_qs(urlparse(next_link).query).get(OFFSET_PARAM, [])
    if not values or not values[0].isdigit():
        return None

    return int(values[0])


class PageFetcher:
    '''Fetch catalog entity pages, following the server's next links'''

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def fetch(
        self,
        base_url: str,
        headers: Dict[str, str],
        page_size: int = DEFAULT_PAGE_SIZE
    ) -> Iterator[List[RawServiceRecord]]:
        '''Yield each page's records until the API stops returning a next link'''
        offset: Optional[int] = 0
        while offset is not None:
            body = self._get_page(base_url, headers, page_size, offset)

            if body is None or body.get('data') is None:
                LOGGER.warning(
                    'No entity data returned from Datadog Software Catalog API',
                    extra={'offset': offset}
                )
                return

            records = body['data']
            if not isinstance(records, list):
                raise MalformedPageError(offset, '`data` is not a list')

            LOGGER.info(
                'Fetched {} entities from Datadog Software Catalog (offset {})'.format(len(records), offset)
            )
            yield records

            offset = parse_next_offset(body.get('links'))

    def _get_page(
        self,
        base_url: str,
        headers: Dict[str, str],
        page_size: int,
        offset: int
    ) -> Optional[Dict[str, Any]]:
        '''Return the decoded body of one catalog page'''
        r = requests.get(
            base_url.rstrip('/') + ENTITY_PATH,
            params={
                'include': 'schema',
                'page[limit]': page_size,
                OFFSET_PARAM: offset,
            },
            headers=headers,
            timeout=self.timeout
        )

        if not r.ok:
            LOGGER.error(
                'Datadog API request failed: {} {}'.format(r.status_code, r.reason),
                extra={'response': r.text}
            )
            raise RemoteAPIError(r.status_code, r.reason, r.text)

        try:
            body = r.json()
        except ValueError as e:
            raise MalformedPageError(offset, 'response is not JSON') from e

        if body is not None and not isinstance(body, dict):
            raise MalformedPageError(offset, 'response is not a JSON object')

        return body
