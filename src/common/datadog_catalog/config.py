'''Datadog provider configuration'''
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from dataclasses_json import LetterCase, dataclass_json

from datadog_catalog.errors import ConfigError

DEFAULT_SITE = 'datadoghq.com'
CONFIG_PATH = ('catalog', 'providers', 'datadog')
REQUIRED_KEYS = ('apiKey', 'applicationKey')


@dataclass_json(letter_case=LetterCase.CAMEL)  # type: ignore[arg-type]
@dataclass
class ProviderConfig:
    '''Credentials and site for the Datadog Software Catalog API'''
    api_key: str
    application_key: str
    site: Optional[str] = DEFAULT_SITE

    def __post_init__(self) -> None:
        if not self.site:
            self.site = DEFAULT_SITE

    @property
    def base_url(self) -> str:
        '''Datadog API base URL for the configured site'''
        return 'https://api.{}'.format(self.site)

    @property
    def headers(self) -> Dict[str, str]:
        '''Request headers carrying the API and application keys'''
        return {
            'DD-API-KEY': self.api_key,
            'DD-APPLICATION-KEY': self.application_key,
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        }

    @classmethod
    def from_provider_block(cls, block: Mapping[str, Any]) -> 'ProviderConfig':
        '''Return config from a `catalog.providers.datadog` block'''
        for key in REQUIRED_KEYS:
            if not block.get(key):
                raise ConfigError('.'.join(CONFIG_PATH + (key,)))

        # schedule is owned by the scheduler, not the provider
        values = {k: v for k, v in block.items() if k != 'schedule'}
        return cls.from_dict(values)  # type: ignore[attr-defined]

    @classmethod
    def from_app_config(cls, config: Mapping[str, Any]) -> 'ProviderConfig':
        '''Return config from an application config mapping'''
        block: Any = config
        for key in CONFIG_PATH:
            if not isinstance(block, Mapping) or key not in block:
                raise ConfigError('.'.join(CONFIG_PATH))
            block = block[key]

        if not isinstance(block, Mapping):
            raise ConfigError('.'.join(CONFIG_PATH))

        return cls.from_provider_block(block)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ProviderConfig':
        '''Return config from DD_* environment variables'''
        env = os.environ if environ is None else environ
        return cls.from_provider_block({
            'apiKey': env.get('DD_API_KEY', ''),
            'applicationKey': env.get('DD_APPLICATION_KEY', ''),
            'site': env.get('DD_SITE', DEFAULT_SITE),
        })
