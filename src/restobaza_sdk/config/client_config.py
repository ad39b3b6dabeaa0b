"""
Client configuration for the Restobaza Python SDK

Holds the identity, secret and endpoint settings a client is built from,
and loads them from mappings, JSON files or environment variables.
"""

import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlparse

from ..exceptions import ApiError, ErrorCodes, missing_parameter
from ..signing.types import DigestAlgorithm, DEFAULT_DIGEST_ALGORITHM

DEFAULT_BASE_ADDRESS = "http://api.restobaza.ru"

REQUIRED_PARAMETERS = ('app_id', 'co_id', 'app_secret')

ENV_PREFIX = "RESTOBAZA_"

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ''


def _invalid_config(message: str) -> ApiError:
    return ApiError(ErrorCodes.INVALID_CONFIG, f"invalid configuration: {message}")


@dataclass(frozen=True)
class ClientConfig:
    """
    Configuration for a Restobaza client.

    Attributes:
        app_id: Application identifier issued by Restobaza
        co_id: Company (account) identifier
        app_secret: Secret shared with the server, used for signing
        base_address: API host, without trailing slash
        test_errors: Fail every call with a synthetic error, no network access
        test_empty_data: Return an empty object from every call, no network access
        timeout: Optional request timeout in seconds (None keeps the HTTP client default)
        digest_algorithm: Signature digest, MD5 for the production API
    """
    app_id: Union[str, int]
    co_id: Union[str, int]
    app_secret: str
    base_address: str = DEFAULT_BASE_ADDRESS
    test_errors: bool = False
    test_empty_data: bool = False
    timeout: Optional[float] = None
    digest_algorithm: DigestAlgorithm = DEFAULT_DIGEST_ALGORITHM

    def __post_init__(self):
        """Validate client configuration."""
        for name in REQUIRED_PARAMETERS:
            if _is_blank(getattr(self, name)):
                raise missing_parameter(name)

        for name in ('app_id', 'co_id'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (str, int)):
                raise _invalid_config(f"{name} must be a string or an integer, got {value!r}")

        if not isinstance(self.app_secret, str):
            raise _invalid_config(f"app_secret must be a string, got {type(self.app_secret).__name__}")

        for name in ('test_errors', 'test_empty_data'):
            if not isinstance(getattr(self, name), bool):
                raise _invalid_config(f"{name} must be a boolean, got {getattr(self, name)!r}")

        if not self.base_address:
            raise _invalid_config("base_address cannot be empty")

        if not isinstance(self.base_address, str):
            raise _invalid_config(f"base_address must be a string, got {self.base_address!r}")

        parsed = urlparse(self.base_address)
        if not parsed.scheme or not parsed.netloc:
            raise _invalid_config(f"invalid base_address: {self.base_address}")

        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
                raise _invalid_config(f"timeout must be a number, got {self.timeout!r}")
            if self.timeout <= 0:
                raise _invalid_config("timeout must be positive")

        try:
            algorithm = DigestAlgorithm(str.lower(self.digest_algorithm))
        except (TypeError, ValueError):
            raise _invalid_config(f"unsupported digest algorithm: {self.digest_algorithm}")

        # frozen dataclass, normalize through object.__setattr__
        object.__setattr__(self, 'base_address', self.base_address.rstrip('/'))
        object.__setattr__(self, 'digest_algorithm', algorithm)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ClientConfig':
        """
        Create configuration from a plain mapping.

        Required keys are checked in order (app_id, co_id, app_secret) so the
        first missing one is reported. Boolean and timeout values may be
        given as strings. Unknown keys are ignored.
        """
        for name in REQUIRED_PARAMETERS:
            if _is_blank(data.get(name)):
                raise missing_parameter(name)

        kwargs: Dict[str, Any] = {name: data[name] for name in REQUIRED_PARAMETERS}

        if data.get('base_address') is not None:
            kwargs['base_address'] = str(data['base_address'])
        if 'test_errors' in data:
            kwargs['test_errors'] = _parse_bool('test_errors', data['test_errors'])
        if 'test_empty_data' in data:
            kwargs['test_empty_data'] = _parse_bool('test_empty_data', data['test_empty_data'])
        if data.get('timeout') is not None:
            kwargs['timeout'] = _parse_timeout(data['timeout'])
        if data.get('digest_algorithm') is not None:
            kwargs['digest_algorithm'] = data['digest_algorithm']

        return cls(**kwargs)

    def to_dict(self, include_secret: bool = False) -> Dict[str, Any]:
        """Convert to dictionary; the secret is masked unless asked for."""
        data = asdict(self)
        data['digest_algorithm'] = self.digest_algorithm.value
        if not include_secret:
            data['app_secret'] = '***'
        return data

    def __repr__(self) -> str:
        return (
            f"ClientConfig(app_id={self.app_id!r}, co_id={self.co_id!r}, "
            f"base_address={self.base_address!r}, test_errors={self.test_errors}, "
            f"test_empty_data={self.test_empty_data})"
        )


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value

    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False

    raise _invalid_config(f"{name} must be a boolean, got {value!r}")


def _parse_timeout(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise _invalid_config(f"timeout must be a number, got {value!r}")


def load_config_from_json(json_string: str) -> ClientConfig:
    """Load client configuration from JSON string"""
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise _invalid_config(f"failed to parse configuration JSON: {e}") from e

    if not isinstance(data, dict):
        raise _invalid_config("configuration JSON must be an object")

    return ClientConfig.from_dict(data)


def load_config_from_file(file_path: Union[str, Path]) -> ClientConfig:
    """Load client configuration from a JSON file"""
    try:
        with open(Path(file_path), 'r', encoding='utf-8') as f:
            json_string = f.read()
    except OSError as e:
        raise _invalid_config(f"failed to read configuration file: {e}") from e

    return load_config_from_json(json_string)


def load_config_from_env(
    prefix: str = ENV_PREFIX,
    environ: Optional[Mapping[str, str]] = None
) -> ClientConfig:
    """
    Load client configuration from environment variables.

    Reads {prefix}APP_ID, {prefix}CO_ID, {prefix}APP_SECRET and the optional
    {prefix}BASE_ADDRESS, {prefix}TEST_ERRORS, {prefix}TEST_EMPTY_DATA,
    {prefix}TIMEOUT and {prefix}DIGEST_ALGORITHM.
    """
    if environ is None:
        environ = os.environ

    data = {}
    for name in REQUIRED_PARAMETERS + ('base_address', 'test_errors', 'test_empty_data',
                                       'timeout', 'digest_algorithm'):
        value = environ.get(f"{prefix}{name.upper()}")
        if value is not None:
            data[name] = value

    return ClientConfig.from_dict(data)
