"""
Restobaza Python SDK
Signed request client for the Restobaza API
"""

from .version import __version__
from .exceptions import (
    ApiError,
    ErrorCodes,
)
from .config import (
    ClientConfig,
    DEFAULT_BASE_ADDRESS,
    load_config_from_json,
    load_config_from_file,
    load_config_from_env,
)
from .http_client import (
    RestobazaClient,
    HttpTransport,
    RequestTrace,
    ApiResponse,
    build_standard_parameters,
    merge_parameters,
    build_url,
    decode_response,
    create_client,
)
from .signing import (
    Signer,
    DigestAlgorithm,
    RESERVED_PARAMETERS,
    build_signature_parameters,
    build_canonical_string,
    sign,
    generate_nonce,
    generate_timestamp,
)

__all__ = [
    '__version__',
    # Errors
    'ApiError',
    'ErrorCodes',
    # Configuration
    'ClientConfig',
    'DEFAULT_BASE_ADDRESS',
    'load_config_from_json',
    'load_config_from_file',
    'load_config_from_env',
    # Client
    'RestobazaClient',
    'HttpTransport',
    'RequestTrace',
    'ApiResponse',
    'build_standard_parameters',
    'merge_parameters',
    'build_url',
    'decode_response',
    'create_client',
    # Signing
    'Signer',
    'DigestAlgorithm',
    'RESERVED_PARAMETERS',
    'build_signature_parameters',
    'build_canonical_string',
    'sign',
    'generate_nonce',
    'generate_timestamp',
]
