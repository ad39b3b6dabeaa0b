"""
Restobaza Python SDK - Request Signing Module

Builds the per-call signature parameters and the signature the Restobaza
API expects on every request.
"""

from .types import (
    DigestAlgorithm,
    DEFAULT_DIGEST_ALGORITHM,
    RESERVED_PARAMETERS,
    RESPONSE_FORMAT,
    SignatureParameters,
    NonceGenerator,
    TimestampGenerator,
)

from .signer import (
    Signer,
    build_signature_parameters,
    build_canonical_string,
    sign,
)

from .utils import (
    generate_nonce,
    generate_timestamp,
    validate_nonce,
    validate_timestamp,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'Signer',
    'build_signature_parameters',
    'build_canonical_string',
    'sign',
    # Types
    'DigestAlgorithm',
    'DEFAULT_DIGEST_ALGORITHM',
    'RESERVED_PARAMETERS',
    'RESPONSE_FORMAT',
    'SignatureParameters',
    'NonceGenerator',
    'TimestampGenerator',
    # Utilities
    'generate_nonce',
    'generate_timestamp',
    'validate_nonce',
    'validate_timestamp',
]
