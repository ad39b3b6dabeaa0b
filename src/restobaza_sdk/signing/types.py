"""
Type definitions for request signing functionality

This module provides the digest algorithm choices and the parameter
name constants shared by the signer and the request builder.
"""

from typing import Callable, Dict, Union
from enum import Enum

from cryptography.hazmat.primitives import hashes


class DigestAlgorithm(str, Enum):
    """Digest algorithms usable for request signatures"""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """Return the cryptography hash primitive for this algorithm"""
        return _HASH_ALGORITHMS[self]()


_HASH_ALGORITHMS = {
    DigestAlgorithm.MD5: hashes.MD5,
    DigestAlgorithm.SHA1: hashes.SHA1,
    DigestAlgorithm.SHA256: hashes.SHA256,
}

# The Restobaza API verifies MD5 signatures only.
DEFAULT_DIGEST_ALGORITHM = DigestAlgorithm.MD5

# Signature parameter names
APP_ID_PARAM = "app_id"
CO_ID_PARAM = "co_id"
RANDOM_PARAM = "random"
TIMESTAMP_PARAM = "timestamp"

# Standard parameter names
SIGNATURE_PARAM = "sig"
FORMAT_PARAM = "format"
RESPONSE_FORMAT = "json"

RESERVED_PARAMETERS = frozenset({
    SIGNATURE_PARAM,
    FORMAT_PARAM,
    APP_ID_PARAM,
    CO_ID_PARAM,
    RANDOM_PARAM,
    TIMESTAMP_PARAM,
})

# Nonce range accepted by the server (inclusive)
NONCE_MIN = 0
NONCE_MAX = 10000

# Type aliases for convenience
ParamValue = Union[str, int]
SignatureParameters = Dict[str, ParamValue]
NonceGenerator = Callable[[], int]
TimestampGenerator = Callable[[], int]
