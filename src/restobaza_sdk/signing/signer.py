"""
Restobaza request signer

The Restobaza API authenticates every call with a signature computed over the
identity parameters, a nonce and a timestamp. This module builds those
parameters and derives the signature from them and the application secret.

The digest defaults to MD5 because that is what the server verifies. It is
kept selectable so a client can follow the server if its contract changes.
"""

import logging
from typing import Mapping, Optional, TYPE_CHECKING

from cryptography.hazmat.primitives import hashes

from ..exceptions import ApiError, ErrorCodes, missing_parameter
from .types import (
    APP_ID_PARAM,
    CO_ID_PARAM,
    RANDOM_PARAM,
    TIMESTAMP_PARAM,
    DEFAULT_DIGEST_ALGORITHM,
    DigestAlgorithm,
    NonceGenerator,
    ParamValue,
    SignatureParameters,
    TimestampGenerator,
)
from .utils import (
    generate_nonce,
    generate_timestamp,
    validate_nonce,
    validate_timestamp,
)

if TYPE_CHECKING:
    from ..config import ClientConfig

logger = logging.getLogger(__name__)


def build_signature_parameters(
    config: "ClientConfig",
    nonce_generator: Optional[NonceGenerator] = None,
    timestamp_generator: Optional[TimestampGenerator] = None
) -> SignatureParameters:
    """
    Build a fresh set of signature parameters for one API call.

    Args:
        config: Client configuration providing app_id and co_id
        nonce_generator: Optional custom nonce source
        timestamp_generator: Optional custom clock

    Returns:
        dict: Mapping with app_id, co_id, random and timestamp

    Raises:
        ApiError: If an injected generator returns an out-of-range value
    """
    nonce = (nonce_generator or generate_nonce)()
    timestamp = (timestamp_generator or generate_timestamp)()

    if not validate_nonce(nonce):
        raise ApiError(
            ErrorCodes.INVALID_SIGNATURE_PARAMETER,
            f"invalid nonce: {nonce!r}"
        )

    if not validate_timestamp(timestamp):
        raise ApiError(
            ErrorCodes.INVALID_SIGNATURE_PARAMETER,
            f"invalid timestamp: {timestamp!r}"
        )

    return {
        APP_ID_PARAM: config.app_id,
        CO_ID_PARAM: config.co_id,
        RANDOM_PARAM: nonce,
        TIMESTAMP_PARAM: timestamp,
    }


def build_canonical_string(signature_parameters: Mapping[str, ParamValue], secret: str) -> str:
    """
    Build the string that gets digested: sorted key=value pairs followed by the secret.

    Example:
        >>> build_canonical_string({'random': 5, 'app_id': 1}, 's3cr3t')
        'app_id=1random=5s3cr3t'
    """
    pairs = ''.join(
        f"{key}={value}" for key, value in sorted(signature_parameters.items())
    )
    return pairs + secret


def sign(
    signature_parameters: Mapping[str, ParamValue],
    secret: str,
    algorithm: DigestAlgorithm = DEFAULT_DIGEST_ALGORITHM
) -> str:
    """
    Compute the request signature.

    Args:
        signature_parameters: Parameters covered by the signature
        secret: Application secret shared with the server
        algorithm: Digest algorithm (MD5 unless the server says otherwise)

    Returns:
        str: Lowercase hex digest
    """
    canonical = build_canonical_string(signature_parameters, secret)

    digest = hashes.Hash(DigestAlgorithm(algorithm).hash_algorithm())
    digest.update(canonical.encode('utf-8'))
    return digest.finalize().hex()


class Signer:
    """
    Signs Restobaza requests with a fixed secret and digest algorithm.
    """

    def __init__(
        self,
        secret: str,
        algorithm: DigestAlgorithm = DEFAULT_DIGEST_ALGORITHM
    ):
        if not secret:
            raise missing_parameter("app_secret")

        self._secret = secret
        self.algorithm = DigestAlgorithm(algorithm)

    def sign(self, signature_parameters: Mapping[str, ParamValue]) -> str:
        signature = sign(signature_parameters, self._secret, self.algorithm)
        logger.debug(f"Computed {self.algorithm.value} signature over {sorted(signature_parameters)}")
        return signature

    def __repr__(self) -> str:
        return f"Signer(algorithm={self.algorithm.value!r})"
