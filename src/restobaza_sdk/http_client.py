"""
HTTP client for the Restobaza API

This module turns a method name and its parameters into a signed request URL,
executes it with a single GET and normalizes the response. Every value built
along the way is returned in a per-call RequestTrace, nothing is stored on the
client between calls.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote_plus

import requests

from .config import ClientConfig
from .exceptions import ApiError, ErrorCodes, reserved_parameter
from .signing import (
    Signer,
    build_signature_parameters,
    RESERVED_PARAMETERS,
    RESPONSE_FORMAT,
    NonceGenerator,
    TimestampGenerator,
)
from .signing.types import SIGNATURE_PARAM, FORMAT_PARAM, ParamValue

logger = logging.getLogger(__name__)

TEST_ERROR_DESCRIPTION = "synthetic test error"
TRANSPORT_ERROR_DESCRIPTION = "transport call failed"
DECODE_ERROR_DESCRIPTION = "response could not be decoded"

EMPTY_PAYLOAD = b"{}"

ApiResult = Union[Dict[str, Any], List[Any]]


@dataclass
class RequestTrace:
    """Everything computed for one API call, kept for inspection."""
    method: str
    signature_params: Dict[str, ParamValue]
    signature: str
    standard_params: Dict[str, str]
    unique_params: Dict[str, ParamValue]
    all_params: Dict[str, ParamValue]
    url: str


@dataclass
class ApiResponse:
    """Decoded result of a successful call together with its trace."""
    data: ApiResult
    trace: RequestTrace = field(repr=False)


def build_standard_parameters(signature: str) -> Dict[str, str]:
    """Standard parameters sent with every request."""
    return {
        SIGNATURE_PARAM: signature,
        FORMAT_PARAM: RESPONSE_FORMAT,
    }


def merge_parameters(
    standard_params: Mapping[str, ParamValue],
    signature_params: Mapping[str, ParamValue],
    unique_params: Optional[Mapping[str, ParamValue]] = None
) -> Dict[str, ParamValue]:
    """
    Combine standard, signature and caller parameters into one key-sorted dict.

    Caller parameters may not reuse a reserved name: the server would read the
    caller's value where it expects the computed one.

    Raises:
        ApiError: If a caller parameter uses a reserved name
    """
    unique_params = unique_params or {}

    for key in sorted(unique_params):
        if key in RESERVED_PARAMETERS:
            raise reserved_parameter(key)

    merged: Dict[str, ParamValue] = {}
    merged.update(standard_params)
    merged.update(signature_params)
    merged.update(unique_params)

    return dict(sorted(merged.items()))


def build_url(base_address: str, method: str, all_params: Mapping[str, ParamValue]) -> str:
    """
    Serialize parameters into the request URL.

    Values are form-encoded, keys are used verbatim and pairs keep the order
    of all_params. The method is not normalized. Values are rendered with
    str(), so booleans go out as True/False; pass '1' or '' where the server
    expects a flag.
    """
    query = '&'.join(
        f"{key}={quote_plus(str(value))}" for key, value in all_params.items()
    )
    return f"{base_address}/{method}?{query}"


def decode_response(raw: Union[bytes, str]) -> ApiResult:
    """
    Decode a response body and surface API-reported errors.

    A successful result is a JSON object or array. A null error_description
    counts as absent.

    Raises:
        ApiError: If the body is not a JSON object or array, or the decoded
            object carries an error_description
    """
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ApiError(ErrorCodes.DECODE_FAILED, DECODE_ERROR_DESCRIPTION) from e

    if not isinstance(decoded, (dict, list)):
        raise ApiError(ErrorCodes.DECODE_FAILED, DECODE_ERROR_DESCRIPTION)

    if isinstance(decoded, dict) and decoded.get('error_description') is not None:
        raise ApiError.from_response(decoded)

    return decoded


class HttpTransport:
    """
    Single-shot GET transport with the test-mode short circuits.

    No retries: a failed request surfaces immediately as an ApiError.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def fetch(self, url: str) -> bytes:
        """
        Fetch the raw response body for a URL.

        Raises:
            ApiError: In forced-error test mode, or on any transport failure
                including non-2xx responses
        """
        if self.config.test_errors:
            raise ApiError(ErrorCodes.TEST_ERROR, TEST_ERROR_DESCRIPTION)

        if self.config.test_empty_data:
            logger.debug("Empty data test mode, skipping network call")
            return EMPTY_PAYLOAD

        try:
            response = self.session.get(url, timeout=self.config.timeout)
            logger.debug(f"GET {self.config.base_address} status={response.status_code}")
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ApiError(ErrorCodes.TRANSPORT_FAILED, TRANSPORT_ERROR_DESCRIPTION) from e

        return response.content

    def close(self):
        """Close the HTTP session if this transport created it."""
        if self._owns_session:
            self.session.close()
            logger.debug("HTTP session closed")


class RestobazaClient:
    """
    Client for the Restobaza API.

    Example:
        >>> with RestobazaClient({'app_id': 1, 'co_id': 2, 'app_secret': 's'}) as client:
        ...     news = client.call('news/getmany', {'limit': '10'})
    """

    def __init__(
        self,
        config: Union[ClientConfig, Mapping[str, Any]],
        session: Optional[requests.Session] = None,
        nonce_generator: Optional[NonceGenerator] = None,
        timestamp_generator: Optional[TimestampGenerator] = None
    ):
        """
        Initialize the client.

        Args:
            config: ClientConfig, or a mapping validated through ClientConfig.from_dict
            session: Optional requests session to send calls through
            nonce_generator: Optional nonce source, for reproducible signatures
            timestamp_generator: Optional clock, for reproducible signatures

        Raises:
            ApiError: If a required configuration parameter is missing (code 23)
        """
        if not isinstance(config, ClientConfig):
            config = ClientConfig.from_dict(config)

        self.config = config
        self.signer = Signer(config.app_secret, config.digest_algorithm)
        self.transport = HttpTransport(config, session)
        self._nonce_generator = nonce_generator
        self._timestamp_generator = timestamp_generator

        logger.info(f"Initialized Restobaza client for {config.base_address}")

    def prepare(
        self,
        method: str,
        params: Optional[Mapping[str, ParamValue]] = None
    ) -> RequestTrace:
        """
        Build the signed request for a call without sending it.

        Raises:
            ApiError: If signature parameters are invalid or a caller
                parameter uses a reserved name
        """
        unique_params = dict(params or {})

        signature_params = build_signature_parameters(
            self.config, self._nonce_generator, self._timestamp_generator
        )
        signature = self.signer.sign(signature_params)
        standard_params = build_standard_parameters(signature)
        all_params = merge_parameters(standard_params, signature_params, unique_params)
        url = build_url(self.config.base_address, method, all_params)

        logger.debug(f"Prepared {method} with parameters {list(all_params)}")

        return RequestTrace(
            method=method,
            signature_params=dict(sorted(signature_params.items())),
            signature=signature,
            standard_params=standard_params,
            unique_params=unique_params,
            all_params=all_params,
            url=url,
        )

    def execute(
        self,
        method: str,
        params: Optional[Mapping[str, ParamValue]] = None
    ) -> ApiResponse:
        """
        Call an API method and return the decoded data with its trace.

        Raises:
            ApiError: On any pipeline failure
        """
        trace = self.prepare(method, params)
        raw = self.transport.fetch(trace.url)
        data = decode_response(raw)
        return ApiResponse(data=data, trace=trace)

    def call(
        self,
        method: str,
        params: Optional[Mapping[str, ParamValue]] = None
    ) -> ApiResult:
        """
        Call an API method.

        Args:
            method: API method path, e.g. 'news/getmany'
            params: Method-specific parameters

        Returns:
            Decoded JSON result

        Raises:
            ApiError: On any pipeline failure
        """
        return self.execute(method, params).data

    api = call

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def create_client(
    app_id: Union[str, int],
    co_id: Union[str, int],
    app_secret: str,
    **options: Any
) -> RestobazaClient:
    """
    Create a Restobaza client from credentials and optional settings.

    Args:
        app_id: Application identifier
        co_id: Company identifier
        app_secret: Application secret
        **options: Any other ClientConfig field (base_address, test_errors, ...)

    Returns:
        RestobazaClient: Configured client
    """
    config = dict(options, app_id=app_id, co_id=co_id, app_secret=app_secret)
    return RestobazaClient(config)
