"""
Test suite for Restobaza request signing

This module tests signature parameter assembly, canonical string
construction and the digest computation.
"""

import time
import pytest
from unittest.mock import Mock

from restobaza_sdk.config import ClientConfig
from restobaza_sdk.exceptions import ApiError, ErrorCodes
from restobaza_sdk.signing import (
    Signer,
    DigestAlgorithm,
    build_signature_parameters,
    build_canonical_string,
    sign,
    generate_nonce,
    generate_timestamp,
    validate_nonce,
    validate_timestamp,
)

SECRET = "my-secret"

FIXED_PARAMS = {
    'app_id': '123',
    'co_id': '456',
    'random': 42,
    'timestamp': 1700000000,
}

# md5("app_id=123co_id=456random=42timestamp=1700000000my-secret")
EXPECTED_MD5 = "42ee2afad4e44903f3dda507870c4165"


@pytest.fixture
def config():
    return ClientConfig(app_id='123', co_id='456', app_secret=SECRET)


class TestSigningUtilities:
    """Test nonce and timestamp sources"""

    def test_generate_nonce_range(self):
        """Nonces stay within the inclusive server range"""
        nonces = [generate_nonce() for _ in range(500)]
        assert all(0 <= nonce <= 10000 for nonce in nonces)
        assert all(isinstance(nonce, int) for nonce in nonces)
        assert len(set(nonces)) > 1

    def test_generate_timestamp(self):
        """Timestamps are current Unix seconds"""
        timestamp = generate_timestamp()
        assert isinstance(timestamp, int)
        assert abs(timestamp - int(time.time())) < 2

    def test_validate_nonce(self):
        assert validate_nonce(0)
        assert validate_nonce(10000)
        assert validate_nonce(5000)

        assert not validate_nonce(-1)
        assert not validate_nonce(10001)
        assert not validate_nonce("42")
        assert not validate_nonce(1.5)
        assert not validate_nonce(True)
        assert not validate_nonce(None)

    def test_validate_timestamp(self):
        assert validate_timestamp(0)
        assert validate_timestamp(int(time.time()))

        assert not validate_timestamp(-1)
        assert not validate_timestamp(1.5)
        assert not validate_timestamp("1700000000")


class TestBuildSignatureParameters:
    """Test signature parameter assembly"""

    def test_contains_exactly_expected_keys(self, config):
        params = build_signature_parameters(config)
        assert set(params) == {'app_id', 'co_id', 'random', 'timestamp'}

    def test_identity_copied_verbatim(self, config):
        params = build_signature_parameters(config)
        assert params['app_id'] == '123'
        assert params['co_id'] == '456'

    def test_injected_generators(self, config):
        """Injected nonce and clock are used as-is"""
        params = build_signature_parameters(config, lambda: 42, lambda: 1700000000)
        assert params == FIXED_PARAMS

    def test_generators_called_once_per_call(self, config):
        nonce = Mock(return_value=7)
        clock = Mock(return_value=1700000000)

        build_signature_parameters(config, nonce, clock)

        nonce.assert_called_once_with()
        clock.assert_called_once_with()

    def test_invalid_nonce_rejected(self, config):
        with pytest.raises(ApiError) as exc_info:
            build_signature_parameters(config, lambda: 10001, lambda: 1700000000)
        assert exc_info.value.code == ErrorCodes.INVALID_SIGNATURE_PARAMETER

    def test_invalid_timestamp_rejected(self, config):
        with pytest.raises(ApiError) as exc_info:
            build_signature_parameters(config, lambda: 1, lambda: -5)
        assert exc_info.value.code == ErrorCodes.INVALID_SIGNATURE_PARAMETER


class TestSign:
    """Test signature computation"""

    def test_canonical_string(self):
        canonical = build_canonical_string(FIXED_PARAMS, SECRET)
        assert canonical == "app_id=123co_id=456random=42timestamp=1700000000my-secret"

    def test_known_md5_signature(self):
        assert sign(FIXED_PARAMS, SECRET) == EXPECTED_MD5

    def test_deterministic(self):
        signatures = {sign(dict(FIXED_PARAMS), SECRET) for _ in range(5)}
        assert signatures == {EXPECTED_MD5}

    def test_insertion_order_irrelevant(self):
        """Parameters are sorted by key before concatenation"""
        reordered = {
            'timestamp': 1700000000,
            'random': 42,
            'co_id': '456',
            'app_id': '123',
        }
        assert sign(reordered, SECRET) == EXPECTED_MD5

    @pytest.mark.parametrize("key,value", [
        ('app_id', '124'),
        ('co_id', '457'),
        ('random', 43),
        ('timestamp', 1700000001),
    ])
    def test_any_parameter_change_changes_signature(self, key, value):
        changed = dict(FIXED_PARAMS, **{key: value})
        assert sign(changed, SECRET) != EXPECTED_MD5

    def test_secret_change_changes_signature(self):
        assert sign(FIXED_PARAMS, "other-secret") != EXPECTED_MD5

    def test_lowercase_hex(self):
        signature = sign(FIXED_PARAMS, SECRET)
        assert len(signature) == 32
        assert signature == signature.lower()
        int(signature, 16)

    def test_empty_parameters_digest_secret_only(self):
        assert sign({}, "secret") == "5ebe2294ecd0e0f08eab7690d2a6ee69"

    def test_alternative_algorithms(self):
        assert sign(FIXED_PARAMS, SECRET, DigestAlgorithm.SHA1) == \
            "456777ea779f02fb160dff3d8d22202faee1b00d"
        assert sign(FIXED_PARAMS, SECRET, DigestAlgorithm.SHA256) == \
            "7a125cfac41e8985d82d8d7549745d861f5fc5308965a6d51c2953836b6024a5"

    def test_algorithm_accepts_string_value(self):
        assert sign(FIXED_PARAMS, SECRET, "md5") == EXPECTED_MD5


class TestSigner:
    """Test the Signer wrapper"""

    def test_defaults_to_md5(self):
        signer = Signer(SECRET)
        assert signer.algorithm == DigestAlgorithm.MD5
        assert signer.sign(FIXED_PARAMS) == EXPECTED_MD5

    def test_empty_secret_rejected(self):
        with pytest.raises(ApiError) as exc_info:
            Signer("")
        assert exc_info.value.code == ErrorCodes.MISSING_PARAMETER
        assert exc_info.value.description == "missing required parameter: app_secret"

    def test_repr_hides_secret(self):
        assert SECRET not in repr(Signer(SECRET))
