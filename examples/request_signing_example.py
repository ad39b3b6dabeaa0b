#!/usr/bin/env python3
"""
Restobaza Python SDK - Request Signing Example

Shows how a signed request is built and how the test modes behave, without
touching the network.
"""

import json

from restobaza_sdk import (
    RestobazaClient,
    ApiError,
    build_canonical_string,
    sign,
)


def signing_example():
    """Build a signed request with fixed nonce and timestamp"""
    print("=== Request Signing Example ===")

    config = {'app_id': '123', 'co_id': '456', 'app_secret': 'my-secret'}

    with RestobazaClient(config, nonce_generator=lambda: 42,
                         timestamp_generator=lambda: 1700000000) as client:
        trace = client.prepare('news/getmany', {'limit': '10'})

    print(f"Signature parameters: {json.dumps(trace.signature_params)}")
    print(f"Canonical string:     {build_canonical_string(trace.signature_params, 'my-secret')}")
    print(f"Signature:            {trace.signature}")
    print(f"URL:                  {trace.url}")

    assert trace.signature == sign(trace.signature_params, 'my-secret')


def mode_flags_example():
    """Exercise the empty-data and error test modes"""
    print("\n=== Test Modes Example ===")

    base = {'app_id': '123', 'co_id': '456', 'app_secret': 'my-secret'}

    with RestobazaClient(dict(base, test_empty_data=True)) as client:
        print(f"Empty data mode returned: {client.call('news/getmany')}")

    with RestobazaClient(dict(base, test_errors=True)) as client:
        try:
            client.call('news/getmany')
        except ApiError as e:
            print(f"Error mode raised: code={e.code} description={e.description!r}")


if __name__ == '__main__':
    signing_example()
    mode_flags_example()
