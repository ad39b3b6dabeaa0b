"""
Command-line interface for Restobaza Python SDK
Calls API methods and computes signatures for debugging
"""

import argparse
import dataclasses
import json
import logging
import sys
from typing import Dict, List, Optional

from . import __version__
from .config import ClientConfig, load_config_from_env, load_config_from_file
from .exceptions import ApiError
from .http_client import RestobazaClient
from .signing import DigestAlgorithm, build_signature_parameters, build_canonical_string, sign


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='restobaza-cli',
        description='Restobaza SDK command-line interface for signed API calls'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Restobaza Python SDK {__version__}'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_call_parser(subparsers)
    setup_sign_parser(subparsers)

    return parser


def setup_call_parser(subparsers):
    """Setup API call subcommand."""
    call_parser = subparsers.add_parser('call', help='Call a Restobaza API method')
    call_parser.add_argument('method', help="API method, e.g. 'news/getmany'")
    call_parser.add_argument(
        '--param', '-p',
        action='append',
        default=[],
        metavar='KEY=VALUE',
        help='Method parameter (repeatable)'
    )
    call_parser.add_argument('--config', help='JSON configuration file (default: RESTOBAZA_* environment variables)')
    call_parser.add_argument('--base-address', help='Override the API base address')
    call_parser.add_argument('--test-errors', action='store_true', help='Fail with a synthetic test error')
    call_parser.add_argument('--test-empty-data', action='store_true', help='Return empty data without calling the API')
    call_parser.add_argument('--trace', action='store_true', help='Also print the signed request details')


def setup_sign_parser(subparsers):
    """Setup signature subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Compute a request signature')
    sign_parser.add_argument('--app-id', required=True, help='Application identifier')
    sign_parser.add_argument('--co-id', required=True, help='Company identifier')
    sign_parser.add_argument('--secret', required=True, help='Application secret')
    sign_parser.add_argument('--random', type=int, help='Nonce to use (random if omitted)')
    sign_parser.add_argument('--timestamp', type=int, help='Unix timestamp to use (now if omitted)')
    sign_parser.add_argument(
        '--algorithm',
        choices=[algorithm.value for algorithm in DigestAlgorithm],
        default=DigestAlgorithm.MD5.value,
        help='Digest algorithm (default: md5)'
    )
    sign_parser.add_argument('--show-canonical', action='store_true', help='Print the string that was digested')


def parse_params(items: List[str]) -> Dict[str, str]:
    """Parse KEY=VALUE items into a dictionary."""
    params = {}
    for item in items:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise ValueError(f"Invalid parameter '{item}', expected KEY=VALUE")
        params[key] = value
    return params


def handle_call_command(args) -> int:
    """Handle API call command."""
    try:
        params = parse_params(args.param)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        config = load_config_from_file(args.config) if args.config else load_config_from_env()

        overrides = {}
        if args.base_address:
            overrides['base_address'] = args.base_address
        if args.test_errors:
            overrides['test_errors'] = True
        if args.test_empty_data:
            overrides['test_empty_data'] = True
        if overrides:
            config = dataclasses.replace(config, **overrides)

        with RestobazaClient(config) as client:
            response = client.execute(args.method, params)

    except ApiError as e:
        print(f"Error ({e.code}): {e.description}", file=sys.stderr)
        return 1

    if args.trace:
        output = {
            'data': response.data,
            'trace': dataclasses.asdict(response.trace),
        }
    else:
        output = response.data

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def handle_sign_command(args) -> int:
    """Handle signature command."""
    try:
        config = ClientConfig(app_id=args.app_id, co_id=args.co_id, app_secret=args.secret)

        nonce_generator = (lambda: args.random) if args.random is not None else None
        timestamp_generator = (lambda: args.timestamp) if args.timestamp is not None else None
        signature_params = build_signature_parameters(config, nonce_generator, timestamp_generator)

    except ApiError as e:
        print(f"Error ({e.code}): {e.description}", file=sys.stderr)
        return 1

    output = {
        'signature_params': dict(sorted(signature_params.items())),
        'algorithm': args.algorithm,
        'sig': sign(signature_params, args.secret, DigestAlgorithm(args.algorithm)),
    }
    if args.show_canonical:
        output['canonical'] = build_canonical_string(signature_params, args.secret)

    print(json.dumps(output, indent=2))
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        if args.command == 'call':
            return handle_call_command(args)
        elif args.command == 'sign':
            return handle_sign_command(args)
        else:
            # No command specified, show help
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
