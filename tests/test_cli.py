"""
Tests for the restobaza-cli command-line interface
"""

import json
import pytest
from unittest.mock import patch

from restobaza_sdk.cli import main, parse_params, create_parser

ENV = {
    'RESTOBAZA_APP_ID': '123',
    'RESTOBAZA_CO_ID': '456',
    'RESTOBAZA_APP_SECRET': 'my-secret',
}


@pytest.fixture
def env(monkeypatch):
    for key, value in ENV.items():
        monkeypatch.setenv(key, value)
    for key in ('RESTOBAZA_TEST_ERRORS', 'RESTOBAZA_TEST_EMPTY_DATA', 'RESTOBAZA_BASE_ADDRESS'):
        monkeypatch.delenv(key, raising=False)


class TestParseParams:

    def test_parse(self):
        assert parse_params(['limit=10', 'q=a=b', 'empty=']) == {
            'limit': '10', 'q': 'a=b', 'empty': '',
        }

    @pytest.mark.parametrize("item", ['novalue', '=value'])
    def test_invalid(self, item):
        with pytest.raises(ValueError, match="expected KEY=VALUE"):
            parse_params([item])


class TestCallCommand:
    """Test the call subcommand"""

    def test_empty_data_mode(self, env, capsys):
        exit_code = main(['call', 'news/getmany', '-p', 'limit=10', '--test-empty-data'])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == {}

    def test_error_mode(self, env, capsys):
        exit_code = main(['call', 'news/getmany', '--test-errors'])

        assert exit_code == 1
        assert "Error (123456789): synthetic test error" in capsys.readouterr().err

    def test_trace_output(self, env, capsys):
        exit_code = main(['call', 'menu/get', '-p', 'id=7', '--test-empty-data', '--trace'])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output['data'] == {}
        assert output['trace']['method'] == 'menu/get'
        assert output['trace']['unique_params'] == {'id': '7'}
        assert output['trace']['url'].startswith("http://api.restobaza.ru/menu/get?")

    def test_config_file(self, tmp_path, capsys, monkeypatch):
        for key in ENV:
            monkeypatch.delenv(key, raising=False)
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            'app_id': '1', 'co_id': '2', 'app_secret': 's', 'test_empty_data': True,
        }), encoding='utf-8')

        assert main(['call', 'm', '--config', str(path)]) == 0
        assert json.loads(capsys.readouterr().out) == {}

    def test_missing_configuration(self, monkeypatch, capsys):
        for key in ENV:
            monkeypatch.delenv(key, raising=False)

        assert main(['call', 'm']) == 1
        assert "Error (23): missing required parameter: app_id" in capsys.readouterr().err

    def test_invalid_param(self, env, capsys):
        assert main(['call', 'm', '-p', 'broken']) == 1
        assert "expected KEY=VALUE" in capsys.readouterr().err

    def test_reserved_param(self, env, capsys):
        assert main(['call', 'm', '-p', 'sig=x', '--test-empty-data']) == 1
        assert "Error (24): reserved parameter: sig" in capsys.readouterr().err

    def test_live_call_uses_client(self, env, capsys):
        with patch("restobaza_sdk.cli.RestobazaClient") as client_class:
            client = client_class.return_value.__enter__.return_value
            client.execute.return_value.data = {'items': [1]}

            assert main(['call', 'news/getmany', '-p', 'limit=10']) == 0

        client.execute.assert_called_once_with('news/getmany', {'limit': '10'})
        assert json.loads(capsys.readouterr().out) == {'items': [1]}


class TestSignCommand:
    """Test the sign subcommand"""

    def test_fixed_values(self, capsys):
        exit_code = main([
            'sign', '--app-id', '123', '--co-id', '456', '--secret', 'my-secret',
            '--random', '42', '--timestamp', '1700000000', '--show-canonical',
        ])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output['sig'] == "42ee2afad4e44903f3dda507870c4165"
        assert output['algorithm'] == 'md5'
        assert output['signature_params'] == {
            'app_id': '123', 'co_id': '456', 'random': 42, 'timestamp': 1700000000,
        }
        assert output['canonical'] == "app_id=123co_id=456random=42timestamp=1700000000my-secret"

    def test_out_of_range_nonce(self, capsys):
        exit_code = main([
            'sign', '--app-id', '1', '--co-id', '2', '--secret', 's', '--random', '20000',
        ])
        assert exit_code == 1
        assert "Error (25)" in capsys.readouterr().err


class TestParser:

    def test_no_command_shows_help(self, capsys):
        assert main([]) == 1
        assert "restobaza-cli" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(['--version'])
        assert exc_info.value.code == 0
        assert "Restobaza Python SDK" in capsys.readouterr().out
