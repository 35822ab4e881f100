"""
Unit tests for CLI parsing, dispatch and outcome reporting.
"""

import json
import threading
from argparse import Namespace
from unittest.mock import Mock, patch
import pytest

from model_config_store.application.completion import Outcome
from model_config_store.cli.main import dispatch_commands, operation_wait_seconds, run, status_code
from model_config_store.cli.parsers import build_parser
from model_config_store.domain.errors import (
    AlreadyExists,
    ErrorKind,
    NotFound,
    StorageReadFailed,
)
from model_config_store.domain.models import ModelConfig

pytestmark = pytest.mark.cli


def _provider_returning(method, outcome):
    """Mock provider whose ``method`` immediately completes with ``outcome``."""
    provider = Mock()
    provider.write_index = ".ml-inference-000001"
    getattr(provider, method).side_effect = lambda *args: args[-1](outcome)
    return provider


def _printed(mock_print):
    return json.loads(mock_print.call_args[0][0])


class TestCommandParsing:

    def test_build_parser_structure(self):
        parser = build_parser()

        assert "Model config store" in parser.description
        with pytest.raises(SystemExit):
            parser.parse_args(["--help"])

    def test_global_and_subcommand_args(self):
        args = build_parser().parse_args([
            "--url", "http://es:9200",
            "--index-pattern", "configs-*",
            "--timeout", "2.5",
            "get", "--model-id", "m1",
        ])

        assert args.cmd == "get"
        assert args.model_id == "m1"
        assert args.url == "http://es:9200"
        assert args.index_pattern == "configs-*"
        assert args.timeout == 2.5
        assert args.write_index is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestDispatch:

    def test_store_from_file(self, tmp_path):
        path = tmp_path / "model.json"
        path.write_text(json.dumps({"model_id": "m1", "version": "1"}))
        provider = _provider_returning("store", Outcome(value=True))

        with patch("builtins.print") as mock_print:
            code = dispatch_commands(Namespace(cmd="store", file=str(path)), provider, 5)

        assert code == 0
        stored = provider.store.call_args[0][0]
        assert stored == ModelConfig(model_id="m1", version="1")
        assert _printed(mock_print)["status"] == "ok"

    def test_store_rejects_unknown_fields(self, tmp_path):
        path = tmp_path / "model.json"
        path.write_text(json.dumps({"model_id": "m1", "bogus": 1}))
        provider = Mock()

        with patch("builtins.print"):
            code = dispatch_commands(Namespace(cmd="store", file=str(path)), provider, 5)

        assert code == 2
        provider.store.assert_not_called()

    def test_store_missing_file(self, tmp_path):
        with patch("builtins.print"):
            code = dispatch_commands(Namespace(cmd="store", file=str(tmp_path / "nope.json")), Mock(), 5)
        assert code == 2

    def test_store_conflict_reports_409(self, tmp_path):
        path = tmp_path / "model.json"
        path.write_text(json.dumps({"model_id": "m1"}))
        provider = _provider_returning("store", Outcome(error=AlreadyExists("m1")))

        with patch("builtins.print") as mock_print:
            code = dispatch_commands(Namespace(cmd="store", file=str(path)), provider, 5)

        assert code == 1
        out = _printed(mock_print)
        assert out["kind"] == "already_exists"
        assert out["status_code"] == 409

    def test_get_prints_config(self):
        config = ModelConfig(model_id="m1", tags=("a",))
        provider = _provider_returning("get", Outcome(value=config))

        with patch("builtins.print") as mock_print:
            code = dispatch_commands(Namespace(cmd="get", model_id="m1"), provider, 5)

        assert code == 0
        out = _printed(mock_print)
        assert out["config"]["model_id"] == "m1"
        assert out["config"]["tags"] == ["a"]

    def test_delete_not_found(self):
        provider = _provider_returning("delete", Outcome(error=NotFound("m1")))

        with patch("builtins.print") as mock_print:
            code = dispatch_commands(Namespace(cmd="delete", model_id="m1"), provider, 5)

        assert code == 1
        assert _printed(mock_print)["status_code"] == 404

    def test_unknown_command(self):
        with patch("builtins.print"):
            assert dispatch_commands(Namespace(cmd="compact"), Mock(), 5) == 2


class TestStatusCodes:

    @pytest.mark.parametrize("kind,code", [
        (ErrorKind.ALREADY_EXISTS, 409),
        (ErrorKind.NOT_FOUND, 404),
        (ErrorKind.SERIALIZATION_FAILED, 400),
        (ErrorKind.DESERIALIZATION_FAILED, 500),
        (ErrorKind.STORAGE_WRITE_FAILED, 500),
        (ErrorKind.STORAGE_READ_FAILED, 500),
    ])
    def test_mapping(self, kind, code):
        assert status_code(kind) == code


class TestRun:

    @patch("model_config_store.cli.main.ElasticsearchDocumentStore")
    def test_run_wires_store_and_reports(self, mock_store_class):
        documents = Mock()
        mock_store_class.return_value.__enter__ = Mock(return_value=documents)
        mock_store_class.return_value.__exit__ = Mock(return_value=False)

        with patch("model_config_store.cli.main.ModelConfigStore") as mock_provider_class:
            mock_provider_class.return_value = _provider_returning(
                "get", Outcome(error=StorageReadFailed("m1", RuntimeError("shard failure")))
            )
            with patch("builtins.print") as mock_print:
                code = run(["--url", "http://es:9200", "--timeout", "2", "get", "--model-id", "m1"])

        assert code == 1
        mock_store_class.assert_called_once_with(base_url="http://es:9200", timeout=2.0)
        assert mock_provider_class.call_args[0][0] is documents
        assert _printed(mock_print)["kind"] == "storage_read_failed"

    @patch("model_config_store.cli.main.ElasticsearchDocumentStore")
    def test_run_reports_unexpected_errors(self, mock_store_class):
        mock_store_class.side_effect = RuntimeError("boom")

        with patch("builtins.print") as mock_print:
            code = run(["get", "--model-id", "m1"])

        assert code == 3
        assert "RuntimeError: boom" in _printed(mock_print)["error"]


class TestOutcomeWait:

    def test_wait_exceeds_connect_plus_read(self):
        assert operation_wait_seconds(2) > 2 * 2
        assert operation_wait_seconds(2.0) == 9.0

    @patch("model_config_store.cli.main.ElasticsearchDocumentStore")
    def test_outcome_after_http_timeout_is_still_reported(self, mock_store_class):
        mock_store_class.return_value.__enter__ = Mock(return_value=Mock())
        mock_store_class.return_value.__exit__ = Mock(return_value=False)
        provider = Mock()
        # completes later than the 0.1s HTTP timeout, as a slow connect plus read would
        provider.delete.side_effect = lambda model_id, cb: threading.Timer(0.3, cb, [Outcome(value=True)]).start()

        with patch("model_config_store.cli.main.ModelConfigStore", return_value=provider):
            with patch("builtins.print") as mock_print:
                code = run(["--timeout", "0.1", "delete", "--model-id", "m1"])

        assert code == 0
        assert _printed(mock_print) == {"status": "ok", "model_id": "m1", "deleted": True}
