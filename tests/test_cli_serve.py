"""
Tests for the tasklist serve command.
"""

import os
from unittest.mock import patch

from typer.testing import CliRunner

from tasklist.cli import app

runner = CliRunner()


class TestServeCommand:
    """Test 'tasklist serve'."""

    def test_serve_help(self):
        """Test that the options are documented."""
        result = runner.invoke(app, ["serve", "--help"])
        assert result.exit_code == 0
        assert "--port" in result.output
        assert "--data-file" in result.output
        assert "--reload" in result.output

    def test_serve_runs_uvicorn_with_options(self, tmp_path):
        """Test that CLI options reach uvicorn and the repository."""
        data_file = tmp_path / "tasks.json"

        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(
                app, ["serve", "--port", "8123", "--data-file", str(data_file)]
            )

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        fastapi_app = mock_run.call_args.args[0]
        assert mock_run.call_args.kwargs["port"] == 8123
        assert mock_run.call_args.kwargs["host"] == "127.0.0.1"
        assert fastapi_app.state.repository.store.path == data_file.resolve()
        assert "Storage:" in result.output

    def test_serve_uses_config_defaults(self, tmp_path, monkeypatch):
        """Test that env config supplies host and port."""
        monkeypatch.setenv("TASKLIST_HOST", "0.0.0.0")
        monkeypatch.setenv("TASKLIST_PORT", "9000")
        monkeypatch.setenv("TASKLIST_DATA_FILE", str(tmp_path / "t.json"))

        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0, result.output
        assert mock_run.call_args.kwargs["host"] == "0.0.0.0"
        assert mock_run.call_args.kwargs["port"] == 9000

    def test_serve_reload_uses_import_string(self, tmp_path, monkeypatch):
        """Test that --reload hands uvicorn the app factory by import path."""
        data_file = tmp_path / "tasks.json"
        # Registers the variable so monkeypatch restores it after the test
        monkeypatch.setenv("TASKLIST_DATA_FILE", "unused.json")

        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(
                app, ["serve", "--reload", "--data-file", str(data_file)]
            )

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == "tasklist.core.api.app:create_app"
        assert mock_run.call_args.kwargs["factory"] is True
        assert mock_run.call_args.kwargs["reload"] is True
        assert os.environ["TASKLIST_DATA_FILE"] == str(data_file.resolve())

    def test_serve_no_reload_passes_app_instance(self, tmp_path):
        """Test that --no-reload keeps the in-process app."""
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(
                app, ["serve", "--no-reload", "--data-file", str(tmp_path / "t.json")]
            )

        assert result.exit_code == 0, result.output
        assert not isinstance(mock_run.call_args.args[0], str)
        assert "reload" not in mock_run.call_args.kwargs
