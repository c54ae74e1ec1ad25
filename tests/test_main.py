"""Test the command-line entry point."""

import logging
from unittest.mock import patch
import pytest
from linemark import __main__ as cli
from linemark import __version__
from linemark.config import EditorSettings


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Keep the user's real settings file and log variable out of the tests."""
    monkeypatch.delenv("LINEMARK_LOG", raising=False)
    with patch('linemark.editor.SettingsStore.load', return_value=EditorSettings()):
        yield


def test_version_flag(capsys):
    assert cli.main(["--version"]) == 0
    out = capsys.readouterr().out
    assert out.startswith(f"linemark {__version__} (")


def test_unreadable_file_exits_with_error(tmp_path, capsys):
    with patch('linemark.editor.Editor.run') as run:
        status = cli.main([str(tmp_path)])
    assert status == 1
    assert "Cannot open" in capsys.readouterr().err
    run.assert_not_called()


def test_opens_file_and_runs(tmp_path):
    source = tmp_path / "a.c"
    source.write_text("int x;\n", encoding='utf-8')
    with patch('linemark.editor.Editor.run') as run:
        assert cli.main([str(source)]) == 0
    run.assert_called_once()


def test_too_many_arguments(capsys):
    assert cli.main(["a", "b"]) == 2
    assert "usage" in capsys.readouterr().err


def test_log_option_configures_file_logging(tmp_path):
    log_file = tmp_path / "linemark.log"
    with patch('linemark.__main__.logging.basicConfig') as basic_config, \
         patch('linemark.editor.Editor.run'):
        assert cli.main(["--log", str(log_file)]) == 0
    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs['filename'] == str(log_file)
    assert basic_config.call_args.kwargs['level'] == logging.DEBUG


def test_log_option_requires_file(capsys):
    assert cli.main(["--log"]) == 2
