"""
Logging Tests

Tests for the aces logging layer: per-module levels, %-style formatting
and structured record sinks.

Run with: pytest tests/test_logging.py -v
"""

import json

import pytest

from aces import logging as aces_logging
from aces.logging import (
    FileSink,
    LogLevel,
    NullSink,
    close_all_sinks,
    configure_logging,
    create_sink_for_module,
    emit_record,
    get_data_dir,
    get_logger,
    register_sink,
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Give each test its own logging configuration and sink registry."""
    monkeypatch.setitem(aces_logging._config, 'default_level', LogLevel.INFO)
    monkeypatch.setitem(aces_logging._config, 'module_levels', {})
    monkeypatch.setitem(aces_logging._config, 'modules', {})
    yield
    close_all_sinks()


class TestLogger:
    """Test level filtering and formatting."""

    def test_info_written_to_stderr(self, capsys):
        get_logger('test_info').info("Wave %d cleared", 3)
        assert capsys.readouterr().err == "[test_info] INFO: Wave 3 cleared\n"

    def test_debug_filtered_by_default(self, capsys):
        get_logger('test_debug').debug("hidden")
        assert capsys.readouterr().err == ""

    def test_module_level_override(self, capsys):
        """Test dotted module names are configured like their env var form."""
        configure_logging('WARNING', modules={'dogfight.ai': 'DEBUG'})

        get_logger('dogfight.ai').debug("tracking")
        get_logger('dogfight').info("dropped")

        err = capsys.readouterr().err
        assert "[dogfight.ai] DEBUG: tracking" in err
        assert "dropped" not in err

    def test_bad_format_args_still_logged(self, capsys):
        get_logger('test_fmt').warning("no placeholder", 5)
        assert "no placeholder (5,)" in capsys.readouterr().err

    def test_loggers_cached(self):
        assert get_logger('same') is get_logger('same')

    def test_exception_includes_traceback(self, capsys):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            get_logger('test_exc').exception("Failed")
        err = capsys.readouterr().err
        assert "ERROR: Failed" in err
        assert "RuntimeError: boom" in err


class TestSinks:
    """Test structured records."""

    def test_no_sink_means_not_emitted(self):
        assert emit_record('nowhere', {'type': 'x'}) is False

    def test_file_sink_writes_jsonl(self, tmp_path):
        """Test header, record and footer lines."""
        sink = FileSink(log_dir=str(tmp_path), session_name='run1')
        register_sink('session', sink)

        assert emit_record('session', {'type': 'game_over', 'ally_score': 30}) is True
        path = sink.log_paths['session']
        close_all_sinks()

        lines = [json.loads(line) for line in path.read_text().splitlines()]
        assert path.name == 'run1_session.jsonl'
        assert [line['type'] for line in lines] == ['header', 'game_over', 'footer']
        assert lines[1]['ally_score'] == 30
        assert 'wall_time' in lines[1]

    def test_disabled_module_gets_null_sink(self):
        assert isinstance(create_sink_for_module('session'), NullSink)

    def test_enabled_module_gets_file_sink(self, tmp_path, monkeypatch):
        monkeypatch.setitem(aces_logging._config, 'modules',
                            {'session': {'enabled': True, 'dir': str(tmp_path)}})
        sink = create_sink_for_module('session', session_name='s')
        assert isinstance(sink, FileSink)


class TestDataDir:
    """Test the platform data directory lookup."""

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv('ACES_DATA_DIR', str(tmp_path))
        assert get_data_dir() == tmp_path
