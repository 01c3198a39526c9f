import pytest
from loguru import logger

from rm_preprocessor import logs
from rm_preprocessor.config.preprocess_config import PreprocessConfig
from rm_preprocessor.utils.errors import ConfigError
from rm_preprocessor.workflows.preprocess_workflow import run_preprocess


@pytest.fixture
def records():
    captured = []
    sink_id = logger.add(lambda msg: captured.append(msg.record), level="DEBUG")
    yield captured
    logger.remove(sink_id)


def test_catch_logs_traceback_for_unexpected_errors(records):
    @logs.catch("boom")
    def explode():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        explode()

    errors = [r for r in records if r["level"].name == "ERROR"]
    assert len(errors) == 1
    assert errors[0]["exception"] is not None


def test_catch_logs_user_input_errors_without_traceback(records):
    @logs.catch("boom")
    def reject():
        raise ConfigError("root directory is required")

    with pytest.raises(ConfigError):
        reject()

    errors = [r for r in records if r["level"].name == "ERROR"]
    assert len(errors) == 1
    assert errors[0]["exception"] is None
    assert "root directory is required" in errors[0]["message"]


def test_missing_root_run_is_logged_without_traceback(tmp_path, records):
    config = PreprocessConfig(root_directory=tmp_path / "missing")

    with pytest.raises(ConfigError):
        run_preprocess(config)

    assert all(r["exception"] is None for r in records)
