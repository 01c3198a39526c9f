from rm_preprocessor.config.app_config import AppConfig


def test_load_packaged_defaults(monkeypatch, tmp_path):
    for var in ("RMPREP_LOG_DIR", "RMPREP_LOG_LEVEL", "RMPREP_MAX_WORKERS"):
        monkeypatch.delenv(var, raising=False)

    cfg = AppConfig.load(env_file=str(tmp_path / "missing.env"))

    assert cfg.log.level == "INFO"
    assert cfg.pipeline.max_workers is None
    assert cfg.pipeline.use_processes is False


def test_env_overrides_yaml(monkeypatch, tmp_path):
    settings = tmp_path / "settings.yml"
    settings.write_text("log:\n  level: INFO\npipeline:\n  max_workers: 2\n", encoding="utf-8")
    monkeypatch.setenv("RMPREP_MAX_WORKERS", "6")
    monkeypatch.setenv("RMPREP_LOG_LEVEL", "DEBUG")

    cfg = AppConfig.load(str(settings), env_file=str(tmp_path / "missing.env"))

    assert cfg.pipeline.max_workers == 6
    assert cfg.log.level == "DEBUG"


def test_dotenv_file_is_read(monkeypatch, tmp_path):
    # setenv first so teardown removes whatever load_dotenv writes
    monkeypatch.setenv("RMPREP_LOG_DIR", "")
    monkeypatch.delenv("RMPREP_LOG_DIR")
    env = tmp_path / ".env"
    env.write_text("RMPREP_LOG_DIR=custom_logs\n", encoding="utf-8")

    cfg = AppConfig.load(env_file=str(env))

    assert cfg.log.dir == "custom_logs"
