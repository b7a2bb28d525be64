from gigachat_providers.base.timeouts import get_timeout_config, httpx_timeout


def test_defaults_and_env_override(monkeypatch):
    cfg = get_timeout_config()
    assert cfg.start_timeout_seconds == 30.0 and cfg.overall_timeout_seconds is None  # nosec B101
    monkeypatch.setenv("PT_TIMEOUT_STREAM_SECONDS", "5")
    monkeypatch.setenv("PT_TIMEOUT_HTTP_SECONDS", "-1")
    cfg = get_timeout_config()
    assert cfg.stream_timeout_seconds == 5.0 and cfg.http_timeout_seconds == 30.0  # nosec B101


def test_stream_reads_use_stream_timeout(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_STREAM_SECONDS", "7")
    monkeypatch.setenv("PT_TIMEOUT_START_SECONDS", "3")
    t = httpx_timeout(stream=True)
    assert t.read == 7.0 and t.connect == 3.0  # nosec B101
    assert httpx_timeout().read == 30.0  # nosec B101
