from gigachat_providers.base.http import close_all_clients, get_httpx_client


def test_clients_are_pooled_per_purpose_and_verify():
    a = get_httpx_client(None, "gigachat.auth")
    assert get_httpx_client(None, "gigachat.auth") is a  # nosec B101
    assert get_httpx_client(None, "gigachat.api") is not a  # nosec B101
    assert get_httpx_client(None, "gigachat.auth", verify=False) is not a  # nosec B101


def test_close_all_clients_resets_pool():
    a = get_httpx_client("https://api.test", "gigachat.api")
    close_all_clients()
    assert a.is_closed  # nosec B101
    assert get_httpx_client("https://api.test", "gigachat.api") is not a  # nosec B101
