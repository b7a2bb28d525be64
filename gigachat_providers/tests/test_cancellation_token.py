import pytest

from gigachat_providers.base.cancellation import CancellationToken, CancelledError


def test_cancel_runs_callbacks_once_and_raises():
    token = CancellationToken()
    hits = []
    token.on_cancel(lambda: hits.append("a"))
    unregister = token.on_cancel(lambda: hits.append("b"))
    unregister()
    token.cancel("user stop")
    token.cancel("again")
    assert hits == ["a"] and token.reason == "user stop"  # nosec B101
    with pytest.raises(CancelledError, match="user stop"):
        token.raise_if_cancelled()


def test_late_registration_runs_immediately_and_failures_are_contained():
    token = CancellationToken()

    def bad():
        raise OSError("already closed")

    token.on_cancel(bad)
    token.cancel()
    hits = []
    token.on_cancel(lambda: hits.append(1))
    assert token.cancelled and hits == [1]  # nosec B101
