import pytest

import gigachat_providers
from gigachat_providers import ErrorCode, GigaChatProvider, ProviderError, create


def test_create_builds_gigachat_provider():
    provider = create(client_id="id", client_secret="secret", model="GigaChat-Pro")
    assert isinstance(provider, GigaChatProvider)  # nosec B101
    assert provider.default_model() == "GigaChat-Pro" and provider.session is not None  # nosec B101
    assert gigachat_providers.__version__  # nosec B101


def test_create_rejects_unknown_provider():
    with pytest.raises(ProviderError) as ei:
        create("openai")
    assert ei.value.code is ErrorCode.UNSUPPORTED  # nosec B101
