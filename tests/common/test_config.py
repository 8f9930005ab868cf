from __future__ import annotations

import os

import pytest

from fedsync.config import (
    ConfigurationError,
    FederationConfig,
    MissingConfigurationError,
    RedundancyAcceptFrom,
    get_activitypub_config,
    get_federation_config,
    require_env_var,
    require_env_vars,
)

FEDERATION_VARS = (
    "FEDSYNC_REDUNDANCY_ACCEPT_FROM",
    "FEDSYNC_TRANSACTION_RETRIES",
    "FEDSYNC_RETRY_INTERVAL",
    "FEDSYNC_WORKERS",
)


@pytest.fixture
def instance_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setenv("FEDSYNC_INSTANCE_URL", "https://local.example")
    for name in FEDERATION_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)
    monkeypatch.delenv("ZZ_MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["ZZ_MISSING_VAR", "MISSING_VAR"])

    assert exc.value.names == ("MISSING_VAR", "ZZ_MISSING_VAR")
    assert "MISSING_VAR, ZZ_MISSING_VAR" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_require_env_var_reads_current_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEMP_VAR", "123")

    assert os.getenv("TEMP_VAR") == "123"
    assert require_env_var("TEMP_VAR") == "123"


def test_federation_config_defaults(instance_env: pytest.MonkeyPatch) -> None:
    config = get_federation_config()

    assert config == FederationConfig(instance_url="https://local.example")
    assert config.redundancy_accept_from == RedundancyAcceptFrom.ANYBODY
    assert config.server_actor_url == "https://local.example/accounts/peertube"


def test_federation_config_reads_overrides(instance_env: pytest.MonkeyPatch) -> None:
    instance_env.setenv("FEDSYNC_INSTANCE_URL", "https://local.example/")
    instance_env.setenv("FEDSYNC_REDUNDANCY_ACCEPT_FROM", " Followings ")
    instance_env.setenv("FEDSYNC_TRANSACTION_RETRIES", "0")
    instance_env.setenv("FEDSYNC_RETRY_INTERVAL", "0.5")
    instance_env.setenv("FEDSYNC_WORKERS", "8")

    config = get_federation_config()

    assert config.redundancy_accept_from == RedundancyAcceptFrom.FOLLOWINGS
    assert config.transaction_retries == 0
    assert config.retry_interval_seconds == 0.5
    assert config.workers == 8
    assert config.server_actor_url == "https://local.example/accounts/peertube"


def test_federation_config_requires_instance_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FEDSYNC_INSTANCE_URL", raising=False)

    with pytest.raises(MissingConfigurationError, match="FEDSYNC_INSTANCE_URL"):
        get_federation_config()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("FEDSYNC_REDUNDANCY_ACCEPT_FROM", "everyone"),
        ("FEDSYNC_TRANSACTION_RETRIES", "many"),
        ("FEDSYNC_TRANSACTION_RETRIES", "-1"),
        ("FEDSYNC_RETRY_INTERVAL", "soon"),
        ("FEDSYNC_WORKERS", "0"),
    ],
)
def test_federation_config_rejects_invalid_values(
    instance_env: pytest.MonkeyPatch, name: str, value: str
) -> None:
    instance_env.setenv(name, value)

    with pytest.raises(ConfigurationError, match=name):
        get_federation_config()


def test_activitypub_config_sends_user_agent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEDSYNC_USER_AGENT", "fedsync-tests")

    config = get_activitypub_config()

    headers = config.resilience.default_headers
    assert headers is not None
    assert headers["User-Agent"] == "fedsync-tests"
    assert "application/activity+json" in headers["Accept"]
