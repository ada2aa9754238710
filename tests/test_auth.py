"""AuthGuard tests."""

import pytest

from service_host import AuthGuard, Unauthorized


@pytest.mark.parametrize("provided", [None, "", "anything"])
def test_no_token_configured_allows_everything(provided):
    guard = AuthGuard()

    assert not guard.enabled
    guard.authorize(provided)


def test_empty_token_disables_auth():
    assert not AuthGuard("").enabled


def test_exact_token_is_accepted():
    guard = AuthGuard("test-token")

    assert guard.enabled
    guard.authorize("test-token")


@pytest.mark.parametrize("provided", [None, "", "wrong-token", "TEST-TOKEN", " test-token", "test-token\n"])
def test_other_tokens_are_rejected(provided):
    guard = AuthGuard("test-token")

    with pytest.raises(Unauthorized) as exc_info:
        guard.authorize(provided)

    assert exc_info.value.http_status == 401
    assert exc_info.value.body == "Unauthorized"
