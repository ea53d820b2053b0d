"""
Integration tests running full authentication flows against the mock Plaid server.

The server runs in-process: FastAPI's TestClient is an httpx.Client, so it
plugs straight into PlaidClient(http=...).

Sandbox users:
- plaid_test: no MFA
- plaid_mfa_device / plaid_mfa_list / plaid_mfa_questions / plaid_mfa_selections
"""

import pytest

from plaid_tartan.domain.exceptions import UnsuccessfulResponse
from plaid_tartan.domain.mfa import (
    CodeChallenge,
    CodeResponse,
    Device,
    DeviceListChallenge,
    QuestionsChallenge,
    QuestionsResponse,
    SelectedDevice,
    SelectionsChallenge,
    SelectionsResponse,
)
from plaid_tartan.domain.payloads import AuthenticateOptions, FetchDataOptions
from plaid_tartan.domain.products import AUTH, BALANCE, CONNECT, INFO
from plaid_tartan.domain.responses import MFA, Authenticated, ProductData, Unknown
from plaid_tartan.domain.status import Connected, MFAChallenged, UnknownStatus, apply
from plaid_tartan.infrastructure.clients.plaid import PlaidClient


@pytest.mark.integration
def test_plaid_test_user_authenticates_without_mfa(plaid_server: PlaidClient):
    """
    plaid_test: valid credentials, no MFA
    Expected: Authenticated with accounts and transactions in order
    """
    response = plaid_server.authenticate(CONNECT, "wells", "plaid_test", "plaid_good")

    assert isinstance(response, Authenticated)
    assert response.user.access_token == "test"
    assert [a.current_balance for a in response.data.accounts] == [742.93, 100030.32]
    assert response.data.accounts[1].available_balance is None
    assert [t.id for t in response.data.transactions] == ["testtransactionid1", "testtransactionid2"]


@pytest.mark.integration
def test_device_code_flow(plaid_server: PlaidClient):
    """
    plaid_mfa_device: code challenge, then correct code
    Expected: Unknown -> MFAChallenged -> Connected
    """
    status = UnknownStatus()

    response = plaid_server.authenticate(CONNECT, "chase", "plaid_mfa_device", "plaid_good")
    status = apply(status, response)
    assert isinstance(status, MFAChallenged)
    assert isinstance(status.challenge, CodeChallenge)
    assert status.challenge.accepts(CodeResponse("tomato"))

    response = plaid_server.step_mfa(CONNECT, status.access_token, CodeResponse("tomato"))
    status = apply(status, response)
    assert isinstance(status, Connected)
    assert status.data.transactions[1].category_id == 13005000


@pytest.mark.integration
def test_device_list_flow(plaid_server: PlaidClient):
    """
    plaid_mfa_list: pick a device from the list, then answer the code
    Expected: DeviceList challenge, Code challenge after selection, then Authenticated
    """
    response = plaid_server.authenticate(
        AUTH, "bofa", "plaid_mfa_list", "plaid_good", options=AuthenticateOptions(list_devices=True)
    )
    assert isinstance(response, MFA)
    assert isinstance(response.challenge, DeviceListChallenge)
    assert [d.device for d in response.challenge.devices] == [Device.PHONE, Device.EMAIL]

    chosen = response.challenge.devices[1]
    response = plaid_server.authenticate(
        AUTH,
        "bofa",
        "plaid_mfa_list",
        "plaid_good",
        options=AuthenticateOptions(send_method=SelectedDevice.by_mask(chosen.mask)),
    )
    assert isinstance(response.challenge, CodeChallenge)

    response = plaid_server.step_mfa(AUTH, response.user.access_token, CodeResponse("tomato"))
    assert isinstance(response, Authenticated)
    assert response.data.accounts[0].routing_number == "021000021"


@pytest.mark.integration
def test_questions_flow(plaid_server: PlaidClient):
    response = plaid_server.authenticate(CONNECT, "usaa", "plaid_mfa_questions", "plaid_good", pin="1234")
    assert isinstance(response.challenge, QuestionsChallenge)

    answer = QuestionsResponse(["tomato"] * len(response.challenge.questions))
    assert response.challenge.accepts(answer)

    response = plaid_server.step_mfa(CONNECT, response.user.access_token, answer)
    assert isinstance(response, Authenticated)


@pytest.mark.integration
def test_selections_flow(plaid_server: PlaidClient):
    response = plaid_server.authenticate(CONNECT, "us", "plaid_mfa_selections", "plaid_good")
    assert isinstance(response.challenge, SelectionsChallenge)

    answer = SelectionsResponse(["tomato", "tomato"])
    response = plaid_server.step_mfa(CONNECT, response.user.access_token, answer)
    assert isinstance(response, Authenticated)


@pytest.mark.integration
def test_wrong_mfa_answer(plaid_server: PlaidClient):
    with pytest.raises(UnsuccessfulResponse) as exc_info:
        plaid_server.step_mfa(CONNECT, "test", CodeResponse("potato"))

    assert exc_info.value.status_code == 402


@pytest.mark.integration
def test_invalid_credentials(plaid_server: PlaidClient):
    # Only the username is checked by the sandbox
    with pytest.raises(UnsuccessfulResponse) as exc_info:
        plaid_server.authenticate(CONNECT, "chase", "nobody", "plaid_good")

    assert exc_info.value.status_code == 402


@pytest.mark.integration
def test_fetch_data_for_each_product(plaid_server: PlaidClient):
    info = plaid_server.fetch_data(INFO, "test")
    balance = plaid_server.fetch_data(BALANCE, "test", FetchDataOptions(start_date="2016-01-01"))

    assert isinstance(info, ProductData)
    assert info.data.info.addresses[0].street == "3819 Greenhaven Ln"
    assert isinstance(balance, ProductData)
    assert balance.data.accounts[0].available_balance == 1203.42


@pytest.mark.integration
def test_fetch_with_bad_token(plaid_server: PlaidClient):
    with pytest.raises(UnsuccessfulResponse) as exc_info:
        plaid_server.fetch_data(CONNECT, "stolen")

    assert exc_info.value.status_code == 401


@pytest.mark.integration
def test_upgrade_and_reauthenticate(plaid_server: PlaidClient):
    upgraded = plaid_server.upgrade(INFO, "test")
    reauthenticated = plaid_server.reauthenticate(CONNECT, "test", "plaid_test", "new_password")

    assert isinstance(upgraded, Authenticated)
    assert upgraded.data.info.emails[0].email == "kelly.walters30@example.com"
    assert isinstance(reauthenticated, Authenticated)


@pytest.mark.integration
def test_remove_user_resets_status(plaid_server: PlaidClient):
    """
    plaid_test: authenticate, then remove the user
    Expected: Connected -> Unknown, and the token no longer matters to the caller
    """
    status = apply(UnknownStatus(), plaid_server.authenticate(CONNECT, "wells", "plaid_test", "plaid_good"))
    assert isinstance(status, Connected)

    response = plaid_server.remove_user(CONNECT, status.access_token)

    assert response == Unknown()
    assert apply(status, response) == UnknownStatus()


@pytest.mark.integration
def test_remove_user_with_bad_token(plaid_server: PlaidClient):
    with pytest.raises(UnsuccessfulResponse) as exc_info:
        plaid_server.remove_user(CONNECT, "stolen")

    assert exc_info.value.status_code == 401
