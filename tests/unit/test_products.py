"""Unit tests for product path resolution"""

import pytest

from plaid_tartan.domain.exceptions import UnsupportedOperation
from plaid_tartan.domain.products import AUTH, CONNECT, INCOME, PRODUCTS, OperationKind, resolve_path
from plaid_tartan.domain.schemas import ConnectData


@pytest.mark.parametrize("slug", ["connect", "auth", "info", "balance", "income"])
def test_resolve_path_for_every_product(slug: str):
    """Test every product resolves every operation kind"""
    product = PRODUCTS[slug]

    assert resolve_path(product, OperationKind.AUTHENTICATE) == f"/{slug}"
    assert resolve_path(product, OperationKind.REAUTHENTICATE) == f"/{slug}"
    assert resolve_path(product, OperationKind.STEP_MFA) == f"/{slug}/step"
    assert resolve_path(product, OperationKind.FETCH_DATA) == f"/{slug}/get"
    assert resolve_path(product, OperationKind.UPGRADE) == f"/upgrade?upgrade_to={slug}"
    assert resolve_path(product, OperationKind.REMOVE_USER) == f"/{slug}"


def test_product_path_shortcut():
    assert INCOME.path(OperationKind.FETCH_DATA) == "/income/get"


def test_resolve_path_rejects_unknown_kind():
    with pytest.raises(UnsupportedOperation):
        resolve_path(CONNECT, "delete")


def test_products_carry_name_and_data_model():
    assert CONNECT.name == "Connect"
    assert str(AUTH) == "Auth"
    assert CONNECT.data_model is ConnectData
