"""Products: remote data categories with their own paths and data shapes"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Type

from plaid_tartan.domain.exceptions import UnsupportedOperation
from plaid_tartan.domain.schemas import (
    AuthData,
    BalanceData,
    ConnectData,
    IncomeData,
    InfoData,
    WireModel,
)


class OperationKind(str, Enum):
    """What a request intends to do with a product"""

    AUTHENTICATE = "authenticate"
    REAUTHENTICATE = "reauthenticate"
    STEP_MFA = "step_mfa"
    FETCH_DATA = "fetch_data"
    UPGRADE = "upgrade"
    REMOVE_USER = "remove_user"


@dataclass(frozen=True)
class Product:
    """
    A remote data category.

    name is the human-readable label, slug the URL component and
    data_model the schema a successful response decodes into.
    """

    name: str
    slug: str
    data_model: Type[WireModel]

    def path(self, kind: OperationKind) -> str:
        return resolve_path(self, kind)

    def __str__(self) -> str:
        return self.name


def resolve_path(product: Product, kind: OperationKind) -> str:
    """
    Resolve the URL path (with leading slash) for an operation on a product.

    Paths:
    - authenticate / reauthenticate / remove_user: /<slug>
    - step_mfa: /<slug>/step
    - fetch_data: /<slug>/get
    - upgrade: /upgrade?upgrade_to=<slug>

    Raises:
        UnsupportedOperation: kind is not an OperationKind
    """
    if not isinstance(kind, OperationKind):
        raise UnsupportedOperation(f"Unsupported operation kind: {kind!r}")

    if kind is OperationKind.STEP_MFA:
        return f"/{product.slug}/step"
    elif kind is OperationKind.FETCH_DATA:
        return f"/{product.slug}/get"
    elif kind is OperationKind.UPGRADE:
        return f"/upgrade?upgrade_to={product.slug}"
    else:
        return f"/{product.slug}"


# Transactions and account balances
CONNECT = Product(name="Connect", slug="connect", data_model=ConnectData)
# Account and routing numbers for ACH
AUTH = Product(name="Auth", slug="auth", data_model=AuthData)
# Account holder emails, addresses and phone numbers
INFO = Product(name="Info", slug="info", data_model=InfoData)
# Live account balances
BALANCE = Product(name="Balance", slug="balance", data_model=BalanceData)
# Income streams and yearly estimates
INCOME = Product(name="Income", slug="income", data_model=IncomeData)

PRODUCTS: Dict[str, Product] = {p.slug: p for p in (CONNECT, AUTH, INFO, BALANCE, INCOME)}
