"""Response variants and the status-code classifier that produces them"""

from dataclasses import dataclass
from typing import Union

from plaid_tartan.domain.codec import decode_challenge, decode_data, decode_user, load_json
from plaid_tartan.domain.exceptions import UnsuccessfulResponse
from plaid_tartan.domain.mfa import Challenge
from plaid_tartan.domain.payloads import Operation
from plaid_tartan.domain.products import OperationKind, Product
from plaid_tartan.domain.schemas import User, WireModel


@dataclass(frozen=True)
class MFA:
    """The user was created but an MFA step is still pending"""

    user: User
    challenge: Challenge


@dataclass(frozen=True)
class Authenticated:
    """The user is authenticated; the product's data came along"""

    user: User
    data: WireModel


@dataclass(frozen=True)
class ProductData:
    """Data fetched for an already authenticated user"""

    data: WireModel


@dataclass(frozen=True)
class ProductNotEnabled:
    """
    The access token is not entitled to the product.

    Recover by sending an Upgrade for the product.
    """

    user: User
    product: Product


@dataclass(frozen=True)
class Unknown:
    """Nothing is known about the user, e.g. after it was removed"""


Response = Union[MFA, Authenticated, ProductData, ProductNotEnabled, Unknown]

AUTHENTICATING = frozenset(
    {
        OperationKind.AUTHENTICATE,
        OperationKind.REAUTHENTICATE,
        OperationKind.STEP_MFA,
        OperationKind.UPGRADE,
    }
)


def classify(product: Product, operation: Operation, status_code: int, content: bytes) -> Response:
    """
    Turn a status code and body into a Response.

    - 201, any operation: User + Challenge -> MFA
    - 200, authenticate/reauthenticate/step/upgrade: User + data -> Authenticated
    - 200, fetch: data -> ProductData
    - 200, remove user: Unknown, body ignored
    - anything else: UnsuccessfulResponse, body ignored

    The remote signals "more auth needed" by status code alone, so a 201
    wins over whatever operation was sent.

    Raises:
        UnsuccessfulResponse: unexpected status code
        DecodeError: body does not match the expected shape
    """
    if status_code == 201:
        body = load_json(content)
        return MFA(user=decode_user(body), challenge=decode_challenge(body))

    if status_code == 200:
        if operation.kind in AUTHENTICATING:
            body = load_json(content)
            return Authenticated(user=decode_user(body), data=decode_data(product, body))
        elif operation.kind is OperationKind.FETCH_DATA:
            return ProductData(data=decode_data(product, load_json(content)))
        elif operation.kind is OperationKind.REMOVE_USER:
            return Unknown()

    raise UnsuccessfulResponse(status_code)
