"""Per-user authentication state, advanced by feeding it responses"""

from dataclasses import dataclass
from typing import Optional, Union

from plaid_tartan.domain.mfa import Challenge
from plaid_tartan.domain.products import Product
from plaid_tartan.domain.responses import (
    MFA,
    Authenticated,
    ProductData,
    ProductNotEnabled,
    Response,
)
from plaid_tartan.domain.schemas import WireModel


@dataclass(frozen=True)
class UnknownStatus:
    access_token: Optional[str] = None


@dataclass(frozen=True)
class MFAChallenged:
    access_token: str
    challenge: Challenge


@dataclass(frozen=True)
class Connected:
    access_token: Optional[str]
    data: WireModel


@dataclass(frozen=True)
class NotEnabled:
    access_token: str
    product: Product


UserStatus = Union[UnknownStatus, MFAChallenged, Connected, NotEnabled]


def apply(status: UserStatus, response: Response) -> UserStatus:
    """
    Advance a user's status with the response of the latest request.

    Unknown -> MFAChallenged -> Connected | NotEnabled. NotEnabled only
    moves on with an MFA or Authenticated response, i.e. after an Upgrade.
    """
    if isinstance(status, NotEnabled) and not isinstance(response, (MFA, Authenticated)):
        return status

    if isinstance(response, MFA):
        return MFAChallenged(access_token=response.user.access_token, challenge=response.challenge)
    elif isinstance(response, Authenticated):
        return Connected(access_token=response.user.access_token, data=response.data)
    elif isinstance(response, ProductData):
        return Connected(access_token=status.access_token, data=response.data)
    elif isinstance(response, ProductNotEnabled):
        return NotEnabled(access_token=response.user.access_token, product=response.product)

    return UnknownStatus()
