"""Operations on a product and the HTTP requests they turn into"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Union

from plaid_tartan.config import ClientConfig
from plaid_tartan.domain.codec import encode_body
from plaid_tartan.domain.exceptions import InternalError, UnsupportedOperation
from plaid_tartan.domain.mfa import MFAResponse, SelectedDevice
from plaid_tartan.domain.products import OperationKind, Product, resolve_path
from plaid_tartan.utils.date_utils import days_before, to_iso_date

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json; charset=utf-8",
}


@dataclass(frozen=True)
class AuthenticateOptions:
    """
    Options sent along with an Authenticate request.

    list_devices asks the remote to answer with a device list challenge
    instead of sending a code straight away; send_method picks the device.
    """

    webhook: Optional[str] = None
    login_only: Optional[bool] = None
    list_devices: Optional[bool] = None
    send_method: Optional[SelectedDevice] = None

    def to_wire(self) -> Dict[str, Any]:
        return {
            "webhook": self.webhook,
            "login_only": self.login_only,
            "list": self.list_devices,
            "send_method": self.send_method.to_wire() if self.send_method else None,
        }


@dataclass(frozen=True)
class FetchDataOptions:
    """Date range filters for a FetchData request"""

    start_date: Optional[Union[str, date]] = None
    end_date: Optional[Union[str, date]] = None

    @classmethod
    def last_days(cls, days: int, today: date | None = None) -> "FetchDataOptions":
        return cls(start_date=days_before(days, today))

    def to_wire(self) -> Dict[str, Any]:
        return {
            "start_date": to_iso_date(self.start_date) if self.start_date is not None else None,
            "end_date": to_iso_date(self.end_date) if self.end_date is not None else None,
        }


@dataclass(frozen=True)
class UpgradeOptions:
    webhook: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        return {"webhook": self.webhook}


@dataclass(frozen=True)
class Authenticate:
    """Create a user from their bank credentials"""

    institution: str
    username: str
    password: str
    options: Optional[AuthenticateOptions] = None
    pin: Optional[str] = None

    kind = OperationKind.AUTHENTICATE


@dataclass(frozen=True)
class Reauthenticate:
    """Update the stored credentials of an existing user"""

    access_token: str
    username: str
    password: str
    pin: Optional[str] = None

    kind = OperationKind.REAUTHENTICATE


@dataclass(frozen=True)
class StepMFA:
    """Answer a pending MFA challenge"""

    access_token: str
    mfa_response: MFAResponse

    kind = OperationKind.STEP_MFA


@dataclass(frozen=True)
class FetchData:
    """Retrieve the product's data for an authenticated user"""

    access_token: str
    options: Optional[FetchDataOptions] = None

    kind = OperationKind.FETCH_DATA


@dataclass(frozen=True)
class Upgrade:
    """Grant an existing user access to another product"""

    access_token: str
    options: Optional[UpgradeOptions] = None

    kind = OperationKind.UPGRADE


@dataclass(frozen=True)
class RemoveUser:
    """Delete a user and its stored credentials"""

    access_token: str

    kind = OperationKind.REMOVE_USER


Operation = Union[Authenticate, Reauthenticate, StepMFA, FetchData, Upgrade, RemoveUser]

METHODS = {
    OperationKind.AUTHENTICATE: "POST",
    OperationKind.REAUTHENTICATE: "PATCH",
    OperationKind.STEP_MFA: "PATCH",
    OperationKind.FETCH_DATA: "GET",
    OperationKind.UPGRADE: "POST",
    OperationKind.REMOVE_USER: "DELETE",
}


@dataclass(frozen=True)
class PreparedRequest:
    """Everything the transport needs to send one request"""

    method: str
    url: str
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))

    @property
    def content(self) -> bytes:
        return encode_body(self.body)


def _credentials(config: ClientConfig) -> Dict[str, Any]:
    return {"client_id": config.client_id, "secret": config.secret}


def _with_optional(body: Dict[str, Any], key: str, value: Any) -> Dict[str, Any]:
    if value is not None:
        body[key] = value
    return body


def build_body(operation: Operation, config: ClientConfig) -> Dict[str, Any]:
    """
    Build the JSON body of an operation.

    An absent options object omits the "options" key; a present one emits
    every option field, unset ones as null.
    """
    if isinstance(operation, Authenticate):
        body = {
            **_credentials(config),
            "username": operation.username,
            "password": operation.password,
            "type": operation.institution,
        }
        _with_optional(body, "pin", operation.pin)
        return _with_optional(body, "options", operation.options.to_wire() if operation.options else None)

    elif isinstance(operation, Reauthenticate):
        body = {
            **_credentials(config),
            "access_token": operation.access_token,
            "username": operation.username,
            "password": operation.password,
        }
        return _with_optional(body, "pin", operation.pin)

    elif isinstance(operation, StepMFA):
        return {
            **_credentials(config),
            "access_token": operation.access_token,
            "mfa": operation.mfa_response.to_wire(),
        }

    elif isinstance(operation, FetchData):
        body = {**_credentials(config), "access_token": operation.access_token}
        return _with_optional(body, "options", operation.options.to_wire() if operation.options else None)

    elif isinstance(operation, RemoveUser):
        return {**_credentials(config), "access_token": operation.access_token}

    elif isinstance(operation, Upgrade):
        body = {**_credentials(config), "access_token": operation.access_token}
        return _with_optional(body, "options", operation.options.to_wire() if operation.options else None)

    raise UnsupportedOperation(f"Unsupported operation: {type(operation).__name__}")


def build_request(product: Product, operation: Operation, config: ClientConfig) -> PreparedRequest:
    """
    Resolve method, URL and body for an operation on a product.

    Raises:
        UnsupportedOperation: operation is not one of the known operations
        InternalError: the body could not be built from the given values
    """
    kind = getattr(operation, "kind", None)
    if kind not in METHODS:
        raise UnsupportedOperation(f"Unsupported operation: {type(operation).__name__}")

    try:
        body = build_body(operation, config)
    except (TypeError, ValueError, AttributeError) as e:
        raise InternalError(f"Could not build {kind.value} request: {e}") from e

    return PreparedRequest(
        method=METHODS[kind],
        url=f"{config.endpoint}{resolve_path(product, kind)}",
        body=body,
    )
