"""Pydantic schemas for the vendor's JSON payloads"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class WireModel(BaseModel):
    """Base for every decoded entity: immutable, unknown keys ignored"""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class User(WireModel):
    """An authenticated end-user, identified by its access token"""

    access_token: str


class Address(WireModel):
    """
    Postal address.

    Two wire shapes are accepted: the flat transaction-location shape
    ({street|address, city, state, zip, coordinates}) and the Info shape
    ({primary, data: {...}}). The street is read from "street" and falls
    back to "address"; when neither is set it is None.
    """

    primary: Optional[bool] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value

        primary = value.get("primary")
        if isinstance(value.get("data"), dict):
            value = value["data"]

        street = value.get("street")
        if street is None:
            street = value.get("address")

        coordinates = value.get("coordinates")
        if not isinstance(coordinates, dict):
            coordinates = {}

        return {
            "primary": primary,
            "street": street,
            "city": value.get("city"),
            "state": value.get("state"),
            "zip": value.get("zip"),
            "latitude": coordinates.get("lat"),
            "longitude": coordinates.get("lon"),
        }


class Email(WireModel):
    primary: bool
    email_type: str = Field(alias="type")
    email: str = Field(alias="data")


class PhoneNumber(WireModel):
    primary: bool
    phone_number_type: str = Field(alias="type")
    phone_number: str = Field(alias="data")


class AccountMeta(WireModel):
    name: Optional[str] = None
    number: Optional[str] = None
    limit: Optional[float] = None


class Account(WireModel):
    """
    A bank account linked to an access token.

    The nested "balance" object is split into current_balance (required)
    and available_balance; "numbers" is only sent by the Auth product.
    """

    id: str = Field(alias="_id")
    item_id: str = Field(alias="_item")
    user_id: Optional[str] = Field(default=None, alias="_user")
    current_balance: float
    available_balance: Optional[float] = None
    institution: str = Field(alias="institution_type")
    account_type: str = Field(alias="type")
    account_subtype: Optional[str] = Field(default=None, alias="subtype")
    account_number: Optional[str] = None
    routing_number: Optional[str] = None
    wire_routing_number: Optional[str] = None
    meta: Optional[AccountMeta] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value

        value = dict(value)
        balance = value.pop("balance", None)
        if balance is not None:
            if not isinstance(balance, dict):
                raise ValueError("balance must be an object")
            if "current" in balance:
                value["current_balance"] = balance["current"]
            if "available" in balance:
                value["available_balance"] = balance["available"]

        numbers = value.pop("numbers", None)
        if isinstance(numbers, dict):
            value["account_number"] = numbers.get("account")
            value["routing_number"] = numbers.get("routing")
            value["wire_routing_number"] = numbers.get("wireRouting")

        return value


class TransactionContext(str, Enum):
    """Where a transaction took place"""

    PLACE = "place"
    DIGITAL = "digital"
    SPECIAL = "special"  # usually banking transactions
    UNRESOLVED = "unresolved"


class TransactionMeta(WireModel):
    location: Optional[Address] = None


class Transaction(WireModel):
    """
    A single posted or pending transaction.

    amount is positive when money leaves the account and negative when it
    comes in. date is kept as the ISO-8601 string the remote sent.
    """

    id: str = Field(alias="_id")
    account_id: str = Field(alias="_account")
    amount: float
    category_id: int
    context: TransactionContext = Field(default=TransactionContext.UNRESOLVED, alias="type")
    categories: List[str] = Field(alias="category")
    pending: bool
    date: str
    name: Optional[str] = None
    meta: Optional[TransactionMeta] = None

    @field_validator("category_id", mode="before")
    @classmethod
    def _parse_category_id(cls, value: Any) -> Any:
        # Sent as a numeric string, e.g. "13005000"
        if isinstance(value, str):
            if not value.strip().isdigit():
                raise ValueError(f"category_id must be a numeric string, got {value!r}")
            return int(value)
        return value

    @field_validator("context", mode="before")
    @classmethod
    def _parse_context(cls, value: Any) -> Any:
        if isinstance(value, dict):
            value = value.get("primary")
        try:
            return TransactionContext(value)
        except ValueError:
            return TransactionContext.UNRESOLVED


class IncomeStream(WireModel):
    monthly_income: float
    confidence: float
    days: int
    name: str


class IncomeSummary(WireModel):
    income_streams: List[IncomeStream] = Field(default_factory=list)
    last_year_income: float
    last_year_income_before_tax: float
    projected_yearly_income: float
    projected_yearly_income_before_tax: float
    max_number_of_overlapping_income_streams: int
    number_of_income_streams: int


class InfoSummary(WireModel):
    emails: List[Email] = Field(default_factory=list)
    addresses: List[Address] = Field(default_factory=list)
    phone_numbers: List[PhoneNumber] = Field(default_factory=list)


class ConnectData(WireModel):
    """Accounts and transaction history"""

    accounts: List[Account]
    transactions: List[Transaction]


class AuthData(WireModel):
    """Accounts including account and routing numbers"""

    accounts: List[Account]


class BalanceData(WireModel):
    accounts: List[Account]


class InfoData(WireModel):
    """Accounts plus account-holder emails, addresses and phone numbers"""

    accounts: List[Account]
    info: InfoSummary


class IncomeData(WireModel):
    accounts: List[Account]
    income: IncomeSummary
