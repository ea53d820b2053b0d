"""Client for the legacy Plaid (tartan) API"""

from plaid_tartan.config import ClientConfig, Settings
from plaid_tartan.domain.exceptions import (
    DecodeError,
    InternalError,
    InvalidResponse,
    PlaidError,
    TransportError,
    UnsuccessfulResponse,
    UnsupportedChallengeType,
    UnsupportedMfaPreference,
    UnsupportedOperation,
)
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
from plaid_tartan.domain.payloads import (
    Authenticate,
    AuthenticateOptions,
    FetchData,
    FetchDataOptions,
    Reauthenticate,
    RemoveUser,
    StepMFA,
    Upgrade,
    UpgradeOptions,
)
from plaid_tartan.domain.products import AUTH, BALANCE, CONNECT, INCOME, INFO, PRODUCTS, OperationKind, Product
from plaid_tartan.domain.responses import MFA, Authenticated, ProductData, ProductNotEnabled, Unknown
from plaid_tartan.infrastructure.clients.plaid import PlaidClient

__version__ = "0.1.0"
