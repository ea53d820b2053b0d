"""Plaid API HTTP client: builds requests, sends them and classifies the answers"""

import time
from typing import Optional

import httpx

from plaid_tartan.config import ClientConfig, settings
from plaid_tartan.domain.exceptions import (
    DecodeError,
    InvalidResponse,
    TransportError,
    UnsuccessfulResponse,
    UnsupportedChallengeType,
    UnsupportedMfaPreference,
)
from plaid_tartan.domain.mfa import MFAResponse
from plaid_tartan.domain.payloads import (
    Authenticate,
    AuthenticateOptions,
    FetchData,
    FetchDataOptions,
    Operation,
    Reauthenticate,
    RemoveUser,
    StepMFA,
    Upgrade,
    UpgradeOptions,
    build_request,
)
from plaid_tartan.domain.products import Product
from plaid_tartan.domain.responses import (
    MFA,
    Authenticated,
    ProductData,
    ProductNotEnabled,
    Response,
    Unknown,
    classify,
)
from plaid_tartan.infrastructure.observability.logging import log_request
from plaid_tartan.infrastructure.observability.metrics import record_failure, record_request

OUTCOMES = {
    MFA: "mfa",
    Authenticated: "authenticated",
    ProductData: "product_data",
    ProductNotEnabled: "product_not_enabled",
    Unknown: "unknown",
}


class PlaidClient:
    """
    Client for the Plaid (tartan) API.

    Pass your own httpx.Client to control proxies, timeouts or transports;
    otherwise one is created with settings.http_timeout_seconds and closed
    by close(). No retries are made: every failure is raised to the caller.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        self.config = config or ClientConfig.from_settings()
        self.timeout = timeout or settings.http_timeout_seconds
        self._owns_http = http is None
        self.http = http or httpx.Client(timeout=self.timeout)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "PlaidClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(self, product: Product, operation: Operation) -> Response:
        """
        Send an operation for a product and return the classified response.

        Raises:
            UnsupportedOperation: unknown operation
            InternalError: request body could not be encoded
            TransportError: connection, timeout or protocol failure
            UnsuccessfulResponse: status code other than 200/201
            UnsupportedChallengeType, UnsupportedMfaPreference: MFA we don't support
            InvalidResponse: body did not match the product's schema
        """
        prepared = build_request(product, operation, self.config)
        content = prepared.content

        start_time = time.perf_counter()
        status_code = None
        outcome = "error"
        try:
            try:
                http_response = self.http.request(
                    prepared.method,
                    prepared.url,
                    content=content,
                    headers=prepared.headers,
                )
            except httpx.HTTPError as e:
                record_failure("transport")
                raise TransportError(f"Plaid API transport error: {e}") from e

            status_code = http_response.status_code
            try:
                response = classify(product, operation, status_code, http_response.content)
            except UnsuccessfulResponse:
                record_failure("unsuccessful_response")
                raise
            except (UnsupportedChallengeType, UnsupportedMfaPreference):
                record_failure("unsupported_mfa")
                raise
            except DecodeError as e:
                record_failure("invalid_response")
                raise InvalidResponse(e) from e

            outcome = OUTCOMES[type(response)]
            return response

        finally:
            duration = time.perf_counter() - start_time
            record_request(product.slug, operation.kind.value, outcome, duration)
            log_request(product.name, operation.kind.value, status_code, outcome, duration * 1000)

    def authenticate(
        self,
        product: Product,
        institution: str,
        username: str,
        password: str,
        options: AuthenticateOptions | None = None,
        pin: Optional[str] = None,
    ) -> Response:
        return self.request(product, Authenticate(institution, username, password, options=options, pin=pin))

    def step_mfa(self, product: Product, access_token: str, mfa_response: MFAResponse) -> Response:
        return self.request(product, StepMFA(access_token, mfa_response))

    def fetch_data(self, product: Product, access_token: str, options: FetchDataOptions | None = None) -> Response:
        return self.request(product, FetchData(access_token, options=options))

    def reauthenticate(
        self, product: Product, access_token: str, username: str, password: str, pin: Optional[str] = None
    ) -> Response:
        return self.request(product, Reauthenticate(access_token, username, password, pin=pin))

    def upgrade(self, product: Product, access_token: str, options: UpgradeOptions | None = None) -> Response:
        """Grant access to `product`; the way out of ProductNotEnabled"""
        return self.request(product, Upgrade(access_token, options=options))

    def remove_user(self, product: Product, access_token: str) -> Response:
        return self.request(product, RemoveUser(access_token))
