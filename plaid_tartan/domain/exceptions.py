"""Error taxonomy for the Plaid client.

Responses are only considered errors when they fall outside the expected
user flow; every non-200/201 status code is one of them.
"""


class PlaidError(Exception):
    """Base exception for the client"""

    pass


class DecodeError(PlaidError):
    """A JSON value did not match the expected shape"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path or '<root>'}: {reason}")


class UnsupportedChallengeType(DecodeError):
    """The MFA challenge discriminator is not one we understand"""

    def __init__(self, challenge_type: str, path: str = "type"):
        self.challenge_type = challenge_type
        super().__init__(path, f"unsupported mfa challenge type {challenge_type!r}")


class UnsupportedMfaPreference(DecodeError):
    """A device offered for MFA is not one we understand"""

    def __init__(self, preference: str, path: str = "mfa"):
        self.preference = preference
        super().__init__(path, f"unsupported mfa preference {preference!r}")


class UnsuccessfulResponse(PlaidError):
    """The remote answered with a status code outside the user flow"""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Plaid API error: {status_code}")


class InvalidResponse(PlaidError):
    """The response body could not be decoded"""

    def __init__(self, decode_error: DecodeError):
        self.decode_error = decode_error
        super().__init__(f"Invalid response from Plaid: {decode_error}")


class TransportError(PlaidError):
    """Connection or protocol failure below the HTTP status level"""

    pass


class InternalError(PlaidError):
    """Encoding the outgoing request failed; indicates a bug in this library"""

    pass


class UnsupportedOperation(PlaidError):
    """The operation is not one the request builder knows about"""

    pass
