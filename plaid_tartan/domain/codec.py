"""Decoding of vendor JSON into typed entities, and encoding of request bodies"""

import json
from typing import Any, Dict, List, Type, TypeVar

from pydantic import ValidationError

from plaid_tartan.domain.exceptions import (
    DecodeError,
    InternalError,
    UnsupportedChallengeType,
    UnsupportedMfaPreference,
)
from plaid_tartan.domain.mfa import (
    Challenge,
    CodeChallenge,
    Device,
    DeviceListChallenge,
    DeviceOption,
    QuestionsChallenge,
    Selection,
    SelectionsChallenge,
)
from plaid_tartan.domain.products import Product
from plaid_tartan.domain.schemas import User, WireModel

M = TypeVar("M", bound=WireModel)


def _join(*parts: Any) -> str:
    return ".".join(str(p) for p in parts if p != "")


def load_json(content: bytes) -> Any:
    """Parse a response body; an unparseable body is a DecodeError at the root"""
    try:
        return json.loads(content)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError("", f"body is not valid JSON: {e}") from e


def encode_body(body: Dict[str, Any]) -> bytes:
    """Serialize a request body; failure means we built something unencodable"""
    try:
        return json.dumps(body).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise InternalError(f"Could not encode request body: {e}") from e


def decode(model: Type[M], raw: Any, path: str = "") -> M:
    """
    Validate a JSON value into a schema.

    Raises:
        DecodeError: with the dotted path of the first failing field
    """
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        raise DecodeError(_join(path, *first["loc"]), first["msg"]) from e


def decode_user(body: Any) -> User:
    return decode(User, body)


def decode_data(product: Product, body: Any) -> WireModel:
    return decode(product.data_model, body)


def _expect(value: Any, kind: type, path: str) -> Any:
    if not isinstance(value, kind):
        raise DecodeError(path, f"expected {kind.__name__}, got {type(value).__name__}")
    return value


def _decode_devices(raw: Any) -> List[DeviceOption]:
    devices = []
    for i, entry in enumerate(_expect(raw, list, "mfa")):
        entry = _expect(entry, dict, _join("mfa", i))
        device_type = entry.get("type")
        mask = entry.get("mask")
        try:
            device = Device(device_type)
        except ValueError:
            raise UnsupportedMfaPreference(str(device_type), path=_join("mfa", i, "type")) from None
        devices.append(DeviceOption(device=device, mask=_expect(mask, str, _join("mfa", i, "mask"))))
    return devices


def _decode_questions(raw: Any) -> List[str]:
    questions = []
    for i, entry in enumerate(_expect(raw, list, "mfa")):
        entry = _expect(entry, dict, _join("mfa", i))
        questions.append(_expect(entry.get("question"), str, _join("mfa", i, "question")))
    return questions


def _decode_selections(raw: Any) -> List[Selection]:
    selections = []
    for i, entry in enumerate(_expect(raw, list, "mfa")):
        entry = _expect(entry, dict, _join("mfa", i))
        question = _expect(entry.get("question"), str, _join("mfa", i, "question"))
        answers = _expect(entry.get("answers", []), list, _join("mfa", i, "answers"))
        selections.append(Selection(question=question, answers=[str(a) for a in answers]))
    return selections


def decode_challenge(body: Any) -> Challenge:
    """
    Decode the MFA challenge of a 201 response.

    The "type" discriminator selects the shape of "mfa":
    - device: {"message": ...}  -> CodeChallenge
    - list: [{"mask", "type"}]  -> DeviceListChallenge (order kept)
    - questions: [{"question"}] -> QuestionsChallenge
    - selections: [{"question", "answers"}] -> SelectionsChallenge

    Raises:
        UnsupportedChallengeType: any other discriminator
        UnsupportedMfaPreference: a listed device type we don't know
        DecodeError: malformed challenge
    """
    body = _expect(body, dict, "")
    if "type" not in body:
        raise DecodeError("type", "Field required")
    challenge_type = body["type"]
    raw = body.get("mfa")

    if challenge_type == "device":
        message = raw.get("message") if isinstance(raw, dict) else None
        return CodeChallenge(message=message)
    elif challenge_type == "list":
        return DeviceListChallenge(devices=_decode_devices(raw))
    elif challenge_type == "questions":
        return QuestionsChallenge(questions=_decode_questions(raw))
    elif challenge_type == "selections":
        return SelectionsChallenge(selections=_decode_selections(raw))

    raise UnsupportedChallengeType(str(challenge_type))
