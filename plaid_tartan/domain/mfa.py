"""Multi-factor authentication challenges, answers and device selection"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class Device(str, Enum):
    """A device the remote can deliver an MFA code to"""

    PHONE = "phone"
    EMAIL = "email"
    CARD = "card"


@dataclass(frozen=True)
class DeviceOption:
    """One entry of a device list challenge, e.g. (EMAIL, "t..t@plaid.com")"""

    device: Device
    mask: str


@dataclass(frozen=True)
class Selection:
    """A multiple-choice question and its possible answers"""

    question: str
    answers: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CodeChallenge:
    """A code was sent to one of the user's registered devices"""

    message: Optional[str] = None

    def accepts(self, response: "MFAResponse") -> bool:
        return isinstance(response, CodeResponse)


@dataclass(frozen=True)
class DeviceListChallenge:
    """
    The user must pick a device to receive a code.

    The pick is sent back through AuthenticateOptions.send_method.
    """

    devices: List[DeviceOption] = field(default_factory=list)

    def accepts(self, response: "MFAResponse") -> bool:
        return False


@dataclass(frozen=True)
class QuestionsChallenge:
    """Security questions that need free-text answers"""

    questions: List[str] = field(default_factory=list)

    def accepts(self, response: "MFAResponse") -> bool:
        return isinstance(response, QuestionsResponse) and len(response.answers) == len(self.questions)


@dataclass(frozen=True)
class SelectionsChallenge:
    """Multiple-choice questions"""

    selections: List[Selection] = field(default_factory=list)

    def accepts(self, response: "MFAResponse") -> bool:
        return isinstance(response, SelectionsResponse) and len(response.answers) == len(self.selections)


Challenge = Union[CodeChallenge, DeviceListChallenge, QuestionsChallenge, SelectionsChallenge]


@dataclass(frozen=True)
class CodeResponse:
    code: str

    def to_wire(self) -> str:
        return self.code


@dataclass(frozen=True)
class QuestionsResponse:
    answers: List[str]

    def to_wire(self) -> List[str]:
        return list(self.answers)


@dataclass(frozen=True)
class SelectionsResponse:
    answers: List[str]

    def to_wire(self) -> List[str]:
        return list(self.answers)


MFAResponse = Union[CodeResponse, QuestionsResponse, SelectionsResponse]


@dataclass(frozen=True)
class SelectedDevice:
    """The device the user chose after a device list challenge"""

    mask: Optional[str] = None
    device: Optional[Device] = None

    @classmethod
    def by_mask(cls, mask: str) -> "SelectedDevice":
        return cls(mask=mask)

    @classmethod
    def by_type(cls, device: Device) -> "SelectedDevice":
        return cls(device=device)

    def to_wire(self) -> Dict[str, Any]:
        if self.mask is not None:
            return {"mask": self.mask}
        if self.device is not None:
            return {"type": self.device.value}
        raise ValueError("SelectedDevice needs either a mask or a device type")
