# models.py
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Sender(str, Enum):
    ASSISTANT = "assistant"
    HUMAN = "human"


class ErrorKind(str, Enum):
    NETWORK = "network"
    SERVER = "server"
    GENERAL = "general"


ERROR_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.NETWORK: "Network error: Please check your internet connection.",
    ErrorKind.SERVER: "Server is currently offline. Please try again later.",
    ErrorKind.GENERAL: "An unexpected error occurred. Please try again.",
}


def error_text(kind: ErrorKind) -> str:
    return ERROR_MESSAGES[kind]


def format_time(moment: datetime) -> str:
    # e.g. "09:05 PM"
    return moment.strftime("%I:%M %p")


class Message(BaseModel):
    """A single transcript entry. Frozen once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    sender: Sender
    timestamp: datetime = Field(default_factory=datetime.now)
    is_error: bool = False
    error_kind: Optional[ErrorKind] = None

    @model_validator(mode="after")
    def _check_error_fields(self) -> "Message":
        if self.is_error != (self.error_kind is not None):
            raise ValueError("error_kind must be set exactly when is_error is true")
        if self.is_error and self.sender is not Sender.ASSISTANT:
            raise ValueError("only assistant messages can carry an error")
        return self

    @property
    def display_time(self) -> str:
        return format_time(self.timestamp)


class ChatRequest(BaseModel):
    message: str = Field(..., description="User message")


class ChatResponse(BaseModel):
    message: Optional[str] = Field(None, description="Assistant reply text")


class SessionView(BaseModel):
    """Everything the rendering surface needs after a state change."""

    messages: List[Message]
    is_typing: bool
    input_text: str
    input_enabled: bool
    send_enabled: bool
    send_label: str
