"""Session data models."""
import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union


class SessionStatus(str, Enum):
    """Lifecycle of the analyzed document."""
    EMPTY = "empty"
    ANALYZING = "analyzing"
    READY = "ready"
    ERRORED = "errored"


class ChatStatus(str, Enum):
    """Whether a chat question is outstanding."""
    IDLE = "idle"
    AWAITING_ANSWER = "awaiting-answer"


class Role(str, Enum):
    """Author of a transcript message."""
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """Represents one transcript entry."""

    role: Role
    text: str


@dataclass(frozen=True)
class Document:
    """Represents a document selected for analysis."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Document":
        """Load a document from disk, guessing its content type from the name."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )
