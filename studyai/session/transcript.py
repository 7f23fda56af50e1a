"""Ordered chat transcript with a single outstanding question."""
from typing import List, Tuple

from studyai.models.session import ChatStatus, Message, Role


class ChatTranscript:
    """
    Append-only list of chat messages for one analyzed document.

    At most one question is outstanding: every user message is followed by
    exactly one assistant message (an answer or an error) before the next
    user message is accepted.
    """

    def __init__(self):
        self._messages: List[Message] = []
        self.status = ChatStatus.IDLE
        self.pending_input = ""

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def awaiting_answer(self) -> bool:
        return self.status == ChatStatus.AWAITING_ANSWER

    def __len__(self) -> int:
        return len(self._messages)

    def start(self, greeting: str) -> None:
        """Begin a new conversation with the assistant greeting."""
        self.clear()
        self._messages.append(Message(Role.ASSISTANT, greeting))

    def clear(self) -> None:
        self._messages.clear()
        self.status = ChatStatus.IDLE
        self.pending_input = ""

    def begin_question(self, text: str) -> bool:
        """
        Record a user question and wait for its answer.

        Returns:
            False (and leaves the transcript untouched) if the text is blank
            or another question is still awaiting its answer
        """
        if not text.strip() or self.awaiting_answer:
            return False

        self._messages.append(Message(Role.USER, text))
        self.pending_input = ""
        self.status = ChatStatus.AWAITING_ANSWER
        return True

    def record_answer(self, text: str) -> None:
        """Append the assistant reply to the outstanding question."""
        if not self.awaiting_answer:
            raise RuntimeError("No question is awaiting an answer")

        self._messages.append(Message(Role.ASSISTANT, text))
        self.status = ChatStatus.IDLE

    def record_failure(self, description: str) -> None:
        self.record_answer(f"Error: {description}")
