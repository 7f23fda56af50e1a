"""Lifecycle of the single analyzed document."""
import uuid
from typing import Optional

from studyai.api.schemas import AnalysisResult
from studyai.models.session import Document, SessionStatus


class DocumentSession:
    """
    Holds the selected document, its analysis result and the analysis error.

    Every analysis is tagged with an epoch. `begin_analysis` and `reset`
    advance the epoch, and a completion carrying an older epoch is refused,
    so a response that arrives after the session moved on is never applied.
    """

    def __init__(self):
        self.status = SessionStatus.EMPTY
        self.document: Optional[Document] = None
        self.result: Optional[AnalysisResult] = None
        self.document_id: Optional[str] = None
        self.error: Optional[str] = None
        self._epoch = 0
        self._in_flight: Optional[Document] = None

    @property
    def epoch(self) -> int:
        return self._epoch

    def select(self, document: Document) -> None:
        """Record the document candidate, replacing any previous one."""
        self.document = document

    def can_submit(self) -> bool:
        return self.document is not None and self.status != SessionStatus.ANALYZING

    def begin_analysis(self) -> int:
        """
        Move to `analyzing`, discarding any previous result.

        Returns:
            Epoch the eventual completion must present
        """
        if not self.can_submit():
            raise RuntimeError(f"Cannot start an analysis while {self.status.value}")

        self._epoch += 1
        self._in_flight = self.document
        self.status = SessionStatus.ANALYZING
        self.result = None
        self.document_id = None
        self.error = None
        return self._epoch

    def is_current(self, epoch: int) -> bool:
        return epoch == self._epoch

    def complete_analysis(self, epoch: int, result: AnalysisResult) -> bool:
        """Install a successful result; returns False if the epoch is stale."""
        if not self._accepts(epoch):
            return False

        self.status = SessionStatus.READY
        self.result = result
        self.document_id = uuid.uuid4().hex
        self._in_flight = None
        return True

    def fail_analysis(self, epoch: int, message: str) -> bool:
        """Record an analysis failure; returns False if the epoch is stale."""
        if not self._accepts(epoch):
            return False

        self.status = SessionStatus.ERRORED
        self.error = message
        # A failed document must be selected again before resubmitting
        if self.document is self._in_flight:
            self.document = None
        self._in_flight = None
        return True

    def reset(self) -> None:
        self._epoch += 1
        self.status = SessionStatus.EMPTY
        self.document = None
        self.result = None
        self.document_id = None
        self.error = None
        self._in_flight = None

    def _accepts(self, epoch: int) -> bool:
        return self.is_current(epoch) and self.status == SessionStatus.ANALYZING
