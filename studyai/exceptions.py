"""Custom exception classes for the StudyAI client."""
from typing import Optional


class StudyClientError(Exception):
    """Base exception for StudyAI client errors."""
    pass


class ServiceError(StudyClientError):
    """Raised when a backend endpoint returns a non-success or malformed response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AnalysisServiceError(ServiceError):
    """Raised when the analysis endpoint rejects or fails a document."""
    pass


class ChatServiceError(ServiceError):
    """Raised when the chat endpoint fails to produce an answer."""
    pass


class ServiceTransportError(StudyClientError):
    """Raised when a request could not complete (connection error, timeout)."""
    pass


class InvalidFlashcardIndexError(StudyClientError, IndexError):
    """Raised when toggling a flashcard index outside the current deck."""
    pass
