"""Session state machine for document analysis and chat."""
from studyai.session.document import DocumentSession
from studyai.session.flashcards import FlashcardFlipTracker
from studyai.session.orchestrator import StudySession
from studyai.session.transcript import ChatTranscript

__all__ = [
    "DocumentSession",
    "FlashcardFlipTracker",
    "StudySession",
    "ChatTranscript",
]
