"""StudyAI client: document analysis and follow-up chat."""
from studyai.api.schemas import AnalysisResult, Flashcard, QuizQuestion
from studyai.config import Settings
from studyai.models.session import ChatStatus, Document, Message, Role, SessionStatus
from studyai.services.study_client import StudyServiceClient
from studyai.session import StudySession

__all__ = [
    "AnalysisResult",
    "Flashcard",
    "QuizQuestion",
    "Settings",
    "ChatStatus",
    "Document",
    "Message",
    "Role",
    "SessionStatus",
    "StudyServiceClient",
    "StudySession",
]
