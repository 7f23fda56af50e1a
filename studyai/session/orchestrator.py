"""Study session orchestrating document analysis and chat requests."""
import asyncio
from pathlib import Path
from typing import List, Optional, Tuple, Union

import httpx
from opentelemetry.sdk.trace import TracerProvider

from studyai.api.schemas import AnalysisResult
from studyai.config import DEFAULT_GREETING, Settings
from studyai.exceptions import StudyClientError
from studyai.models.session import ChatStatus, Document, Message, SessionStatus
from studyai.services.study_client import StudyServiceClient, describe_error
from studyai.session.document import DocumentSession
from studyai.session.flashcards import FlashcardFlipTracker
from studyai.session.transcript import ChatTranscript
from studyai.utils.logger import logger, set_log_level
from studyai.utils.tracer import initialize_tracing, shutdown_tracing

ANALYSIS_CANCELLED = "Analysis was cancelled"
CHAT_CANCELLED = "Chat request was cancelled"


class StudySession:
    """
    Client-side state for one study session.

    Issues the analysis and chat requests and applies their outcomes to the
    document session, the flashcard tracker and the chat transcript. Meant
    to be driven from a single event loop: admission checks and the status
    change both happen before the first await, so overlapping submissions or
    questions are rejected rather than queued.
    """

    def __init__(
        self,
        client: StudyServiceClient,
        greeting: str = DEFAULT_GREETING,
        tracer_provider: Optional[TracerProvider] = None,
    ):
        """
        Initialize study session.

        Args:
            client: Backend client for analysis and chat
            greeting: First assistant message after a successful analysis
            tracer_provider: Tracing provider owned by this session, shut down on close
        """
        self.client = client
        self.greeting = greeting
        self.tracer_provider = tracer_provider
        self.document_session = DocumentSession()
        self.flashcards = FlashcardFlipTracker()
        self.transcript = ChatTranscript()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "StudySession":
        """Build a session, its backend client, log level and tracing from settings."""
        settings = settings or Settings()
        set_log_level(settings.log_level)
        tracer_provider = initialize_tracing(
            otlp_endpoint=settings.otlp_endpoint if settings.otlp_endpoint else None,
            tracing_enabled=settings.tracing_enabled,
        )
        return cls(
            StudyServiceClient.from_settings(settings, transport=transport),
            greeting=settings.greeting,
            tracer_provider=tracer_provider,
        )

    @property
    def status(self) -> SessionStatus:
        return self.document_session.status

    @property
    def chat_status(self) -> ChatStatus:
        return self.transcript.status

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self.document_session.result

    @property
    def error(self) -> Optional[str]:
        return self.document_session.error

    @property
    def document(self) -> Optional[Document]:
        return self.document_session.document

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self.transcript.messages

    @property
    def suggested_questions(self) -> List[str]:
        result = self.document_session.result
        return list(result.suggested_questions) if result else []

    def select_document(self, document: Document) -> None:
        self.document_session.select(document)
        logger.info("Document selected", extra={"document_name": document.filename})

    def select_file(self, path: Union[str, Path]) -> None:
        self.select_document(Document.from_path(path))

    async def submit(self) -> bool:
        """
        Analyze the selected document.

        Returns:
            True if an analysis request was issued, False if the submission
            was rejected (no document selected, or an analysis in flight)
        """
        if self.document_session.document is None:
            logger.info("Submit ignored: no document selected")
            return False
        if self.document_session.status == SessionStatus.ANALYZING:
            logger.warning("Submit rejected: an analysis is already in progress")
            return False

        document = self.document_session.document
        epoch = self.document_session.begin_analysis()
        self.flashcards.clear()
        self.transcript.clear()
        logger.info(
            "Analysis started",
            extra={"document_name": document.filename, "session_epoch": epoch},
        )

        try:
            result = await self.client.analyze(document)
        except asyncio.CancelledError:
            # Leave the session resubmittable, then let the cancellation through
            if self.document_session.fail_analysis(epoch, ANALYSIS_CANCELLED):
                logger.warning(
                    ANALYSIS_CANCELLED,
                    extra={"document_name": document.filename, "session_epoch": epoch},
                )
            raise
        except StudyClientError as e:
            message = describe_error(e)
        except Exception as e:
            logger.error(f"Unexpected error during analysis: {str(e)}", exc_info=True)
            message = describe_error(e)
        else:
            if self.document_session.complete_analysis(epoch, result):
                self.flashcards.load(result.flashcards)
                self.transcript.start(self.greeting)
                logger.info(
                    "Analysis ready",
                    extra={
                        "document_id": self.document_session.document_id,
                        "session_epoch": epoch,
                    },
                )
            else:
                self._drop_stale("analysis", epoch)
            return True

        if self.document_session.fail_analysis(epoch, message):
            logger.warning(
                f"Analysis failed: {message}",
                extra={"document_name": document.filename, "session_epoch": epoch},
            )
        else:
            self._drop_stale("analysis error", epoch)
        return True

    def toggle(self, index: int) -> bool:
        """Flip the flashcard at index; returns whether its back is now shown."""
        return self.flashcards.toggle(index)

    def set_input(self, text: str) -> None:
        self.transcript.pending_input = text

    async def send_input(self) -> bool:
        return await self.ask(self.transcript.pending_input)

    async def ask(self, text: str) -> bool:
        """
        Ask a question about the analyzed document.

        The user message is appended before the request is sent; exactly one
        assistant message (the answer or an error description) follows it.

        Returns:
            True if the question was sent, False if it was ignored (blank
            text, a question already awaiting its answer, or no document ready)
        """
        if self.document_session.status != SessionStatus.READY:
            logger.info("Question ignored: no analyzed document")
            return False

        epoch = self.document_session.epoch
        document_id = self.document_session.document_id
        if not self.transcript.begin_question(text):
            logger.info("Question ignored: blank text or an answer is still pending")
            return False
        logger.info(
            "Question sent",
            extra={"document_id": document_id, "question_length": len(text)},
        )

        try:
            answer = await self.client.chat(text, document_id=document_id)
        except asyncio.CancelledError:
            if self.document_session.is_current(epoch):
                logger.warning(CHAT_CANCELLED, extra={"document_id": document_id})
                self.transcript.record_failure(CHAT_CANCELLED)
            raise
        except StudyClientError as e:
            failure = describe_error(e)
        except Exception as e:
            logger.error(f"Unexpected error during chat: {str(e)}", exc_info=True)
            failure = describe_error(e)
        else:
            if self.document_session.is_current(epoch):
                self.transcript.record_answer(answer)
            else:
                self._drop_stale("chat answer", epoch)
            return True

        if self.document_session.is_current(epoch):
            logger.warning(f"Chat failed: {failure}", extra={"document_id": document_id})
            self.transcript.record_failure(failure)
        else:
            self._drop_stale("chat error", epoch)
        return True

    async def ask_suggested(self, text: str) -> bool:
        """Ask one of the suggested questions; suggestions can be reused."""
        return await self.ask(text)

    def reset(self) -> None:
        """Return to an empty session; any in-flight response will be dropped."""
        self.document_session.reset()
        self.flashcards.clear()
        self.transcript.clear()
        logger.info("Session reset", extra={"session_epoch": self.document_session.epoch})

    def _drop_stale(self, kind: str, epoch: int) -> None:
        logger.debug(
            f"Dropping stale {kind} response",
            extra={"session_epoch": epoch},
        )

    async def close(self):
        """Close backend client and shut down tracing."""
        await self.client.close()
        shutdown_tracing(self.tracer_provider)
        self.tracer_provider = None

    async def __aenter__(self) -> "StudySession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
