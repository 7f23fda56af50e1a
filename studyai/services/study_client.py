"""HTTP client for the StudyAI analysis and chat endpoints."""
import time
from typing import Optional

import httpx

from studyai.api.schemas import AnalysisResult, ChatRequest, ChatResponse, ErrorResponse
from studyai.config import Settings
from studyai.exceptions import (
    AnalysisServiceError,
    ChatServiceError,
    ServiceTransportError,
)
from studyai.models.session import Document
from studyai.utils.logger import logger
from studyai.utils.tracer import get_tracer

ANALYZE_PATH = "/api/analyze"
CHAT_PATH = "/api/chat"

ANALYSIS_FALLBACK_ERROR = "Something went wrong"
CHAT_FALLBACK_ERROR = "Failed to get chat response"


def describe_error(exc: BaseException) -> str:
    """Human-readable text for an exception, never empty."""
    return str(exc) or exc.__class__.__name__


class StudyServiceClient:
    """Client for the StudyAI backend."""

    def __init__(
        self,
        api_base: str,
        analyze_timeout: float = 300.0,
        chat_timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the backend client.

        Args:
            api_base: Base URL of the backend (without the /api suffix)
            analyze_timeout: Seconds to wait for a document analysis
            chat_timeout: Seconds to wait for a chat answer
            transport: Optional httpx transport (used to mount an in-process app)
        """
        self.api_base = api_base.rstrip("/")
        self.analyze_timeout = analyze_timeout
        self.chat_timeout = chat_timeout
        self.client = httpx.AsyncClient(base_url=self.api_base, transport=transport)

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "StudyServiceClient":
        """Build a client from application settings."""
        return cls(
            api_base=settings.api_base,
            analyze_timeout=settings.analyze_timeout_seconds,
            chat_timeout=settings.chat_timeout_seconds,
            transport=transport,
        )

    async def analyze(self, document: Document) -> AnalysisResult:
        """
        Upload a document and return its summary, flashcards, quiz and suggestions.

        Args:
            document: Document to analyze

        Returns:
            Parsed AnalysisResult

        Raises:
            AnalysisServiceError: Backend answered with an error or a malformed body
            ServiceTransportError: Request could not complete
        """
        start_time = time.time()
        files = {"file": (document.filename, document.content, document.content_type)}

        with get_tracer().start_as_current_span("studyai.analyze") as span:
            span.set_attribute("studyai.filename", document.filename)
            try:
                response = await self.client.post(
                    ANALYZE_PATH, files=files, timeout=self.analyze_timeout
                )
            except httpx.RequestError as e:
                logger.warning(
                    f"Analysis request failed: {describe_error(e)}",
                    extra={"document_name": document.filename},
                )
                raise ServiceTransportError(describe_error(e)) from e

            span.set_attribute("http.status_code", response.status_code)
            response_time_ms = (time.time() - start_time) * 1000

            if not response.is_success:
                message = self._error_message(response) or ANALYSIS_FALLBACK_ERROR
                logger.warning(
                    f"Analysis service returned an error: {message}",
                    extra={
                        "document_name": document.filename,
                        "status_code": response.status_code,
                        "response_time_ms": response_time_ms,
                    },
                )
                raise AnalysisServiceError(message, status_code=response.status_code)

            try:
                result = AnalysisResult.model_validate(response.json())
            except ValueError as e:
                logger.error(f"Malformed analysis response: {str(e)}")
                raise AnalysisServiceError(
                    "Malformed response from analysis service",
                    status_code=response.status_code,
                ) from e

        logger.info(
            "Document analyzed",
            extra={
                "document_name": document.filename,
                "status_code": response.status_code,
                "response_time_ms": response_time_ms,
            },
        )
        return result

    async def chat(self, question: str, document_id: Optional[str] = None) -> str:
        """
        Ask a question about the analyzed document.

        Args:
            question: User's question
            document_id: Identifier of the document the question refers to

        Returns:
            Answer text

        Raises:
            ChatServiceError: Backend answered with an error or a malformed body
            ServiceTransportError: Request could not complete
        """
        start_time = time.time()
        payload = ChatRequest(question=question, document_id=document_id)

        with get_tracer().start_as_current_span("studyai.chat") as span:
            try:
                response = await self.client.post(
                    CHAT_PATH,
                    json=payload.model_dump(by_alias=True, exclude_none=True),
                    timeout=self.chat_timeout,
                )
            except httpx.RequestError as e:
                logger.warning(
                    f"Chat request failed: {describe_error(e)}",
                    extra={"document_id": document_id},
                )
                raise ServiceTransportError(describe_error(e)) from e

            span.set_attribute("http.status_code", response.status_code)
            response_time_ms = (time.time() - start_time) * 1000

            logger.debug(
                "Chat response received",
                extra={
                    "document_id": document_id,
                    "status_code": response.status_code,
                    "response_time_ms": response_time_ms,
                },
            )

            # The chat endpoint's error body is not surfaced
            if not response.is_success:
                raise ChatServiceError(CHAT_FALLBACK_ERROR, status_code=response.status_code)

            try:
                answer = ChatResponse.model_validate(response.json()).answer
            except ValueError as e:
                logger.error(f"Malformed chat response: {str(e)}")
                raise ChatServiceError(
                    "Malformed response from chat service",
                    status_code=response.status_code,
                ) from e

        return answer

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        """Extract the backend's `error` field from a failed response, if any."""
        try:
            return ErrorResponse.model_validate(response.json()).error or None
        except ValueError:
            return None

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "StudyServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
