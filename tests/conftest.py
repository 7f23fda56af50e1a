"""Pytest configuration and fixtures."""
import asyncio
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse

from studyai.models.session import Document, SessionStatus
from studyai.services.study_client import StudyServiceClient
from studyai.session.orchestrator import StudySession

BASE_URL = "http://testserver"

SAMPLE_ANALYSIS = {
    "summary": "S",
    "flashcards": [{"front": "Q1", "back": "A1"}],
    "quiz": [],
    "suggestedQuestions": ["What is S?"],
}


class FakeBackend:
    """In-process stand-in for the analysis and chat endpoints."""

    def __init__(self):
        self.analysis_reply: Tuple[int, Any] = (200, SAMPLE_ANALYSIS)
        self.chat_reply: Tuple[int, Any] = (200, {"answer": "S is ..."})
        self.analyze_calls: List[Dict[str, Any]] = []
        self.chat_calls: List[Dict[str, Any]] = []

        # Set when a request reaches the endpoint; a gate holds the reply back
        self.analyze_started = asyncio.Event()
        self.chat_started = asyncio.Event()
        self.analyze_gate: Optional[asyncio.Event] = None
        self.chat_gate: Optional[asyncio.Event] = None

        self.app = self._build_app()

    def hold_analysis(self) -> asyncio.Event:
        self.analyze_gate = asyncio.Event()
        return self.analyze_gate

    def hold_chat(self) -> asyncio.Event:
        self.chat_gate = asyncio.Event()
        return self.chat_gate

    @staticmethod
    def _respond(reply: Tuple[int, Any]):
        status_code, body = reply
        if isinstance(body, str):
            return PlainTextResponse(body, status_code=status_code)
        return JSONResponse(body, status_code=status_code)

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.post("/api/analyze")
        async def analyze(file: UploadFile = File(...)):
            self.analyze_calls.append(
                {
                    "filename": file.filename,
                    "content": await file.read(),
                    "content_type": file.content_type,
                }
            )
            self.analyze_started.set()
            if self.analyze_gate is not None:
                await self.analyze_gate.wait()
            return self._respond(self.analysis_reply)

        @app.post("/api/chat")
        async def chat(request: Request):
            self.chat_calls.append(await request.json())
            self.chat_started.set()
            if self.chat_gate is not None:
                await self.chat_gate.wait()
            return self._respond(self.chat_reply)

        return app


@pytest_asyncio.fixture
async def backend():
    """Fake StudyAI backend."""
    return FakeBackend()


@pytest_asyncio.fixture
async def client(backend):
    """Backend client wired to the fake backend."""
    service_client = StudyServiceClient(BASE_URL, transport=httpx.ASGITransport(app=backend.app))
    yield service_client
    await service_client.close()


@pytest_asyncio.fixture
async def session(client):
    """Fresh study session."""
    return StudySession(client)


@pytest.fixture
def sample_document():
    """Small text document."""
    return Document(filename="notes.txt", content=b"Photosynthesis converts light.", content_type="text/plain")


@pytest_asyncio.fixture
async def ready_session(session, sample_document):
    """Study session with the sample analysis installed."""
    session.select_document(sample_document)
    await session.submit()
    assert session.status == SessionStatus.READY
    return session


def failing_transport(exc_type=httpx.ConnectError, message="Connection refused"):
    """Transport whose every request fails before a response arrives."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type(message, request=request)

    return httpx.MockTransport(handler)


@pytest_asyncio.fixture
async def offline_client_factory():
    """Build backend clients whose requests fail at the transport level."""
    created: List[StudyServiceClient] = []

    def factory(exc_type=httpx.ConnectError, message="Connection refused") -> StudyServiceClient:
        service_client = StudyServiceClient(BASE_URL, transport=failing_transport(exc_type, message))
        created.append(service_client)
        return service_client

    yield factory
    for service_client in created:
        await service_client.close()
