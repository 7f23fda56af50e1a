"""Pydantic schemas for backend requests and responses."""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Flashcard(BaseModel):
    """A single flashcard; the back is revealed on flip."""

    model_config = ConfigDict(frozen=True)

    front: str = Field(..., description="Prompt side of the card")
    back: str = Field(..., description="Answer side of the card")


class QuizQuestion(BaseModel):
    """Multiple-choice quiz question."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(..., description="Question text")
    options: Tuple[str, ...] = Field(default_factory=tuple, description="Answer options in display order")
    answer: str = Field(..., description="Correct answer")


class AnalysisResult(BaseModel):
    """Response schema for document analysis."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str = Field(..., description="Summary of the document")
    flashcards: Tuple[Flashcard, ...] = Field(default_factory=tuple)
    quiz: Tuple[QuizQuestion, ...] = Field(default_factory=tuple)
    suggested_questions: Tuple[str, ...] = Field(
        default_factory=tuple,
        alias="suggestedQuestions",
        description="Questions offered as one-click chat prompts",
    )


class ErrorResponse(BaseModel):
    """Error body returned by the backend on non-2xx responses."""

    error: Optional[str] = None


class ChatRequest(BaseModel):
    """Request schema for asking a question about the analyzed document."""

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(..., min_length=1, description="User's question")
    document_id: Optional[str] = Field(
        None,
        alias="documentId",
        description="Identifier of the analyzed document the question refers to",
    )


class ChatResponse(BaseModel):
    """Response schema for the chat endpoint."""

    answer: str = Field(..., description="Assistant answer")
