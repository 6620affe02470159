"""Request/response schemas for poll endpoints."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

MAX_OPTIONS_PER_POLL = 50


class PollCreateRequest(BaseModel):
    question: str = Field(..., max_length=1000, description="Poll question")
    options: list[str] = Field(..., description="Option texts, in display order")

    @field_validator("question")
    @classmethod
    def validate_question(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Question is required")
        return v

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        cleaned = [opt.strip() for opt in v]
        if not cleaned:
            raise ValueError("At least one option is required")
        if len(cleaned) > MAX_OPTIONS_PER_POLL:
            raise ValueError(f"At most {MAX_OPTIONS_PER_POLL} options per poll")
        if any(not opt for opt in cleaned):
            raise ValueError("Options must not be empty")
        if any(len(opt) > 500 for opt in cleaned):
            raise ValueError("Options must be at most 500 characters")
        return cleaned


class VoteRequest(BaseModel):
    """
    Vote body; accepts optionIndex (as sent by the web client) or option_index.

    Left untyped so a missing, null or non-numeric index reaches the vote
    service and gets the same "Invalid option index" answer as an out-of-range one.
    """

    model_config = ConfigDict(populate_by_name=True)

    option_index: Any = Field(default=None, alias="optionIndex")


class PollOptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    text: str
    votes: int


class PollCreator(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class PollOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question: str
    options: list[PollOptionOut]
    created_by: PollCreator | None = Field(
        default=None, validation_alias=AliasChoices("creator", "created_by")
    )
    created_at: datetime | None = None
