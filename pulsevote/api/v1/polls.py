"""Poll routes: list, create (authenticated) and vote (anonymous)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pulsevote.api.v1.auth import require_user
from pulsevote.core.database import get_db
from pulsevote.models.user import User
from pulsevote.repositories.polls import PollRepository
from pulsevote.schemas.polls import PollCreateRequest, PollOut, VoteRequest
from pulsevote.services import polls as poll_service

router = APIRouter()


def get_poll_repository(db: Annotated[Session, Depends(get_db)]) -> PollRepository:
    return PollRepository(db)


@router.get("", response_model=list[PollOut])
def list_polls(
    repo: Annotated[PollRepository, Depends(get_poll_repository)],
) -> list[PollOut]:
    """Return every poll with its options and the creator's username."""
    return [PollOut.model_validate(p) for p in poll_service.list_polls(repo)]


@router.post("", response_model=PollOut)
def create_poll(
    body: PollCreateRequest,
    current_user: Annotated[User, Depends(require_user)],
    repo: Annotated[PollRepository, Depends(get_poll_repository)],
) -> PollOut:
    poll = poll_service.create_poll(repo, current_user, body.question, body.options)
    return PollOut.model_validate(poll)


@router.post("/{poll_id}/vote", response_model=PollOut)
def vote(
    poll_id: int,
    body: VoteRequest,
    repo: Annotated[PollRepository, Depends(get_poll_repository)],
) -> PollOut:
    """Add one vote to the option at optionIndex. Open to anonymous callers."""
    poll = poll_service.vote(repo, poll_id, body.option_index)
    return PollOut.model_validate(poll)
