"""Poll listing, creation and voting."""

from sqlalchemy.exc import SQLAlchemyError

from pulsevote.core.errors import InternalError, NotFoundError, ValidationError
from pulsevote.core.logging import log_poll_created, log_poll_voted
from pulsevote.models.poll import Poll
from pulsevote.models.user import User
from pulsevote.repositories.polls import PollRepository


def list_polls(repo: PollRepository) -> list[Poll]:
    return repo.list_all()


def create_poll(repo: PollRepository, user: User, question: str, options: list[str]) -> Poll:
    """Persist a poll owned by user; options keep their given order."""
    if not question or not question.strip():
        raise ValidationError("Question is required")
    if not options:
        raise ValidationError("At least one option is required")
    try:
        poll = repo.create(question.strip(), options, created_by=user.id)
    except SQLAlchemyError as e:
        repo.session.rollback()
        raise InternalError("Could not create poll", cause=e) from e
    log_poll_created(poll.id, user.id)
    return poll


def _option_position(option_index: object, option_count: int) -> int:
    """JSON numbers only; 1.0 counts as 1, 1.5 and "1" do not."""
    if isinstance(option_index, bool) or not isinstance(option_index, (int, float)):
        raise ValidationError("Invalid option index")
    if isinstance(option_index, float) and not option_index.is_integer():
        raise ValidationError("Invalid option index")
    position = int(option_index)
    if position < 0 or position >= option_count:
        raise ValidationError("Invalid option index")
    return position


def vote(repo: PollRepository, poll_id: int, option_index: object) -> Poll:
    """
    Add one vote to the option at option_index.

    No authentication and no one-vote-per-person check.
    """
    poll = repo.get(poll_id)
    if poll is None:
        raise NotFoundError("Poll not found")
    position = _option_position(option_index, len(poll.options))

    if not repo.increment_vote(poll_id, position):
        # Option rows disappeared between the read and the update.
        raise NotFoundError("Poll not found")
    log_poll_voted(poll_id, position)

    poll = repo.get(poll_id)
    if poll is None:
        raise NotFoundError("Poll not found")
    return poll
