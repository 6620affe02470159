"""Poll store: listing, creation and atomic vote increments."""

from sqlalchemy import update
from sqlalchemy.orm import Session, selectinload

from pulsevote.models.poll import Poll, PollOption


class PollRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> list[Poll]:
        return (
            self.session.query(Poll)
            .options(selectinload(Poll.options))
            .order_by(Poll.id)
            .all()
        )

    def get(self, poll_id: int) -> Poll | None:
        return self.session.get(Poll, poll_id)

    def create(self, question: str, option_texts: list[str], created_by: int | None) -> Poll:
        poll = Poll(
            question=question,
            created_by=created_by,
            options=[
                PollOption(position=i, text=text, votes=0)
                for i, text in enumerate(option_texts)
            ],
        )
        self.session.add(poll)
        self.session.commit()
        self.session.refresh(poll)
        return poll

    def increment_vote(self, poll_id: int, position: int) -> bool:
        """Add exactly one vote to one option; returns False if no row matched."""
        stmt = (
            update(PollOption)
            .where(PollOption.poll_id == poll_id, PollOption.position == position)
            .values(votes=PollOption.votes + 1)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        self.session.commit()
        return result.rowcount == 1
