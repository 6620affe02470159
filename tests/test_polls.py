"""Unit tests for pulsevote.services.polls: create, list and vote."""

import unittest

from pulsevote.core.errors import NotFoundError, ValidationError
from pulsevote.repositories.polls import PollRepository
from pulsevote.services import polls as poll_service
from support import add_user, make_session


class PollServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session, self.engine = make_session()
        self.repo = PollRepository(self.session)
        self.user = add_user(self.session)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()


class TestCreatePoll(PollServiceTestCase):
    def test_options_keep_order_and_start_at_zero(self) -> None:
        poll = poll_service.create_poll(self.repo, self.user, "Tea or coffee?", ["Tea", "Coffee", "Both"])
        self.assertEqual([o.text for o in poll.options], ["Tea", "Coffee", "Both"])
        self.assertEqual([o.votes for o in poll.options], [0, 0, 0])
        self.assertEqual([o.position for o in poll.options], [0, 1, 2])
        self.assertEqual(poll.created_by, self.user.id)
        self.assertEqual(poll.creator.username, "alice")

    def test_requires_an_option(self) -> None:
        with self.assertRaises(ValidationError):
            poll_service.create_poll(self.repo, self.user, "Empty?", [])

    def test_requires_a_question(self) -> None:
        with self.assertRaises(ValidationError):
            poll_service.create_poll(self.repo, self.user, "   ", ["A"])

    def test_list_in_creation_order(self) -> None:
        poll_service.create_poll(self.repo, self.user, "First", ["A"])
        poll_service.create_poll(self.repo, self.user, "Second", ["B"])
        self.assertEqual([p.question for p in poll_service.list_polls(self.repo)], ["First", "Second"])


class TestVote(PollServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.poll = poll_service.create_poll(self.repo, self.user, "Yes or no?", ["Yes", "No"])

    def test_out_of_range_index(self) -> None:
        for index in (5, 2, -1):
            with self.assertRaises(ValidationError) as ctx:
                poll_service.vote(self.repo, self.poll.id, index)
            self.assertEqual(ctx.exception.message, "Invalid option index")
        self.session.expire_all()
        self.assertEqual([o.votes for o in self.repo.get(self.poll.id).options], [0, 0])

    def test_vote_increments_exactly_one_option(self) -> None:
        poll = poll_service.vote(self.repo, self.poll.id, 0)
        self.assertEqual([o.votes for o in poll.options], [1, 0])
        poll = poll_service.vote(self.repo, self.poll.id, 0)
        poll = poll_service.vote(self.repo, self.poll.id, 1)
        self.assertEqual([o.votes for o in poll.options], [2, 1])

    def test_unknown_poll(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            poll_service.vote(self.repo, 12345, 0)
        self.assertEqual(ctx.exception.message, "Poll not found")

    def test_bool_is_not_an_index(self) -> None:
        with self.assertRaises(ValidationError):
            poll_service.vote(self.repo, self.poll.id, True)

    def test_non_numeric_index(self) -> None:
        for index in (None, "0", 0.5, [0]):
            with self.assertRaises(ValidationError) as ctx:
                poll_service.vote(self.repo, self.poll.id, index)
            self.assertEqual(ctx.exception.message, "Invalid option index")

    def test_whole_float_index_is_accepted(self) -> None:
        poll = poll_service.vote(self.repo, self.poll.id, 1.0)
        self.assertEqual([o.votes for o in poll.options], [0, 1])


if __name__ == "__main__":
    unittest.main()
