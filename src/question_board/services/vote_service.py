"""Vote ledger mutations that keep ``Question.upvotes`` in sync.

Each mutation writes the ledger row and the question counter inside one
transaction, so the counter always equals the sum of the ledger's signed
contributions once the transaction is over. The counter is changed with a
single ``UPDATE ... SET upvotes = upvotes + delta`` so concurrent votes on the
same question cannot overwrite each other's increments.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from question_board.models import QuestionVote, VoteValue
from question_board.repositories.question_repo import QuestionRepository
from question_board.repositories.vote_repo import VoteRepository
from question_board.schemas.vote import VoteResponse
from question_board.services.context import RequestContext
from question_board.services.errors import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


class VoteService:
    """Create, flip and retract votes on questions."""

    def __init__(self, ctx: RequestContext) -> None:
        self.ctx = ctx
        self.votes = VoteRepository(ctx.session)
        self.questions = QuestionRepository(ctx.session)

    def get_vote(self, question_id: str) -> QuestionVote | None:
        """Return the caller's vote on a question, or None."""
        user_id = self.ctx.require_user()
        return self.votes.get_for_user(question_id, user_id)

    def create_vote(self, question_id: str, value: VoteValue) -> QuestionVote:
        """Cast the caller's vote on a question.

        Raises:
            NotFoundError: If the question does not exist.
            ConflictError: If the caller already voted on this question.
        """
        user_id = self.ctx.require_user()
        try:
            with self.ctx.transaction():
                if self.questions.get_by_id(question_id) is None:
                    raise NotFoundError("Question not found")
                if self.votes.get_for_user(question_id, user_id) is not None:
                    raise ConflictError("You have already voted on this question")
                row = self.votes.add(question_id=question_id, user_id=user_id, vote=value)
                self._adjust_counter(question_id, value.contribution)
        except IntegrityError as err:
            # A concurrent request inserted the same (question, user) pair first.
            raise ConflictError("You have already voted on this question") from err

        logger.info("User %s cast %s on question %s", user_id, value.value, question_id)
        return row

    def update_vote(self, vote_id: str, value: VoteValue) -> QuestionVote:
        """Change the direction of the caller's vote.

        Flipping moves the counter by two. Re-submitting the current value
        changes nothing.

        Raises:
            NotFoundError: If the vote does not exist.
            ForbiddenError: If the caller does not own the vote.
        """
        user_id = self.ctx.require_user()
        with self.ctx.transaction():
            row = self._get_owned_vote(vote_id, user_id)
            if row.vote is value:
                logger.info("Vote %s already %s; nothing to update", vote_id, value.value)
                return row
            delta = value.contribution - row.vote.contribution
            row.vote = value
            self.ctx.session.flush()
            self._adjust_counter(row.question_id, delta)

        logger.info("User %s changed vote %s to %s", user_id, vote_id, value.value)
        return row

    def delete_vote(self, vote_id: str) -> VoteResponse:
        """Retract the caller's vote and undo its contribution.

        Raises:
            NotFoundError: If the vote does not exist.
            ForbiddenError: If the caller does not own the vote.
        """
        user_id = self.ctx.require_user()
        with self.ctx.transaction():
            row = self._get_owned_vote(vote_id, user_id)
            deleted = VoteResponse.model_validate(row)
            self.votes.delete(row)
            self._adjust_counter(row.question_id, -row.vote.contribution)

        logger.info("User %s retracted vote %s", user_id, vote_id)
        return deleted

    def _get_owned_vote(self, vote_id: str, user_id: str) -> QuestionVote:
        row = self.votes.get_by_id(vote_id, for_update=True)
        if row is None:
            raise NotFoundError("Vote not found")
        if row.user_id != user_id:
            logger.warning("User %s attempted to modify vote %s", user_id, vote_id)
            raise ForbiddenError("You can only change your own votes")
        return row

    def _adjust_counter(self, question_id: str, delta: int) -> None:
        if not self.questions.adjust_upvotes(question_id, delta):
            raise NotFoundError("Question not found")
