"""Vote tallying for a single contest."""

import logging
from collections.abc import Iterable
from dataclasses import InitVar, dataclass, field

from votecount.models import Contest, ContestResult, FlatVote
from votecount.methods import get_tally_method

# Import tally methods to register them
from votecount.methods import plurality_at_large  # noqa: F401

logger = logging.getLogger(__name__)


@dataclass
class Tally:
    """A contest together with the votes submitted for it.

    Votes for another contest are dropped when added, both through
    add_vote() and through the constructor:

        >>> tally = Tally(contest, initial_votes)
        >>> tally.add_vote(vote)
        >>> result = tally.result()

    All votes should be added before tallying; result() reads the current
    vote list and does no locking.
    """
    contest: Contest
    initial_votes: InitVar[Iterable[FlatVote]] = ()
    votes: list[FlatVote] = field(default_factory=list, init=False)

    def __post_init__(self, initial_votes: Iterable[FlatVote]) -> None:
        self.add_votes(initial_votes)

    def add_vote(self, vote: FlatVote) -> None:
        """Add a vote, silently ignoring it if it belongs to another contest."""
        if vote.contest_id != self.contest.id:
            logger.debug(
                "Dropping vote for contest %s from tally of contest %s",
                vote.contest_id, self.contest.id,
            )
            return
        self.votes.append(vote)

    def add_votes(self, votes: Iterable[FlatVote]) -> None:
        for vote in votes:
            self.add_vote(vote)

    def result(self) -> ContestResult:
        """Count the votes using the contest's tally method."""
        method = get_tally_method(self.contest.tally_method)
        return method.calculate(self.contest, list(self.votes))
