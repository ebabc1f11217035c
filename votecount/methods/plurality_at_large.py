"""Plurality-at-large tally method."""

import logging

from votecount.models import (
    PLURALITY_AT_LARGE,
    Contest,
    ContestChoice,
    ContestChoiceResult,
    ContestResult,
    FlatVote,
)
from votecount.methods import register_tally_method
from votecount.methods.base import TallyMethod, UnknownChoiceError

logger = logging.getLogger(__name__)


@register_tally_method
class PluralityAtLargeMethod(TallyMethod):
    """Plurality-at-large (block voting).

    Each voter selects between min_choices and max_choices options. Every
    selection of a valid vote adds its `selected` count to that choice.
    Choices are ranked by total, highest first, and the top num_winners
    entries win.

    Ties: choices with equal totals share a position, and the position only
    advances when the total changes, so totals [10, 6, 6, 4] give positions
    [1, 2, 2, 3]. The winner cutoff counts entries, not positions: once
    num_winners entries have been placed, every remaining entry gets
    position 0 even if it ties with the last winner.

    Among equal totals, choices are ordered by ascending choice id so that
    results are reproducible.
    """

    TALLY_METHOD = PLURALITY_AT_LARGE

    @property
    def name(self) -> str:
        return "Plurality-at-large"

    @property
    def description(self) -> str:
        return "Top num_winners choices by raw vote count win; ties share a position"

    @staticmethod
    def count_votes(votes: list[FlatVote]) -> tuple[dict[int, int], int]:
        """Sum selections per choice id over the valid votes.

        Selections with selected == 0 do not create an entry.

        Returns (totals dict mapping choice id -> count, number of valid votes).
        """
        totals: dict[int, int] = {}
        valid_votes = 0

        for vote in votes:
            if vote.is_explicit_invalid:
                continue
            valid_votes += 1
            for selection in vote.selections:
                if selection.selected > 0:
                    choice_id = selection.choice.id
                    totals[choice_id] = totals.get(choice_id, 0) + selection.selected

        return totals, valid_votes

    @staticmethod
    def calc_positions(sorted_counts: list[tuple[int, int]], num_winners: int) -> list[int]:
        """Assign winner positions to (choice id, count) pairs sorted by count.

        Returns one position per entry, in the same order.
        """
        positions: list[int] = []
        current_position = 0
        current_count = None

        for _, count in sorted_counts:
            if len(positions) >= num_winners:
                positions.append(0)
                continue
            if count != current_count:
                current_position += 1
                current_count = count
            positions.append(current_position)

        return positions

    @staticmethod
    def _lookup_choice(contest: Contest, choice_id: int) -> ContestChoice:
        choice = contest.get_choice(choice_id)
        if choice is None:
            raise UnknownChoiceError(
                f"Got a vote for choice {choice_id}, which is not part of contest {contest.id}"
            )
        return choice

    def calculate(self, contest: Contest, votes: list[FlatVote]) -> ContestResult:
        totals, valid_votes = self.count_votes(votes)

        sorted_counts = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
        positions = self.calc_positions(sorted_counts, contest.num_winners)

        results = [
            ContestChoiceResult(
                choice=self._lookup_choice(contest, choice_id),
                total_count=count,
                winner_position=position,
            )
            for (choice_id, count), position in zip(sorted_counts, positions)
        ]

        cutoff = max(0, min(contest.num_winners, len(results)))
        winners = [r.choice for r in results[:cutoff]]

        logger.debug(
            "Contest %s: %d valid, %d invalid, %d choices counted, %d winners",
            contest.id, valid_votes, len(votes) - valid_votes, len(results), len(winners),
        )

        return ContestResult(
            contest=contest,
            total_valid_votes=valid_votes,
            total_invalid_votes=len(votes) - valid_votes,
            results=results,
            winners=winners,
        )
