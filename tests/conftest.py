"""Shared test helpers."""

from votecount.models import Contest, ContestChoice, ContestResult, ContestVote, FlatVote, VoteChoiceSelection


def make_contest(
    num_winners: int,
    choices: dict[int, str],
    min_choices: int = 1,
    max_choices: int = 1,
    contest_id: int = 1,
    description: str = "",
) -> Contest:
    """Build a Contest from a compact {choice_id: text} table."""
    return Contest.create(
        num_winners,
        [ContestChoice(id=choice_id, text=text) for choice_id, text in choices.items()],
        contest_id=contest_id,
        description=description,
        min_choices=min_choices,
        max_choices=max_choices,
    )


def make_votes(contest: Contest, ballots: list[list[int]]) -> list[FlatVote]:
    """Build flat votes from ballots given as lists of selected choice ids.

    Validity is worked out from the contest rules, as for real votes.
    """
    votes = []
    for ballot in ballots:
        selections = [VoteChoiceSelection(choice=contest.get_choice(c)) for c in ballot]
        votes.append(ContestVote.create(contest, selections).flatten())
    return votes


def positions(result: ContestResult) -> dict[int, int]:
    """Map choice id -> winner position."""
    return {r.choice.id: r.winner_position for r in result.results}


def counts(result: ContestResult) -> dict[int, int]:
    """Map choice id -> total count."""
    return {r.choice.id: r.total_count for r in result.results}


def winner_ids(result: ContestResult) -> list[int]:
    return [w.id for w in result.winners]
