"""Random contests, choices and votes for testing and demos.

Pass a seed to get the same data on every run. Choice labels are fake first
names from faker.
"""

import random

from faker import Faker

from votecount.models import (
    MAX_CONTEST_ID,
    Contest,
    ContestChoice,
    ContestVote,
    FlatVote,
    VoteChoiceSelection,
)

MAX_CHOICE_ID = 1_000


def gen_random_choices(count: int, seed: int | None = None) -> list[ContestChoice]:
    """Generate `count` choices for a contest.

    Ids are random integers in [0, MAX_CHOICE_ID), unique within the set.
    Labels are not guaranteed to be unique.
    """
    if count > MAX_CHOICE_ID:
        raise ValueError(f"Cannot generate more than {MAX_CHOICE_ID} unique choices, got {count}")

    rng = random.Random(seed)
    fake = Faker()
    if seed is not None:
        fake.seed_instance(seed)

    ids = rng.sample(range(MAX_CHOICE_ID), count)
    return [ContestChoice(id=choice_id, text=fake.first_name()) for choice_id in ids]


def gen_random_contest(
    num_winners: int, choices: list[ContestChoice], seed: int | None = None
) -> Contest:
    """Generate a contest with `num_winners` and `choices`.

    max_choices is 1 for a single winner, otherwise random in
    [1, num_winners). min_choices is 1 when max_choices is 1, otherwise
    random in [1, max_choices).
    """
    rng = random.Random(seed)
    max_choices = 1 if num_winners <= 1 else rng.randrange(1, num_winners)
    min_choices = 1 if max_choices == 1 else rng.randrange(1, max_choices)

    return Contest.create(
        num_winners,
        choices,
        contest_id=rng.randrange(MAX_CONTEST_ID),
        description="A random contest",
        min_choices=min_choices,
        max_choices=max_choices,
    )


def gen_random_votes(count: int, contest: Contest, seed: int | None = None) -> list[FlatVote]:
    """Generate `count` votes for `contest`, both valid and invalid.

    Each voter selects at least one choice and never the same choice twice.
    With more than one choice available, a voter selects fewer choices
    than there are in total.
    """
    if not contest.choices:
        raise ValueError(f"Contest {contest.id} has no choices to vote for")

    rng = random.Random(seed)
    num_available = len(contest.choices)
    votes = []

    for _ in range(count):
        num_selected = 1 if num_available == 1 else rng.randrange(1, num_available)
        picked = rng.sample(contest.choices, num_selected)
        selections = [VoteChoiceSelection(choice=choice) for choice in picked]
        # Go through ContestVote so validity follows the contest rules
        votes.append(ContestVote.create(contest, selections).flatten())

    return votes
