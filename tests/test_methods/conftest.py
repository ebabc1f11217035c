"""Shared fixtures for tally method tests."""

import pytest
from tests.conftest import make_contest, make_votes


@pytest.fixture
def guitarists():
    """Three choices, three winners, one choice per vote.

             votes
    100       3
    200       2
    300       1

    Positions: 100=1, 200=2, 300=3. All votes valid.
    """
    contest = make_contest(3, {
        100: "Mark Knopfler",
        200: "Eric Clapton",
        300: "Jimmy Page",
    }, description="A contest with 3 winners")
    votes = make_votes(contest, [[100], [100], [100], [200], [200], [300]])
    return contest, votes


@pytest.fixture
def beatles():
    """Two pairs of ties, three winners, one choice per vote.

             votes
    100       3
    200       3
    300       2
    400       2

    Positions: 100=1, 200=1, 300=2, 400=0. The cutoff counts entries, so
    400 is left out even though it ties with 300.
    """
    contest = make_contest(3, {
        100: "John Lennon",
        200: "Paul McCartney",
        300: "George Harrison",
        400: "Ringo Starr",
    }, description="Rate the best Beatle!")
    votes = make_votes(contest, [
        [100], [100], [100],
        [200], [200], [200],
        [300], [300],
        [400], [400],
    ])
    return contest, votes


@pytest.fixture
def blues():
    """Three winners, 2-3 choices per vote, five valid and four invalid votes.

    Valid ballots count 100=4, 300=2, 700=2, and 1 each for 400, 500, 600
    and 800. Positions: 100=1, 300=2, 700=2, rest 0.
    """
    contest = make_contest(3, {
        100: "BB King",
        200: "Robert Johnson",
        300: "Muddy Waters",
        400: "John Lee Hooker",
        500: "Etta James",
        600: "Buddy Guy",
        700: "Stevie Ray Vaughan",
        800: "Elmore James",
    }, min_choices=2, max_choices=3, description="The Blues All-Star Showdown")
    votes = make_votes(contest, [
        # Valid
        [100, 300],
        [100, 300, 500],
        [100, 700],
        [400, 700],
        [100, 600, 800],
        # Too few choices
        [400],
        [100],
        [500],
        # Too many choices
        [400, 500, 700, 800],
    ])
    return contest, votes
