"""Core data models for contests, votes and tally results."""

import random
from dataclasses import dataclass, field
from typing import Any, Self

PLURALITY_AT_LARGE = "plurality-at-large"

MAX_CONTEST_ID = 1_000_000


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Expected true or false, got {value!r}")
    return value


@dataclass
class ContestChoice:
    """One selectable option within a contest.

    Attributes:
        id: Identifier, unique within the contest
        text: Label shown to voters
        urls: Reference links (informational only)
    """
    id: int
    text: str
    urls: list[str] = field(default_factory=list)

    def add_url(self, url: str) -> None:
        self.urls.append(url)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "urls": list(self.urls)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=int(data["id"]),
            text=str(data["text"]),
            urls=list(data.get("urls", [])),
        )


@dataclass(frozen=True)
class Contest:
    """A contest with its choices and selection rules.

    Attributes:
        id: Contest identifier
        description: Free-form description
        tally_method: Tag of the tally method, always "plurality-at-large"
        num_winners: How many choices get elected
        min_choices: Fewest choices a valid vote may select
        max_choices: Most choices a valid vote may select
        choices: The available choices, in declaration order

    Example:
        >>> contest = Contest.create(2, [
        ...     ContestChoice(1, "Alice"),
        ...     ContestChoice(2, "Bob"),
        ...     ContestChoice(3, "Carol"),
        ... ], description="Board election", max_choices=2)

    Contest-level rules are not checked here: a contest with
    min_choices > max_choices is accepted, it just rejects every vote.
    """
    id: int
    description: str
    tally_method: str
    num_winners: int
    min_choices: int
    max_choices: int
    choices: list[ContestChoice]

    @classmethod
    def create(
        cls,
        num_winners: int,
        choices: list[ContestChoice],
        *,
        contest_id: int | None = None,
        description: str = "",
        min_choices: int = 1,
        max_choices: int | None = None,
    ) -> Self:
        """Build a plurality-at-large contest.

        A random id in [0, MAX_CONTEST_ID) is drawn when none is given, and
        max_choices defaults to num_winners.
        """
        if contest_id is None:
            contest_id = random.randrange(MAX_CONTEST_ID)
        if max_choices is None:
            max_choices = num_winners
        return cls(
            id=contest_id,
            description=description,
            tally_method=PLURALITY_AT_LARGE,
            num_winners=num_winners,
            min_choices=min_choices,
            max_choices=max_choices,
            choices=[ContestChoice.from_dict(c.to_dict()) for c in choices],
        )

    def get_choice(self, choice_id: int) -> ContestChoice | None:
        """Get the choice with the given id, or None if not part of this contest."""
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "tally_method": self.tally_method,
            "num_winners": self.num_winners,
            "min_choices": self.min_choices,
            "max_choices": self.max_choices,
            "choices": [c.to_dict() for c in self.choices],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=int(data["id"]),
            description=str(data.get("description", "")),
            tally_method=str(data.get("tally_method", PLURALITY_AT_LARGE)),
            num_winners=int(data["num_winners"]),
            min_choices=int(data["min_choices"]),
            max_choices=int(data["max_choices"]),
            choices=[ContestChoice.from_dict(c) for c in data.get("choices", [])],
        )


@dataclass
class VoteChoiceSelection:
    """A choice within a vote, with the number of votes assigned to it.

    In plurality-at-large `selected` is 0 or 1, but larger values are kept
    as given and summed by the tally.
    """
    choice: ContestChoice
    selected: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"contest_choice": self.choice.to_dict(), "selected": self.selected}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        selected = int(data.get("selected", 1))
        if selected < 0:
            raise ValueError(f"Negative selection count: {selected}")
        return cls(
            choice=ContestChoice.from_dict(data["contest_choice"]),
            selected=selected,
        )


@dataclass
class ContestVote:
    """A vote as submitted, carrying the full contest it was cast in.

    Use ContestVote.create() so validity is worked out from the contest
    rules. Storage and tallying use the FlatVote form (see flatten()).
    """
    contest: Contest
    selections: list[VoteChoiceSelection]
    is_explicit_invalid: bool = False

    @classmethod
    def create(cls, contest: Contest, selections: list[VoteChoiceSelection]) -> Self:
        return cls(
            contest=contest,
            selections=selections,
            is_explicit_invalid=not cls.is_valid(contest, selections),
        )

    @staticmethod
    def is_valid(contest: Contest, selections: list[VoteChoiceSelection]) -> bool:
        """Check the number of selections against the contest's min/max choices.

        Only the count matters: duplicated choices or choices from another
        contest are not detected here.
        """
        return contest.min_choices <= len(selections) <= contest.max_choices

    def invalidate(self) -> None:
        """Mark this vote invalid. There is no way back."""
        self.is_explicit_invalid = True

    def flatten(self) -> "FlatVote":
        return FlatVote(
            contest_id=self.contest.id,
            selections=list(self.selections),
            is_explicit_invalid=self.is_explicit_invalid,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            contest=Contest.from_dict(data["contest"]),
            selections=[VoteChoiceSelection.from_dict(s) for s in data["choices"]],
            is_explicit_invalid=_as_bool(data["is_explicit_invalid"]),
        )


@dataclass(frozen=True)
class FlatVote:
    """A vote that references its contest by id only.

    Embedding the whole contest in every vote is redundant for bulk
    storage, so this is the form held by a Tally and written to disk.
    """
    contest_id: int
    selections: list[VoteChoiceSelection]
    is_explicit_invalid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_explicit_invalid": self.is_explicit_invalid,
            "choices": [s.to_dict() for s in self.selections],
            "contest": self.contest_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            contest_id=int(data["contest"]),
            selections=[VoteChoiceSelection.from_dict(s) for s in data["choices"]],
            is_explicit_invalid=_as_bool(data["is_explicit_invalid"]),
        )


@dataclass(frozen=True)
class ContestChoiceResult:
    """Tally outcome for one choice.

    Attributes:
        choice: The choice
        total_count: Sum of selections from valid votes
        winner_position: 1-indexed position among winners (tied choices
                         share a position), or 0 for a non-winner
    """
    choice: ContestChoice
    total_count: int
    winner_position: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "contest_choice": self.choice.to_dict(),
            "total_count": self.total_count,
            "winner_position": self.winner_position,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            choice=ContestChoice.from_dict(data["contest_choice"]),
            total_count=int(data["total_count"]),
            winner_position=int(data["winner_position"]),
        )


@dataclass(frozen=True)
class ContestResult:
    """Aggregated result of tallying a contest.

    Attributes:
        contest: The contest these results belong to
        total_valid_votes: Votes that were counted
        total_invalid_votes: Votes skipped as invalid
        results: One entry per choice that received at least one vote,
                 highest count first
        winners: Winning choices in ranked order
    """
    contest: Contest
    total_valid_votes: int
    total_invalid_votes: int
    results: list[ContestChoiceResult]
    winners: list[ContestChoice]

    def get_choice_result(self, choice_id: int) -> ContestChoiceResult | None:
        """Get the result entry for a choice, or None if it got no votes."""
        for r in self.results:
            if r.choice.id == choice_id:
                return r
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "contest": self.contest.to_dict(),
            "total_valid_votes": self.total_valid_votes,
            "total_invalid_votes": self.total_invalid_votes,
            "results": [r.to_dict() for r in self.results],
            "winners": [w.to_dict() for w in self.winners],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            contest=Contest.from_dict(data["contest"]),
            total_valid_votes=int(data["total_valid_votes"]),
            total_invalid_votes=int(data["total_invalid_votes"]),
            results=[ContestChoiceResult.from_dict(r) for r in data["results"]],
            winners=[ContestChoice.from_dict(w) for w in data["winners"]],
        )
