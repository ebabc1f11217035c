"""Abstract base class for tally methods."""

from abc import ABC, abstractmethod

from votecount.models import Contest, ContestResult, FlatVote


class UnknownChoiceError(RuntimeError):
    """Raised when a counted vote references a choice outside the contest.

    Votes are expected to only reference the contest's own choices, so this
    means the input was built wrongly. It is not meant to be recovered from.
    """
    pass


class TallyMethod(ABC):
    """Abstract base class for tally methods.

    Each method turns a contest and its votes into a ContestResult. Methods
    are registered via the @register_tally_method decorator in
    votecount/methods/__init__.py and looked up by the contest's
    tally_method tag.
    """

    TALLY_METHOD: str

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this tally method."""
        pass

    @property
    def description(self) -> str:
        """Optional description of how this tally method works."""
        return ""

    @abstractmethod
    def calculate(self, contest: Contest, votes: list[FlatVote]) -> ContestResult:
        """Count the votes for a contest.

        Args:
            contest: The contest being tallied
            votes: Votes already filtered to this contest

        Returns:
            ContestResult with vote totals, positions and winners

        Raises:
            UnknownChoiceError: If a valid vote selects a choice that is
                not part of the contest
        """
        pass
