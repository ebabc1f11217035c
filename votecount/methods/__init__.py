"""Tally methods for counting contest votes."""

from .base import TallyMethod

# Tally method registry - import methods here to register them
_tally_methods: dict[str, type[TallyMethod]] = {}


class UnknownTallyMethodError(ValueError):
    """Raised when a contest names a tally method that is not registered."""
    pass


def register_tally_method(method_class: type[TallyMethod]) -> type[TallyMethod]:
    """Decorator to register a tally method class under its TALLY_METHOD tag."""
    _tally_methods[method_class.TALLY_METHOD] = method_class
    return method_class


def get_tally_method(tag: str) -> TallyMethod:
    """Return an instance of the tally method registered under `tag`."""
    try:
        method_class = _tally_methods[tag]
    except KeyError:
        raise UnknownTallyMethodError(
            f"Unknown tally method {tag!r}, expected one of: {', '.join(sorted(_tally_methods))}"
        ) from None
    return method_class()
