"""Load and save contests, votes and results as JSON.

Contests and results are stored as single pretty-printed JSON documents.
Votes are stored as JSON lines, one FlatVote per line. Every loader accepts
either a filesystem path or an http(s) URL.
"""

import json
import logging
from pathlib import Path
from urllib.parse import urlparse

import httpx

from votecount.methods import UnknownTallyMethodError, get_tally_method
from votecount.models import Contest, ContestResult, FlatVote
from votecount.tally import Tally

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 30.0


class VoteDataError(Exception):
    """Error reading, decoding or writing contest data."""
    pass


def is_url(source: str | Path) -> bool:
    return urlparse(str(source)).scheme in ("http", "https")


def fetch_url(url: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> bytes:
    """Fetch content from an http(s) URL."""
    try:
        with httpx.Client(follow_redirects=True, timeout=timeout) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.content
    except httpx.HTTPStatusError as e:
        raise VoteDataError(f"HTTP error fetching {url}: {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise VoteDataError(f"Error fetching {url}: {e}") from e


def read_source(source: str | Path) -> bytes:
    """Read raw bytes from a path or URL."""
    if is_url(source):
        logger.info("Fetching %s", source)
        return fetch_url(str(source))
    try:
        return Path(source).read_bytes()
    except OSError as e:
        raise VoteDataError(f"Failed to read {source}: {e}") from e


def _write(path: Path, text: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise VoteDataError(f"Failed to write {path}: {e}") from e
    logger.info("Written to %s", path)
    return path


def _decode_document(source: str | Path) -> dict:
    content = read_source(source)
    try:
        return json.loads(content)
    except ValueError as e:
        raise VoteDataError(f"Invalid JSON in {source}: {e}") from e


def save_contest(contest: Contest, directory: str | Path = ".") -> Path:
    """Save a contest to contest-<id>.json and return the path."""
    path = Path(directory) / f"contest-{contest.id}.json"
    return _write(path, json.dumps(contest.to_dict(), indent=2))


def load_contest(source: str | Path) -> Contest:
    """Load a contest from a JSON file or URL."""
    data = _decode_document(source)
    try:
        contest = Contest.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise VoteDataError(f"Malformed contest in {source}: {e!r}") from e
    try:
        get_tally_method(contest.tally_method)
    except UnknownTallyMethodError as e:
        raise VoteDataError(f"Unsupported contest in {source}: {e}") from e
    return contest


def save_votes(tally: Tally, directory: str | Path = ".") -> Path:
    """Save a tally's votes to votes-<contest id>.json, one vote per line."""
    path = Path(directory) / f"votes-{tally.contest.id}.json"
    lines = [json.dumps(vote.to_dict()) + "\n" for vote in tally.votes]
    return _write(path, "".join(lines))


def load_votes(source: str | Path, contest: Contest) -> Tally:
    """Load votes for `contest` from a JSON lines file or URL.

    Votes for other contests are dropped by the Tally.
    """
    try:
        content = read_source(source).decode("utf-8")
    except UnicodeDecodeError as e:
        raise VoteDataError(f"Votes in {source} are not valid UTF-8: {e}") from e
    tally = Tally(contest)
    for line_number, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            vote = FlatVote.from_dict(json.loads(line))
        except json.JSONDecodeError as e:
            raise VoteDataError(f"Invalid JSON in {source}, line {line_number}: {e}") from e
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise VoteDataError(f"Malformed vote in {source}, line {line_number}: {e!r}") from e
        tally.add_vote(vote)
    logger.info("Loaded %d votes for contest %s from %s", len(tally.votes), contest.id, source)
    return tally


def save_result(result: ContestResult, directory: str | Path = ".") -> Path:
    """Save contest results to results-<contest id>.json."""
    path = Path(directory) / f"results-{result.contest.id}.json"
    return _write(path, json.dumps(result.to_dict(), indent=2))


def load_result(source: str | Path) -> ContestResult:
    """Load contest results from a JSON file or URL."""
    data = _decode_document(source)
    try:
        return ContestResult.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise VoteDataError(f"Malformed result in {source}: {e!r}") from e
