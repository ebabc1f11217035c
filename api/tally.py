"""Vercel serverless function for tallying contests."""

import json
import logging

from votecount.methods import UnknownTallyMethodError, get_tally_method
from votecount.models import Contest, FlatVote
from votecount.storage import VoteDataError, is_url, load_contest, load_votes
from votecount.tally import Tally

logger = logging.getLogger(__name__)


class RequestError(ValueError):
    """The request body is missing data or has the wrong shape."""
    pass


def handler(request):
    """Handle incoming requests to tally a contest.

    Accepts POST with a JSON body holding the contest and its votes, either
    inline or as URLs to fetch:
        {"contest": {...}, "votes": [{...}, ...]}
        {"contest_url": "https://...", "votes_url": "https://..."}

    Returns JSON with the contest result.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        content_type = request.headers.get("content-type", "")
        if "application/json" not in content_type:
            return create_response(
                {"error": f"Unsupported content type: {content_type}"},
                status=400,
            )

        data = json.loads(request.body.decode("utf-8"))
        tally = build_tally(data)
        result = tally.result()

        return create_response(result.to_dict())

    except (RequestError, VoteDataError) as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except Exception as e:
        logger.exception("Failed to tally contest")
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def check_url(url) -> str:
    """Only http(s) URLs may be fetched on behalf of a client."""
    if not isinstance(url, str) or not is_url(url):
        raise RequestError(f"Invalid URL scheme: {url!r}, expected http or https")
    return url


def build_tally(data) -> Tally:
    """Build a Tally from a decoded request body."""
    if not isinstance(data, dict):
        raise RequestError("Request body must be a JSON object")

    try:
        if "contest" in data:
            contest = Contest.from_dict(data["contest"])
        elif "contest_url" in data:
            contest = load_contest(check_url(data["contest_url"]))
        else:
            raise RequestError("Missing 'contest' or 'contest_url' in request body")

        try:
            get_tally_method(contest.tally_method)
        except UnknownTallyMethodError as e:
            raise RequestError(str(e)) from e

        if "votes" in data:
            return Tally(contest, [FlatVote.from_dict(v) for v in data["votes"]])
        if "votes_url" in data:
            return load_votes(check_url(data["votes_url"]), contest)
    except RequestError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise RequestError(f"Malformed request body: {e!r}") from e

    raise RequestError("Missing 'votes' or 'votes_url' in request body")


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
