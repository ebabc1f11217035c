"""Command-line interface for generating and tallying contests.

Usage:
    votecount generate --winners 3 --choices 10 --votes 200 --seed 20260201 -o data/
    votecount tally data/contest-123.json data/votes-123.json
    votecount tally https://example.com/contest.json https://example.com/votes.json -o out/
"""

import argparse
import logging
import sys

from votecount.generate import gen_random_choices, gen_random_contest, gen_random_votes
from votecount.models import ContestResult
from votecount.storage import VoteDataError, load_contest, load_votes, save_contest, save_result, save_votes
from votecount.tally import Tally


def format_result(result: ContestResult) -> str:
    """Render a result as a plain-text table, highest count first."""
    contest = result.contest
    lines = [
        f"Contest {contest.id}: {contest.description or '(no description)'}",
        f"  {contest.num_winners} winner(s), {contest.min_choices}-{contest.max_choices} choices per vote",
        f"  Valid votes: {result.total_valid_votes}, invalid votes: {result.total_invalid_votes}",
        "",
        f"  {'Pos':>3}  {'Votes':>6}  Choice",
    ]
    for r in result.results:
        position = str(r.winner_position) if r.winner_position else "-"
        lines.append(f"  {position:>3}  {r.total_count:>6}  {r.choice.text} ({r.choice.id})")
    if not result.results:
        lines.append("  (no votes counted)")
    lines.append("")
    lines.append("Winners: " + (", ".join(w.text for w in result.winners) or "none"))
    return "\n".join(lines)


def cmd_generate(args: argparse.Namespace) -> None:
    choices = gen_random_choices(args.choices, seed=args.seed)
    contest = gen_random_contest(args.winners, choices, seed=args.seed)
    tally = Tally(contest, gen_random_votes(args.votes, contest, seed=args.seed))

    contest_path = save_contest(contest, args.output)
    votes_path = save_votes(tally, args.output)
    print(f"Contest written to {contest_path}")
    print(f"{len(tally.votes)} votes written to {votes_path}")


def cmd_tally(args: argparse.Namespace) -> None:
    contest = load_contest(args.contest)
    tally = load_votes(args.votes, contest)
    result = tally.result()

    print(format_result(result))
    if args.output:
        path = save_result(result, args.output)
        print(f"Results written to {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="votecount", description="Tally plurality-at-large contests")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", help="Generate a random contest and votes")
    generate.add_argument("--winners", type=int, default=3,
                          help="Number of winners (default: 3)")
    generate.add_argument("--choices", type=int, default=10,
                          help="Number of choices (default: 10)")
    generate.add_argument("--votes", type=int, default=200,
                          help="Number of votes (default: 200)")
    generate.add_argument("--seed", type=int, default=None,
                          help="Random seed for reproducible output")
    generate.add_argument("-o", "--output", default=".",
                          help="Output directory (default: current directory)")
    generate.set_defaults(func=cmd_generate)

    tally = subparsers.add_parser(
        "tally", help="Tally votes for a contest")
    tally.add_argument("contest", help="Path or URL of the contest JSON")
    tally.add_argument("votes", help="Path or URL of the votes JSON lines")
    tally.add_argument("-o", "--output", default=None,
                       help="Directory to write results-<id>.json to")
    tally.set_defaults(func=cmd_tally)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except VoteDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
