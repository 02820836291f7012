"""CLI entry point for the tribute site core."""

import argparse
import json
import logging
import sys
from pathlib import Path

from tribute.config import load_config
from tribute.fixtures import FixtureError, FixtureRepository
from tribute.gate import PasswordGate


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Tribute site fixtures")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument(
        "--fixtures-dir", type=Path, default=None,
        help="Directory holding the fixture JSON files (overrides config)",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("validate", help="Load fixtures and report counts")
    sub.add_parser("chapters", help="List journey chapters in order")

    messages_parser = sub.add_parser("messages", help="List messages, newest first")
    messages_parser.add_argument("--relation", default=None, help="Exact relation to match")
    messages_parser.add_argument("--chapter", default=None, help="Chapter id to match")
    curated = messages_parser.add_mutually_exclusive_group()
    curated.add_argument(
        "--curated", dest="curated", action="store_const", const=True, default=None,
        help="Only curated messages",
    )
    curated.add_argument(
        "--uncurated", dest="curated", action="store_const", const=False,
        help="Only messages not curated",
    )

    sub.add_parser("relations", help="List distinct message relations")
    sub.add_parser("videos", help="List videos")
    sub.add_parser("audio", help="List audio clips")

    password_parser = sub.add_parser("check-password", help="Test an attempt against the site gate")
    password_parser.add_argument("attempt", help="Password attempt")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    config = load_config(args.config)

    if args.command == "check-password":
        gate = PasswordGate.from_config(config)
        if not gate.enabled:
            print("No site password configured; gate is open.")
            return 0
        if gate.check(args.attempt):
            print("OK")
            return 0
        print("Incorrect password")
        return 1

    try:
        if args.fixtures_dir is not None:
            repo = FixtureRepository.from_dir(args.fixtures_dir, config.fixtures)
        else:
            repo = FixtureRepository.from_config(config)
    except FixtureError as e:
        print(f"Fixture error: {e}", file=sys.stderr)
        return 1

    if args.command == "validate":
        print(
            f"OK: {len(repo.list_chapters())} chapters, "
            f"{len(repo.list_messages())} messages "
            f"({len(repo.list_messages(curated=True))} curated), "
            f"{len(repo.list_videos())} videos, {len(repo.list_audio())} audio clips"
        )
    elif args.command == "chapters":
        _print_json([c.to_fixture() for c in repo.list_chapters()])
    elif args.command == "messages":
        _print_json([
            m.to_fixture() for m in repo.list_messages(
                chapter_id=args.chapter, relation=args.relation, curated=args.curated,
            )
        ])
    elif args.command == "relations":
        for relation in repo.list_relations():
            print(relation)
    elif args.command == "videos":
        _print_json([v.to_fixture() for v in repo.list_videos()])
    elif args.command == "audio":
        _print_json([a.to_fixture() for a in repo.list_audio()])
    return 0


if __name__ == "__main__":
    sys.exit(main())
