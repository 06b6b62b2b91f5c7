#!/usr/bin/env python3
"""
Replay a list of scorebook commands against a league match and print the result.

    python -m scorebook.main match.json commands.json --store-dir data/scorebook

`match.json` is the league match payload; `commands.json` a list of
{"type": ..., "payload": {...}} commands. History is restored from and
saved to the side-channel, so consecutive runs continue the same game.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from dataclasses import replace
from typing import List, Optional

from dotenv import load_dotenv

from scorebook.config.config import ScorebookConfig, build_side_channel
from scorebook.config.logging import setup_logging
from scorebook.domain.commands import InvalidCommandError, command_from_dict
from scorebook.infra.seed import LeagueMatchPayload, build_initial_history
from scorebook.services.session import ScoringSession

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Replay commands on a live scorebook')
    parser.add_argument('match_file', type=Path, help='League match payload (JSON)')
    parser.add_argument('commands_file', type=Path, nargs='?', help='JSON list of commands to dispatch')
    parser.add_argument('--store-dir', type=Path, help='Directory for the local side-channel')
    parser.add_argument('--database-url', help='Use a SQL side-channel instead, e.g. sqlite:///scorebook.db')
    parser.add_argument('--state-key', help='Side-channel key (defaults to one key per match)')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv('.env')
    config = ScorebookConfig.from_env()

    setup_logging(config.log_dir, level=logging.DEBUG if args.debug else logging.INFO)

    payload = LeagueMatchPayload.model_validate(json.loads(args.match_file.read_text()))
    config = replace(
        config,
        store_dir=args.store_dir or config.store_dir,
        database_url=args.database_url or config.database_url,
        state_key=args.state_key or f"{config.state_key}_{payload.league_match_id}",
    )

    session = ScoringSession(
        match_id=payload.league_match_id,
        default_store=build_initial_history(payload),
        side_channel=build_side_channel(config),
        config=config,
    )

    if args.commands_file:
        commands = json.loads(args.commands_file.read_text())
        for position, raw in enumerate(commands):
            try:
                command = command_from_dict(raw)
            except InvalidCommandError as e:
                logger.error(f"Stopping replay at command {position}: {e}")
                return 1
            session.dispatch(command)
        logger.info(f"Replayed {len(commands)} commands on {payload.league_match_id}")

    json.dump(session.current_snapshot().to_dict(), sys.stdout, indent=2)
    sys.stdout.write('\n')
    return 0


if __name__ == '__main__':
    sys.exit(main())
