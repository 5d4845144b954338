"""Command-line interface for Club Tennis.

Every subcommand works on one tournament file. Without arguments the CLI
starts an interactive shell with command completion.
"""

# Club Tennis
# Copyright (C) 2025  Club Tennis developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import re
import shlex
import sys
from typing import Dict, List, Optional, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from clubtennis.constants import PHASE_GROUP, PHASE_NAMES, PHASES
from clubtennis.exceptions import ClubTennisException, InvalidResultException
from clubtennis.models.match import MatchEntry
from clubtennis.models.standings import StandingRow
from clubtennis.models.tournament import Tournament
from clubtennis.models.tournament_config import KnockoutFormat, TournamentConfig
from clubtennis.utils import setup_logger
from clubtennis.utils.tournament_io import (
    load_tournament,
    save_tournament,
    tournament_file_path,
)

logger = setup_logger(__name__)

DEFAULT_FILE = "tournament.json"

SCORE_PATTERN = re.compile(r"^(\d+)[:\-](\d+)$")


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "init": {
        "description": "Create a tournament file with the club roster",
        "options": {
            "--name": "Tournament name",
            "--format": "Knockout format (round_robin_groups/single_elimination)",
            "--force": "Overwrite an existing file",
        },
    },
    "standings": {
        "description": "Show group tables",
        "options": {"--group": "Show a single group"},
    },
    "qualify": {
        "description": "Show the qualified players in seeding order",
        "options": {},
    },
    "knockout": {
        "description": "Show knockout groups, finalists and final round",
        "options": {},
    },
    "bracket": {
        "description": "Show the single elimination bracket",
        "options": {},
    },
    "pairings": {
        "description": "List pairings a result can be entered for",
        "options": {
            "--phase": "group/quarterfinal/semifinal/final (default: group)",
            "--group": "Group or knockout group",
            "--override": "Include pairings that already have a result",
        },
    },
    "record": {
        "description": "Record a result: record P1 P2 6:4 3:6 10:8",
        "options": {
            "--phase": "group/quarterfinal/semifinal/final (default: group)",
            "--group": "Group or knockout group",
            "--override": "Replace an existing result for the pairing",
        },
    },
    "delete": {
        "description": "Delete a result by match id",
        "options": {"<id>": "Match id"},
    },
    "help": {
        "description": "Show help for specific command",
        "options": {"<command>": "Command name to get help for"},
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                     CLUB TENNIS - CLI                         ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/help"] = None
    completions["/list"] = None

    return NestedCompleter.from_nested_dict(completions)


# ========== Output ==========


def print_table(title: str, rows: Sequence[StandingRow]):
    """Print a ranked table with its ranking metrics."""
    print(f"\n{Colors.BOLD}{title}{Colors.ENDC}")
    print(
        f"  {'#':>2}  {'Player':15} {'M':>2} {'W':>2} {'L':>2} "
        f"{'Sets':>7} {'Set%':>6} {'Games':>7} {'Game%':>6}"
    )
    for position, row in enumerate(rows, start=1):
        origin = (
            f" ({row.original_group}{row.original_position})"
            if row.original_group
            else ""
        )
        print(
            f"  {position:>2}. {row.name:15} {row.matches:>2} {row.wins:>2} "
            f"{row.losses:>2} {row.sets_won:>3}:{row.sets_lost:<3} "
            f"{row.set_percentage:>6.1f} {row.games_won:>3}:{row.games_lost:<3} "
            f"{row.game_percentage:>6.1f}{origin}"
        )


def print_pairings(title: str, statuses) -> None:
    print(f"\n{Colors.BOLD}{title}{Colors.ENDC}")
    if not statuses:
        print(f"  {Colors.WARNING}Pending{Colors.ENDC}")
        return
    for status in statuses:
        if status.played:
            match = status.match
            print(
                f"  {Colors.OKGREEN}{status.player1} vs {status.player2}: "
                f"{match.score_line()} (winner {match.winner}, #{match.id}){Colors.ENDC}"
            )
        else:
            print(f"  {status.player1} vs {status.player2}: open")


def print_errors(error: ClubTennisException):
    if isinstance(error, InvalidResultException):
        print(f"{Colors.FAIL}Result rejected:{Colors.ENDC}")
        for message in error.errors:
            print(f"  {Colors.FAIL}- {message}{Colors.ENDC}")
    else:
        print(f"{Colors.FAIL}Error: {error}{Colors.ENDC}")


# ========== Commands ==========


def parse_score_tokens(tokens: Sequence[str]) -> Dict[str, Optional[int]]:
    """Turn ``["6:4", "3:6", "10:8"]`` into entry score fields.

    Raises:
        InvalidResultException: If a token is not ``games:games`` or there
            are more than three of them
    """
    if len(tokens) > 3:
        raise InvalidResultException(["At most two sets and a match tiebreak"])

    keys = ["set1", "set2", "tiebreak"]
    fields: Dict[str, Optional[int]] = {}
    for key, token in zip(keys, tokens):
        found = SCORE_PATTERN.match(token)
        if not found:
            raise InvalidResultException([f"'{token}' is not a score like 6:4"])
        fields[f"{key}_player1"] = int(found.group(1))
        fields[f"{key}_player2"] = int(found.group(2))
    return fields


def run_init_command(args: argparse.Namespace) -> int:
    path = tournament_file_path(args.file)
    if path.exists() and not args.force:
        print(f"{Colors.FAIL}Error: {path} exists, use --force to overwrite{Colors.ENDC}")
        return 1

    config = TournamentConfig(knockout_format=KnockoutFormat(args.format))
    if args.name:
        config.name = args.name
    saved = save_tournament(Tournament(config), path)
    print(f"{Colors.OKGREEN}Tournament created: {saved}{Colors.ENDC}")
    return 0


def run_standings_command(args: argparse.Namespace) -> int:
    tournament = load_tournament(args.file)
    groups = [args.group] if args.group else tournament.config.group_names
    for group_name in groups:
        played, total = tournament.group_progress(group_name)
        print_table(
            f"Group {group_name} ({played}/{total} played)",
            tournament.group_table(group_name),
        )
    return 0


def run_qualify_command(args: argparse.Namespace) -> int:
    tournament = load_tournament(args.file)
    qualified = tournament.qualified
    print(
        f"\n{Colors.BOLD}Qualified ({len(qualified)}/"
        f"{tournament.config.qualifier_count}){Colors.ENDC}"
    )
    for seed, player in enumerate(qualified, start=1):
        print(
            f"  {seed:>2}. {player.label:3} {player.name:15} "
            f"W {player.wins}  sets {player.set_difference:+d}  "
            f"games {player.game_difference:+d}"
        )
    if not tournament.qualification_complete:
        print(f"  {Colors.WARNING}Group phase not complete{Colors.ENDC}")
    return 0


def run_knockout_command(args: argparse.Namespace) -> int:
    tournament = load_tournament(args.file)
    if tournament.knockout_format is not KnockoutFormat.ROUND_ROBIN_GROUPS:
        print(f"{Colors.WARNING}This tournament uses the bracket, see 'bracket'{Colors.ENDC}")
        return 1

    for state in tournament.knockout_group_states:
        if not state.players:
            print(f"\n{Colors.WARNING}Knockout group {state.label}: pending{Colors.ENDC}")
            continue
        print_table(
            f"Knockout group {state.label} ({state.played}/{len(state.pairings)} played)",
            state.table,
        )

    final_round = tournament.final_round
    if final_round.finalists:
        print_table("Final round", final_round.table)
        print_pairings("Final round pairings", final_round.pairings)
    else:
        print(f"\n{Colors.WARNING}Finalists: pending{Colors.ENDC}")

    if tournament.champion:
        print(f"\n{Colors.OKGREEN}{Colors.BOLD}Champion: {tournament.champion}{Colors.ENDC}")
    return 0


def run_bracket_command(args: argparse.Namespace) -> int:
    tournament = load_tournament(args.file)
    if tournament.knockout_format is not KnockoutFormat.SINGLE_ELIMINATION:
        print(f"{Colors.WARNING}This tournament uses knockout groups, see 'knockout'{Colors.ENDC}")
        return 1

    bracket = tournament.bracket
    for phase, bracket_round in bracket.rounds.items():
        print_pairings(PHASE_NAMES[phase], bracket_round.pairings)

    if bracket.champion:
        print(f"\n{Colors.OKGREEN}{Colors.BOLD}Champion: {bracket.champion}{Colors.ENDC}")
    return 0


def run_pairings_command(args: argparse.Namespace) -> int:
    tournament = load_tournament(args.file)
    statuses = tournament.available_pairings(args.phase, args.group, args.override)
    title = PHASE_NAMES[args.phase] + (f" {args.group}" if args.group else "")
    print_pairings(title, statuses)
    return 0


def run_record_command(args: argparse.Namespace) -> int:
    tournament = load_tournament(args.file)
    group = args.group
    if group is None and args.phase == PHASE_GROUP:
        group = tournament.config.group_of(args.player1)
    fields = {
        "phase": args.phase,
        "group": group,
        "player1": args.player1,
        "player2": args.player2,
    }
    fields.update(parse_score_tokens(args.sets))
    entry = MatchEntry.from_fields(fields)

    match = tournament.record_match(entry, allow_override=args.override)
    save_tournament(tournament, args.file)
    print(
        f"{Colors.OKGREEN}Recorded #{match.id}: {match.player1} vs "
        f"{match.player2} {match.score_line()}, winner {match.winner}{Colors.ENDC}"
    )
    return 0


def run_delete_command(args: argparse.Namespace) -> int:
    tournament = load_tournament(args.file)
    tournament.delete_match(args.match_id)
    save_tournament(tournament, args.file)
    print(f"{Colors.OKGREEN}Deleted match #{args.match_id}{Colors.ENDC}")
    return 0


def execute(args: argparse.Namespace) -> int:
    """Run a parsed subcommand, reporting tournament errors on the terminal."""
    try:
        return args.func(args)
    except ClubTennisException as e:
        logger.debug(f"{args.command} failed: {e}")
        print_errors(e)
        return 1


# ========== Parsers ==========


def _add_phase_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--phase", choices=PHASES, default=PHASE_GROUP)
    parser.add_argument("--group", help="Group or knockout group")
    parser.add_argument("--override", action="store_true")


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="club-tennis",
        description="Club championship tournament engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  club-tennis

  # New tournament with the single elimination bracket
  club-tennis init --format single_elimination

  # Enter a group result
  club-tennis record --group A Henning Julia 6:4 3:6 10:8

  # Enter a knockout group result
  club-tennis record --phase semifinal --group B Markus Sascha 6:2 6:3
        """,
    )
    parser.add_argument("--file", "-f", default=DEFAULT_FILE, help="Tournament file")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logging"
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Create a tournament file")
    init_parser.add_argument("--name")
    init_parser.add_argument(
        "--format",
        choices=[f.value for f in KnockoutFormat],
        default=KnockoutFormat.ROUND_ROBIN_GROUPS.value,
    )
    init_parser.add_argument("--force", action="store_true")
    init_parser.set_defaults(func=run_init_command)

    standings_parser = subparsers.add_parser("standings", help="Show group tables")
    standings_parser.add_argument("--group")
    standings_parser.set_defaults(func=run_standings_command)

    qualify_parser = subparsers.add_parser("qualify", help="Show qualified players")
    qualify_parser.set_defaults(func=run_qualify_command)

    knockout_parser = subparsers.add_parser("knockout", help="Show knockout groups")
    knockout_parser.set_defaults(func=run_knockout_command)

    bracket_parser = subparsers.add_parser("bracket", help="Show the bracket")
    bracket_parser.set_defaults(func=run_bracket_command)

    pairings_parser = subparsers.add_parser("pairings", help="List open pairings")
    _add_phase_arguments(pairings_parser)
    pairings_parser.set_defaults(func=run_pairings_command)

    record_parser = subparsers.add_parser("record", help="Record a result")
    _add_phase_arguments(record_parser)
    record_parser.add_argument("player1")
    record_parser.add_argument("player2")
    record_parser.add_argument("sets", nargs="+", help="Scores like 6:4")
    record_parser.set_defaults(func=run_record_command)

    delete_parser = subparsers.add_parser("delete", help="Delete a result")
    delete_parser.add_argument("match_id", type=int)
    delete_parser.set_defaults(func=run_delete_command)

    return parser


# ========== Modes ==========


def run_interactive_mode(file: str = DEFAULT_FILE) -> int:
    """Run the interactive shell on one tournament file."""
    print_banner()
    print(f"Tournament file: {Colors.BOLD}{file}{Colors.ENDC}\n")

    style = Style.from_dict({"prompt": "#00aa00 bold"})
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )
    parser = create_main_parser()

    while True:
        try:
            user_input = session.prompt("club-tennis> ").strip()
        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
            continue
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break

        if not user_input:
            continue

        if user_input in ["exit", "quit", "q"]:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break

        if user_input in ["/help", "help", "?", "/list"]:
            print_commands_list()
            continue

        if user_input.startswith("/help ") or user_input.startswith("help "):
            print_command_help(user_input.split()[1].lstrip("/"))
            continue

        try:
            parts = shlex.split(user_input)
        except ValueError as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            continue

        # Support both "/command" and "command"
        command = parts[0].lstrip("/")
        if command not in COMMANDS:
            print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
            print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
            continue

        try:
            args = parser.parse_args(["--file", file, command] + parts[1:])
        except SystemExit:
            # argparse calls sys.exit on error
            continue
        execute(args)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the club-tennis CLI."""
    argv = sys.argv[1:] if argv is None else argv
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logger(__name__, "DEBUG")

    if args.interactive or not args.command:
        return run_interactive_mode(args.file)

    return execute(args)


if __name__ == "__main__":
    sys.exit(main())
