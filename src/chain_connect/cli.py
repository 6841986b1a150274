"""chain_connect.cli
====================
CLI for starting a game shipped with *chain_connect*.

* **Built-in agents by name** - ``--agent engine`` plays the heuristic
  engine, ``--agent random`` picks uniformly among legal moves.
* Accepts fully-qualified *module:attr* paths for custom agents.
* ``--seed`` makes engine and random agents reproducible.
"""
from __future__ import annotations

import argparse
import importlib
import logging
import random
import sys
from types import ModuleType
from typing import Callable, List, Optional, Union

from .board import PLAYER_O, PLAYER_X, GameBoard

AgentCallable = Callable[[list, list], tuple]  # expected signature

DEFAULT_AGENT = "engine"
DEFAULT_BOARD_SIZE = 15
MIN_BOARD_SIZE = 5
MAX_BOARD_SIZE = 26

# ---------------------------------------------------------------------------
# Agent resolution helpers
# ---------------------------------------------------------------------------

def _import_module(module_path: str) -> ModuleType:
    try:
        return importlib.import_module(module_path)
    except ModuleNotFoundError as err:
        raise ValueError(f"Cannot import module {module_path!r}.") from err


def _load_attr(module: ModuleType, *candidate_names: str) -> AgentCallable:
    """Return the first attribute in *candidate_names* that is callable."""
    for name in candidate_names:
        attr = getattr(module, name, None)
        if callable(attr):
            return attr  # type: ignore[return-value]
    raise ValueError(
        f"None of the symbols {candidate_names!r} are callables in {module.__name__}."
    )


def _resolve_agent(agent: str, seed: Optional[int] = None,
                   diagonal_extension: bool = False) -> AgentCallable:
    """Return a callable for *agent*.

    * ``engine`` builds a fresh :class:`~chain_connect.engine.EngineAgent`.
    * ``random`` / ``rnd`` picks a legal move at random.
    * Anything containing a colon (``pkg.mod:attr``) is imported.
    """
    name = agent.lower()
    if name in {"random", "rnd"}:
        rng = random.Random(seed)
        return lambda _board, action_set: rng.choice(action_set)

    if name in {"engine", "heuristic"}:
        from .engine import EngineAgent
        return EngineAgent(seed=seed, enable_diagonal_extension=diagonal_extension)

    if ":" in agent:
        module_path, attr_name = agent.split(":", 1)
        if not module_path or not attr_name:
            raise ValueError("Agent path must be of the form 'module.sub:attr'.")
        module = _import_module(module_path)
        return _load_attr(module, attr_name)

    raise ValueError(
        f"Unknown agent {agent!r}: use 'engine', 'random' or 'module:attr'.")

# ---------------------------------------------------------------------------
# Interactive helpers
# ---------------------------------------------------------------------------

def _prompt_choice(prompt: str, choices: list[str], default: Optional[str] = None) -> str:
    choice_str = "/".join(choices)
    while True:
        inp = input(f"{prompt} [{choice_str}] ").strip().lower()
        if not inp and default is not None:
            return default
        if inp in choices:
            return inp
        print(f"Please type one of: {choice_str}\n")


def _prompt_yes_no(prompt: str, default: bool = False) -> bool:
    default_str = "Y/n" if default else "y/N"
    while True:
        inp = input(f"{prompt} [{default_str}] ").strip().lower()
        if not inp:
            return default
        if inp in ("y", "yes"):
            return True
        if inp in ("n", "no"):
            return False
        print("Please answer with 'y' or 'n'.\n")


def _interactive_wizard(args: argparse.Namespace) -> argparse.Namespace:
    """Fill unspecified *args* fields by prompting the user."""
    if args.mode is None:
        args.mode = _prompt_choice(
            "Choose game mode",
            ["hvh", "hvm", "mvm"],
            default="hvm",
        )

    if args.board_size is None:
        while True:
            try:
                size_str = input(
                    f"Board size ({MIN_BOARD_SIZE}-{MAX_BOARD_SIZE}) [{DEFAULT_BOARD_SIZE}] ").strip()
                args.board_size = int(size_str) if size_str else DEFAULT_BOARD_SIZE
                if MIN_BOARD_SIZE <= args.board_size <= MAX_BOARD_SIZE:
                    break
            except ValueError:
                pass
            print(f"Please enter an integer between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}.\n")

    if args.use_pygame is None:
        args.use_pygame = _prompt_yes_no("Enable pygame GUI?", default=False)

    if args.mode == "hvm":
        if args.human_player is None:
            ans = _prompt_choice("Human plays as (1 = X top-bottom, 2 = O left-right)", ["1", "2"], default="1")
            args.human_player = int(ans)
    else:
        args.human_player = None

    if args.mode == "mvm":
        ans = _prompt_yes_no(
            "Enable auto-play mode (machine vs machine)?", default=True)
        args.auto = ans
        if ans:
            rate_str = input("Auto-play speed in moves/second [3.0] ").strip()
            args.rate = float(rate_str) if rate_str else 3.0
        else:
            args.rate = None

    if args.mode in ("hvm", "mvm") and args.agent is None:
        ans = input(
            f"Agent: 'engine', 'random' or 'module:attr' [{DEFAULT_AGENT}] "
        ).strip()
        args.agent = ans or DEFAULT_AGENT

    print()  # spacing before game starts
    return args

# ---------------------------------------------------------------------------
# Helpers for multiple-agent handling
# ---------------------------------------------------------------------------

def _normalise_agent_list(agent_opt: Union[None, str, List[str]]) -> List[str]:
    """Return a list with exactly two entries (duplicates if necessary)."""
    if agent_opt is None:
        return [DEFAULT_AGENT, DEFAULT_AGENT]

    if isinstance(agent_opt, str):
        return [agent_opt, agent_opt]

    if isinstance(agent_opt, list):
        if len(agent_opt) == 0:
            return [DEFAULT_AGENT, DEFAULT_AGENT]
        if len(agent_opt) == 1:
            return [agent_opt[0], agent_opt[0]]
        if len(agent_opt) == 2:
            return agent_opt  # type: ignore[return-value]
        raise ValueError("--agent accepts at most two values.")

    raise TypeError("Invalid --agent argument type.")


def _board_size(value: str) -> int:
    size = int(value)
    if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
        raise argparse.ArgumentTypeError(
            f"board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}")
    return size

# ---------------------------------------------------------------------------
# Game runner
# ---------------------------------------------------------------------------

def _run_game(args: argparse.Namespace) -> None:
    game = GameBoard(
        size=args.board_size,
        use_pygame=args.use_pygame,
    )

    # Normalise agent option into a two-element list
    agent_names = _normalise_agent_list(args.agent)
    seed = args.seed

    if args.mode == "hvh":
        try:
            game.human_vs_human()
        except KeyboardInterrupt:
            print("\nGame interrupted by user.")
        finally:
            game.close()

    elif args.mode == "hvm":
        # Use only the *first* agent when two are supplied
        agent_callable = _resolve_agent(agent_names[0], seed, args.diagonal_extension)
        human_player_flag = PLAYER_X if (args.human_player or 1) == 1 else PLAYER_O
        try:
            game.human_vs_machine(human_player=human_player_flag,
                                  machine=agent_callable)
        except KeyboardInterrupt:
            print("\nGame interrupted by user.")
        finally:
            game.close()

    elif args.mode == "mvm":
        agent1_callable = _resolve_agent(agent_names[0], seed, args.diagonal_extension)
        agent2_callable = _resolve_agent(
            agent_names[1], None if seed is None else seed + 1, args.diagonal_extension)
        try:
            game.machine_vs_machine(machine1=agent1_callable,
                                    machine2=agent2_callable,
                                    auto=args.auto,
                                    rate=args.rate)
        except KeyboardInterrupt:
            print("\nGame interrupted by user.")
        finally:
            game.close()
        from .engine import get_strategy_counts, print_strategy_summary
        print_strategy_summary(get_strategy_counts())
    else:
        raise ValueError(f"Unsupported mode {args.mode!r}.")

# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chain-connect",
        description="Play the chain connection game against the heuristic engine.",
    )

    parser.add_argument("--mode", choices=["hvh", "hvm", "mvm"],
                        help="Game mode: hvh (human vs human), hvm (human vs machine), mvm (machine vs machine)")
    parser.add_argument(
        "--auto", action="store_true",
        help="Start machine-vs-machine in continuous auto-play."
    )
    parser.add_argument(
        "--rate", type=float, default=3.0,
        help="Auto-play speed in moves / second (default 3)."
    )
    parser.add_argument("--board-size", type=_board_size,
                        help=f"Board side length ({MIN_BOARD_SIZE}-{MAX_BOARD_SIZE}, default {DEFAULT_BOARD_SIZE})")
    parser.add_argument("--use-pygame", action="store_true",
                        help="Enable pygame GUI")
    parser.add_argument(
        "--agent", nargs="+",
        help=(
            "'engine', 'random' or a module:attr path. "
            "Accepts one or two values - when two are given they are used as "
            "agent 1 and agent 2. In hvm mode the second value is ignored."
        )
    )
    parser.add_argument("--human-player", type=int, choices=[1, 2],
                        help="For hvm mode: 1=X (top-bottom), 2=O (left-right) (default 1)")
    parser.add_argument("--seed", type=int,
                        help="Seed for the engine and random agents")
    parser.add_argument("--diagonal-extension", action="store_true",
                        help="Let the engine fall back to single diagonal steps")
    parser.add_argument("--debug", action="store_true",
                        help="Log every engine decision")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="Prompt for options interactively (default when no flags are given)")
    return parser


def main(argv: Optional[list[str]] = None) -> None:  # noqa: D401 - simple name
    argv = sys.argv[1:] if argv is None else argv

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Normalise unspecified flags to None so the wizard can override
    if not args.use_pygame:
        args.use_pygame = None

    need_interactive = args.interactive or len(argv) == 0

    if need_interactive:
        args = _interactive_wizard(args)
    else:
        if args.board_size is None:
            args.board_size = DEFAULT_BOARD_SIZE
        if args.use_pygame is None:
            args.use_pygame = False
        if args.mode is None:
            parser.error("--mode is required when not using interactive mode")
        if args.mode in ("hvm", "mvm") and args.agent is None:
            args.agent = DEFAULT_AGENT
        if args.mode == "hvm" and args.human_player is None:
            args.human_player = 1
    _run_game(args)

# Allow "python -m chain_connect.cli" direct execution
if __name__ == "__main__":  # pragma: no cover
    main()
