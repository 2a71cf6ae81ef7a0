from __future__ import annotations

"""CLI for the CORE quiz shell: argument parsing, dispatch and the prompt loop."""

import argparse
import asyncio
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..config.config import load_config, validate_config
from ..errors import ChannelClosed, QuizError
from ..storage.store import QuizStore
from ..util import out
from ..util.randomness import seed_if_needed
from .channel import ConsoleChannel
from .commands import COMMANDS, ShellContext


async def dispatch(ctx: ShellContext, line: str) -> bool:
    """Run one command line. Returns False when the shell should exit.

    Command errors and failed store writes are reported and the shell goes
    on; ChannelClosed propagates.
    """
    words = line.strip().split(maxsplit=1)
    if not words:
        return True
    cmd = words[0]
    arg = words[1] if len(words) > 1 else None
    handler = COMMANDS.get(cmd)
    if handler is None:
        ctx.channel.notify(f"Unknown command: '{cmd}'")
        ctx.channel.notify("Use 'help' to list the available commands.")
        return True
    try:
        return await handler(ctx, arg)
    except ChannelClosed:
        raise
    except (QuizError, ValueError) as e:
        ctx.channel.error(str(e))
    except OSError as e:
        ctx.channel.error(f"Cannot write quiz store: {e}")
    ctx.errors += 1
    return True


async def run_shell(ctx: ShellContext, banner: str, prompt: str) -> int:
    if banner:
        ctx.channel.notify(banner)
    while True:
        try:
            line = await ctx.channel.readline(prompt)
            if not await dispatch(ctx, line):
                break
        except ChannelClosed:
            break
    ctx.channel.notify("Bye")
    return 0


async def run_once(ctx: ShellContext, words: List[str]) -> int:
    try:
        await dispatch(ctx, " ".join(words))
    except ChannelClosed:
        return 2
    return 2 if ctx.errors else 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="corequiz", description="Interactive trivia quiz shell")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--store", default=None, help="Quiz file (.json or .parquet), overrides the config")
    p.add_argument("--explain", action="store_true", help="Trace session and store events")
    p.add_argument("--no-color", dest="color", action="store_false", help="Disable colored output")
    p.set_defaults(color=None)
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("command", nargs="*", help="Run a single command (e.g. 'show 2') and exit")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.version:
        print(f"corequiz {__version__}")
        return 0

    seed_if_needed()
    if args.explain:
        from .explain import enable as explain_enable
        explain_enable(True)
    cfg = validate_config(load_config(args.config))
    ui = cfg["ui"]
    out.configure(ui["color"] if args.color is None else args.color)

    store_path = Path(args.store or cfg["store"]["path"])
    try:
        store = QuizStore(store_path, seed_defaults=cfg["store"]["seed_defaults"])
    except (OSError, ValueError) as e:
        out.errorlog(f"Cannot open quiz store {store_path}: {e}")
        return 1

    ctx = ShellContext(
        store=store,
        channel=ConsoleChannel(question_color=ui["question_color"]),
        credits=list(ui["credits"]),
    )
    try:
        if args.command:
            return asyncio.run(run_once(ctx, args.command))
        return asyncio.run(run_shell(ctx, ui["banner"], ui["prompt"]))
    except KeyboardInterrupt:
        print()
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
