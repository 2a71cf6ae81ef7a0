from __future__ import annotations

"""Shell commands: quiz CRUD, single test, play, help, credits."""

import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..errors import InvalidId
from ..storage.store import QuizStore
from ..util.out import colorize
from .session_manager import play
from .single_test import run_single_test


HELP_LINES = [
    "Commands:",
    "   h|help - Show this help.",
    "   list - List the existing quizzes.",
    "   show <id> - Show the question and the answer of the given quiz.",
    "   add - Add a new quiz interactively.",
    "   delete <id> - Delete the given quiz.",
    "   edit <id> - Edit the given quiz.",
    "   test <id> - Test the given quiz.",
    "   p|play - Play: answer every quiz in random order.",
    "   credits - Credits.",
    "   q|quit - Quit the program.",
]

_ID_RE = re.compile(r"^\d+$")


@dataclass
class ShellContext:
    store: QuizStore
    channel: Any
    credits: List[str] = field(default_factory=list)
    rng: Any = None
    errors: int = 0


def parse_id(raw: Optional[str]) -> int:
    """Turn a raw command argument into a quiz id."""
    if raw is None or not raw.strip():
        raise InvalidId("Missing id parameter.")
    token = raw.strip()
    if not _ID_RE.match(token):
        raise InvalidId(f"Invalid id: '{token}'.")
    return int(token)


def _arrow() -> str:
    return colorize("=>", "magenta")


async def help_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    for line in HELP_LINES:
        ctx.channel.notify(line)
    return True


async def list_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    for quiz in ctx.store.get_all():
        ctx.channel.notify(f"  [{colorize(quiz.id, 'magenta')}]: {quiz.question}")
    return True


async def show_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    quiz = ctx.store.get_by_id(parse_id(arg))
    ctx.channel.notify(f"  [{colorize(quiz.id, 'magenta')}]:  {quiz.question} {_arrow()} {quiz.answer}")
    return True


async def add_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    question = await ctx.channel.ask("Enter a question:")
    answer = await ctx.channel.ask("Enter the answer:")
    quiz = ctx.store.add(question, answer)
    ctx.channel.notify(f" {colorize('Added', 'magenta')}: {quiz.question} {_arrow()} {quiz.answer}")
    return True


async def delete_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    quiz_id = parse_id(arg)
    ctx.store.delete(quiz_id)
    ctx.channel.notify(f" Deleted quiz [{colorize(quiz_id, 'magenta')}].")
    return True


async def edit_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    quiz = ctx.store.get_by_id(parse_id(arg))
    question = await ctx.channel.ask("Enter a question:", prefill=quiz.question)
    answer = await ctx.channel.ask("Enter the answer:", prefill=quiz.answer)
    quiz = ctx.store.update(quiz.id, question, answer)
    ctx.channel.notify(f" {colorize('Updated', 'magenta')}: {quiz.question} {_arrow()} {quiz.answer}")
    return True


async def test_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    await run_single_test(ctx.store, ctx.channel, parse_id(arg))
    return True


async def play_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    await play(ctx.store, ctx.channel, ctx.rng)
    return True


async def credits_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    ctx.channel.notify("Authors:")
    for name in ctx.credits:
        ctx.channel.notify(colorize(name, "green"))
    return True


async def quit_cmd(ctx: ShellContext, arg: Optional[str]) -> bool:
    return False


Command = Callable[[ShellContext, Optional[str]], Awaitable[bool]]

COMMANDS: Dict[str, Command] = {
    "h": help_cmd,
    "help": help_cmd,
    "list": list_cmd,
    "show": show_cmd,
    "add": add_cmd,
    "delete": delete_cmd,
    "edit": edit_cmd,
    "test": test_cmd,
    "p": play_cmd,
    "play": play_cmd,
    "credits": credits_cmd,
    "q": quit_cmd,
    "quit": quit_cmd,
}
