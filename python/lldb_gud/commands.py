"""LLDB startup settings and the user-action command table.

Nothing here talks to a process.  The launcher passes
:func:`startup_arguments` to LLDB so that its frame and thread-stop lines
carry the full source path and line number that :mod:`lldb_gud.patterns`
expects, and the front-end turns user actions into command strings with
:func:`build_command`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from string import Formatter
from typing import Dict, Iterable, List, Optional, Sequence

from .patterns import DEFAULT_PROMPT

FRAME_FORMAT = (
    "frame #${frame.index}: ${frame.pc}"
    "{ ${module.file.basename}{`${function.name-without-args}{${frame.no-debug}${function.pc-offset}}}}"
    "{ at ${line.file.fullpath}:${line.number}}\\n"
)
THREAD_FORMAT = (
    "* thread #${thread.index}: tid = ${thread.id%tid}"
    "{, ${frame.pc}}{ ${module.file.basename}{`${function.name-without-args}{${frame.no-debug}${function.pc-offset}}}}"
    "{ at ${line.file.fullpath}:${line.number}}"
    "{, name = '${thread.name}'}{, queue = '${thread.queue}'}"
    "{, stop reason = ${thread.stop-reason}}\\n"
)
THREAD_STOP_FORMAT = THREAD_FORMAT


class CommandError(LookupError):
    """Raised for unknown actions or missing command arguments."""


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def startup_settings(prompt: str = DEFAULT_PROMPT) -> List[str]:
    """Return the ``settings set`` commands the filter depends on."""
    return [
        f"settings set prompt {_quote(prompt)}",
        "settings set use-color false",
        f"settings set frame-format {_quote(FRAME_FORMAT)}",
        f"settings set thread-format {_quote(THREAD_FORMAT)}",
        f"settings set thread-stop-format {_quote(THREAD_STOP_FORMAT)}",
        "settings set stop-line-count-before 0",
        "settings set stop-line-count-after 0",
        "settings set stop-disassembly-display never",
    ]


def startup_arguments(prompt: str = DEFAULT_PROMPT) -> List[str]:
    """Render :func:`startup_settings` as ``-O`` options for the lldb binary."""
    argv: List[str] = []
    for setting in startup_settings(prompt):
        argv.extend(["-O", setting])
    return argv


@dataclass(frozen=True)
class CommandSpec:
    """One user action and the LLDB command template it sends."""

    name: str
    template: str
    description: str
    aliases: Sequence[str] = field(default_factory=tuple)

    @property
    def fields(self) -> List[str]:
        return [name for _, name, _, _ in Formatter().parse(self.template) if name]

    def render(self, **values: object) -> str:
        missing = [name for name in self.fields if values.get(name) in (None, "")]
        if missing:
            raise CommandError(f"{self.name}: missing {', '.join(missing)}")
        return self.template.format(**values)


class CommandTable:
    """Stores the known actions and resolves aliases."""

    def __init__(self, specs: Iterable[CommandSpec] = ()) -> None:
        self._commands: Dict[str, CommandSpec] = {}
        self._ordered: List[CommandSpec] = []
        for spec in specs:
            self.register(spec)

    def register(self, spec: CommandSpec) -> None:
        self._ordered.append(spec)
        self._commands[spec.name] = spec
        for alias in spec.aliases:
            self._commands[alias] = spec

    def get(self, name: str) -> Optional[CommandSpec]:
        return self._commands.get(name)

    def list_commands(self) -> Iterable[CommandSpec]:
        return self._ordered

    def build(self, action: str, **values: object) -> str:
        spec = self.get(action)
        if spec is None:
            raise CommandError(f"unknown action: {action}")
        return spec.render(**values)


COMMANDS = CommandTable(
    [
        CommandSpec("step", "thread step-in", "Step into the next source line", aliases=("s",)),
        CommandSpec("next", "thread step-over", "Step over the next source line", aliases=("n",)),
        CommandSpec("finish", "thread step-out", "Run until the current frame returns"),
        CommandSpec("continue", "process continue", "Resume execution", aliases=("cont", "c")),
        CommandSpec("break", "breakpoint set --file {file} --line {line}", "Set a breakpoint", aliases=("b",)),
        CommandSpec(
            "tbreak",
            "breakpoint set --one-shot true --file {file} --line {line}",
            "Set a one-shot breakpoint",
        ),
        CommandSpec("clear", "breakpoint clear --file {file} --line {line}", "Clear breakpoints at a line"),
        CommandSpec("up", "frame select --relative 1", "Select the caller frame"),
        CommandSpec("down", "frame select --relative -1", "Select the callee frame"),
        CommandSpec("print", "expression -- {expr}", "Evaluate an expression", aliases=("p",)),
        CommandSpec("backtrace", "thread backtrace", "Show the call stack", aliases=("bt",)),
        CommandSpec("quit", "quit", "Leave the debugger", aliases=("q",)),
    ]
)


def build_command(action: str, **values: object) -> str:
    """Return the LLDB command string for *action*."""
    return COMMANDS.build(action, **values)


__all__ = [
    "COMMANDS",
    "FRAME_FORMAT",
    "THREAD_FORMAT",
    "THREAD_STOP_FORMAT",
    "CommandError",
    "CommandSpec",
    "CommandTable",
    "build_command",
    "startup_arguments",
    "startup_settings",
]
