"""Command string tokenizer -- splits a configured command into an argv.

Quoting rules:

    'single' and "double" quotes group words; a span closes only on the
    same quote character that opened it. Inside a span the only escape is
    a backslash before the closing quote. Outside a span a backslash
    before either quote character makes that quote literal. Every other
    backslash is kept as-is.

    notify-send "Hi there" --icon=foo   ->  notify-send | Hi there | --icon=foo
    echo "say \\"hi\\""                 ->  echo | say "hi"
    echo it\\'s                         ->  echo | it's
    foo"bar baz"qux                     ->  foobar bazqux

There is no shell expansion: variables, globs, pipes and redirections are
passed through literally.
"""

from __future__ import annotations

import string

ArgumentVector = tuple[str, ...]

QUOTES = "'\""
BACKSLASH = "\\"
WHITESPACE = string.whitespace


class CommandSyntaxError(ValueError):
    """A command string could not be split (unbalanced quote)."""

    def __init__(self, command: str, position: int, zone: str | None = None) -> None:
        message = f"unbalanced quote at position {position} in command: {command!r}"
        super().__init__(f"{zone}: {message}" if zone else message)
        self.command = command
        self.position = position
        self.zone = zone


def tokenize(command: str | None) -> ArgumentVector | None:
    """Split ``command`` into an argument vector.

    Returns None ("no command") for a missing, empty or whitespace-only
    string, and also when the first word is empty after quote removal,
    since there would be no program to run. Raises CommandSyntaxError
    when a quote is left open.
    """
    if not command:
        return None

    words: list[str] = []
    i = 0
    n = len(command)

    while True:
        while i < n and command[i] in WHITESPACE:
            i += 1
        if i >= n:
            break

        word: list[str] = []
        while i < n and command[i] not in WHITESPACE:
            c = command[i]
            if c in QUOTES:
                i = _read_quoted(command, i, word)
            elif c == BACKSLASH and i + 1 < n and command[i + 1] in QUOTES:
                word.append(command[i + 1])
                i += 2
            else:
                word.append(c)
                i += 1
        words.append("".join(word))

    if not words or not words[0].strip(WHITESPACE):
        return None
    return tuple(words)


def _read_quoted(command: str, start: int, word: list[str]) -> int:
    """Copy the quoted span opening at ``start`` into ``word``.

    Returns the index just past the closing quote.
    """
    quote = command[start]
    i = start + 1
    n = len(command)
    while i < n and command[i] != quote:
        if command[i] == BACKSLASH and i + 1 < n and command[i + 1] == quote:
            i += 1
        word.append(command[i])
        i += 1
    if i >= n:
        raise CommandSyntaxError(command=command, position=start)
    return i + 1
