"""
Command Line Tokenizer

Splits a raw input line into an argument vector.

Rules:
    - Whitespace outside quotes separates tokens
    - A "double" or 'single' quoted run is kept whole, quotes stripped;
      there is no escaping inside quotes
    - A quoted run touching unquoted text joins it (a"b c" -> ab c)
    - An unterminated quote takes the rest of the line literally
"""

from __future__ import annotations

QUOTES = ('"', "'")


def tokenize(line: str) -> list[str]:
    """
    Tokenize a command line.

    Examples:
        >>> tokenize('echo "hello world" \\'a b\\'')
        ['echo', 'hello world', 'a b']
        >>> tokenize('cat "my file')
        ['cat', 'my file']
        >>> tokenize('   ')
        []
    """
    tokens: list[str] = []
    buf: list[str] = []
    in_token = False
    i = 0
    length = len(line)

    while i < length:
        ch = line[i]

        if ch.isspace():
            if in_token:
                tokens.append("".join(buf))
                buf = []
                in_token = False
            i += 1
            continue

        in_token = True
        if ch in QUOTES:
            end = line.find(ch, i + 1)
            if end == -1:
                # Unterminated: the remainder is one literal run
                buf.append(line[i + 1:])
                i = length
                continue
            buf.append(line[i + 1:end])
            i = end + 1
            continue

        buf.append(ch)
        i += 1

    if in_token:
        tokens.append("".join(buf))

    return tokens


def split_command(line: str) -> tuple[str, list[str]]:
    """
    Split a line into (command name, args).

    The command name is lowercased; arguments keep their case. An empty
    line gives ``("", [])``.
    """
    argv = tokenize(line)
    if not argv:
        return "", []
    return argv[0].lower(), argv[1:]
