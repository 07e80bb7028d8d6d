"""Tag argument parsing."""

_QUOTES = frozenset("'\"")


def tokenize(markup: str) -> list[str]:
    """Split tag markup into arguments.

    Arguments are separated by whitespace. Single or double quotes capture
    whitespace, and a backslash inserts the next character literally::

        ""                    -> []
        "  foo   bar"         -> ["foo", "bar"]
        "foo 'bar quux'"      -> ["foo", "bar quux"]
        "foo bar\\ quux"      -> ["foo", "bar quux"]
        "foo \"'bar quux'\""  -> ["foo", "'bar quux'"]
        "'' foo"              -> ["", "foo"]

    Empty quotes keep their position as an empty argument, so callers can skip
    an optional argument. An unterminated quote or a trailing backslash is
    accepted silently.
    """
    args: list[str] = []
    current: list[str] = []
    quote: str | None = None
    escaped = False

    def flush() -> None:
        if current:
            args.append("".join(current))
            current.clear()

    for char in markup:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote is not None:
            if char == quote:
                # a closing quote always ends the argument, even an empty one
                args.append("".join(current))
                current.clear()
                quote = None
            else:
                current.append(char)
        elif char in _QUOTES:
            quote = char
        elif char.isspace():
            flush()
        else:
            current.append(char)

    flush()
    return args
