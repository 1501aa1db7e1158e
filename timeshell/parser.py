import re

# Unquoted word | "double quoted" | 'single quoted' | stray quote + rest of word
_TOKEN_RE = re.compile(r"""[^\s"']+|"([^"]*)"|'([^']*)'|(["'][^\s"']*)""")


def tokenize(line):
    """
    Split a command line into tokens.
    Quoted spans stay whole and lose their quotes; an unterminated quote
    is kept as a literal character at the start of its word.
    Returns: list of tokens
    """
    tokens = []
    for match in _TOKEN_RE.finditer(line):
        double, single, stray = match.groups()
        if double is not None:
            tokens.append(double)
        elif single is not None:
            tokens.append(single)
        elif stray is not None:
            tokens.append(stray)
        else:
            tokens.append(match.group())
    return tokens


def split_background(tokens):
    """
    Strip a trailing standalone "&".
    Returns: (tokens, background: bool)
    """
    if tokens and tokens[-1] == "&":
        return tokens[:-1], True
    return list(tokens), False


def split_pipe(tokens):
    """
    Split tokens at the first "|".
    Returns: (left, right) or None when there is no pipe
    """
    try:
        idx = tokens.index("|")
    except ValueError:
        return None
    return tokens[:idx], tokens[idx + 1:]
