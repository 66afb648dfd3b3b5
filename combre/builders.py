"""Functions for building pattern trees. Each function corresponds to a piece
of regex syntax, which is noted in its docstring."""

import functools
import string

from .patterns import (Literal, CharPredicate, StartAnchor, EndAnchor,
                       WordBoundary, Lookahead, Sequence, Alternation,
                       Repetition, Optional, Group, _reject)

DIGIT = frozenset(string.digits)
ALPHA = frozenset(string.ascii_letters)
ALPHANUMERIC = ALPHA | DIGIT
WORD = ALPHANUMERIC | {'_'}
WHITESPACE = frozenset(string.whitespace)

########################################
# Leaves

def literal(text):
    return Literal(text)

def char_predicate(fn, name=None):
    return CharPredicate(fn, name)

def _char_set(chars, name):
    return CharPredicate(chars.__contains__, name)

def any_char():
    """Corresponds to r'.' with DOTALL: any character at all, newline included."""
    return CharPredicate(lambda char: True, 'any')

def digit():
    """Corresponds to r'\\d' (ASCII digits only)."""
    return _char_set(DIGIT, 'digit')

def alpha():
    """Corresponds to r'[a-zA-Z]'."""
    return _char_set(ALPHA, 'alpha')

def alnum():
    """Corresponds to r'[a-zA-Z0-9]'."""
    return _char_set(ALPHANUMERIC, 'alnum')

def word_char():
    """Corresponds to r'\\w' (ASCII only)."""
    return _char_set(WORD, 'word')

def whitespace():
    """Corresponds to r'\\s' (ASCII only)."""
    return _char_set(WHITESPACE, 'whitespace')

def _charset_arg(chars):
    if isinstance(chars, str):
        chars = set(chars)
    chars = frozenset(chars)
    if not chars:
        _reject('A character set must not be empty.')
    for char in chars:
        if not isinstance(char, str) or len(char) != 1:
            _reject(f'Not a single character: {char!r}')
    return chars

def one_of(chars):
    """Corresponds to r'[<chars>]'. (chars) is a string or an iterable of
    single characters."""
    chars = _charset_arg(chars)
    return _char_set(chars, f'one_of({"".join(sorted(chars))!r})')

def none_of(chars):
    """Corresponds to r'[^<chars>]'."""
    chars = _charset_arg(chars)
    return CharPredicate(lambda char: char not in chars,
                         f'none_of({"".join(sorted(chars))!r})')

def char_range(first, last):
    """Corresponds to r'[<first>-<last>]'."""
    for char in (first, last):
        if not isinstance(char, str) or len(char) != 1:
            _reject(f'Range bounds must be single characters: {char!r}')
    if first > last:
        _reject(f'Bad range {first}-{last}.')
    return CharPredicate(lambda char: first <= char <= last,
                         f'range({first!r}, {last!r})')

########################################
# Zero-width assertions

def start():
    """Corresponds to r'^'."""
    return StartAnchor()

def end():
    """Corresponds to r'$'."""
    return EndAnchor()

def word_boundary():
    """Corresponds to r'\\b'."""
    return WordBoundary()

def not_word_boundary():
    """Corresponds to r'\\B'."""
    return WordBoundary(negate=True)

def lookahead(node):
    """Corresponds to r'(?=<node>)'."""
    return Lookahead(node)

def negative_lookahead(node):
    """Corresponds to r'(?!<node>)'."""
    return Lookahead(node, negative=True)

########################################
# Combinators

def sequence(*nodes):
    """Corresponds to r'<r1><r2>...<rN>', where nodes[K] is the pattern of <rK>."""
    return Sequence(nodes)

def alternation(left, right, *more):
    """Corresponds to r'<r1>|<r2>|...|<rN>'. The operator is left-associative,
    so the alternatives are tried from left to right."""
    return functools.reduce(Alternation, more, Alternation(left, right))

def repeat(node, min, max=None):
    """Corresponds to r'<node>{min,max}'. A (max) of None means no upper bound,
    as in r'<node>{min,}'."""
    return Repetition(node, min, max)

def optional(node):
    """Corresponds to r'<node>?'."""
    return Optional(node)

def one_or_more(node):
    """Corresponds to r'<node>+'."""
    return Repetition(node, 1, None)

def zero_or_more(node):
    """Corresponds to r'<node>*'."""
    return Repetition(node, 0, None)

def group(node, name=None):
    """Corresponds to r'(<node>)', or r'(?P<name><node>)' when (name) is given."""
    return Group(node, name)

__all__ = [
    'literal', 'char_predicate', 'any_char', 'digit', 'alpha',
    'alnum', 'word_char', 'whitespace', 'one_of', 'none_of', 'char_range',
    'start', 'end', 'word_boundary', 'not_word_boundary', 'lookahead',
    'negative_lookahead', 'sequence', 'alternation', 'repeat', 'optional',
    'one_or_more', 'zero_or_more', 'group']
