import logging
import sys

from .common import PatternError

logger = logging.getLogger(__name__)

def _reject(msg):
    logger.debug('Rejected pattern: %s', msg)
    raise PatternError(msg)

def _check_child(child):
    if not isinstance(child, Pattern):
        _reject(f'Expected a Pattern, not {type(child).__name__}: {child!r}')
    return child

def _check_bound(name, bound):
    if type(bound) is not int:
        _reject(f'Repetition {name} must be an int, not {type(bound).__name__}')
    if bound < 0:
        _reject(f'Repetition {name} must not be negative: {bound}')


class Pattern:
    """Base class for patterns.

    Patterns can have subpatterns, so they form a tree. For example, the
    pattern built by (one_or_more(sequence(literal('a'), literal('b')))) consists
    of 4 patterns total: a repetition, which has a single child, which is a
    sequence which has two children, the literals 'a' and 'b'.

    Patterns are immutable. Assigning to an attribute of a constructed pattern
    raises AttributeError. All the state of a matching process lives in a
    Context, so the same tree can be used by many evaluations at once, as long
    as each one has its own context.

    Every pattern class implements (_attempt). The contract: if the pattern
    matches (context.text) at (context.position), the position is advanced past
    the matched substring and True is returned. Otherwise, the context is left
    exactly as it was and False is returned.
    """

    __slots__ = ()

    def _init(self, **attrs):
        for name, value in attrs.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} patterns are immutable.')

    def __delattr__(self, name):
        raise AttributeError(f'{type(self).__name__} patterns are immutable.')

    ########################################
    # Matching

    def attempt(self, context):
        """Tries to match (self) at (context.position). See the class docstring
        for the contract."""
        context.step()
        return self._attempt(context)

    def _attempt(self, context):
        raise NotImplementedError

    ########################################
    # Miscellaneous functions

    def children(self):
        """Returns a tuple of the children Patterns of (self)."""
        return ()

    def walk(self):
        """Yields (self) and all of its subpatterns, in preorder."""
        stack = [self]
        while stack:
            p = stack.pop()
            yield p
            stack.extend(reversed(p.children()))

    def group_nodes(self):
        """Returns the Group patterns of the tree in preorder, that is, in the
        order their opening parenthesis would appear in a regex string. A group
        that occurs more than once in the tree is listed once."""
        seen = set()
        out = []
        for p in self.walk():
            if isinstance(p, Group) and id(p) not in seen:
                seen.add(id(p))
                out.append(p)
        return out


class Literal(Pattern):
    __slots__ = ('_text',)

    def __init__(self, text):
        if not isinstance(text, str):
            _reject(f'Literal text must be a str, not {type(text).__name__}')
        self._init(_text=text)

    @property
    def text(self):
        return self._text

    def _attempt(self, context):
        literal, i = self._text, context.position
        substr = context.text[i:i+len(literal)]
        matches = (literal.lower() == substr.lower()
                   if context.ignorecase else literal == substr)
        if matches:
            context.position = i + len(literal)
        return matches

    def __repr__(self):
        return f'Literal({self._text!r})'


class CharPredicate(Pattern):
    """Matches a single character for which the predicate (fn) holds. With
    IGNORECASE, the lowercase and uppercase forms of the character are tried as
    well."""

    __slots__ = ('_fn', '_name')

    def __init__(self, fn, name=None):
        if not callable(fn):
            _reject(f'Predicate must be callable: {fn!r}')
        if name is None:
            name = getattr(fn, '__name__', repr(fn))
        self._init(_fn=fn, _name=name)

    @property
    def name(self):
        return self._name

    def _test(self, char, ignorecase):
        fn = self._fn
        if fn(char):
            return True
        if not ignorecase:
            return False
        # Case mappings such as 'ß'.upper() == 'SS' are not single characters.
        return any(len(form) == 1 and fn(form)
                   for form in (char.lower(), char.upper()))

    def _attempt(self, context):
        if context.at_end():
            return False
        if self._test(context.text[context.position], context.ignorecase):
            context.position += 1
            return True
        return False

    def __repr__(self):
        return f'CharPredicate({self._name})'


class ZeroWidth(Pattern):
    """All zero-width assertions follow a common matching algorithm: check if a
    condition holds at the current position and never move the cursor. The
    subclasses implement (_holds)."""

    __slots__ = ()

    def _holds(self, context):
        raise NotImplementedError

    def _attempt(self, context):
        return bool(self._holds(context))


class StartAnchor(ZeroWidth):
    """Start of input. With MULTILINE, also right after each newline."""

    __slots__ = ()

    def _holds(self, context):
        i = context.position
        if i == 0:
            return True
        return context.multiline and context.text[i-1] == '\n'

    def __repr__(self):
        return 'StartAnchor()'


class EndAnchor(ZeroWidth):
    """End of input. With MULTILINE, also right before each newline."""

    __slots__ = ()

    def _holds(self, context):
        if context.at_end():
            return True
        return context.multiline and context.text[context.position] == '\n'

    def __repr__(self):
        return 'EndAnchor()'


def _isword(char):
    return char.isalnum() or char == '_'

class WordBoundary(ZeroWidth):
    __slots__ = ('_negate',)

    def __init__(self, negate=False):
        self._init(_negate=bool(negate))

    def _holds(self, context):
        text, i = context.text, context.position
        before = i > 0 and _isword(text[i-1])
        after = i < len(text) and _isword(text[i])
        return (before != after) != self._negate

    def __repr__(self):
        return f'WordBoundary(negate={self._negate})'


class Lookahead(ZeroWidth):
    """Holds if (child) matches at the current position (or, when negative,
    if it doesn't). Whatever (child) did to the context is undone, including
    any group spans it recorded."""

    __slots__ = ('_child', '_negative')

    def __init__(self, child, negative=False):
        self._init(_child=_check_child(child), _negative=bool(negative))

    def children(self):
        return (self._child,)

    def _holds(self, context):
        mark = context.mark()
        found = self._child.attempt(context)
        context.restore(mark)
        return found != self._negative

    def __repr__(self):
        return f'Lookahead({self._child!r}, negative={self._negative})'


class Sequence(Pattern):
    """For patterns of the form '<p1><p2>...<pN>'. Either all children match
    one after the other, or the sequence fails as a whole."""

    __slots__ = ('_children',)

    def __init__(self, children):
        children = tuple(children)
        if not children:
            _reject('A sequence needs at least one child.')
        for child in children:
            _check_child(child)
        self._init(_children=children)

    def children(self):
        return self._children

    def _attempt(self, context):
        mark = context.mark()
        for child in self._children:
            if not child.attempt(context):
                return context.restore(mark)
        return True

    def __repr__(self):
        return f'Sequence({", ".join(map(repr, self._children))})'


class Alternation(Pattern):
    """For patterns of the form '<left>|<right>'. The left pattern is tried
    first. If it matches, that match is final: (right) is not tried, even if it
    could have matched a longer substring."""

    __slots__ = ('_left', '_right')

    def __init__(self, left, right):
        self._init(_left=_check_child(left), _right=_check_child(right))

    def children(self):
        return (self._left, self._right)

    def _attempt(self, context):
        mark = context.mark()
        if self._left.attempt(context):
            return True
        context.restore(mark)
        if self._right.attempt(context):
            return True
        return context.restore(mark)

    def __repr__(self):
        return f'Alternation({self._left!r}, {self._right!r})'


class Repetition(Pattern):
    """All quantifiers are implemented by this class. A repetition has a lower
    and upper bound. Here is a mapping from regex operators to bounds:
    - '*' -> (0, None)
    - '+' -> (1, None)
    - '?' -> (0, 1)
    - '{m,n}' -> (m, n).
    An upper bound of None means there is no upper bound.

    Repetitions are greedy: the child is matched as many times as it can be, up
    to the upper bound, and the count reached is final."""

    __slots__ = ('_child', '_min', '_max')

    def __init__(self, child, min, max=None):
        _check_child(child)
        _check_bound('min', min)
        if max is not None:
            _check_bound('max', max)
            if max < min:
                _reject(f'Repetition max must not be less than min: {min} > {max}')
        self._init(_child=child, _min=min,
                   _max=sys.maxsize if max is None else max)

    @property
    def min(self):
        return self._min

    @property
    def max(self):
        return None if self._max == sys.maxsize else self._max

    def children(self):
        return (self._child,)

    def _attempt(self, context):
        child, mark = self._child, context.mark()
        count = 0
        while count < self._max:
            i = context.position
            if not child.attempt(context):
                break
            count += 1
            if context.position == i:
                # Empty child. Break to avoid an infinite loop.
                break
        if count >= self._min:
            return True
        return context.restore(mark)

    def __repr__(self):
        return f'Repetition({self._child!r}, {self._min}, {self.max})'


class Optional(Repetition):
    __slots__ = ()

    def __init__(self, child):
        super().__init__(child, 0, 1)

    def __repr__(self):
        return f'Optional({self._child!r})'


class Group(Pattern):
    """Matches exactly what (child) matches, and records the span of the match
    in the context, so that it can be inspected afterwards."""

    __slots__ = ('_child', '_name')

    def __init__(self, child, name=None):
        if name is not None and not isinstance(name, str):
            _reject(f'Group name must be a str, not {type(name).__name__}')
        self._init(_child=_check_child(child), _name=name)

    @property
    def name(self):
        return self._name

    def children(self):
        return (self._child,)

    def _attempt(self, context):
        start = context.position
        if self._child.attempt(context):
            return context.record(self, start, context.position)
        return False

    def __repr__(self):
        if self._name is None:
            return f'Group({self._child!r})'
        return f'Group({self._child!r}, name={self._name!r})'
