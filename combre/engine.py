from .common import Context, Span
from .patterns import Pattern, Group

########################################
# Matches

class Match:
    """The result of a successful match of (pattern) at some position of
    (string).

    Groups are referred to by key. A key is one of:
    - 0, which stands for the whole match;
    - a positive int K, the Kth Group of the pattern tree in preorder (the
      order in which their opening parenthesis would appear in a regex);
    - a Group pattern of the tree;
    - a group name.
    """

    def __init__(self, pattern, context, start):
        self.string = context.text
        self.pattern = pattern
        self._context = context
        self._start = start
        self._end = context.position
        self._group_list = None

    def __bool__(self):
        return True

    def __getitem__(self, key):
        return self.group(key)

    def __repr__(self):
        return (f'<combre.Match span=({self._start}, {self._end}), '
                f'match={self.string[self._start:self._end]!r}>')

    @property
    def _groups(self):
        if self._group_list is None:
            self._group_list = self.pattern.group_nodes()
        return self._group_list

    def _resolve(self, key):
        """A helper for the functions which make use of groups. Returns None
        for the whole match and the Group pattern otherwise."""
        if isinstance(key, bool):
            raise TypeError(f'Group key must not be a bool: {key}')
        if isinstance(key, int):
            if not 0 <= key <= len(self._groups):
                raise IndexError(f'No such group: {key}')
            return None if key == 0 else self._groups[key-1]
        if isinstance(key, Group):
            if not any(g is key for g in self._groups):
                raise IndexError(f'Group is not part of the pattern: {key!r}')
            return key
        if isinstance(key, str):
            for g in self._groups:
                if g.name == key:
                    return g
            raise IndexError(f'No such group: {key!r}')
        raise TypeError(f'Group key must be an int, str or Group, not {type(key)}')

    def span(self, key=0):
        """Returns the (start, end) span of the group. If the group didn't
        match, (-1, -1) is returned."""
        g = self._resolve(key)
        if g is None:
            return Span(self._start, self._end)
        span = self._context.group_span(g)
        return Span(-1, -1) if span is None else span

    def start(self, key=0):
        return self.span(key).start

    def end(self, key=0):
        return self.span(key).end

    def group(self, *keys):
        """If (not keys), equivalent to group(0). With a single key, returns the
        substring matched by that group, or None if the group didn't
        match. If it matched multiple times, the substring of the last match is
        returned. With several keys, a tuple of the results is returned."""
        def extract(key):
            start, end = self.span(key)
            return None if start == -1 else self.string[start:end]
        if len(keys) == 0:
            return extract(0)
        elif len(keys) == 1:
            return extract(keys[0])
        else:
            return tuple(extract(key) for key in keys)

    def groups(self, default=None):
        """Mostly equivalent to (self.group(1, 2, ..., N)) where (N) is the
        number of groups. The difference is that if (group(k) is None), then
        (result[k] is default)."""
        mstrs = (self.group(i) for i in range(1, len(self._groups)+1))
        return tuple(default if mstr is None else mstr for mstr in mstrs)

    def groupdict(self, default=None):
        """Maps the name of every named group to what it matched."""
        out = {}
        for g in self._groups:
            if g.name is not None:
                mstr = self.group(g)
                out[g.name] = default if mstr is None else mstr
        return out

########################################
# Public functions

def _check_pattern(pattern):
    if not isinstance(pattern, Pattern):
        raise TypeError(f'Expected a Pattern, not {type(pattern).__name__}')

def matches(pattern, text, flags=None, budget=None):
    """Returns True if (pattern) matches the whole of (text)."""
    _check_pattern(pattern)
    context = Context(text, 0, flags, budget)
    return pattern.attempt(context) and context.at_end()

def match(pattern, text, pos=0, flags=None, budget=None):
    """If (pattern) matches a prefix of (text[pos:]), the corresponding Match
    object is returned. Otherwise, None."""
    _check_pattern(pattern)
    context = Context(text, pos, flags, budget)
    if pattern.attempt(context):
        return Match(pattern, context, pos)
    return None

def _scan(pattern, text, flags, budget):
    i, len_text = 0, len(text) # current position within (text)
    steps = 0
    while i <= len_text:
        context = Context(text, i, flags, budget)
        context.steps = steps
        found = pattern.attempt(context)
        steps = context.steps
        if found:
            yield Match(pattern, context, i)
            if context.position == i:
                # empty match
                i += 1
            else:
                i = context.position
        else:
            i += 1

def finditer(pattern, text, flags=None, budget=None):
    """Returns an iterator of all non-overlapping matches of (pattern) in
    (text), from left to right. The budget, if any, is shared by all the
    positions tried."""
    _check_pattern(pattern)
    return _scan(pattern, text, flags, budget)

def search(pattern, text, flags=None, budget=None):
    """Returns the spans of all non-overlapping matches of (pattern) in
    (text), from left to right."""
    return [m.span() for m in finditer(pattern, text, flags, budget)]

def findall(pattern, text, flags=None, budget=None):
    """Returns a list of all non-overlapping substrings of (text) which
    match (pattern), from left to right."""
    return [m.group() for m in finditer(pattern, text, flags, budget)]
