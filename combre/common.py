from collections import namedtuple
import enum
import logging

logger = logging.getLogger(__name__)

########################################
# Flags

class RegexFlags(enum.Flag):
    IGNORECASE = I = enum.auto()
    MULTILINE = M = enum.auto()

def define_flags(namespace):
    """Binds every flag name (e.g. 'IGNORECASE' and its alias 'I') in the
    dict (namespace), so that flags can be accessed at the top level of a
    module."""
    for name, flag in RegexFlags.__members__.items():
        namespace[name] = flag

def emptyflags():
    return RegexFlags(0)

########################################
# Errors

class PatternError(ValueError):
    """Raised when a pattern is built with invalid arguments, e.g. a repetition
    whose upper bound is less than its lower bound. Always raised at
    construction time, never while matching."""


class BudgetExceeded(RuntimeError):
    """Raised when an evaluation takes more steps than its budget allows. This
    is not the same as "no match": the outcome of the evaluation is unknown."""

    def __init__(self, budget, steps):
        super().__init__(f'Step budget of {budget} exceeded after {steps} steps.')
        self.budget = budget
        self.steps = steps

########################################
# Spans

Span = namedtuple('Span', 'start end')

########################################
# Context

class Context:
    """
    A Context contains the state of a single evaluation of a pattern tree
    against a string. Patterns are immutable, so everything that changes during
    matching lives here. Every node of the tree receives the same context.

    Attributes:
    - text: the string being matched.
    - position: the cursor. A node which matches advances it past what it
      matched; a node which fails leaves it where it was.
    - flags: a RegexFlags instance, e.g. IGNORECASE.
    - last_group_span: the span most recently recorded by a Group, or None.
    - budget: None or the maximum number of steps this evaluation may take.
    - steps: the number of node attempts made so far.

    Group spans are kept in a journal, a list of (group, span) pairs in the
    order they were recorded. Rolling back the cursor also truncates the
    journal, so a group inside a failed alternative leaves nothing behind.
    """

    def __init__(self, text, position=0, flags=None, budget=None):
        if not 0 <= position <= len(text):
            raise ValueError(
                f'Position must be within [0, {len(text)}], not {position}.')
        if budget is not None and budget <= 0:
            raise ValueError(f'Budget must be positive, not {budget}.')
        if flags is None:
            flags = emptyflags()
        elif not isinstance(flags, RegexFlags):
            # plain ints, as accepted by the re module
            try:
                flags = RegexFlags(flags)
            except ValueError:
                raise ValueError(f'Not a valid combination of flags: {flags!r}') from None
        self.text = text
        self.position = position
        self.flags = flags
        self.budget = budget
        self.steps = 0
        self._journal = []

    def __repr__(self):
        return (f'Context(position={self.position}, '
                f'length={len(self.text)}, flags={self.flags!r})')

    @property
    def ignorecase(self):
        return RegexFlags.IGNORECASE in self.flags

    @property
    def multiline(self):
        return RegexFlags.MULTILINE in self.flags

    def at_end(self):
        return self.position == len(self.text)

    def step(self):
        """Counts one node attempt. Raises BudgetExceeded if the budget has run
        out."""
        self.steps += 1
        if self.budget is not None and self.steps > self.budget:
            logger.warning('Step budget of %d exceeded at position %d',
                           self.budget, self.position)
            raise BudgetExceeded(self.budget, self.steps)

    # ----------------------------------------
    # Rollback

    def mark(self):
        """Returns an opaque value which (self.restore) can use to put the
        cursor and the group journal back to their current state."""
        return (self.position, len(self._journal))

    def restore(self, mark):
        """Always returns False. Returning False is useful because a failing
        node restores and then fails, so it can simply write (return
        context.restore(mark))."""
        self.position, journal_len = mark
        del self._journal[journal_len:]
        return False

    # ----------------------------------------
    # Groups

    def record(self, group, start, end):
        """Records that (group) matched text[start:end]. Always returns True."""
        self._journal.append((group, Span(start, end)))
        return True

    @property
    def last_group_span(self):
        if not self._journal:
            return None
        return self._journal[-1][1]

    def group_span(self, key):
        """Returns the latest span recorded for (key), which is either a Group
        pattern or a group name. If nothing was recorded, None is returned."""
        for group, span in reversed(self._journal):
            if group is key or (isinstance(key, str) and group.name == key):
                return span
        return None
