from . import common
from .common import (RegexFlags, Context, Span, PatternError, BudgetExceeded)
from .patterns import (Pattern, Literal, CharPredicate, ZeroWidth, StartAnchor,
                       EndAnchor, WordBoundary, Lookahead, Sequence,
                       Alternation, Repetition, Optional, Group)
from .builders import *
from .engine import Match, matches, match, search, finditer, findall

# get a copy of the flags so that they can be accessed publically.
common.define_flags(globals())
