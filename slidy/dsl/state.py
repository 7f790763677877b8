"""
slidy/dsl/state.py -- Lexer states

Which directive context the most recent non-argument directive put the
lexer in. Gates which directives are legal next and where their effects
land (document default, current slide, current section).
"""

from enum import Enum


class CurrentState(str, Enum):
    GENERAL = "general"
    SLIDE = "slide"
    FIGURE = "figure"
    TEXT = "text"
    IMPORT = "import"
    # Nothing seen yet.
    NONE = "none"
