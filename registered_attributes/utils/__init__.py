"""Pure utility functions for registered attributes.

No dependencies on the package's models, so these can be imported from
anywhere without circular import risk.
"""

from .blanks import is_blank, as_list, compact_blanks

__all__ = [
    "is_blank",
    "as_list",
    "compact_blanks",
]
