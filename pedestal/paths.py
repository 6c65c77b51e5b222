"""File locations relative to the running program and SQL screening."""

from __future__ import annotations

import os
import sys

_DANGEROUS_KEYWORDS = (
    " drop ", " delete ", " truncate ", " alter ", " create ", " insert ",
    " update ", " replace ", " grant ", " revoke ", " shutdown ", " backup ",
    " restore ", " lock ", " unlock ", " rename ", "/*", "*/", "--",
)


def gen_file_path(*args: str) -> str:
    """Join the names onto the directory held in the FilePath variable.

    The separator comes from the Separator variable.
    """
    current = os.environ.get("FilePath", "")
    separator = os.environ.get("Separator", "")
    if not separator:
        return current + "".join(args)
    return separator.join(current.split(separator) + list(args))


def current_path() -> str:
    """Directory that holds the running program."""
    if sys.argv and sys.argv[0]:
        program = os.path.abspath(sys.argv[0])
    else:
        program = sys.executable
    return os.sep.join(program.split(os.sep)[:-1])


def is_safe_sql(sql: str) -> bool:
    """False when the statement holds a keyword that changes data or a comment."""
    lowered = sql.lower()
    return not any(keyword in lowered for keyword in _DANGEROUS_KEYWORDS)