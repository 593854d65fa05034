"""
RecipeShare Backend - API Routes Package
========================================

What:  HTTP route handlers that accept requests and return envelopes.
How:   Each route module handles one resource; all are mounted under /api.

Route Inventory:
    - recipes.py:    /recipes, /recipe, /recipe/{id}, /cuisines
    - steps.py:      /recipe/{id}/steps, /steps/{id}, /images/{id}
    - likes.py:      /recipes/liked, /recipes/liked/{id}, /recipes/liked-by-all,
                     /likeRecipe, /unlikeRecipe
    - users.py:      /user/{id}, /users, /user, /pantry/{id}, /locations
    - health.py:     /check-db-connection, /test

Design Principle:
    Routes are THIN: parse path/query/body, call one executor, map an empty
    result to 404 and a value to {"data": ...}. Store failures are typed
    exceptions handled globally in main.py.
"""

from typing import List, Optional


def split_columns(columns: Optional[str]) -> Optional[List[str]]:
    """Split a `?columns=a,b,c` query value; None when absent or blank."""
    if not columns:
        return None
    names = [name.strip() for name in columns.split(",") if name.strip()]
    return names or None


_FALSE_FLAGS = frozenset({"", "0", "false"})


def is_flag_set(value: Optional[str]) -> bool:
    """Presence flag such as `?img=<anything>`; absent, blank, 0 and false are off."""
    if value is None:
        return False
    return value.strip().lower() not in _FALSE_FLAGS
