# app/api/__init__.py
# This file makes the api directory a Python package.

from . import mentor
from . import notification
from . import review

__all__ = [
    "review",
    "mentor",
    "notification",
]
