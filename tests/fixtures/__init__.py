"""Shared pytest fixtures and helpers for catalog tests."""

from .core import *  # noqa: F401,F403
from .dummies import *  # noqa: F401,F403
from .services import *  # noqa: F401,F403
