"""External collaborator clients."""

from .base import IsbnChecker, Notifier
from .email_notifier import HttpEmailNotifier
from .isbn_checker import HttpIsbnChecker

__all__ = ["IsbnChecker", "Notifier", "HttpEmailNotifier", "HttpIsbnChecker"]
