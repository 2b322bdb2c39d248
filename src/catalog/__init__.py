"""Book catalog service.

Creates, lists and retrieves book records on top of a pluggable store, with
optional ISBN validation and creation notices through external services.
"""

__version__ = "0.1.0"
