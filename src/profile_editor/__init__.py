"""Profile editor: merge, edit and save an account's extended profile."""

__version__ = "0.1.0"
