"""docmirror: mirror a docs tree into a browsable site tree."""

__version__ = "0.1.0"
