"""doc-flow: documentation models extracted from JavaScript doc comments."""

__version__ = "0.1.0"
