"""Top-level package for the page blocks editor backend."""

__version__ = "0.1.0"

from .startup import open_page  # noqa: E402

__all__ = ["__version__", "open_page"]
