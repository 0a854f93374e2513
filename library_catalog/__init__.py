"""Local library catalog: genre management over Flask and SQLAlchemy."""

from .app import create_app

__version__ = "0.1.0"

__all__ = ["create_app", "__version__"]
