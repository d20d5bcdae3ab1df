"""Server-rendered library catalog built on FastAPI and SQLModel."""

__version__ = "0.1.0"
