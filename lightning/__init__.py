"""In-memory order matching engine: skip-list order books, a per-pair match pool and a request front end."""

__version__ = "0.1.0"