"""Library API - Core Application Package

This package contains the core application modules including:
- HTTP API and route registration (api.py)
- Request handlers and result types (handlers.py, results.py)
- Book service logic (library.py)
- Field validation rules (validators.py)
- Data model and persistence (book.py, database.py, store.py)
- CLI interface (main.py)
"""

__version__ = "1.0.0"
