"""
Application Modules.

- backend/: Note store, board services, API, configuration
- cli/: Terminal board client (Typer + Rich)
"""
