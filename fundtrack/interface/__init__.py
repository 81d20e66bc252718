"""Mini README: Interactive interfaces for the fund tracker.

Exports the FastAPI application factory consumed by the Typer launcher in
``main_fund_tracker.py``.
"""

from .web_app import create_application

__all__ = ["create_application"]
