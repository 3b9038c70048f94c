"""FastAPI REST API for the cutting-stock optimizer.

Usage:
    uvicorn cutstock.web:app --reload

Set ``CUTSTOCK_CONFIG`` to an engine configuration file to change the
packing strategy or its tuning.
"""

from cutstock.web.app import app, create_app

__all__ = ["app", "create_app"]
