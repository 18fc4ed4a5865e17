"""Main application entry point for the FastAPI application.

Run with ``uvicorn signet.main:app`` or ``signet serve``.
"""

from signet.core.application import create_application
from signet.core.initialization import initialize_application

initialize_application()

app = create_application()
