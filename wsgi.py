"""WSGI entry point for the to-do API."""

import os

from todo_api import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
