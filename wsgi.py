"""WSGI entry point for the Task Manager API."""

import os

from dotenv import load_dotenv

# Environment must be populated before config.py reads it
load_dotenv()

from app import create_app  # noqa: E402

app = create_app(os.getenv("FLASK_ENV", "production"))


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["PORT"])
