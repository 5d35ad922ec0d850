#!/usr/bin/env python3
"""
GPTK Records - Student records backend
=======================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging

from flask import Flask

import config
from db import init_db
from api import api_bp
from api.errors import register_app_handlers


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)

    # ── Upload staging area ─────────────────────────────────────────
    config.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)

    # ── Register blueprints + JSON error handlers ───────────────────
    app.register_blueprint(api_bp)
    register_app_handlers(app)

    return app


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    print("=" * 56)
    print("  GPTK Records - Student Records Backend")
    print("=" * 56)

    app = create_app()

    print(f"  Database: {config.DB_URL}")
    print(f"  Uploads:  {config.UPLOAD_DIR}")
    print(f"\n  http://{config.HOST}:{config.PORT}/api/health")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
