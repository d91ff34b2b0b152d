"""
project: Delver
module: server.py
License: MIT

Server bootstrap for the HTTP rendering surface.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from delver import create_app


def _configure_logging(log_dir: str):
    """Configure logging to both console and a rotating file in log_dir.

    The file path will be <log_dir>/delver.log. Retains a few backups to avoid growth.
    """
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "delver.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path


def start_server(host="127.0.0.1", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the Flask development server with file + console logging."""
    app = create_app()
    _configure_logging(os.getenv("DELVER_LOG_DIR", app.instance_path))
    try:
        print(f"[INFO] Starting dungeon server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)
