"""Entry point for running the feed viewer with Uvicorn."""
from __future__ import annotations

import os

import uvicorn

from treehole.config import get_settings


def main() -> None:
  port = int(os.getenv("TREEHOLE_SERVER_PORT", str(get_settings().server_port)))
  reload = os.getenv("UVICORN_RELOAD", "false").lower() == "true"
  uvicorn.run("treehole.main:app", host="0.0.0.0", port=port, reload=reload)


if __name__ == "__main__":
  main()
