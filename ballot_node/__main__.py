# ballot_node/__main__.py
"""
Entry point for running the Ballot Node as a module:
    python -m ballot_node [--host 0.0.0.0] [--port 8000] [--admin alice]
                          [--config-dir .]
Env toggles:
  BALLOT_ADMIN_ID=...       -> administrator identity
  BALLOT_CALLER_HEADER=...  -> header carrying the caller identity
  BALLOT_LOG_LEVEL=DEBUG    -> log verbosity
"""

from __future__ import annotations

import argparse
import os

import uvicorn

from .ballot_api import create_app
from .config import get_bind_host, get_bind_port, load_config


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="ballot-node",
        description="Run a single-election Ballot Node (REST API)",
    )
    p.add_argument(
        "--config-dir",
        default=os.getcwd(),
        help="Directory holding ballot_config.yaml (default: cwd)",
    )
    p.add_argument("--host", default=None, help="Bind address (overrides config)")
    p.add_argument("--port", type=int, default=None, help="Port (overrides config)")
    p.add_argument("--admin", default=None, help="Administrator identity (overrides config)")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    cfg = load_config(args.config_dir)
    if args.admin:
        cfg["election"]["admin_id"] = args.admin
    host = args.host or get_bind_host(cfg)
    port = args.port or get_bind_port(cfg)

    app = create_app(cfg)
    uvicorn.run(app, host=host, port=port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
