from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ballot_node.api import election as election_api
from ballot_node.ballot_runtime.election import Election
from ballot_node.config import get_admin_id, get_cors_origins, get_log_level, load_config

log = logging.getLogger(__name__)


def create_app(cfg: Optional[Dict[str, Any]] = None) -> FastAPI:
    cfg = cfg if cfg is not None else load_config()

    logging.basicConfig(
        level=getattr(logging, get_log_level(cfg), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    app = FastAPI(title="Ballot Node API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(cfg),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # one election per app instance
    app.state.config = cfg
    app.state.election = Election(admin_id=get_admin_id(cfg))
    log.info("Election created, administrator=%s", app.state.election.admin_id)

    # Routers
    app.include_router(election_api.router)

    @app.get("/health")
    def health():
        return {"ok": True, "status": app.state.election.status.label}

    return app
