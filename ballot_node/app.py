"""
ballot_node/app.py
------------------
Thin entrypoint for running the Ballot Node FastAPI app via:

    uvicorn ballot_node.app:app

All real route wiring lives in ballot_node.ballot_api.
"""

from .ballot_api import create_app

app = create_app()


if __name__ == "__main__":
    # Convenience for: python -m ballot_node.app
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
