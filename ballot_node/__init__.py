"""
Ballot Node package initializer

Keep this module lightweight. Do not import FastAPI or the runtime here,
so the election core can be used without the REST stack loaded.
"""

from __future__ import annotations

__all__ = []
