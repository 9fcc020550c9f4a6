"""FastAPI dependencies for routes."""

from typing import Annotated

from fastapi import Path, Request

from preferences import PreferencesGate

Fid = Annotated[int, Path(ge=1, description="Farcaster user id")]


def get_gate(request: Request) -> PreferencesGate:
    """Return the app's preferences gate. Use in Depends()."""
    return request.app.state.gate
