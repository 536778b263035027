from __future__ import annotations

from fastapi import HTTPException, Request

from vite_bridge.application.vite import Vite
from vite_bridge.web.directives import ViteDirectives


def get_vite(request: Request) -> Vite:
    vite = getattr(request.app.state, "vite", None)
    if vite is None:
        raise HTTPException(status_code=503, detail="Vite integration is not initialised")
    return vite


def get_directives(request: Request) -> ViteDirectives:
    directives = getattr(request.app.state, "vite_directives", None)
    if directives is None:
        directives = ViteDirectives(get_vite(request))
        request.app.state.vite_directives = directives
    return directives
