from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from vite_bridge.application.vite import Vite
from vite_bridge.infrastructure.config import get_settings
from vite_bridge.web.dependencies import get_directives, get_vite
from vite_bridge.web.directives import ViteDirectives

router = APIRouter(tags=["pages"])

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def _base_context(request: Request, vite: Vite) -> dict[str, object]:
    settings = get_settings()
    return {
        "request": request,
        "app_title": settings.app.title,
        "vite_tags": Markup(vite.get_resolved_vite_scripts()),
        "vite_hmr": Markup(vite.get_hmr_script()),
        "vite_asset": vite.get_asset_url,
        "vite_hash": vite.get_hash() or "",
    }


def _render(template_name: str, context: dict[str, object], directives: ViteDirectives) -> HTMLResponse:
    html = templates.get_template(template_name).render(context)
    return HTMLResponse(directives.render(html))


@router.get("/", response_class=HTMLResponse)
async def spa_root(
    request: Request,
    vite: Vite = Depends(get_vite),
    directives: ViteDirectives = Depends(get_directives),
) -> HTMLResponse:
    return _render("index.html", _base_context(request, vite), directives)


@router.get("/{path:path}", response_class=HTMLResponse)
async def spa_catch_all(
    path: str,
    request: Request,
    vite: Vite = Depends(get_vite),
    directives: ViteDirectives = Depends(get_directives),
) -> HTMLResponse:
    context = _base_context(request, vite)
    context["spa_path"] = path
    return _render("index.html", context, directives)
