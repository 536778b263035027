from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from vite_bridge.application.vite import Vite
from vite_bridge.infrastructure.exceptions import ManifestError, log_error_details
from vite_bridge.infrastructure.logging import get_logger
from vite_bridge.web.dependencies import get_vite
from vite_bridge.web.schemas import AssetUrl, ViteStatus

logger = get_logger(__name__)

router = APIRouter(prefix="/api/vite", tags=["vite"])


@router.get("", response_model=ViteStatus)
def vite_status(vite: Vite = Depends(get_vite)) -> ViteStatus:
    return ViteStatus(
        mode=vite.mode,
        dev_server_url=vite.get_dev_server_url(),
        entrypoints=list(vite.entrypoints),
        manifest_hash=vite.get_hash(),
        prefix=vite.prefix,
        app_url=vite.app_url,
    )


@router.get("/asset", response_model=AssetUrl)
def asset_url(path: str = Query(..., min_length=1), vite: Vite = Depends(get_vite)) -> AssetUrl:
    try:
        url = vite.get_asset_url(path)
    except ManifestError as exc:
        logger.error("Asset lookup failed", extra=log_error_details(exc, {"path": path}))
        raise HTTPException(status_code=500, detail=exc.user_message) from exc
    if not url:
        raise HTTPException(status_code=404, detail=f"Asset '{path}' not found in manifest")
    return AssetUrl(path=path, url=url)
