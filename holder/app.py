from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field, ValidationError

from .models import ALIASES, REGISTRY, HolderConfig, resolve
from .models.holder import build, finalize
from .utils.geo import GeometryError
from .utils.stl_writer import ExportError, mesh_to_stl_bytes

logger = logging.getLogger(__name__)

# -------------------------- Config & App --------------------------

def _split_origins(s: Optional[str]) -> list[str]:
    if not s:
        return []
    return [x.strip() for x in s.split(",") if x.strip()]

origins = _split_origins(os.getenv("CORS_ALLOW_ORIGINS", "")) or ["*"]

app = FastAPI(title="Holder STL Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------- Schemas --------------------------

class GenerateBody(BaseModel):
    variant: str = "full"
    resolution: Optional[int] = Field(default=None, ge=8, le=600)
    overrides: Dict[str, Any] = Field(default_factory=dict)

# -------------------------- Helpers --------------------------

def _config(slug: str) -> HolderConfig:
    try:
        return resolve(slug)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Variant '{slug}' not found")

def _with_overrides(cfg: HolderConfig, overrides: Dict[str, Any]) -> HolderConfig:
    if not overrides:
        return cfg
    try:
        return HolderConfig.model_validate({**cfg.model_dump(), **overrides})
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid overrides: {e}")

# -------------------------- Endpoints --------------------------

@app.get("/health")
def health():
    return {
        "ok": True,
        "service": "holder-stl",
        "variants": sorted(REGISTRY.keys()),
        "aliases_count": len(ALIASES),
    }

@app.get("/variants/{slug}")
def variant(slug: str):
    return _config(slug).model_dump()

@app.post("/generate")
def generate(body: GenerateBody):
    cfg = _with_overrides(_config(body.variant), body.overrides)

    try:
        solid = finalize(cfg, build(cfg))
    except GeometryError as e:
        raise HTTPException(status_code=400, detail=f"Model build error: {e}")

    resolution = cfg.resolution if body.resolution is None else body.resolution
    try:
        stl = mesh_to_stl_bytes(solid, resolution)
    except ExportError as e:
        logger.error("export of %s failed: %s", cfg.name, e)
        raise HTTPException(status_code=500, detail=f"Export error: {e}")

    return Response(
        content=stl,
        media_type="model/stl",
        headers={"Content-Disposition": f'attachment; filename="holder-{cfg.name}.stl"'},
    )
