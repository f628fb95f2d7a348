"""FastAPI app exposing cell encoding, decoding and grid aggregation."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from geocell.config import Settings, load_settings
from geocell.contracts import GeoPoint, HashType
from geocell.errors import GeoCellError
from geocell.grid import aggregate, cell_bbox, cell_key, check_precision_range, encode_cell

logger = logging.getLogger(__name__)


class PointRequest(BaseModel):
    """One WGS84 point."""

    lat: float = Field(ge=-90.0, le=90.0)
    lon: float


class EncodeRequest(PointRequest):
    """Request schema for encoding one point."""

    hash_type: HashType | None = None
    precision: int | None = None


class RectangleResponse(BaseModel):
    """Cell bounding rectangle in degrees."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


class CellResponse(BaseModel):
    """Cell hash with its key and bounds."""

    hash: int
    key: str
    bbox: RectangleResponse


class GridRequest(BaseModel):
    """Request schema for grid aggregation."""

    points: list[PointRequest]
    hash_type: HashType | None = None
    precision: int | None = None
    size: int | None = Field(default=None, ge=1)


class BucketResponse(CellResponse):
    """One aggregated cell."""

    count: int


class GridResponse(BaseModel):
    """Grid aggregation result."""

    hash_type: HashType
    precision: int
    buckets: list[BucketResponse]


def _reject(exc: GeoCellError) -> HTTPException:
    logger.warning("rejected request: %s", exc)
    return HTTPException(status_code=422, detail=str(exc))


def _cell_response(cell_hash: int, hash_type: HashType) -> CellResponse:
    bbox = cell_bbox(cell_hash, hash_type)
    return CellResponse(
        hash=cell_hash,
        key=cell_key(cell_hash, hash_type),
        bbox=RectangleResponse(**bbox.to_dict()),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI app."""
    app = FastAPI(title="Geocell API", version="0.1.0")
    resolved = settings or load_settings()
    app.state.settings = resolved

    @app.post("/cells/encode", response_model=CellResponse)
    def post_encode(payload: EncodeRequest) -> CellResponse:
        """Encode one point into the cell that contains it."""
        hash_type = payload.hash_type or resolved.hash_type
        precision = resolved.precision if payload.precision is None else payload.precision
        try:
            check_precision_range(precision, hash_type)
            cell_hash = encode_cell(GeoPoint(lon=payload.lon, lat=payload.lat), hash_type, precision)
            return _cell_response(cell_hash, hash_type)
        except GeoCellError as exc:
            raise _reject(exc) from exc

    @app.get("/cells/{hash_type}/{cell_hash}", response_model=CellResponse)
    def get_cell(hash_type: HashType, cell_hash: int) -> CellResponse:
        """Decode a cell hash into its key and bounds."""
        try:
            return _cell_response(cell_hash, hash_type)
        except GeoCellError as exc:
            raise _reject(exc) from exc

    @app.post("/grid", response_model=GridResponse)
    def post_grid(payload: GridRequest) -> GridResponse:
        """Bucket points into grid cells and count them."""
        hash_type = payload.hash_type or resolved.hash_type
        precision = resolved.precision if payload.precision is None else payload.precision
        size = payload.size or resolved.max_cells
        points = [GeoPoint(lon=p.lon, lat=p.lat) for p in payload.points]
        try:
            buckets = aggregate(points, hash_type, precision, size)
        except GeoCellError as exc:
            raise _reject(exc) from exc
        return GridResponse(
            hash_type=hash_type,
            precision=precision,
            buckets=[
                BucketResponse(
                    hash=b.hash,
                    key=b.key,
                    count=b.count,
                    bbox=RectangleResponse(**b.bbox.to_dict()),
                )
                for b in buckets
            ],
        )

    return app
