"""HyperPlot matching API - parse parcel text, match it against the catalog."""

from fastapi import FastAPI, HTTPException, Request

from hyperplot.catalog.normalize import load_plots
from hyperplot.catalog.store import CatalogLoadError, CatalogStore
from hyperplot.config import ASSUME_SQM_FOR_UNKNOWN, CATALOG_PATH, LAST_SEEN_PATH, PLOT_META_PATH
from hyperplot.matching.engine import annotate_owner_references, match_parcels
from hyperplot.parse.engine import parse_parcels
from hyperplot.parse.parsers.parse_form import build_parcel_from_form, can_quick_search
from hyperplot.plots.store import LastSeenLog, PlotMetaStore

app = FastAPI(title="HyperPlot Matching")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(400, "Body must be JSON")
    if not isinstance(body, dict):
        raise HTTPException(400, "Body must be a JSON object")
    return body


def _form_parcel(fields: dict, assume_sqm: bool):
    return build_parcel_from_form(
        fields.get("area_name", ""),
        plot_area=fields.get("plot_area"),
        plot_area_unit=fields.get("plot_area_unit", "sqm"),
        gfa=fields.get("gfa"),
        gfa_unit=fields.get("gfa_unit", "sqm"),
        zoning=fields.get("zoning"),
        floors=fields.get("floors"),
        assume_sqm=assume_sqm,
    )


def _catalog_plots(body: dict) -> list:
    """Inline ``plots`` from the request, otherwise the catalog store."""
    if body.get("plots") is not None:
        return load_plots(body["plots"])
    try:
        return CatalogStore(CATALOG_PATH).plots
    except CatalogLoadError as e:
        raise HTTPException(500, str(e))


def _respond(results, body: dict) -> dict:
    sheet_rows = body.get("sheet_rows")
    if isinstance(sheet_rows, dict):
        results = annotate_owner_references(results, sheet_rows)
    return {"results": [r.to_dict() for r in results], "count": len(results)}


# ---------------------------------------------------------------------------
# Parse / match
# ---------------------------------------------------------------------------

@app.post("/api/parse")
async def api_parse(request: Request):
    body = await _body(request)
    text = body.get("text")
    if not isinstance(text, str) or not text.strip():
        raise HTTPException(400, "Missing text")

    parcels, incomplete = parse_parcels(text, assume_sqm=bool(body.get("assume_sqm", ASSUME_SQM_FOR_UNKNOWN)))
    return {"parcels": [p.to_dict() for p in parcels], "incomplete": incomplete}


@app.post("/api/match")
async def api_match(request: Request):
    """Match ``text`` or a list of form ``parcels`` against the catalog."""
    body = await _body(request)
    assume_sqm = bool(body.get("assume_sqm", ASSUME_SQM_FOR_UNKNOWN))

    text = body.get("text")
    forms = body.get("parcels")
    if isinstance(text, str) and text.strip():
        parcels, _ = parse_parcels(text, assume_sqm=assume_sqm)
    elif isinstance(forms, list) and forms:
        parcels = [_form_parcel(f, assume_sqm) for f in forms if isinstance(f, dict)]
    else:
        raise HTTPException(400, "Provide text or parcels")

    return _respond(match_parcels(parcels, _catalog_plots(body)), body)


@app.post("/api/quick-search")
async def api_quick_search(request: Request):
    body = await _body(request)
    parcel = _form_parcel(body, bool(body.get("assume_sqm", ASSUME_SQM_FOR_UNKNOWN)))
    if not can_quick_search(parcel):
        raise HTTPException(400, "Area name and a positive plot area or GFA are required")

    return _respond(match_parcels([parcel], _catalog_plots(body)), body)


@app.get("/api/catalog/status")
def api_catalog_status():
    store = CatalogStore(CATALOG_PATH)
    if not store.exists():
        raise HTTPException(404, "No catalog file")
    try:
        return store.stats()
    except CatalogLoadError as e:
        raise HTTPException(500, str(e))


@app.post("/api/manual-land")
async def api_save_manual_land(request: Request):
    """Create or update a manually entered plot (matched on ``id``)."""
    body = await _body(request)
    if not body.get("id") and not str(body.get("area_name") or "").strip():
        raise HTTPException(400, "area_name is required")
    try:
        return CatalogStore(CATALOG_PATH).save_manual_entry(body)
    except CatalogLoadError as e:
        raise HTTPException(500, str(e))


@app.delete("/api/manual-land/{entry_id}")
def api_delete_manual_land(entry_id: str):
    try:
        deleted = CatalogStore(CATALOG_PATH).delete_manual_entry(entry_id)
    except CatalogLoadError as e:
        raise HTTPException(500, str(e))
    if not deleted:
        raise HTTPException(404, f"No manual entry {entry_id}")
    return {"deleted": entry_id}


# ---------------------------------------------------------------------------
# Plot metadata / last seen
# ---------------------------------------------------------------------------

@app.get("/api/plots/{plot_id}/meta")
def api_get_meta(plot_id: str):
    meta = PlotMetaStore(PLOT_META_PATH).get(plot_id)
    if meta is None:
        raise HTTPException(404, f"No metadata for plot {plot_id}")
    return meta


@app.post("/api/plots/{plot_id}/meta")
async def api_set_meta(plot_id: str, request: Request):
    body = await _body(request)
    if not body:
        raise HTTPException(400, "No fields provided")
    return PlotMetaStore(PLOT_META_PATH).set(plot_id, body)


@app.delete("/api/plots/{plot_id}/meta")
def api_delete_meta(plot_id: str):
    if not PlotMetaStore(PLOT_META_PATH).delete(plot_id):
        raise HTTPException(404, f"No metadata for plot {plot_id}")
    return {"deleted": plot_id}


@app.get("/api/last-seen")
def api_last_seen():
    return LastSeenLog(LAST_SEEN_PATH).entries()


@app.post("/api/last-seen")
async def api_add_last_seen(request: Request):
    body = await _body(request)
    if not LastSeenLog(LAST_SEEN_PATH).add(body):
        raise HTTPException(400, "plot_id and non-zero coordinates are required")
    return {"ok": True}
