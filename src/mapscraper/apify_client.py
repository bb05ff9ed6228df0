from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Any, Optional, List, Tuple
from urllib.parse import quote, urlencode

import requests

from .config import APIFY_API_BASE, EXPORT_FORMATS, REQUEST_TIMEOUT_S, get_apify_token, get_actor_id
from .errors import MissingCredential, RequestFailed
from .schemas import ActorRun, DatasetMetadata

log = logging.getLogger(__name__)

Record = Dict[str, Any]


def is_configured() -> bool:
    return bool(get_apify_token())


def _actor_url(path: str = "") -> str:
    return f"{APIFY_API_BASE}/acts/{quote(get_actor_id(), safe='~')}{path}"


def _dataset_url(dataset_id: str, path: str = "") -> str:
    return f"{APIFY_API_BASE}/datasets/{quote(str(dataset_id), safe='')}{path}"


def _status_text(resp: requests.Response) -> str:
    return f"{resp.status_code} {resp.reason or ''}".strip()


def _error_message(resp: requests.Response) -> Optional[str]:
    """Pull a message out of an error body: {"error": {"message": ...}} or {"message": ...}."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    err = body.get("error")
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    if body.get("message"):
        return str(body["message"])
    return None


def _unwrap(resp: requests.Response) -> Any:
    # single objects come back as {"data": {...}}
    body = resp.json()
    return body.get("data") if isinstance(body, dict) else None


def _malformed(what: str, resp: requests.Response, e: ValueError) -> RequestFailed:
    # 2xx with a body that is not JSON or does not match the model
    log.error("%s: malformed response: %s", what, e)
    return RequestFailed(f"{what}: malformed response ({e})", resp.status_code)


def _get(url: str, token: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
    q = {"token": token}
    q.update(params or {})
    try:
        return requests.get(url, params=q, timeout=REQUEST_TIMEOUT_S)
    except requests.RequestException as e:
        raise RequestFailed(f"Request to {url} failed: {e}") from e


def get_last_run() -> Optional[ActorRun]:
    """Most recently started run of the actor, or None when there is none yet."""
    token = get_apify_token()
    if not token:
        log.warning("Apify token not found")
        return None

    resp = _get(_actor_url("/runs/last"), token)
    if resp.status_code == 404:
        return None
    if not resp.ok:
        log.error("Failed to fetch last run: %s", _status_text(resp))
        raise RequestFailed(f"Failed to fetch last run: {_status_text(resp)}", resp.status_code)

    try:
        data = _unwrap(resp)
        return ActorRun.model_validate(data) if isinstance(data, dict) else None
    except ValueError as e:
        raise _malformed("Failed to fetch last run", resp, e) from e


def run_actor(search_query: str, max_results: int = 5) -> ActorRun:
    """
    Start a new actor run. ``search_query`` may hold several queries, one per line.
    Raises MissingCredential without a token and RequestFailed on a non-2xx reply.
    """
    token = get_apify_token()
    if not token:
        raise MissingCredential()

    url = _actor_url("/runs")
    payload = {"searchQuery": search_query, "maxResults": int(max_results)}
    try:
        resp = requests.post(url, params={"token": token}, json=payload, timeout=REQUEST_TIMEOUT_S)
    except requests.RequestException as e:
        log.error("Error starting actor run: %s", e)
        raise RequestFailed(f"Failed to start run: {e}") from e

    if not resp.ok:
        msg = _error_message(resp) or f"Failed to start run: {_status_text(resp)}"
        log.error("Error starting actor run: %s", msg)
        raise RequestFailed(msg, resp.status_code)

    try:
        data = _unwrap(resp)
        if not isinstance(data, dict):
            raise RequestFailed("Failed to start run: response had no run object", resp.status_code)
        run = ActorRun.model_validate(data)
    except ValueError as e:
        raise _malformed("Failed to start run", resp, e) from e
    log.info("Started run %s (maxResults=%s)", run.id, max_results)
    return run


def list_runs() -> List[ActorRun]:
    """All runs of the actor, newest first. Empty without a token."""
    token = get_apify_token()
    if not token:
        log.warning("Apify token not found")
        return []

    resp = _get(_actor_url("/runs"), token, {"desc": 1})
    if not resp.ok:
        log.error("Failed to fetch runs: %s", _status_text(resp))
        raise RequestFailed(f"Failed to fetch runs: {_status_text(resp)}", resp.status_code)

    try:
        data = _unwrap(resp) or {}
        items = data.get("items") if isinstance(data, dict) else None
        runs = [ActorRun.model_validate(it) for it in (items or []) if isinstance(it, dict)]
    except ValueError as e:
        raise _malformed("Failed to fetch runs", resp, e) from e
    # desc=1 should already do this; runs without a start time go last
    runs.sort(key=lambda r: r.started_at.timestamp() if r.started_at else float("-inf"), reverse=True)
    return runs


def get_dataset_metadata(dataset_id: str) -> Optional[DatasetMetadata]:
    # best-effort: the preview falls back to fixed columns when this is None
    token = get_apify_token()
    if not token:
        return None

    try:
        resp = _get(_dataset_url(dataset_id), token)
    except RequestFailed as e:
        log.error("Error fetching dataset metadata: %s", e)
        return None
    if not resp.ok:
        log.warning("Failed to fetch info for dataset %s: %s", dataset_id, _status_text(resp))
        return None

    try:
        data = _unwrap(resp)
        return DatasetMetadata.model_validate(data) if isinstance(data, dict) else None
    except ValueError as e:
        log.error("Error fetching dataset metadata: %s", e)
        return None


def get_dataset_items(dataset_id: str, limit: int = 10) -> List[Record]:
    token = get_apify_token()
    if not token:
        return []

    resp = _get(_dataset_url(dataset_id, "/items"), token, {"limit": int(limit), "format": "json"})
    if not resp.ok:
        log.error("Failed to fetch dataset items: %s", _status_text(resp))
        raise RequestFailed(f"Failed to fetch dataset items: {_status_text(resp)}", resp.status_code)

    # items endpoint returns a bare array, not {"data": ...}
    try:
        data = resp.json()
    except ValueError as e:
        raise _malformed("Failed to fetch dataset items", resp, e) from e
    if not isinstance(data, list):
        return []
    return [it for it in data if isinstance(it, dict)]


def get_dataset_export_url(dataset_id: str, fmt: str) -> str:
    """Download URL for the whole dataset in ``fmt``. Built locally, never fetched."""
    fmt = (fmt or "").lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt!r} (expected one of {', '.join(EXPORT_FORMATS)})")

    params: Dict[str, Any] = {}
    token = get_apify_token()
    if token:
        params["token"] = token
    params["format"] = fmt
    params["attachment"] = "true"
    return f"{_dataset_url(dataset_id, '/items')}?{urlencode(params)}"


def fetch_preview(dataset_id: str, limit: int = 10) -> Tuple[List[Record], Optional[DatasetMetadata]]:
    """
    Fetch sample items and metadata concurrently and wait for both.
    A failure of either call is raised to the caller.
    """
    with ThreadPoolExecutor(max_workers=2) as pool:
        items_f = pool.submit(get_dataset_items, dataset_id, limit)
        meta_f = pool.submit(get_dataset_metadata, dataset_id)
        items = items_f.result()
        metadata = meta_f.result()
    return items, metadata
