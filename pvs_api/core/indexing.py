"""URL Indexing State — pure rules for the per-URL search indexing lifecycle.

Invariants:
    - URL entries are plain dicts: {url, indexing_status, indexing_requested_at, indexed_at}
    - Timestamps are ISO-8601 strings (stored as-is in the JSON column, sortable)
    - A URL only moves forward: pending -> requested -> indexed; indexed never changes
    - Deployment-level status: pending if ANY url pending, else requested if ANY
      requested, else indexed
    - Deployment indexed_at is set only when EVERY url is indexed (latest timestamp)

Design Decisions:
    - Pure functions, no IO: services read/write rows, these compute the state
    - Legacy entries {url, indexed_at} normalized on read, never migrated in place
"""

from typing import Any

from pvs_api.core.domain_types import IndexingStatus

UrlEntry = dict[str, Any]

_PENDING = IndexingStatus.PENDING.value
_REQUESTED = IndexingStatus.REQUESTED.value
_INDEXED = IndexingStatus.INDEXED.value


def new_url_entry(url: str) -> UrlEntry:
    """Fresh entry for a URL that was just deployed."""
    return {
        "url": url,
        "indexing_status": _PENDING,
        "indexing_requested_at": None,
        "indexed_at": None,
    }


def normalize_changed_urls(urls: list[dict] | None) -> list[UrlEntry]:
    """Convert legacy {url, indexed_at} entries to the three-state shape."""
    normalized = []
    for entry in urls or []:
        if "indexing_status" in entry:
            normalized.append(dict(entry))
            continue
        indexed_at = entry.get("indexed_at")
        normalized.append({
            "url": entry.get("url"),
            "indexing_status": _INDEXED if indexed_at else _PENDING,
            "indexing_requested_at": None,
            "indexed_at": indexed_at,
        })
    return normalized


def calculate_deployment_status(urls: list[UrlEntry]) -> str:
    if any(u["indexing_status"] == _PENDING for u in urls):
        return _PENDING
    if any(u["indexing_status"] == _REQUESTED for u in urls):
        return _REQUESTED
    return _INDEXED


def calculate_deployment_timestamps(urls: list[UrlEntry]) -> dict:
    """First request time, and last indexed time once every URL is indexed."""
    requested = sorted(
        u["indexing_requested_at"] for u in urls if u.get("indexing_requested_at")
    )
    indexed = sorted(u["indexed_at"] for u in urls if u.get("indexed_at"))
    all_indexed = all(u["indexing_status"] == _INDEXED for u in urls)
    return {
        "indexing_requested_at": requested[0] if requested else None,
        "indexed_at": indexed[-1] if all_indexed and indexed else None,
    }


def normalize_deployment(record: dict) -> dict:
    """Normalize URLs and fill deployment-level fields the row does not carry.

    Stored deployment-level values win over computed ones.
    """
    urls = normalize_changed_urls(record.get("changed_urls"))
    status = calculate_deployment_status(urls)
    timestamps = calculate_deployment_timestamps(urls)
    return {
        **record,
        "changed_urls": urls,
        "indexing_status": record.get("indexing_status") or status,
        "indexing_requested_at": (
            record.get("indexing_requested_at")
            or timestamps["indexing_requested_at"]
        ),
        "indexed_at": record.get("indexed_at") or timestamps["indexed_at"],
    }


def advance_url(entry: UrlEntry, target: str, now: str) -> UrlEntry:
    """Move one URL towards `target` ("requested" or "indexed").

    Returns the entry unchanged when it is already indexed, or when a
    requested URL is asked to be requested again.
    """
    current = entry["indexing_status"]
    if current == _INDEXED:
        return entry
    if target == _REQUESTED:
        if current == _REQUESTED:
            return entry
        return {
            **entry,
            "indexing_status": _REQUESTED,
            "indexing_requested_at": entry.get("indexing_requested_at") or now,
        }
    if target == _INDEXED:
        return {
            **entry,
            "indexing_status": _INDEXED,
            "indexing_requested_at": entry.get("indexing_requested_at") or now,
            "indexed_at": now,
        }
    raise ValueError(f"Unsupported indexing target: {target}")


def apply_to_all(urls: list[UrlEntry], target: str, now: str) -> list[UrlEntry]:
    return [advance_url(u, target, now) for u in urls]


def apply_to_selected(
    urls: list[UrlEntry], selected: set[str], target: str, now: str,
) -> list[UrlEntry]:
    return [
        advance_url(u, target, now) if u["url"] in selected else u
        for u in urls
    ]


def deployment_fields(urls: list[UrlEntry]) -> dict:
    """Recomputed deployment-level columns for a set of URL entries."""
    return {
        "changed_urls": urls,
        "indexing_status": calculate_deployment_status(urls),
        **calculate_deployment_timestamps(urls),
    }
