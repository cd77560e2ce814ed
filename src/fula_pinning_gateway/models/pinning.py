"""Wire models for the Pinning Service API and the ledger manifest API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fula_pinning_gateway.errors import DecodeError


def _str_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DecodeError(f"'{name}' must be a list of strings")
    return list(value)


# ── Pinning Service API ────────────────────────────────────


@dataclass(frozen=True)
class Pin:
    """Client-submitted intent to pin one object (the Pinning Service ``Pin``).

    The decoded request object is kept in ``raw`` so the status reply can
    echo it back exactly as submitted.
    """

    cid: str
    name: str | None = None
    origins: tuple[str, ...] = ()
    meta: dict[str, str] = field(default_factory=dict, hash=False)
    raw: dict[str, Any] | None = field(default=None, compare=False, hash=False, repr=False)

    @classmethod
    def from_json(cls, obj: Any) -> Pin:
        if not isinstance(obj, dict):
            raise DecodeError("pin must be a JSON object")
        cid = obj.get("cid")
        if not isinstance(cid, str) or not cid:
            raise DecodeError("'cid' is required and must be a non-empty string")

        name = obj.get("name")
        if name is not None and not isinstance(name, str):
            raise DecodeError("'name' must be a string")

        origins = obj.get("origins")
        origins = tuple(_str_list(origins, "origins")) if origins is not None else ()

        meta = obj.get("meta")
        if meta is None:
            meta = {}
        elif not isinstance(meta, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in meta.items()
        ):
            raise DecodeError("'meta' must be an object of string values")

        return cls(cid=cid, name=name, origins=origins, meta=dict(meta), raw=obj)

    def to_json(self) -> dict[str, Any]:
        if self.raw is not None:
            return self.raw
        out: dict[str, Any] = {"cid": self.cid}
        if self.name:
            out["name"] = self.name
        if self.origins:
            out["origins"] = list(self.origins)
        if self.meta:
            out["meta"] = dict(self.meta)
        return out


@dataclass
class PinStatus:
    """Pinning Service ``PinStatus`` reply."""

    requestid: str
    status: str
    created: str  # RFC 3339
    pin: Pin
    delegates: list[str] = field(default_factory=list)
    info: dict[str, str] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "requestid": self.requestid,
            "status": self.status,
            "created": self.created,
            "pin": self.pin.to_json(),
        }
        if self.delegates:
            out["delegates"] = list(self.delegates)
        if self.info:
            out["info"] = dict(self.info)
        return out


# ── Ledger manifest API ────────────────────────────────────


@dataclass(frozen=True)
class ManifestJob:
    work: str
    engine: str
    uri: str

    def to_json(self) -> dict[str, str]:
        return {"work": self.work, "engine": self.engine, "uri": self.uri}


@dataclass(frozen=True)
class ManifestMetadata:
    job: ManifestJob

    def to_json(self) -> dict[str, Any]:
        return {"job": self.job.to_json()}


@dataclass(frozen=True)
class ManifestBatchUploadRequest:
    """Ledger-facing batch envelope.

    ``cid``, ``replication_factor`` and ``manifest_metadata`` are parallel:
    index i of each describes the same identifier.
    """

    cid: list[str]
    pool_id: int
    replication_factor: list[int]
    manifest_metadata: list[ManifestMetadata]

    def __post_init__(self) -> None:
        n = len(self.cid)
        if len(self.replication_factor) != n or len(self.manifest_metadata) != n:
            raise DecodeError(
                "cid, replication_factor and manifest_metadata must have the same length"
            )

    @classmethod
    def from_json(cls, obj: Any) -> ManifestBatchUploadRequest:
        if not isinstance(obj, dict):
            raise DecodeError("manifest batch must be a JSON object")
        cids = _str_list(obj.get("cid"), "cid")

        pool_id = obj.get("pool_id")
        if not isinstance(pool_id, int) or isinstance(pool_id, bool):
            raise DecodeError("'pool_id' must be an integer")

        factors = obj.get("replication_factor")
        if not isinstance(factors, list) or not all(
            isinstance(f, int) and not isinstance(f, bool) for f in factors
        ):
            raise DecodeError("'replication_factor' must be a list of integers")

        raw_meta = obj.get("manifest_metadata")
        if not isinstance(raw_meta, list):
            raise DecodeError("'manifest_metadata' must be a list")
        metadata = []
        for entry in raw_meta:
            job = entry.get("job") if isinstance(entry, dict) else None
            if not isinstance(job, dict):
                raise DecodeError("each manifest_metadata entry needs a 'job' object")
            for key in ("work", "engine", "uri"):
                if not isinstance(job.get(key), str):
                    raise DecodeError(f"manifest job '{key}' must be a string")
            metadata.append(ManifestMetadata(ManifestJob(
                work=job["work"], engine=job["engine"], uri=job["uri"],
            )))

        return cls(
            cid=cids,
            pool_id=pool_id,
            replication_factor=list(factors),
            manifest_metadata=metadata,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "cid": list(self.cid),
            "pool_id": self.pool_id,
            "replication_factor": list(self.replication_factor),
            "manifest_metadata": [m.to_json() for m in self.manifest_metadata],
        }


@dataclass(frozen=True)
class ManifestBatchUploadResponse:
    """Ledger reply. Its ``cid`` list is what proceeds to pinning."""

    pool_id: int
    storer: str
    cid: list[str]

    @classmethod
    def from_json(cls, obj: Any) -> ManifestBatchUploadResponse:
        # A bad ledger body is our upstream's fault, hence 500.
        if not isinstance(obj, dict):
            raise DecodeError("ledger response is not a JSON object", status=500)
        pool_id = obj.get("pool_id", 0)
        if not isinstance(pool_id, int) or isinstance(pool_id, bool):
            raise DecodeError("ledger response 'pool_id' is not an integer", status=500)
        storer = obj.get("storer", "")
        if not isinstance(storer, str):
            raise DecodeError("ledger response 'storer' is not a string", status=500)
        cids = obj.get("cid", [])
        if cids is None:
            cids = []  # Go ledgers encode an empty slice as null
        if not isinstance(cids, list) or not all(isinstance(c, str) for c in cids):
            raise DecodeError("ledger response 'cid' is not a list of strings", status=500)
        return cls(pool_id=pool_id, storer=storer, cid=list(cids))

    def to_json(self) -> dict[str, Any]:
        return {"pool_id": self.pool_id, "storer": self.storer, "cid": list(self.cid)}
