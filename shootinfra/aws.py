"""Provider configuration documents for AWS shoots."""

from __future__ import annotations

import ipaddress
import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

API_VERSION = "aws.provider.extensions.gardener.cloud/v1alpha1"
INFRASTRUCTURE_CONFIG_KIND = "InfrastructureConfig"
CONTROL_PLANE_CONFIG_KIND = "ControlPlaneConfig"
WORKER_CONFIG_KIND = "WorkerConfig"

HTTP_TOKENS_REQUIRED = "required"
IMDSV2_HTTP_PUT_RESPONSE_HOP_LIMIT = 2

_WORKERS_BITS = 3
_LAST_BIT_NUMBER = 31


@dataclass(frozen=True)
class Zone:
    """Subnet layout of one availability zone."""

    name: str
    workers: str
    public: str
    internal: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "internal": self.internal,
            "public": self.public,
            "workers": self.workers,
        }


def _encode(document: dict[str, Any]) -> bytes:
    return json.dumps(document, separators=(",", ":")).encode()


def _type_meta(kind: str) -> dict[str, str]:
    return {"kind": kind, "apiVersion": API_VERSION}


def generate_zones(workers_cidr: str, zone_names: Iterable[str] | None) -> list[Zone]:
    """Split a CIDR into non-overlapping worker, public and internal subnets per zone.

    For ``10.250.0.0/16`` the first zone gets workers ``10.250.0.0/19``,
    public ``10.250.32.0/20`` and internal ``10.250.48.0/20``.
    """
    try:
        interface = ipaddress.IPv4Interface(workers_cidr)
    except ValueError as exc:
        raise ValueError(f"invalid workers CIDR: {workers_cidr!r}") from exc

    worker_prefix_length = interface.network.prefixlen + _WORKERS_BITS
    if worker_prefix_length > _LAST_BIT_NUMBER:
        raise ValueError(f"workers CIDR {workers_cidr!r} is too small to split into zones")

    mask = ((1 << worker_prefix_length) - 1) << (32 - worker_prefix_length)
    base = int(interface.ip) & mask
    delta = 1 << (_LAST_BIT_NUMBER - worker_prefix_length)

    def prefix(value: int, length: int) -> str:
        return f"{ipaddress.IPv4Address(value)}/{length}"

    zones = []
    for name in zone_names or ():
        workers = prefix(base, worker_prefix_length)
        base += 2 * delta
        public = prefix(base, worker_prefix_length + 1)
        base += delta
        internal = prefix(base, worker_prefix_length + 1)
        base += delta
        zones.append(Zone(name=name, workers=workers, public=public, internal=internal))
    return zones


def new_infrastructure_config(workers_cidr: str, zones: Iterable[str] | None) -> dict[str, Any]:
    """Build the infrastructure configuration document."""
    return {
        **_type_meta(INFRASTRUCTURE_CONFIG_KIND),
        "networks": {
            "vpc": {"cidr": workers_cidr},
            "zones": [zone.to_dict() for zone in generate_zones(workers_cidr, zones)],
        },
    }


def new_control_plane_config() -> dict[str, Any]:
    """Build the control plane configuration document."""
    return _type_meta(CONTROL_PLANE_CONFIG_KIND)


def new_worker_config() -> dict[str, Any]:
    """Build the worker configuration document enforcing IMDSv2."""
    return {
        **_type_meta(WORKER_CONFIG_KIND),
        "instanceMetadataOptions": {
            "httpTokens": HTTP_TOKENS_REQUIRED,
            "httpPutResponseHopLimit": IMDSV2_HTTP_PUT_RESPONSE_HOP_LIMIT,
        },
    }


def get_infrastructure_config(workers_cidr: str, zones: Iterable[str] | None) -> bytes:
    """Return the infrastructure configuration as JSON bytes."""
    return _encode(new_infrastructure_config(workers_cidr, zones))


def get_control_plane_config(zones: Iterable[str] | None = None) -> bytes:
    """Return the control plane configuration as JSON bytes; zones are ignored."""
    return _encode(new_control_plane_config())


def get_worker_config() -> bytes:
    """Return the worker configuration as JSON bytes."""
    return _encode(new_worker_config())


def decode_infrastructure_config(data: bytes | str) -> dict[str, Any]:
    """Parse an infrastructure configuration document."""
    document = json.loads(data)
    if not isinstance(document, dict):
        raise ValueError("infrastructure config must be a JSON object")
    return document