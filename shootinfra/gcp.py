"""Provider configuration documents for GCP shoots."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from typing import Any

API_VERSION = "gcp.provider.extensions.gardener.cloud/v1alpha1"
INFRASTRUCTURE_CONFIG_KIND = "InfrastructureConfig"
CONTROL_PLANE_CONFIG_KIND = "ControlPlaneConfig"


def _encode(document: dict[str, Any]) -> bytes:
    return json.dumps(document, separators=(",", ":")).encode()


def new_infrastructure_config(workers_cidr: str) -> dict[str, Any]:
    """Build the infrastructure configuration document.

    The deprecated ``worker`` field is filled alongside ``workers``.
    """
    return {
        "kind": INFRASTRUCTURE_CONFIG_KIND,
        "apiVersion": API_VERSION,
        "networks": {"worker": workers_cidr, "workers": workers_cidr},
    }


def new_control_plane_config(zones: Sequence[str]) -> dict[str, Any]:
    """Build the control plane configuration document for the first zone."""
    if not zones:
        raise ValueError("zones list is empty")
    return {
        "kind": CONTROL_PLANE_CONFIG_KIND,
        "apiVersion": API_VERSION,
        "zone": zones[0],
    }


def get_infrastructure_config(workers_cidr: str, zones: Iterable[str] | None = None) -> bytes:
    """Return the infrastructure configuration as JSON bytes; zones are ignored."""
    return _encode(new_infrastructure_config(workers_cidr))


def get_control_plane_config(zones: Sequence[str] | None) -> bytes:
    """Return the control plane configuration as JSON bytes.

    Raises ValueError when no zone is given.
    """
    if not zones:
        raise ValueError("zones list is empty")
    return _encode(new_control_plane_config(list(zones)))


def decode_control_plane_config(data: bytes | str) -> dict[str, Any]:
    """Parse a control plane configuration document."""
    document = json.loads(data)
    if not isinstance(document, dict):
        raise ValueError("control plane config must be a JSON object")
    return document