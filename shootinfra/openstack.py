"""Provider configuration documents for OpenStack shoots."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

API_VERSION = "openstack.provider.extensions.gardener.cloud/v1alpha1"
INFRASTRUCTURE_CONFIG_KIND = "InfrastructureConfig"
CONTROL_PLANE_CONFIG_KIND = "ControlPlaneConfig"
DEFAULT_FLOATING_POOL_NAME = "FloatingIP-external-kyma-01"
DEFAULT_LOAD_BALANCER_PROVIDER = "f5"


def _encode(document: dict[str, Any]) -> bytes:
    return json.dumps(document, separators=(",", ":")).encode()


def new_infrastructure_config(workers_cidr: str) -> dict[str, Any]:
    """Build the infrastructure configuration document."""
    return {
        "kind": INFRASTRUCTURE_CONFIG_KIND,
        "apiVersion": API_VERSION,
        "floatingPoolName": DEFAULT_FLOATING_POOL_NAME,
        "networks": {"workers": workers_cidr},
    }


def new_control_plane_config() -> dict[str, Any]:
    """Build the control plane configuration document."""
    return {
        "kind": CONTROL_PLANE_CONFIG_KIND,
        "apiVersion": API_VERSION,
        "loadBalancerProvider": DEFAULT_LOAD_BALANCER_PROVIDER,
    }


def get_infrastructure_config(workers_cidr: str, zones: Iterable[str] | None = None) -> bytes:
    """Return the infrastructure configuration as JSON bytes; zones are ignored."""
    return _encode(new_infrastructure_config(workers_cidr))


def get_control_plane_config(zones: Iterable[str] | None = None) -> bytes:
    """Return the control plane configuration as JSON bytes; zones are ignored."""
    return _encode(new_control_plane_config())