"""Provider configuration documents for Azure shoots."""

from __future__ import annotations

import ipaddress
import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

API_VERSION = "azure.provider.extensions.gardener.cloud/v1alpha1"
INFRASTRUCTURE_CONFIG_KIND = "InfrastructureConfig"
CONTROL_PLANE_CONFIG_KIND = "ControlPlaneConfig"

DEFAULT_CONNECTION_TIMEOUT_MINUTES = 4
_WORKERS_BITS = 3
_CIDR_LENGTH = 32
_ZONE_NAME = re.compile(r"[+-]?[0-9]+")


@dataclass
class ResourceGroup:
    """An Azure resource group."""

    name: str


@dataclass
class VNet:
    """An existing or to-be-created virtual network."""

    name: str | None = None
    resource_group: str | None = None
    cidr: str | None = None


@dataclass
class VNetStatus:
    """Name and resource group of a virtual network."""

    name: str
    resource_group: str | None = None


@dataclass
class PublicIPReference:
    """A public IP assigned to a NAT gateway."""

    name: str
    resource_group: str
    zone: int = 0


@dataclass
class NatGateway:
    """NAT gateway settings for a subnet."""

    enabled: bool = False
    idle_connection_timeout_minutes: int = 0
    zone: int = 0
    ip_addresses: list[PublicIPReference] = field(default_factory=list)


@dataclass
class Zone:
    """Subnet of one availability zone."""

    name: int
    cidr: str
    service_endpoints: list[str] = field(default_factory=list)
    nat_gateway: NatGateway | None = None


@dataclass
class NetworkConfig:
    """Kubernetes and infrastructure networks."""

    vnet: VNet = field(default_factory=VNet)
    workers: str | None = None
    service_endpoints: list[str] = field(default_factory=list)
    nat_gateway: NatGateway | None = None
    zones: list[Zone] = field(default_factory=list)


def _optional(document: dict[str, Any], key: str, value: Any) -> None:
    if value:
        document[key] = value


def _nat_gateway_to_dict(gateway: NatGateway) -> dict[str, Any]:
    document: dict[str, Any] = {
        "enabled": gateway.enabled,
        "idleConnectionTimeoutMinutes": gateway.idle_connection_timeout_minutes,
    }
    _optional(document, "zone", gateway.zone)
    if gateway.ip_addresses:
        addresses = []
        for address in gateway.ip_addresses:
            entry: dict[str, Any] = {"name": address.name, "resourceGroup": address.resource_group}
            _optional(entry, "zone", address.zone)
            addresses.append(entry)
        document["ipAddresses"] = addresses
    return document


def _nat_gateway_from_dict(data: Mapping[str, Any] | None) -> NatGateway | None:
    if data is None:
        return None
    return NatGateway(
        enabled=bool(data.get("enabled", False)),
        idle_connection_timeout_minutes=int(data.get("idleConnectionTimeoutMinutes", 0)),
        zone=int(data.get("zone", 0)),
        ip_addresses=[
            PublicIPReference(
                name=entry.get("name", ""),
                resource_group=entry.get("resourceGroup", ""),
                zone=int(entry.get("zone", 0)),
            )
            for entry in data.get("ipAddresses") or ()
        ],
    )


def _zone_to_dict(zone: Zone) -> dict[str, Any]:
    document: dict[str, Any] = {"name": zone.name, "cidr": zone.cidr}
    _optional(document, "serviceEndpoints", list(zone.service_endpoints))
    if zone.nat_gateway is not None:
        document["natGateway"] = _nat_gateway_to_dict(zone.nat_gateway)
    return document


def _zone_from_dict(data: Mapping[str, Any]) -> Zone:
    return Zone(
        name=int(data.get("name", 0)),
        cidr=data.get("cidr", ""),
        service_endpoints=list(data.get("serviceEndpoints") or ()),
        nat_gateway=_nat_gateway_from_dict(data.get("natGateway")),
    )


def _networks_to_dict(networks: NetworkConfig) -> dict[str, Any]:
    vnet: dict[str, Any] = {}
    _optional(vnet, "name", networks.vnet.name)
    _optional(vnet, "resourceGroup", networks.vnet.resource_group)
    _optional(vnet, "cidr", networks.vnet.cidr)
    document: dict[str, Any] = {"vnet": vnet}
    _optional(document, "workers", networks.workers)
    _optional(document, "serviceEndpoints", list(networks.service_endpoints))
    if networks.nat_gateway is not None:
        document["natGateway"] = _nat_gateway_to_dict(networks.nat_gateway)
    if networks.zones:
        document["zones"] = [_zone_to_dict(zone) for zone in networks.zones]
    return document


def _networks_from_dict(data: Mapping[str, Any]) -> NetworkConfig:
    vnet = data.get("vnet") or {}
    return NetworkConfig(
        vnet=VNet(
            name=vnet.get("name"),
            resource_group=vnet.get("resourceGroup"),
            cidr=vnet.get("cidr"),
        ),
        workers=data.get("workers"),
        service_endpoints=list(data.get("serviceEndpoints") or ()),
        nat_gateway=_nat_gateway_from_dict(data.get("natGateway")),
        zones=[_zone_from_dict(zone) for zone in data.get("zones") or ()],
    )


def _type_meta(kind: str, api_version: str) -> dict[str, Any]:
    document: dict[str, Any] = {}
    _optional(document, "kind", kind)
    _optional(document, "apiVersion", api_version)
    return document


@dataclass
class InfrastructureConfig:
    """Infrastructure configuration resource."""

    networks: NetworkConfig = field(default_factory=NetworkConfig)
    zoned: bool = False
    resource_group: ResourceGroup | None = None
    kind: str = ""
    api_version: str = ""

    def to_dict(self) -> dict[str, Any]:
        document = _type_meta(self.kind, self.api_version)
        if self.resource_group is not None:
            document["resourceGroup"] = {"name": self.resource_group.name}
        document["networks"] = _networks_to_dict(self.networks)
        document["zoned"] = self.zoned
        return document

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InfrastructureConfig:
        group = data.get("resourceGroup")
        return cls(
            networks=_networks_from_dict(data.get("networks") or {}),
            zoned=bool(data.get("zoned", False)),
            resource_group=ResourceGroup(name=group.get("name", "")) if group is not None else None,
            kind=data.get("kind", ""),
            api_version=data.get("apiVersion", ""),
        )


@dataclass
class CloudControllerManagerConfig:
    """Settings for the cloud-controller-manager."""

    feature_gates: dict[str, bool] = field(default_factory=dict)


@dataclass
class ControlPlaneConfig:
    """Control plane configuration resource."""

    cloud_controller_manager: CloudControllerManagerConfig | None = None
    kind: str = ""
    api_version: str = ""

    def to_dict(self) -> dict[str, Any]:
        document = _type_meta(self.kind, self.api_version)
        if self.cloud_controller_manager is not None:
            gates = self.cloud_controller_manager.feature_gates
            document["cloudControllerManager"] = {"FeatureGates": dict(gates) if gates else None}
        return document

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ControlPlaneConfig:
        manager = data.get("cloudControllerManager")
        ccm = None
        if manager is not None:
            gates = manager.get("FeatureGates", manager.get("featureGates")) or {}
            ccm = CloudControllerManagerConfig(feature_gates={k: bool(v) for k, v in gates.items()})
        return cls(
            cloud_controller_manager=ccm,
            kind=data.get("kind", ""),
            api_version=data.get("apiVersion", ""),
        )


def _encode(document: dict[str, Any]) -> bytes:
    return json.dumps(document, separators=(",", ":")).encode()


def convert_zone_names(zone_names: Iterable[str] | None) -> list[int]:
    """Turn zone names into zone numbers, dropping anything outside 1..3."""
    zones = []
    for name in zone_names or ():
        if not _ZONE_NAME.fullmatch(name):
            continue
        zone = int(name)
        if 1 <= zone <= 3:
            zones.append(zone)
    return zones


def generate_zones(workers_cidr: str, zone_names: Iterable[str] | None) -> list[Zone]:
    """Split a CIDR into consecutive zone subnets, each with a NAT gateway.

    For ``10.250.0.0/22`` the zones get ``10.250.0.0/25``, ``10.250.0.128/25``
    and so on.
    """
    try:
        interface = ipaddress.IPv4Interface(workers_cidr)
    except ValueError as exc:
        raise ValueError(f"invalid workers CIDR: {workers_cidr!r}") from exc

    worker_prefix_length = interface.network.prefixlen + _WORKERS_BITS
    if worker_prefix_length > _CIDR_LENGTH:
        raise ValueError(f"workers CIDR {workers_cidr!r} is too small to split into zones")

    shift = _CIDR_LENGTH - worker_prefix_length
    value = (int(interface.ip) >> shift) << shift
    delta = 1 << shift

    zones = []
    for name in convert_zone_names(zone_names):
        zones.append(
            Zone(
                name=name,
                cidr=f"{ipaddress.IPv4Address(value)}/{worker_prefix_length}",
                # New runtimes always get a NAT gateway in every zone.
                nat_gateway=NatGateway(
                    enabled=True,
                    idle_connection_timeout_minutes=DEFAULT_CONNECTION_TIMEOUT_MINUTES,
                ),
            )
        )
        value += delta
    return zones


def new_infrastructure_config(workers_cidr: str, zones: Iterable[str] | None) -> InfrastructureConfig:
    """Build the infrastructure configuration; it is zoned when any zone is given."""
    zone_names = list(zones or ())
    return InfrastructureConfig(
        kind=INFRASTRUCTURE_CONFIG_KIND,
        api_version=API_VERSION,
        networks=NetworkConfig(
            vnet=VNet(cidr=workers_cidr),
            zones=generate_zones(workers_cidr, zone_names),
        ),
        zoned=len(zone_names) > 0,
    )


def new_control_plane_config() -> ControlPlaneConfig:
    """Build the control plane configuration."""
    return ControlPlaneConfig(kind=CONTROL_PLANE_CONFIG_KIND, api_version=API_VERSION)


def get_infrastructure_config(workers_cidr: str, zones: Iterable[str] | None) -> bytes:
    """Return the infrastructure configuration as JSON bytes."""
    return _encode(new_infrastructure_config(workers_cidr, zones).to_dict())


def get_control_plane_config(zones: Iterable[str] | None = None) -> bytes:
    """Return the control plane configuration as JSON bytes; zones are ignored."""
    return _encode(new_control_plane_config().to_dict())


def decode_infrastructure_config(data: bytes | str) -> InfrastructureConfig:
    """Parse an infrastructure configuration document."""
    document = json.loads(data)
    if not isinstance(document, dict):
        raise ValueError("infrastructure config must be a JSON object")
    return InfrastructureConfig.from_dict(document)