import json

import pytest

from shootinfra import azure

DEFAULT_NODES_CIDR = "10.250.0.0/22"


def _gateway():
    return azure.NatGateway(
        enabled=True,
        idle_connection_timeout_minutes=azure.DEFAULT_CONNECTION_TIMEOUT_MINUTES,
    )


def test_control_plane_config():
    data = azure.get_control_plane_config(None)
    config = azure.ControlPlaneConfig.from_dict(json.loads(data))
    assert config.api_version == azure.API_VERSION
    assert config.kind == azure.CONTROL_PLANE_CONFIG_KIND


def test_control_plane_config_bytes():
    assert azure.get_control_plane_config([]) == (
        b'{"kind":"ControlPlaneConfig",'
        b'"apiVersion":"azure.provider.extensions.gardener.cloud/v1alpha1"}'
    )


@pytest.mark.parametrize(
    "zone_names, expected",
    [
        (["1"], [(1, "10.250.0.0/25")]),
        (["2", "3"], [(2, "10.250.0.0/25"), (3, "10.250.0.128/25")]),
        (
            ["1", "2", "3"],
            [(1, "10.250.0.0/25"), (2, "10.250.0.128/25"), (3, "10.250.1.0/25")],
        ),
    ],
)
def test_infrastructure_config(zone_names, expected):
    data = azure.get_infrastructure_config(DEFAULT_NODES_CIDR, zone_names)
    config = azure.decode_infrastructure_config(data)

    assert config.api_version == azure.API_VERSION
    assert config.kind == azure.INFRASTRUCTURE_CONFIG_KIND
    assert config.networks.vnet.cidr == DEFAULT_NODES_CIDR
    assert config.zoned is True
    assert [(z.name, z.cidr) for z in config.networks.zones] == expected
    for zone in config.networks.zones:
        assert zone.nat_gateway.enabled is True
        assert zone.nat_gateway.idle_connection_timeout_minutes == 4


def test_no_zones_gives_unzoned_config_without_zones():
    document = json.loads(azure.get_infrastructure_config(DEFAULT_NODES_CIDR, []))
    assert document["zoned"] is False
    assert "zones" not in document["networks"]
    assert document["networks"]["vnet"] == {"cidr": DEFAULT_NODES_CIDR}


def test_zone_json_layout():
    document = json.loads(azure.get_infrastructure_config(DEFAULT_NODES_CIDR, ["1"]))
    assert document["networks"]["zones"] == [
        {
            "name": 1,
            "cidr": "10.250.0.0/25",
            "natGateway": {"enabled": True, "idleConnectionTimeoutMinutes": 4},
        }
    ]


def test_generate_zones_values():
    zones = azure.generate_zones("10.250.0.0/16", ["1", "2"])
    assert zones == [
        azure.Zone(name=1, cidr="10.250.0.0/19", nat_gateway=_gateway()),
        azure.Zone(name=2, cidr="10.250.32.0/19", nat_gateway=_gateway()),
    ]


def test_generate_zones_masks_host_bits():
    zones = azure.generate_zones("10.250.0.77/22", ["1"])
    assert zones[0].cidr == "10.250.0.0/25"


def test_generate_zones_invalid_cidr():
    with pytest.raises(ValueError):
        azure.generate_zones("not-a-cidr", ["1"])


def test_generate_zones_too_small_cidr():
    with pytest.raises(ValueError):
        azure.generate_zones("10.250.0.0/30", ["1"])


def test_convert_zone_names_filters_invalid():
    assert azure.convert_zone_names(["1", "4", "0", "x", "+2", "03", " 1", ""]) == [1, 2, 3]


def test_convert_zone_names_none():
    assert azure.convert_zone_names(None) == []


def test_invalid_zone_names_dropped_but_config_zoned():
    config = azure.new_infrastructure_config(DEFAULT_NODES_CIDR, ["eu-1"])
    assert config.zoned is True
    assert config.networks.zones == []


def test_infrastructure_round_trip():
    original = azure.InfrastructureConfig(
        kind=azure.INFRASTRUCTURE_CONFIG_KIND,
        api_version=azure.API_VERSION,
        resource_group=azure.ResourceGroup(name="rg"),
        networks=azure.NetworkConfig(
            vnet=azure.VNet(name="vnet", resource_group="rg", cidr="10.0.0.0/16"),
            workers="10.0.0.0/19",
            service_endpoints=["Microsoft.Storage"],
            nat_gateway=azure.NatGateway(
                enabled=True,
                idle_connection_timeout_minutes=10,
                zone=2,
                ip_addresses=[azure.PublicIPReference(name="ip", resource_group="rg", zone=2)],
            ),
            zones=[azure.Zone(name=1, cidr="10.0.0.0/19", service_endpoints=["Microsoft.Sql"])],
        ),
        zoned=True,
    )
    decoded = azure.decode_infrastructure_config(json.dumps(original.to_dict()))
    assert decoded == original


def test_control_plane_round_trip():
    original = azure.ControlPlaneConfig(
        kind=azure.CONTROL_PLANE_CONFIG_KIND,
        api_version=azure.API_VERSION,
        cloud_controller_manager=azure.CloudControllerManagerConfig(feature_gates={"Gate": True}),
    )
    assert azure.ControlPlaneConfig.from_dict(original.to_dict()) == original


def test_decode_rejects_non_object():
    with pytest.raises(ValueError):
        azure.decode_infrastructure_config(b"[1, 2]")


def test_decode_rejects_invalid_json():
    with pytest.raises(ValueError):
        azure.decode_infrastructure_config(b"{not json")