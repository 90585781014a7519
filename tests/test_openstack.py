import json

from shootinfra import openstack


def test_control_plane_config():
    config = json.loads(openstack.get_control_plane_config(["europe-west3a"]))
    assert config["apiVersion"] == "openstack.provider.extensions.gardener.cloud/v1alpha1"
    assert config["kind"] == "ControlPlaneConfig"
    assert config["loadBalancerProvider"] == "f5"


def test_infrastructure_config():
    config = json.loads(openstack.get_infrastructure_config("10.250.0.0/22", None))
    assert config["apiVersion"] == "openstack.provider.extensions.gardener.cloud/v1alpha1"
    assert config["kind"] == "InfrastructureConfig"
    assert config["networks"]["workers"] == "10.250.0.0/22"
    assert config["floatingPoolName"] == "FloatingIP-external-kyma-01"


def test_serialized_matches_document():
    assert json.loads(openstack.get_infrastructure_config("10.250.0.0/16")) == (
        openstack.new_infrastructure_config("10.250.0.0/16")
    )
    assert json.loads(openstack.get_control_plane_config()) == openstack.new_control_plane_config()