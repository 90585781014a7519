# shootinfra

Builds the provider-specific configuration documents that a Gardener shoot
cluster needs: infrastructure, control plane and worker configuration for
AWS, Azure, GCP and OpenStack. It also answers two questions about a
runtime's annotations: whether patch reconciliation should be forced or
suspended.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Providers

The names of the supported providers are in `shootinfra.hyperscaler.Hyperscaler`,
a string enum with the members `AWS`, `AZURE`, `GCP` and `OPENSTACK`
(values `aws`, `azure`, `gcp`, `openstack`).

Every provider module offers `get_infrastructure_config(workers_cidr, zones)`
and `get_control_plane_config(zones)`. Both return the JSON document as
compact UTF-8 `bytes`, ready to be put into the shoot's provider section.
Each module also has `new_infrastructure_config(...)` and
`new_control_plane_config(...)`, which build the document without encoding it.

### AWS

```python
from shootinfra import aws

raw = aws.get_infrastructure_config(
    "10.250.0.0/16", ["eu-central-1a", "eu-central-1b", "eu-central-1c"]
)
config = aws.decode_infrastructure_config(raw)  # a plain dict
```

The node CIDR is split up into non-overlapping subnets. Each zone gets a
workers subnet and, after it, a public and an internal subnet:

| zone          | workers         | public          | internal        |
|---------------|-----------------|-----------------|-----------------|
| eu-central-1a | 10.250.0.0/19   | 10.250.32.0/20  | 10.250.48.0/20  |
| eu-central-1b | 10.250.64.0/19  | 10.250.96.0/20  | 10.250.112.0/20 |
| eu-central-1c | 10.250.128.0/19 | 10.250.160.0/20 | 10.250.176.0/20 |

`aws.generate_zones(workers_cidr, zone_names)` returns these as frozen
`aws.Zone` objects; `Zone.to_dict()` gives the JSON form. The VPC CIDR in the
document is the given node CIDR. An invalid CIDR, or one too small to be split
(prefix length above 28), raises `ValueError`.

`aws.get_control_plane_config(zones)` ignores the zones.
`aws.get_worker_config()` returns a worker configuration that requires IMDSv2
tokens (`httpTokens: required`) with a hop limit of 2.

### Azure

```python
from shootinfra import azure

raw = azure.get_infrastructure_config("10.250.0.0/22", ["1", "2", "3"])
config = azure.decode_infrastructure_config(raw)
for zone in config.networks.zones:
    print(zone.name, zone.cidr, zone.nat_gateway.enabled)
```

Azure documents are modelled as dataclasses (`InfrastructureConfig`,
`NetworkConfig`, `VNet`, `Zone`, `NatGateway`, `PublicIPReference`,
`ResourceGroup`, `VNetStatus`, `ControlPlaneConfig`,
`CloudControllerManagerConfig`). `InfrastructureConfig` and
`ControlPlaneConfig` have `to_dict()` and `from_dict()` for the JSON form;
`decode_infrastructure_config` returns an `InfrastructureConfig`.

Zone names are turned into numbers by `azure.convert_zone_names`: names that
are not integers, or that lie outside 1 to 3, are skipped. Each remaining zone
gets its own consecutive subnet (for `10.250.0.0/22`: `10.250.0.0/25`,
`10.250.0.128/25`, `10.250.1.0/25`) and an enabled NAT gateway with a
four-minute idle timeout. The configuration is marked as zoned when at least
one zone name is given. An invalid or too small CIDR raises `ValueError`.

### GCP

```python
from shootinfra import gcp

gcp.get_infrastructure_config("10.250.0.0/22", [])
gcp.get_control_plane_config(["europe-west3-a"])
```

The infrastructure configuration sets both `workers` and the deprecated
`worker` network field to the given CIDR; zones are ignored. The control plane
configuration uses the first zone; an empty or missing zone list raises
`ValueError`. `gcp.decode_control_plane_config(data)` parses a control plane
document into a dict.

### OpenStack

```python
from shootinfra import openstack

openstack.get_infrastructure_config("10.250.0.0/22", [])
openstack.get_control_plane_config([])
```

The floating pool `FloatingIP-external-kyma-01` and the `f5` load balancer
provider are used. Zones are ignored by both functions.

## Reconciliation annotations

```python
from shootinfra.annotations import (
    should_force_reconciliation,
    should_suspend_reconciliation,
)

should_force_reconciliation(
    {"operator.kyma-project.io/force-patch-reconciliation": "true"}
)  # True
should_suspend_reconciliation(None)  # False
```

Only the exact value `"true"` counts. The annotation keys are available as
`FORCE_RECONCILE_ANNOTATION` and `SUSPEND_RECONCILE_ANNOTATION`.

## What it does not do

This is a library only. It has no command-line tool, does not connect to a
Gardener or Kubernetes cluster, and does not build or apply whole shoot
specifications; it only produces and reads the provider configuration
documents described above.