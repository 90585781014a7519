"""Supported hyperscaler provider types."""

from __future__ import annotations

from enum import Enum


class Hyperscaler(str, Enum):
    """Provider type names as used in shoot specifications."""

    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"
    OPENSTACK = "openstack"