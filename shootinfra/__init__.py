"""Provider configuration documents for Gardener shoots and reconciliation annotation checks."""

__version__ = "0.1.0"
__all__ = ["annotations", "aws", "azure", "gcp", "hyperscaler", "openstack"]