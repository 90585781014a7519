"""Annotations that steer the patch reconciliation of a runtime."""

from __future__ import annotations

from collections.abc import Mapping

FORCE_RECONCILE_ANNOTATION = "operator.kyma-project.io/force-patch-reconciliation"
SUSPEND_RECONCILE_ANNOTATION = "operator.kyma-project.io/suspend-patch-reconciliation"


def _is_true(annotations: Mapping[str, str] | None, key: str) -> bool:
    if not annotations:
        return False
    return annotations.get(key) == "true"


def should_suspend_reconciliation(annotations: Mapping[str, str] | None) -> bool:
    """Return True when the suspend annotation is set to ``"true"``."""
    return _is_true(annotations, SUSPEND_RECONCILE_ANNOTATION)


def should_force_reconciliation(annotations: Mapping[str, str] | None) -> bool:
    """Return True when the force annotation is set to ``"true"``."""
    return _is_true(annotations, FORCE_RECONCILE_ANNOTATION)