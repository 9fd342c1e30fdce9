"""
Resource types the diagnostics read from the cluster.

A ResourceType identifies one API resource (group/version/kind plus the
plural used in REST paths). Only the types the check framework itself
touches live here; individual checks declare their own.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ResourceType(BaseModel):
    """An API resource identified by group, version and kind."""

    model_config = ConfigDict(frozen=True)

    group: str = ""
    version: str
    kind: str
    plural: str
    namespaced: bool = True

    @property
    def api_version(self) -> str:
        """``group/version``, or just ``version`` for the core group."""
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version

    @property
    def list_kind(self) -> str:
        return f"{self.kind}List"

    def __str__(self) -> str:
        return f"{self.plural}.{self.group}" if self.group else self.plural


DATA_SCIENCE_CLUSTER = ResourceType(
    group="datasciencecluster.opendatahub.io",
    version="v1",
    kind="DataScienceCluster",
    plural="datascienceclusters",
    namespaced=False,
)

DSC_INITIALIZATION = ResourceType(
    group="dscinitialization.opendatahub.io",
    version="v1",
    kind="DSCInitialization",
    plural="dscinitializations",
    namespaced=False,
)

CONFIG_MAP = ResourceType(version="v1", kind="ConfigMap", plural="configmaps")

NAMESPACE = ResourceType(version="v1", kind="Namespace", plural="namespaces", namespaced=False)

NOTEBOOK = ResourceType(
    group="kubeflow.org",
    version="v1",
    kind="Notebook",
    plural="notebooks",
)

INFERENCE_SERVICE = ResourceType(
    group="serving.kserve.io",
    version="v1beta1",
    kind="InferenceService",
    plural="inferenceservices",
)
