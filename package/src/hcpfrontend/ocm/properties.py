"""
Additional properties attached to every cluster created in the Cluster Service.

In production only the baseline flags are sent. Development setups may pin
clusters to a provision shard or ask the Cluster Service to skip the full
provision/deprovision flow.
"""

from typing import Dict, Optional

# Enables the hosted cluster provisioner. Without it a cluster never leaves
# the installing state.
PROVISIONER_HOSTEDCLUSTER_STEP_ENABLED = "provisioner_hostedcluster_step_enabled"
# Enables provisioning of the ManagedCluster CR tied to the hosted cluster.
PROVISIONER_MANAGEDCLUSTER_STEP_ENABLED = "provisioner_managedcluster_step_enabled"
# Enable day 2 node pool provisioning and deprovisioning on the management cluster.
NP_PROVISIONER_PROVISION_ENABLED = "np_provisioner_provision_enabled"
NP_PROVISIONER_DEPROVISION_ENABLED = "np_provisioner_deprovision_enabled"

PROVISION_SHARD_ID = "provision_shard_id"
PROVISIONER_NOOP_PROVISION = "provisioner_noop_provision"
PROVISIONER_NOOP_DEPROVISION = "provisioner_noop_deprovision"

BASELINE_PROPERTY_KEYS = (
    PROVISIONER_HOSTEDCLUSTER_STEP_ENABLED,
    PROVISIONER_MANAGEDCLUSTER_STEP_ENABLED,
    NP_PROVISIONER_PROVISION_ENABLED,
    NP_PROVISIONER_DEPROVISION_ENABLED,
)


def default_additional_properties() -> Dict[str, str]:
    """Return a new dict holding the baseline provisioning flags."""
    return {key: "true" for key in BASELINE_PROPERTY_KEYS}


def build_additional_properties(
    provision_shard_id: Optional[str] = None,
    noop_provision: bool = False,
    noop_deprovision: bool = False,
) -> Dict[str, str]:
    properties = default_additional_properties()
    if provision_shard_id is not None:
        properties[PROVISION_SHARD_ID] = provision_shard_id
    if noop_provision:
        properties[PROVISIONER_NOOP_PROVISION] = "true"
    if noop_deprovision:
        properties[PROVISIONER_NOOP_DEPROVISION] = "true"
    return properties
