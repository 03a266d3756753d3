# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Json payloads of the OpenAPI (/cloudapi) endpoints."""

from dataclasses import dataclass
from dataclasses import field
from typing import List, Optional

from dataclasses_json import dataclass_json, LetterCase, Undefined

DEFAULT_RIGHTS_BUNDLE_KEY = 'com.vmware.vcloud.undefined.key'


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class OpenApiReference:
    name: Optional[str] = None
    id: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class OpenApiReferences:
    values: List[OpenApiReference] = field(default_factory=list)


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class Right:
    name: str
    id: Optional[str] = None
    description: Optional[str] = None
    bundle_key: Optional[str] = None
    category: Optional[str] = None
    service_namespace: Optional[str] = None
    right_type: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class RightsCategory:
    name: str
    id: Optional[str] = None
    bundle_key: Optional[str] = None
    parent: Optional[str] = None
    rights_count: Optional[dict] = None
    sub_categories: Optional[List[str]] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class RightsBundle:
    name: str
    description: Optional[str] = None
    bundle_key: str = DEFAULT_RIGHTS_BUNDLE_KEY
    read_only: bool = False
    publish_all: bool = False
    id: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class CertificateLibraryItem:
    alias: str
    certificate: str
    id: Optional[str] = None
    description: Optional[str] = None
    private_key: Optional[str] = None
    private_key_passphrase: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class VgpuProfile:
    name: str
    id: Optional[str] = None
    tenant_facing_name: Optional[str] = None
    instructions: Optional[str] = None
    allow_multiple_per_vm: Optional[bool] = None
    count: Optional[int] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class IpSpaceUplink:
    name: str
    external_network_ref: Optional[OpenApiReference] = None
    ip_space_ref: Optional[OpenApiReference] = None
    id: Optional[str] = None
    description: Optional[str] = None
    ip_space_type: Optional[str] = None
    status: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtSegmentProfileTemplate:
    name: str
    source_nsxt_manager_ref: Optional[OpenApiReference] = None
    id: Optional[str] = None
    description: Optional[str] = None
    ip_discovery_profile: Optional[dict] = None
    mac_discovery_profile: Optional[dict] = None
    qos_profile: Optional[dict] = None
    segment_security_profile: Optional[dict] = None
    spoof_guard_profile: Optional[dict] = None
    last_modified: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtGlobalDefaultSegmentProfileTemplate:
    vapp_networks_default_segment_profile_template_ref: Optional[OpenApiReference] = None  # noqa: E501
    vdc_networks_default_segment_profile_template_ref: Optional[OpenApiReference] = None  # noqa: E501


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class VdcNetworkProfile:
    primary_edge_cluster: Optional[dict] = None
    secondary_edge_cluster: Optional[dict] = None
    services_edge_cluster: Optional[dict] = None
    vapp_networks_default_segment_profile_template_ref: Optional[OpenApiReference] = None  # noqa: E501
    vdc_networks_default_segment_profile_template_ref: Optional[OpenApiReference] = None  # noqa: E501


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtEdgeGateway:
    name: str
    id: Optional[str] = None
    description: Optional[str] = None
    owner_ref: Optional[OpenApiReference] = None
    org_ref: Optional[OpenApiReference] = None
    edge_gateway_uplinks: Optional[List[dict]] = None
    edge_cluster_config: Optional[dict] = None
    status: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class DnsForwarderZone:
    display_name: str
    upstream_servers: List[str] = field(default_factory=list)
    dns_domain_names: Optional[List[str]] = None
    id: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtEdgeGatewayDns:
    enabled: bool = False
    listener_ip: Optional[str] = None
    snat_rule_ip_address: Optional[str] = None
    snat_rule_enabled: Optional[bool] = None
    default_forwarder_zone: Optional[DnsForwarderZone] = None
    conditional_forwarder_zones: Optional[List[DnsForwarderZone]] = None
    version: Optional[dict] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class RouteAdvertisement:
    enable: bool = False
    subnets: List[str] = field(default_factory=list)


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtAlbServiceConfig:
    enabled: bool = False
    service_network_definition: Optional[str] = None
    ipv6_service_network_definition: Optional[str] = None
    supported_feature_set: Optional[str] = None
    transparent_mode_enabled: Optional[bool] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtSegmentProfile:
    """Fields shared by the read-only NSX-T segment profiles."""

    display_name: Optional[str] = None
    id: Optional[str] = None
    description: Optional[str] = None
    nsx_t_manager_ref: Optional[OpenApiReference] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtIpDiscoveryProfile(NsxtSegmentProfile):
    arp_binding_limit: Optional[int] = None
    arp_nd_binding_timeout: Optional[int] = None
    is_arp_snooping_enabled: Optional[bool] = None
    is_dhcp_snooping_v4_enabled: Optional[bool] = None
    is_dhcp_snooping_v6_enabled: Optional[bool] = None
    is_duplicate_ip_detection_enabled: Optional[bool] = None
    is_nd_snooping_enabled: Optional[bool] = None
    is_tofu_enabled: Optional[bool] = None
    is_vm_tools_v4_enabled: Optional[bool] = None
    is_vm_tools_v6_enabled: Optional[bool] = None
    nd_snooping_limit: Optional[int] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtMacDiscoveryProfile(NsxtSegmentProfile):
    is_mac_change_enabled: Optional[bool] = None
    is_mac_learning_enabled: Optional[bool] = None
    is_unknown_unicast_flooding_enabled: Optional[bool] = None
    mac_learning_aging_time: Optional[int] = None
    mac_limit: Optional[int] = None
    mac_policy: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtSpoofGuardProfile(NsxtSegmentProfile):
    is_address_binding_whitelist_enabled: Optional[bool] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtQosProfile(NsxtSegmentProfile):
    class_of_service: Optional[int] = None
    dscp_config: Optional[dict] = None
    egress_rate_limiter: Optional[dict] = None
    ingress_broadcast_rate_limiter: Optional[dict] = None
    ingress_rate_limiter: Optional[dict] = None


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass
class NsxtSegmentSecurityProfile(NsxtSegmentProfile):
    bpdu_filter_allow_list: List[str] = field(default_factory=list)
    is_bpdu_filter_enabled: Optional[bool] = None
    is_dhcp_client_block_v4_enabled: Optional[bool] = None
    is_dhcp_client_block_v6_enabled: Optional[bool] = None
    is_dhcp_server_block_v4_enabled: Optional[bool] = None
    is_dhcp_server_block_v6_enabled: Optional[bool] = None
    is_non_ip_traffic_block_enabled: Optional[bool] = None
    is_ra_guard_enabled: Optional[bool] = None
    is_rate_limiting_enabled: Optional[bool] = None
    rate_limits: Optional[dict] = None
