# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from enum import Enum


class CloudApiResource(str, Enum):
    """Endpoint templates relative to /cloudapi/.

    %s placeholders are filled with the endpoint params of a CrudConfig.
    """

    SESSIONS = '1.0.0/sessions'
    SESSIONS_PROVIDER = '1.0.0/sessions/provider'
    SESSIONS_CURRENT = '1.0.0/sessions/current'
    RIGHTS = '1.0.0/rights/'
    RIGHTS_CATEGORIES = '1.0.0/rightsCategories/'
    RIGHTS_BUNDLES = '1.0.0/rightsBundles/'
    RIGHTS_BUNDLE_RIGHTS = '1.0.0/rightsBundles/%s/rights'
    RIGHTS_BUNDLE_TENANTS = '1.0.0/rightsBundles/%s/tenants'
    RIGHTS_BUNDLE_TENANTS_PUBLISH = '1.0.0/rightsBundles/%s/tenants/publish'
    RIGHTS_BUNDLE_TENANTS_UNPUBLISH = '1.0.0/rightsBundles/%s/tenants/unpublish'  # noqa: E501
    RIGHTS_BUNDLE_TENANTS_PUBLISH_ALL = '1.0.0/rightsBundles/%s/tenants/publishAll'  # noqa: E501
    RIGHTS_BUNDLE_TENANTS_UNPUBLISH_ALL = '1.0.0/rightsBundles/%s/tenants/unpublishAll'  # noqa: E501
    SSL_CERTIFICATE_LIBRARY = '1.0.0/ssl/certificateLibrary/'
    VGPU_PROFILES = '1.0.0/vgpuProfiles/'
    IP_SPACE_UPLINKS = '1.0.0/ipSpaceUplinks/'
    SEGMENT_PROFILE_TEMPLATES = '1.0.0/segmentProfileTemplates/'
    SEGMENT_PROFILE_TEMPLATES_GLOBAL_DEFAULT = '1.0.0/segmentProfileTemplates/default'  # noqa: E501
    SEGMENT_IP_DISCOVERY_PROFILES = '1.0.0/segmentIpDiscoveryProfiles/'
    SEGMENT_MAC_DISCOVERY_PROFILES = '1.0.0/segmentMacDiscoveryProfiles/'
    SEGMENT_SPOOF_GUARD_PROFILES = '1.0.0/segmentSpoofGuardProfiles/'
    SEGMENT_QOS_PROFILES = '1.0.0/segmentQoSProfiles/'
    SEGMENT_SECURITY_PROFILES = '1.0.0/segmentSecurityProfiles/'
    VDC_NETWORK_PROFILE = '1.0.0/vdcs/%s/networkProfile'
    EDGE_GATEWAYS = '1.0.0/edgeGateways/'
    EDGE_GATEWAY_DNS = '1.0.0/edgeGateways/%s/dns'
    EDGE_GATEWAY_ROUTE_ADVERTISEMENT = '1.0.0/edgeGateways/%s/routing/advertisement'  # noqa: E501
    EDGE_GATEWAY_ALB = '1.0.0/edgeGateways/%s/loadBalancer'


# Minimum api version each endpoint is available at
ENDPOINT_MIN_API_VERSIONS = {
    CloudApiResource.SESSIONS: '33.0',
    CloudApiResource.SESSIONS_PROVIDER: '33.0',
    CloudApiResource.SESSIONS_CURRENT: '33.0',
    CloudApiResource.RIGHTS: '31.0',
    CloudApiResource.RIGHTS_CATEGORIES: '31.0',
    CloudApiResource.RIGHTS_BUNDLES: '31.0',
    CloudApiResource.RIGHTS_BUNDLE_RIGHTS: '31.0',
    CloudApiResource.RIGHTS_BUNDLE_TENANTS: '31.0',
    CloudApiResource.RIGHTS_BUNDLE_TENANTS_PUBLISH: '31.0',
    CloudApiResource.RIGHTS_BUNDLE_TENANTS_UNPUBLISH: '31.0',
    CloudApiResource.RIGHTS_BUNDLE_TENANTS_PUBLISH_ALL: '31.0',
    CloudApiResource.RIGHTS_BUNDLE_TENANTS_UNPUBLISH_ALL: '31.0',
    CloudApiResource.SSL_CERTIFICATE_LIBRARY: '35.0',
    CloudApiResource.VGPU_PROFILES: '36.2',
    CloudApiResource.IP_SPACE_UPLINKS: '37.1',
    CloudApiResource.SEGMENT_PROFILE_TEMPLATES: '36.2',
    CloudApiResource.SEGMENT_PROFILE_TEMPLATES_GLOBAL_DEFAULT: '36.2',
    CloudApiResource.SEGMENT_IP_DISCOVERY_PROFILES: '36.2',
    CloudApiResource.SEGMENT_MAC_DISCOVERY_PROFILES: '36.2',
    CloudApiResource.SEGMENT_SPOOF_GUARD_PROFILES: '36.2',
    CloudApiResource.SEGMENT_QOS_PROFILES: '36.2',
    CloudApiResource.SEGMENT_SECURITY_PROFILES: '36.2',
    CloudApiResource.VDC_NETWORK_PROFILE: '36.0',
    CloudApiResource.EDGE_GATEWAYS: '34.0',
    CloudApiResource.EDGE_GATEWAY_DNS: '37.0',
    CloudApiResource.EDGE_GATEWAY_ROUTE_ADVERTISEMENT: '34.0',
    CloudApiResource.EDGE_GATEWAY_ALB: '35.0',
}

# Newer api versions that change the payload of an endpoint. The highest one
# the client can use is preferred over the minimum version.
ENDPOINT_ELEVATED_API_VERSIONS = {
    CloudApiResource.EDGE_GATEWAYS: ['37.0', '37.1', '38.0'],
    CloudApiResource.EDGE_GATEWAY_DNS: ['37.1', '38.0'],
    CloudApiResource.EDGE_GATEWAY_ALB: ['37.0', '37.1'],
    CloudApiResource.SEGMENT_PROFILE_TEMPLATES: ['37.0'],
}


class ResponseKeys(str, Enum):
    LINK = 'link'
    REL = 'rel'
    URL = 'url'
