# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

import pytest

from tests.conftest import API_HREF
from tests.conftest import CLOUDAPI_HREF
from tests.conftest import VCLOUD_NS
from vcd_sdk.exception.exceptions import EntityNotFoundError
from vcd_sdk.exception.exceptions import MultipleEntitiesFoundError
from vcd_sdk.exception.exceptions import VcdResponseError
from vcd_sdk.models import openapi_models
from vcd_sdk.models.openapi_models import DnsForwarderZone
from vcd_sdk.models.openapi_models import NsxtEdgeGatewayDns
from vcd_sdk.models.openapi_models import OpenApiReference
from vcd_sdk.nsxt import segment_profile_template
from vcd_sdk.nsxt.ip_space_uplink import IpSpaceUplink
from vcd_sdk.nsxt.nsxt_edge_gateway import NsxtEdgeGateway
from vcd_sdk.nsxt.segment_profiles import get_all_segment_profiles
from vcd_sdk.nsxt.segment_profiles import get_segment_profile_by_name
from vcd_sdk.nsxt.segment_profiles import segment_profile_context_filter
from vcd_sdk.nsxt.segment_profiles import SegmentProfileType

ORG_UUID = 'a93c9db9-7471-3192-8d09-a8f7eeda85f9'
GATEWAY_ID = 'urn:vcloud:gateway:9f0e5b46-1c4f-4c51-b1a3-7b1d9a3c7f10'
GATEWAYS_URL = f"{CLOUDAPI_HREF}1.0.0/edgeGateways/"
GATEWAY_URL = f"{GATEWAYS_URL}{GATEWAY_ID}"
EXTERNAL_NETWORK_ID = 'urn:vcloud:network:3d8a4f4c'
UPLINKS_URL = f"{CLOUDAPI_HREF}1.0.0/ipSpaceUplinks/"
NSXT_MANAGER_ID = 'urn:vcloud:nsxtmanager:7a2b9d6e'

GATEWAY_JSON = {
    'id': GATEWAY_ID,
    'name': 'edge-1',
    'orgRef': {'id': f"urn:vcloud:org:{ORG_UUID}", 'name': 'acme'},
    'ownerRef': {'id': 'urn:vcloud:vdc:1', 'name': 'vdc-1'},
    'edgeGatewayUplinks': [{'uplinkId': EXTERNAL_NETWORK_ID}],
}


@pytest.fixture
def edge_gateway(vcd_client, fake_session):
    fake_session.add('GET', GATEWAY_URL, json_body=GATEWAY_JSON)
    return NsxtEdgeGateway.get_by_id(vcd_client, GATEWAY_ID)


def test_0010_get_edge_gateway(edge_gateway, fake_session):
    assert edge_gateway.name == 'edge-1'
    assert edge_gateway.edge_gateway.org_ref.name == 'acme'
    assert fake_session.requests[0].headers['Accept'] == \
        'application/json;version=37.1'


def test_0020_tenant_context_from_org_reference(edge_gateway, vcd_client,
                                                fake_session):
    tenant_context = edge_gateway.get_tenant_context()
    assert tenant_context.org_name == 'acme'
    assert len(fake_session.requests) == 1

    edge_gateway.edge_gateway.org_ref = OpenApiReference(
        id=f"urn:vcloud:org:{ORG_UUID}")
    fake_session.add('GET', f"{API_HREF}org/{ORG_UUID}",
                     text=f'<Org xmlns="{VCLOUD_NS}" name="acme-by-id" '
                          f'id="urn:vcloud:org:{ORG_UUID}"/>')
    assert edge_gateway.get_tenant_context().org_name == 'acme-by-id'

    edge_gateway.edge_gateway.org_ref = None
    with pytest.raises(ValueError):
        edge_gateway.get_tenant_context()


def test_0030_update_dns_config_returns_saved_config(edge_gateway,
                                                     fake_session):
    dns_url = f"{GATEWAY_URL}/dns"
    fake_session.add('PUT', dns_url, json_body={})
    fake_session.add('GET', dns_url, json_body={
        'enabled': True,
        'listenerIp': '10.0.0.1',
        'defaultForwarderZone': {'displayName': 'default',
                                 'upstreamServers': ['1.1.1.1']},
        'version': {'version': 2},
    })

    saved = edge_gateway.update_dns_config(NsxtEdgeGatewayDns(
        enabled=True,
        default_forwarder_zone=DnsForwarderZone(
            display_name='default', upstream_servers=['1.1.1.1'])))

    assert saved.listener_ip == '10.0.0.1'
    assert saved.default_forwarder_zone.upstream_servers == ['1.1.1.1']
    put = fake_session.requests_to('PUT', dns_url)[0]
    assert put.json == {'enabled': True,
                        'defaultForwarderZone': {
                            'displayName': 'default',
                            'upstreamServers': ['1.1.1.1']}}


def test_0040_delete_route_advertisement_saves_empty_config(edge_gateway,
                                                            fake_session):
    advertisement_url = f"{GATEWAY_URL}/routing/advertisement"
    fake_session.add('PUT', advertisement_url, status_code=204)
    fake_session.add('GET', advertisement_url,
                     json_body={'enable': False, 'subnets': []})

    edge_gateway.delete_route_advertisement()

    put = fake_session.requests_to('PUT', advertisement_url)[0]
    assert put.json == {'enable': False, 'subnets': []}
    assert put.headers['X-VMWARE-VCLOUD-TENANT-CONTEXT'] == ORG_UUID
    assert put.headers['X-VMWARE-VCLOUD-AUTH-CONTEXT'] == 'acme'
    assert fake_session.requests_to('DELETE', advertisement_url) == []


def test_0050_disable_alb_error(edge_gateway, fake_session):
    fake_session.add('PUT', f"{GATEWAY_URL}/loadBalancer", status_code=400,
                     json_body={'message': 'service engine group in use'})

    with pytest.raises(VcdResponseError) as excinfo:
        edge_gateway.disable_alb()

    assert str(excinfo.value) == \
        'error disabling NSX-T ALB: error updating NSX-T ALB settings: ' \
        'API Error: 400: service engine group in use'


def test_0060_edge_gateway_by_name_in_tenant_context(vcd_client,
                                                     fake_session):
    fake_session.add('GET', GATEWAYS_URL,
                     json_body={'values': [GATEWAY_JSON, GATEWAY_JSON]})
    tenant_context = NsxtEdgeGateway(
        vcd_client,
        openapi_models.NsxtEdgeGateway.from_dict(GATEWAY_JSON)
    ).get_tenant_context()

    with pytest.raises(MultipleEntitiesFoundError):
        NsxtEdgeGateway.get_by_name(vcd_client, 'edge-1', tenant_context)

    request = fake_session.requests[0]
    assert request.params['filter'] == 'name==edge-1'
    assert request.headers['X-VMWARE-VCLOUD-TENANT-CONTEXT'] == ORG_UUID


def test_0070_ip_space_uplinks_are_filtered_by_external_network(
        vcd_client, fake_session):
    fake_session.add('GET', UPLINKS_URL, json_body={'values': [
        {'id': 'urn:vcloud:ipSpaceUplink:1', 'name': 'uplink-1',
         'externalNetworkRef': {'id': EXTERNAL_NETWORK_ID}}]})

    uplink = IpSpaceUplink.get_by_name(vcd_client, EXTERNAL_NETWORK_ID,
                                       'uplink-1')

    assert uplink.id == 'urn:vcloud:ipSpaceUplink:1'
    assert uplink.ip_space_uplink.external_network_ref.id == \
        EXTERNAL_NETWORK_ID
    assert fake_session.requests[0].params['filter'] == \
        f"name==uplink-1;externalNetworkRef.id=={EXTERNAL_NETWORK_ID}"
    with pytest.raises(ValueError,
                       match='mandatory external network id is empty'):
        IpSpaceUplink.get_all(vcd_client, '')


def test_0080_ip_space_uplink_errors(vcd_client, fake_session):
    fake_session.add('GET', UPLINKS_URL, status_code=500,
                     json_body={'message': 'boom'})

    with pytest.raises(VcdResponseError) as excinfo:
        IpSpaceUplink.get_by_name(vcd_client, EXTERNAL_NETWORK_ID, 'x')
    assert str(excinfo.value).startswith(
        "error getting IP Space Uplink by name 'x': ")

    uplink = IpSpaceUplink(vcd_client,
                           openapi_models.IpSpaceUplink(name='uplink-1'))
    with pytest.raises(ValueError, match='IP Space Uplink must have id'):
        uplink.delete()


def test_0090_global_default_segment_profile_templates(vcd_client,
                                                       fake_session):
    url = f"{CLOUDAPI_HREF}1.0.0/segmentProfileTemplates/default"
    template_ref = {'id': 'urn:vcloud:segmentProfileTemplate:1',
                    'name': 'template-1'}
    fake_session.add('PUT', url, json_body={
        'vdcNetworksDefaultSegmentProfileTemplateRef': template_ref})

    defaults = segment_profile_template.update_global_default_segment_profile_templates(  # noqa: E501
        vcd_client,
        openapi_models.NsxtGlobalDefaultSegmentProfileTemplate(
            vdc_networks_default_segment_profile_template_ref=OpenApiReference(**template_ref)))  # noqa: E501

    assert defaults.vdc_networks_default_segment_profile_template_ref.name \
        == 'template-1'
    assert defaults.vapp_networks_default_segment_profile_template_ref is None
    assert fake_session.requests[0].json == {
        'vdcNetworksDefaultSegmentProfileTemplateRef': template_ref}


@pytest.mark.parametrize('profile_type,path', [
    (SegmentProfileType.IP_DISCOVERY, 'segmentIpDiscoveryProfiles/'),
    (SegmentProfileType.MAC_DISCOVERY, 'segmentMacDiscoveryProfiles/'),
    (SegmentProfileType.SPOOF_GUARD, 'segmentSpoofGuardProfiles/'),
    (SegmentProfileType.QOS, 'segmentQoSProfiles/'),
    (SegmentProfileType.SEGMENT_SECURITY, 'segmentSecurityProfiles/'),
])
def test_0100_get_all_segment_profiles_in_nsxt_manager(
        vcd_client, fake_session, profile_type, path):
    fake_session.add('GET', f"{CLOUDAPI_HREF}1.0.0/{path}", json_body={
        'values': [{'id': 'profile-1', 'displayName': 'default',
                    'nsxTManagerRef': {'id': NSXT_MANAGER_ID}}]})

    profiles = get_all_segment_profiles(
        vcd_client, profile_type,
        segment_profile_context_filter(nsxt_manager_id=NSXT_MANAGER_ID))

    assert len(profiles) == 1
    assert isinstance(profiles[0], profile_type.model)
    assert profiles[0].display_name == 'default'
    assert profiles[0].nsx_t_manager_ref.id == NSXT_MANAGER_ID
    assert fake_session.requests[0].params['filter'] == \
        f"nsxTManagerRef.id=={NSXT_MANAGER_ID}"


def test_0110_segment_profile_by_display_name(vcd_client, fake_session):
    fake_session.add(
        'GET', f"{CLOUDAPI_HREF}1.0.0/segmentIpDiscoveryProfiles/",
        json_body={'values': [
            {'id': 'profile-1', 'displayName': 'default',
             'isArpSnoopingEnabled': True, 'arpBindingLimit': 1},
            {'id': 'profile-2', 'displayName': 'custom'},
            {'id': 'profile-3', 'displayName': 'twin'},
            {'id': 'profile-4', 'displayName': 'twin'}]})
    query_parameters = segment_profile_context_filter(
        org_vdc_id='urn:vcloud:vdc:1')

    profile = get_segment_profile_by_name(
        vcd_client, SegmentProfileType.IP_DISCOVERY, 'default',
        query_parameters)

    assert profile.id == 'profile-1'
    assert profile.is_arp_snooping_enabled is True
    assert profile.arp_binding_limit == 1
    assert fake_session.requests[0].params['filter'] == \
        'orgVdcId==urn:vcloud:vdc:1'
    with pytest.raises(EntityNotFoundError, match="displayName 'missing'"):
        get_segment_profile_by_name(
            vcd_client, SegmentProfileType.IP_DISCOVERY, 'missing',
            query_parameters)
    with pytest.raises(MultipleEntitiesFoundError):
        get_segment_profile_by_name(
            vcd_client, SegmentProfileType.IP_DISCOVERY, 'twin',
            query_parameters)


def test_0120_segment_profile_errors(vcd_client, fake_session):
    fake_session.add('GET', f"{CLOUDAPI_HREF}1.0.0/segmentQoSProfiles/",
                     status_code=500, json_body={'message': 'boom'})

    with pytest.raises(VcdResponseError) as excinfo:
        get_segment_profile_by_name(
            vcd_client, SegmentProfileType.QOS, 'x',
            segment_profile_context_filter(vdc_group_id='group-1'))
    assert str(excinfo.value).startswith(
        "error getting QoS Profiles by name 'x': ")
    with pytest.raises(ValueError, match='empty QoS Profiles name'):
        get_segment_profile_by_name(vcd_client, SegmentProfileType.QOS, '')
    with pytest.raises(ValueError, match='NSX-T manager, org VDC or VDC'):
        segment_profile_context_filter()
