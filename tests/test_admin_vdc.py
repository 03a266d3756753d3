# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from lxml import etree
from lxml import objectify
import pytest

from tests.conftest import API_HREF
from tests.conftest import task_xml
from tests.conftest import VCLOUD_NS
from vcd_sdk.exception.exceptions import EntityNotFoundError
from vcd_sdk.exception.exceptions import MultipleEntitiesFoundError
from vcd_sdk.vdc.admin_vdc import AdminVdc
from vcd_sdk.vdc.admin_vdc import to_admin_vdc_href

ORG_UUID = 'a93c9db9-7471-3192-8d09-a8f7eeda85f9'
VDC_UUID = '5c1d3e7f-0000-4000-8000-000000000002'
VDC_HREF = f"{API_HREF}admin/vdc/{VDC_UUID}"
TENANT_VDC_HREF = f"{API_HREF}vdc/{VDC_UUID}"
QUERY_HREF = f"{API_HREF}query"
TASK_HREF = f"{API_HREF}task/1234"
GOLD_HREF = f"{API_HREF}admin/vdcStorageProfile/11111111-0000-4000-8000-000000000001"  # noqa: E501
SILVER_HREF = f"{API_HREF}admin/vdcStorageProfile/22222222-0000-4000-8000-000000000002"  # noqa: E501
PVDC_GOLD_HREF = f"{API_HREF}admin/pvdcStorageProfile/33333333-0000-4000-8000-000000000003"  # noqa: E501


def _vdc_xml(name='vdc-1', description='dev', storage_profiles=('gold', 'silver')):  # noqa: E501
    description_xml = f'<Description>{description}</Description>' \
        if description is not None else ''
    hrefs = {'gold': GOLD_HREF, 'silver': SILVER_HREF}
    profiles_xml = ''.join(
        f'<VdcStorageProfile href="{hrefs[profile]}" name="{profile}" '
        'type="application/vnd.vmware.vcloud.vdcStorageProfile+xml"/>'
        for profile in storage_profiles)
    return f'<AdminVdc xmlns="{VCLOUD_NS}" href="{VDC_HREF}" ' \
           f'id="urn:vcloud:vdc:{VDC_UUID}" name="{name}" ' \
           'type="application/vnd.vmware.admin.vdc+xml">' \
           f'<Link rel="up" href="{API_HREF}admin/org/{ORG_UUID}" ' \
           'type="application/vnd.vmware.admin.organization+xml"/>' \
           f'{description_xml}' \
           '<AllocationModel>Flex</AllocationModel>' \
           '<ResourcePoolRefs><VimObjectRef/></ResourcePoolRefs>' \
           f'<VdcStorageProfiles>{profiles_xml}</VdcStorageProfiles>' \
           '<IsEnabled>true</IsEnabled></AdminVdc>'


def _storage_profile_xml(href, name, enabled='true', default='false'):
    return f'<AdminVdcStorageProfile xmlns="{VCLOUD_NS}" href="{href}" ' \
           f'name="{name}">' \
           f'<Enabled>{enabled}</Enabled><Units>MB</Units>' \
           f'<Limit>1024</Limit><Default>{default}</Default>' \
           f'<ProviderVdcStorageProfile href="{PVDC_GOLD_HREF}" ' \
           f'name="{name}"/></AdminVdcStorageProfile>'


def _vdc_records_xml(*hrefs):
    records = ''.join(
        f'<AdminVdcRecord name="vdc-1" orgName="acme" href="{href}"/>'
        for href in hrefs)
    return f'<QueryResultRecords xmlns="{VCLOUD_NS}">{records}' \
           '</QueryResultRecords>'


@pytest.fixture
def vdc(vcd_client, fake_session):
    fake_session.add('GET', VDC_HREF, text=_vdc_xml())
    return AdminVdc.get_by_id(vcd_client, f"urn:vcloud:vdc:{VDC_UUID}")


def test_0010_get_by_id(vdc, fake_session):
    assert to_admin_vdc_href(TENANT_VDC_HREF) == VDC_HREF
    assert vdc.href == VDC_HREF
    assert vdc.name == 'vdc-1'
    assert vdc.id == f"urn:vcloud:vdc:{VDC_UUID}"
    assert vdc.is_enabled()
    assert [request.url for request in fake_session.requests] == [VDC_HREF]


def test_0020_get_by_name(vcd_client, fake_session):
    fake_session.add('GET', QUERY_HREF, text=_vdc_records_xml(TENANT_VDC_HREF))  # noqa: E501
    fake_session.add('GET', VDC_HREF, text=_vdc_xml())

    vdc = AdminVdc.get_by_name(vcd_client, 'acme', 'vdc-1')

    query = fake_session.requests[0]
    assert query.params['type'] == 'adminOrgVdc'
    assert query.params['filter'] == 'name==vdc-1;orgName==acme'
    assert fake_session.requests[1].url == VDC_HREF
    assert vdc.name == 'vdc-1'


def test_0030_get_by_name_errors(vcd_client, fake_session):
    fake_session.add('GET', QUERY_HREF, text=_vdc_records_xml())
    with pytest.raises(EntityNotFoundError, match="name 'vdc-1'"):
        AdminVdc.get_by_name(vcd_client, 'acme', 'vdc-1')
    with pytest.raises(ValueError, match='empty VDC name'):
        AdminVdc.get_by_name(vcd_client, 'acme', '')
    with pytest.raises(ValueError, match='empty VDC id'):
        AdminVdc.get_by_id(vcd_client, None)


def test_0040_update_waits_and_refreshes(vdc, fake_session):
    fake_session.add('PUT', VDC_HREF, text=task_xml('running'))
    fake_session.add('GET', TASK_HREF, text=task_xml('success'))
    fake_session.add('GET', VDC_HREF, text=_vdc_xml(name='renamed'))

    vdc.update(name='renamed', description='production')

    put = fake_session.requests_to('PUT', VDC_HREF)[0]
    assert put.headers['Content-Type'] == \
        'application/vnd.vmware.admin.vdc+xml'
    payload = etree.fromstring(put.data)
    assert payload.get('name') == 'renamed'
    assert payload.findtext(f"{{{VCLOUD_NS}}}Description") == 'production'
    assert payload.findtext(f"{{{VCLOUD_NS}}}AllocationModel") == 'Flex'
    assert payload.find(f"{{{VCLOUD_NS}}}ResourcePoolRefs") is None
    assert fake_session.requests_to('GET', TASK_HREF)
    assert vdc.name == 'renamed'


def test_0050_update_adds_missing_description(vcd_client, fake_session):
    fake_session.add('GET', VDC_HREF, text=_vdc_xml(description=None))
    fake_session.add('PUT', VDC_HREF, text=task_xml('success'))
    fake_session.add('GET', TASK_HREF, text=task_xml('success'))
    vdc = AdminVdc.get_by_href(vcd_client, TENANT_VDC_HREF)

    vdc.update(description='new')

    payload = etree.fromstring(
        fake_session.requests_to('PUT', VDC_HREF)[0].data)
    assert [etree.QName(child).localname for child in payload][:3] == \
        ['Link', 'Description', 'AllocationModel']
    assert payload.findtext(f"{{{VCLOUD_NS}}}Description") == 'new'


def test_0060_add_storage_profile(vdc, fake_session):
    fake_session.add('POST', f"{VDC_HREF}/vdcStorageProfiles",
                     text=task_xml('running'))
    fake_session.add('GET', TASK_HREF, text=task_xml('success'))

    vdc.add_storage_profile(PVDC_GOLD_HREF, 'gold', limit=2048)

    post = fake_session.requests_to('POST', VDC_HREF)[0]
    assert post.headers['Content-Type'] == \
        'application/vnd.vmware.admin.updateVdcStorageProfiles+xml'
    payload = etree.fromstring(post.data)
    assert payload.get('name') == 'gold'
    added = payload.find(f"{{{VCLOUD_NS}}}AddStorageProfile")
    assert added.findtext(f"{{{VCLOUD_NS}}}Enabled") == 'true'
    assert added.findtext(f"{{{VCLOUD_NS}}}Limit") == '2048'
    assert added.findtext(f"{{{VCLOUD_NS}}}Default") == 'false'
    assert added.find(f"{{{VCLOUD_NS}}}ProviderVdcStorageProfile").get(
        'href') == PVDC_GOLD_HREF
    assert fake_session.requests[-1].url == VDC_HREF


def test_0070_remove_storage_profile_disables_it_first(vdc, fake_session):
    fake_session.add('GET', GOLD_HREF,
                     text=_storage_profile_xml(GOLD_HREF, 'gold'))
    fake_session.add('PUT', GOLD_HREF, text=_storage_profile_xml(
        GOLD_HREF, 'gold', enabled='false'))
    fake_session.add('POST', f"{VDC_HREF}/vdcStorageProfiles",
                     text=task_xml('success'))
    fake_session.add('GET', TASK_HREF, text=task_xml('success'))

    vdc.remove_storage_profile('gold')

    put = fake_session.requests_to('PUT', GOLD_HREF)[0]
    assert put.headers['Content-Type'] == \
        'application/vnd.vmware.admin.vdcStorageProfile+xml'
    disabled = etree.fromstring(put.data)
    assert disabled.findtext(f"{{{VCLOUD_NS}}}Enabled") == 'false'
    assert disabled.findtext(f"{{{VCLOUD_NS}}}Limit") == '1024'
    removal = etree.fromstring(
        fake_session.requests_to('POST', VDC_HREF)[0].data)
    assert removal.find(f"{{{VCLOUD_NS}}}RemoveStorageProfile").get(
        'href') == GOLD_HREF
    assert removal.find(f"{{{VCLOUD_NS}}}AddStorageProfile") is None


def test_0080_remove_disabled_or_unknown_storage_profile(vdc, fake_session):
    fake_session.add('GET', SILVER_HREF, text=_storage_profile_xml(
        SILVER_HREF, 'silver', enabled='false'))
    fake_session.add('POST', f"{VDC_HREF}/vdcStorageProfiles",
                     text=task_xml('success'))
    fake_session.add('GET', TASK_HREF, text=task_xml('success'))

    vdc.remove_storage_profile('silver')
    assert not fake_session.requests_to('PUT', SILVER_HREF)

    with pytest.raises(EntityNotFoundError) as excinfo:
        vdc.remove_storage_profile('bronze')
    assert str(excinfo.value) == "error removing VDC storage profile: " \
                                 "storage profile 'bronze' not found in " \
                                 "VDC vdc-1"


def test_0090_set_default_storage_profile(vdc, fake_session):
    fake_session.add('GET', SILVER_HREF, text=_storage_profile_xml(
        SILVER_HREF, 'silver', enabled='false'))
    fake_session.add('PUT', SILVER_HREF, text=_storage_profile_xml(
        SILVER_HREF, 'silver', default='true'))

    vdc.set_default_storage_profile('silver')

    updated = etree.fromstring(
        fake_session.requests_to('PUT', SILVER_HREF)[0].data)
    assert updated.get('name') == 'silver'
    assert updated.findtext(f"{{{VCLOUD_NS}}}Enabled") == 'true'
    assert updated.findtext(f"{{{VCLOUD_NS}}}Default") == 'true'
    assert fake_session.requests[-1].url == VDC_HREF


def test_0100_default_storage_profile_reference(vdc, fake_session):
    fake_session.add('GET', GOLD_HREF, text=_storage_profile_xml(
        GOLD_HREF, 'gold', default='true'))
    fake_session.add('GET', SILVER_HREF,
                     text=_storage_profile_xml(SILVER_HREF, 'silver'))

    reference = vdc.get_default_storage_profile_reference()

    assert reference.get('name') == 'gold'
    assert reference.get('href') == GOLD_HREF


def test_0110_default_storage_profile_reference_errors(vcd_client,
                                                       fake_session):
    fake_session.add('GET', GOLD_HREF, text=_storage_profile_xml(
        GOLD_HREF, 'gold', default='true'))
    fake_session.add('GET', SILVER_HREF, text=_storage_profile_xml(
        SILVER_HREF, 'silver', default='true'))
    fake_session.add('GET', VDC_HREF, text=_vdc_xml())
    vdc = AdminVdc.get_by_href(vcd_client, VDC_HREF)
    with pytest.raises(MultipleEntitiesFoundError,
                       match="more than one default storage profile"):
        vdc.get_default_storage_profile_reference()

    vdc = AdminVdc(vcd_client, resource=objectify.fromstring(
        _vdc_xml(storage_profiles=())))
    with pytest.raises(EntityNotFoundError,
                       match='no storage profiles found in VDC vdc-1'):
        vdc.get_default_storage_profile_reference()
