# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

import pytest

from tests.conftest import API_HREF
from tests.conftest import CLOUDAPI_HREF
from tests.conftest import task_xml
from vcd_sdk.client import VcdClient
from vcd_sdk.exception.exceptions import ApiVersionNotSupportedError
from vcd_sdk.exception.exceptions import EntityNotFoundError
from vcd_sdk.exception.exceptions import MultipleEntitiesFoundError
from vcd_sdk.exception.exceptions import TaskError
from vcd_sdk.exception.exceptions import VcdError
from vcd_sdk.exception.exceptions import VcdNotFoundResponseError
from vcd_sdk.exception.exceptions import VcdResponseError
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.models.openapi_models import Right
from vcd_sdk.models.openapi_models import RightsBundle

RIGHTS_URL = f"{CLOUDAPI_HREF}1.0.0/rights/"
BUNDLES_URL = f"{CLOUDAPI_HREF}1.0.0/rightsBundles/"
TASK_HREF = f"{API_HREF}task/1234"
BUNDLE_ID = 'urn:vcloud:rightsBundle:0b9e1c6e'


def _rights_config(query_parameters=None):
    return generic_crud.CrudConfig(endpoint=CloudApiResource.RIGHTS,
                                   entity_label='rights',
                                   query_parameters=query_parameters)


def _bundles_config():
    return generic_crud.CrudConfig(endpoint=CloudApiResource.RIGHTS_BUNDLES,
                                   entity_label='rights bundle')


def _right(index):
    return {'id': f"urn:vcloud:right:{index}", 'name': f"Right {index}",
            'category': 'cat', 'unknownField': 'ignored'}


def _page(values, page, page_count, next_url=None):
    headers = {}
    if next_url:
        headers['Link'] = f'<{next_url}>;rel="nextPage";' \
                          'type="application/json;version=37.1"'
    return {'json_body': {'resultTotal': 5, 'pageCount': page_count,
                          'page': page, 'pageSize': 2, 'values': values},
            'headers': headers}


def test_0010_crud_config_validation():
    with pytest.raises(ValueError):
        generic_crud.CrudConfig(endpoint='', entity_label='x').validate()
    with pytest.raises(ValueError):
        generic_crud.CrudConfig(endpoint=CloudApiResource.RIGHTS,
                                entity_label='').validate()
    with pytest.raises(ValueError):
        generic_crud.CrudConfig(
            endpoint=CloudApiResource.RIGHTS_BUNDLE_RIGHTS,
            entity_label='rights bundle rights').validate()
    with pytest.raises(ValueError):
        generic_crud.CrudConfig(
            endpoint=CloudApiResource.RIGHTS_BUNDLE_RIGHTS,
            entity_label='rights bundle rights',
            endpoint_params=('',)).validate()

    config = generic_crud.CrudConfig(
        endpoint=CloudApiResource.RIGHTS_BUNDLE_RIGHTS,
        entity_label='rights bundle rights',
        endpoint_params=(BUNDLE_ID,))
    assert config.get_exact_endpoint() == \
        f"1.0.0/rightsBundles/{BUNDLE_ID}/rights"


def test_0020_get_all_follows_next_page_links_in_order(vcd_client,
                                                      fake_session):
    page_2 = f"{RIGHTS_URL}?page=2&pageSize=2"
    page_3 = f"{RIGHTS_URL}?page=3&pageSize=2"
    fake_session.add('GET', RIGHTS_URL,
                     **_page([_right(1), _right(2)], 1, 3, page_2))
    fake_session.add('GET', page_2,
                     **_page([_right(3), _right(4)], 2, 3, page_3))
    fake_session.add('GET', page_3, **_page([_right(5)], 3, 3))

    rights = generic_crud.get_all_inner_entities(vcd_client,
                                                 _rights_config(), Right)

    assert [right.name for right in rights] == \
        ['Right 1', 'Right 2', 'Right 3', 'Right 4', 'Right 5']
    assert isinstance(rights[0], Right)
    urls = [request.url for request in fake_session.requests]
    assert urls == [RIGHTS_URL, page_2, page_3]
    assert fake_session.requests[0].params == {'pageSize': 128}
    assert fake_session.requests[1].params is None


def test_0030_get_all_without_type_returns_dicts(vcd_client, fake_session):
    fake_session.add('GET', RIGHTS_URL, **_page([_right(1)], 1, 1))

    rights = generic_crud.get_all_inner_entities(
        vcd_client, _rights_config({'filter': 'category==cat',
                                    'pageSize': 10}))

    assert rights == [_right(1)]
    assert fake_session.requests[0].params == {'filter': 'category==cat',
                                               'pageSize': 10}


def test_0040_error_on_any_page_aborts_the_retrieval(vcd_client,
                                                     fake_session):
    page_2 = f"{RIGHTS_URL}?page=2&pageSize=2"
    fake_session.add('GET', RIGHTS_URL,
                     **_page([_right(1), _right(2)], 1, 2, page_2))
    fake_session.add('GET', page_2, status_code=500,
                     json_body={'message': 'database unavailable'})

    with pytest.raises(VcdResponseError) as excinfo:
        generic_crud.get_all_inner_entities(vcd_client, _rights_config(),
                                            Right)

    assert excinfo.value.status_code == 500
    assert str(excinfo.value).startswith('error getting all rights: ')
    assert 'database unavailable' in str(excinfo.value)


def test_0050_get_by_id_not_found(vcd_client, fake_session):
    fake_session.add('GET', f"{RIGHTS_URL}urn:vcloud:right:9",
                     status_code=404,
                     json_body={'message': 'no such right',
                                'minorErrorCode': 'NOT_FOUND'})

    with pytest.raises(EntityNotFoundError) as excinfo:
        generic_crud.get_inner_entity(vcd_client, _rights_config(),
                                      'urn:vcloud:right:9', Right)

    assert isinstance(excinfo.value, VcdNotFoundResponseError)
    assert excinfo.value.minor_error_code == 'NOT_FOUND'
    assert str(excinfo.value) == \
        'error getting rights: API Error: 404: no such right'


def test_0060_get_by_name(vcd_client, fake_session):
    fake_session.add('GET', RIGHTS_URL, **_page([_right(1)], 1, 1))

    right = generic_crud.get_inner_entity_by_name(
        vcd_client, _rights_config({'filter': 'category==cat'}),
        'Right 1', Right)

    assert right.id == 'urn:vcloud:right:1'
    assert fake_session.requests[0].params['filter'] == \
        'category==cat;name==Right 1'


def test_0070_get_by_name_zero_or_many(vcd_client, fake_session):
    fake_session.add('GET', RIGHTS_URL, **_page([], 1, 0))
    fake_session.add('GET', RIGHTS_URL,
                     **_page([_right(1), _right(1)], 1, 1))

    with pytest.raises(EntityNotFoundError,
                       match="got zero entities by name 'Right 1'"):
        generic_crud.get_inner_entity_by_name(vcd_client, _rights_config(),
                                              'Right 1', Right)
    with pytest.raises(MultipleEntitiesFoundError):
        generic_crud.get_inner_entity_by_name(vcd_client, _rights_config(),
                                              'Right 1', Right)


def test_0080_create_synchronous(vcd_client, fake_session):
    fake_session.add('POST', BUNDLES_URL, status_code=201,
                     json_body={'id': BUNDLE_ID, 'name': 'bundle',
                                'bundleKey': 'key', 'readOnly': False,
                                'publishAll': False})

    created = generic_crud.create_inner_entity(
        vcd_client, _bundles_config(), RightsBundle(name='bundle'),
        RightsBundle)

    assert created.id == BUNDLE_ID
    sent = fake_session.requests[0].json
    assert sent['name'] == 'bundle'
    assert sent['bundleKey'] == 'com.vmware.vcloud.undefined.key'
    assert 'id' not in sent
    assert 'description' not in sent


def test_0090_create_asynchronous_fetches_task_owner(vcd_client,
                                                     fake_session):
    fake_session.add('POST', BUNDLES_URL, status_code=202,
                     headers={'Location': TASK_HREF})
    fake_session.add('GET', TASK_HREF, text=task_xml('running'))
    fake_session.add('GET', TASK_HREF,
                     text=task_xml('success', owner_id=BUNDLE_ID,
                                   owner_href=f"{BUNDLES_URL}{BUNDLE_ID}"))
    fake_session.add('GET', f"{BUNDLES_URL}{BUNDLE_ID}",
                     json_body={'id': BUNDLE_ID, 'name': 'bundle'})

    created = generic_crud.create_inner_entity(
        vcd_client, _bundles_config(), RightsBundle(name='bundle'),
        RightsBundle)

    assert created.id == BUNDLE_ID
    assert created.name == 'bundle'
    assert [request.method for request in fake_session.requests] == \
        ['POST', 'GET', 'GET', 'GET']


def test_0100_create_asynchronous_task_failure(vcd_client, fake_session):
    fake_session.add('POST', BUNDLES_URL, status_code=202,
                     headers={'Location': TASK_HREF})
    fake_session.add('GET', TASK_HREF,
                     text=task_xml('error', error_message='name in use'))

    with pytest.raises(TaskError) as excinfo:
        generic_crud.create_inner_entity(vcd_client, _bundles_config(),
                                         RightsBundle(name='bundle'))

    assert str(excinfo.value) == 'error creating rights bundle: name in use'
    assert excinfo.value.error_message == 'name in use'


def test_0110_update_asynchronous_fetches_item_again(vcd_client,
                                                     fake_session):
    url = f"{BUNDLES_URL}{BUNDLE_ID}"
    fake_session.add('PUT', url, status_code=202,
                     headers={'Location': TASK_HREF})
    fake_session.add('GET', TASK_HREF, text=task_xml('success'))
    fake_session.add('GET', url, json_body={'id': BUNDLE_ID,
                                            'name': 'renamed'})

    updated = generic_crud.update_inner_entity(
        vcd_client, _bundles_config(), BUNDLE_ID,
        RightsBundle(name='renamed', id=BUNDLE_ID), RightsBundle)

    assert updated.name == 'renamed'
    assert fake_session.requests[0].json['id'] == BUNDLE_ID


def test_0120_delete(vcd_client, fake_session):
    url = f"{BUNDLES_URL}{BUNDLE_ID}"
    fake_session.add('DELETE', url, status_code=204)

    generic_crud.delete_entity_by_id(vcd_client, _bundles_config(),
                                     BUNDLE_ID)

    assert [request.method for request in fake_session.requests] == \
        ['DELETE']


def test_0130_delete_asynchronous_waits_for_task(vcd_client, fake_session):
    url = f"{BUNDLES_URL}{BUNDLE_ID}"
    fake_session.add('DELETE', url, status_code=202,
                     headers={'Location': TASK_HREF})
    fake_session.add('GET', TASK_HREF, text=task_xml('success'))

    generic_crud.delete_entity_by_id(vcd_client, _bundles_config(),
                                     BUNDLE_ID)

    assert len(fake_session.requests_to('GET', TASK_HREF)) == 1


def test_0140_elevated_api_version_is_sent(vcd_client, fake_session):
    url = f"{CLOUDAPI_HREF}1.0.0/edgeGateways/"
    fake_session.add('GET', url, json_body={'values': []})

    generic_crud.get_all_inner_entities(
        vcd_client,
        generic_crud.CrudConfig(endpoint=CloudApiResource.EDGE_GATEWAYS,
                                entity_label='edge gateways'))

    assert fake_session.requests[0].headers['Accept'] == \
        'application/json;version=37.1'


def test_0150_endpoint_newer_than_client_is_rejected(fake_session):
    old_client = VcdClient('vcd.example.com', api_version='36.0')
    old_client._session = fake_session
    old_client.cloudapi_client._session = fake_session

    with pytest.raises(ApiVersionNotSupportedError):
        generic_crud.get_all_inner_entities(
            old_client,
            generic_crud.CrudConfig(
                endpoint=CloudApiResource.IP_SPACE_UPLINKS,
                entity_label='IP Space Uplinks'))
    assert fake_session.requests == []


def test_0160_create_asynchronous_task_without_owner(vcd_client,
                                                     fake_session):
    fake_session.add('POST', BUNDLES_URL, status_code=202,
                     headers={'Location': TASK_HREF})
    fake_session.add('GET', TASK_HREF, text=task_xml('success'))

    with pytest.raises(VcdError) as excinfo:
        generic_crud.create_inner_entity(vcd_client, _bundles_config(),
                                         RightsBundle(name='bundle'),
                                         RightsBundle)

    assert str(excinfo.value) == \
        f"error creating rights bundle: task {TASK_HREF} has no owner, " \
        "the created entity cannot be retrieved"
    assert fake_session.requests_to('GET', BUNDLES_URL) == []
