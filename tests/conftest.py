# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""
conftest.py is used by pytest to automatically find shared fixtures.

Fixtures defined here can be used without importing. vCD is simulated by
FakeSession, which replaces the requests.Session of the client and answers
from canned responses.
"""
from collections import namedtuple
import json

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from vcd_sdk import client as client_module
from vcd_sdk.client import VcdClient

VCD_HOST = 'vcd.example.com'
VCD_URL = f"https://{VCD_HOST}"
API_HREF = f"{VCD_URL}/api/"
CLOUDAPI_HREF = f"{VCD_URL}/cloudapi/"
API_VERSION = '37.1'
TOKEN = 'fake-jwt-token'

VCLOUD_NS = 'http://www.vmware.com/vcloud/v1.5'
XSI_NS = 'http://www.w3.org/2001/XMLSchema-instance'

RecordedRequest = namedtuple('RecordedRequest',
                             'method url headers params data json auth')


def make_response(method, url, status_code=200, json_body=None, text=None,
                  headers=None):
    """Build a requests.Response as requests itself would."""
    response = requests.Response()
    response.status_code = status_code
    if json_body is not None:
        response._content = json.dumps(json_body).encode('utf-8')
    elif text is not None:
        response._content = text.encode('utf-8')
    else:
        response._content = b''
    response.encoding = 'utf-8'
    response.headers = CaseInsensitiveDict(headers or {})
    response.url = url
    response.request = requests.Request(method, url).prepare()
    return response


class FakeSession:
    """Stand in for requests.Session answering from registered routes.

    Routes are looked up by method and full url first, then by method and
    url without query string. Several responses registered on the same
    route are returned in order, the last one is returned again once the
    others are used up.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, url, status_code=200, json_body=None, text=None,
            headers=None):
        self.routes.setdefault((method.upper(), url), []).append(
            (status_code, json_body, text, headers))

    def request(self, method, url, headers=None, params=None, data=None,
                json=None, auth=None, verify=None, timeout=None):
        method = method.upper()
        self.requests.append(RecordedRequest(method, url, dict(headers or {}),
                                             params, data, json, auth))
        key = (method, url)
        if key not in self.routes:
            key = (method, url.split('?')[0])
        if key not in self.routes:
            return make_response(method, url, status_code=404,
                                 json_body={'message': f"no route for {method} {url}",  # noqa: E501
                                            'minorErrorCode': 'NOT_FOUND'})
        responses = self.routes[key]
        status_code, json_body, text, response_headers = \
            responses.pop(0) if len(responses) > 1 else responses[0]
        return make_response(method, url, status_code=status_code,
                             json_body=json_body, text=text,
                             headers=response_headers)

    def requests_to(self, method, url_prefix):
        return [request for request in self.requests
                if request.method == method.upper()
                and request.url.startswith(url_prefix)]


def task_xml(status, href=f"{API_HREF}task/1234", owner_id=None,
             owner_href=None, error_message=None):
    """Xml representation of a vCD task."""
    owner = ''
    if owner_href:
        owner = f'<Owner href="{owner_href}" id="{owner_id or ""}" ' \
                'type="application/json"/>'
    error = ''
    if error_message:
        error = f'<Error message="{error_message}" ' \
                'majorErrorCode="500" minorErrorCode="INTERNAL_SERVER_ERROR"/>'  # noqa: E501
    return f'<?xml version="1.0" encoding="UTF-8"?>' \
           f'<Task xmlns="{VCLOUD_NS}" href="{href}" status="{status}" ' \
           f'operation="op" name="task">{owner}{error}</Task>'


@pytest.fixture(autouse=True)
def clear_tenant_context_cache():
    client_module.ORG_TENANT_CONTEXT_CACHE.clear()
    yield
    client_module.ORG_TENANT_CONTEXT_CACHE.clear()


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def vcd_client(fake_session):
    """Client logged in as a provider, talking to the fake session."""
    vcd_client = VcdClient(VCD_HOST, api_version=API_VERSION,
                           task_poll_interval=0)
    vcd_client._session = fake_session
    vcd_client.cloudapi_client._session = fake_session
    vcd_client._set_auth(TOKEN, True, 'System')
    return vcd_client
