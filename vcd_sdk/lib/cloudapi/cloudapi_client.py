# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from copy import deepcopy
import json
import logging

import requests

from vcd_sdk.common.constants.shared_constants import DEFAULT_HTTP_TIMEOUT_SEC
from vcd_sdk.common.constants.shared_constants import MediaType
from vcd_sdk.common.constants.shared_constants import PaginationKey
from vcd_sdk.common.constants.shared_constants import RequestHeader
from vcd_sdk.exception.exception_handler import process_http_error
from vcd_sdk.lib.cloudapi.constants import ResponseKeys
from vcd_sdk.logging.logger import NULL_LOGGER


class CloudApiClient(object):
    """REST based client for the /cloudapi endpoints of vCD."""

    def __init__(self,
                 base_url: str,
                 token: str,
                 is_jwt_token: bool,
                 api_version: str,
                 logger_debug: logging.Logger = NULL_LOGGER,
                 logger_wire: logging.Logger = NULL_LOGGER,
                 verify_ssl: bool = True,
                 is_sys_admin: bool = False,
                 session: requests.Session = None,
                 timeout: int = DEFAULT_HTTP_TIMEOUT_SEC,
                 additional_headers: dict = None):
        if not base_url.endswith('/'):
            base_url += '/'
        self._base_url = base_url

        self._headers = {}
        self.set_token(token, is_jwt_token)
        if additional_headers:
            self._headers.update(additional_headers)

        self._verify_ssl = verify_ssl
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self.LOGGER = logger_debug
        self.LOGGER_WIRE = logger_wire
        self.is_sys_admin = is_sys_admin
        self._api_version = api_version

    def set_token(self, token, is_jwt_token=True):
        self._headers.pop(RequestHeader.AUTHORIZATION.value, None)
        self._headers.pop(RequestHeader.VCLOUD_AUTHORIZATION.value, None)
        if not token:
            return
        if is_jwt_token:
            self._headers[RequestHeader.AUTHORIZATION.value] = f"Bearer {token}"  # noqa: E501
        else:
            self._headers[RequestHeader.VCLOUD_AUTHORIZATION.value] = token

    def build_url(self, resource_url_relative_path):
        """Build an absolute url out of a path relative to /cloudapi/.

        :param str resource_url_relative_path: e.g. 1.0.0/rightsBundles/

        :rtype: str
        """
        return f"{self._base_url}{resource_url_relative_path}"

    def do_request(self,
                   method,
                   cloudapi_version=None,
                   resource_url_relative_path=None,
                   resource_url_absolute_path=None,
                   payload=None,
                   content_type=None,
                   additional_request_headers=None,
                   return_response_headers=False,
                   params=None,
                   api_version=None,
                   return_response=False):
        """Make a request to vCD server at /cloudapi endpoint.

        :param shared_constants.RequestMethod method: One of the HTTP verb
            defined in the enum.
        :param str cloudapi_version: cloudapi version that's part of the url
            e.g. 1.0.0 in /cloudapi/1.0.0/rightsBundles
        :param str resource_url_relative_path: part of the url that identifies
            just the resource (the host and the common /cloudapi/ should be
            omitted). E.g .rightsBundles,
            rightsBundles/urn:vcloud:rightsBundle:ac313b07-21df-45d2 etc.
        :param str resource_url_absolute_path: absolute path for a resource,
            e.g. a next page link returned by the server
        :param dict payload: JSON payload for the REST call.
        :param str content_type: content type of the body of the request
        :param dict additional_request_headers: request specific headers
        :param bool return_response_headers: should return response_headers?
        :param dict params: query parameters
        :param str api_version: api version for the Accept header, defaults
            to the version the client was created with.
        :param bool return_response: return the requests.Response object
            instead of the parsed body.

        :return: body of the response text (JSON) in form of a dictionary and
            the response headers if return_headers is set

        :rtype: dict or (dict, dict) or requests.Response

        :raises VcdResponseError: if the underlying REST call fails, 404
            answers raise VcdNotFoundResponseError.
        """
        if resource_url_absolute_path:
            url = resource_url_absolute_path
        else:
            url = self._base_url
            if cloudapi_version:
                url += f"{cloudapi_version}/"
            url += f"{resource_url_relative_path}"

        method = method.value if hasattr(method, 'value') else method
        self.LOGGER_WIRE.debug(f"Request uri : {method.upper()} {url}")
        headers = deepcopy(self._headers)
        headers[RequestHeader.ACCEPT.value] = \
            f"{MediaType.JSON.value};version={api_version or self._api_version}"  # noqa: E501
        if additional_request_headers:
            headers.update(additional_request_headers)
        if content_type and 'json' not in content_type:
            headers[RequestHeader.CONTENT_TYPE.value] = content_type
            response = self._session.request(
                method,
                url,
                headers=headers,
                params=params,
                data=payload,
                verify=self._verify_ssl,
                timeout=self._timeout)
        else:
            headers[RequestHeader.CONTENT_TYPE.value] = MediaType.JSON.value
            response = self._session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=payload,
                verify=self._verify_ssl,
                timeout=self._timeout)

        if response.request is not None:
            self.LOGGER_WIRE.debug("Request headers :"
                                   f" {response.request.headers}")
            self.LOGGER_WIRE.debug(f"Request body : {response.request.body}")

        self.LOGGER_WIRE.debug(f"Response status code: {response.status_code}")
        self.LOGGER_WIRE.debug(f"Response headers : {response.headers}")
        self.LOGGER_WIRE.debug(f"Response body : {response.text}")

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            raise process_http_error(err) from err
        if return_response:
            return response
        body = json.loads(response.text) if response.text else None
        if return_response_headers:
            return body, response.headers
        return body

    @staticmethod
    def get_next_page_url(response_headers) -> str:
        """Get the link to the next page out of the response headers.

        Example header
        <https://vcd/cloudapi/1.0.0/rights?page=2>;rel="nextPage"

        :param dict response_headers: headers of a paginated response

        :return: absolute url of the next page, or empty string on the last
            page
        :rtype: str
        """  # noqa: E501
        if not response_headers:
            return ''
        unparsed_links = response_headers.get(ResponseKeys.LINK.value)
        if not unparsed_links:
            return ''

        # Find link corresponding to the next page
        parsed_links = requests.utils.parse_header_links(unparsed_links)
        for link in parsed_links:
            if link.get(ResponseKeys.REL.value) == \
                    PaginationKey.NEXT_PAGE_REL.value:
                return link.get(ResponseKeys.URL.value, '')
        return ''
