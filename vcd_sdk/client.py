# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Entry point of the sdk: session management and request execution."""

from dataclasses import dataclass
import logging
from typing import Dict, List, Optional
from urllib.parse import urlparse

from lxml import etree
from lxml import objectify
import requests
import semantic_version

from vcd_sdk.common.constants import shared_constants
from vcd_sdk.common.constants.shared_constants import AuthHeaderType
from vcd_sdk.common.constants.shared_constants import MediaType
from vcd_sdk.common.constants.shared_constants import NSMAP
from vcd_sdk.common.constants.shared_constants import RequestHeader
from vcd_sdk.common.constants.shared_constants import RequestMethod
from vcd_sdk.common.utils import config_utils
from vcd_sdk.common.utils.core_utils import build_urn
from vcd_sdk.common.utils.core_utils import extract_uuid
from vcd_sdk.exception.exception_handler import process_http_error
from vcd_sdk.exception.exceptions import ApiVersionNotSupportedError
from vcd_sdk.exception.exceptions import AuthenticationError
from vcd_sdk.lib.cloudapi.cloudapi_client import CloudApiClient
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.lib.cloudapi.constants import ENDPOINT_ELEVATED_API_VERSIONS
from vcd_sdk.lib.cloudapi.constants import ENDPOINT_MIN_API_VERSIONS
from vcd_sdk.logging.logger import configure_all_file_loggers
from vcd_sdk.logging.logger import NULL_LOGGER
from vcd_sdk.logging.logger import SDK_LOGGER
from vcd_sdk.logging.logger import SDK_WIRE_LOGGER
from vcd_sdk.metadata.ignored_metadata import IgnoredMetadata
from vcd_sdk.task import Task

# org id -> TenantContext, shared by all clients of the process
ORG_TENANT_CONTEXT_CACHE: Dict[str, 'TenantContext'] = {}


@dataclass(frozen=True)
class TenantContext:
    org_id: str
    org_name: str


def to_semantic_version(api_version) -> semantic_version.Version:
    """Convert a vCD api version like 37.1 to a comparable version."""
    return semantic_version.Version.coerce(str(api_version))


def get_tenant_context_headers(tenant_context: Optional[TenantContext]):
    """Build the headers that scope a provider request to an organization.

    :param TenantContext tenant_context: org to act in, None for no scoping

    :rtype: dict
    """
    if tenant_context is None:
        return {}
    return {
        RequestHeader.TENANT_CONTEXT.value: extract_uuid(tenant_context.org_id),  # noqa: E501
        RequestHeader.AUTH_CONTEXT.value: tenant_context.org_name,
    }


class VcdClient:
    """Client for a single vCD site.

    A client is usable for unauthenticated calls (e.g. version discovery)
    right after creation. authenticate(), set_token() or set_api_token()
    must be called before any other call.
    """

    def __init__(self,
                 host: str,
                 api_version: str = None,
                 verify_ssl: bool = True,
                 http_timeout: int = shared_constants.DEFAULT_HTTP_TIMEOUT_SEC,
                 user_agent: str = shared_constants.DEFAULT_USER_AGENT,
                 custom_headers: dict = None,
                 ignored_metadata: List[IgnoredMetadata] = None,
                 task_timeout: float = shared_constants.DEFAULT_TASK_TIMEOUT_SEC,  # noqa: E501
                 task_poll_interval: float = shared_constants.DEFAULT_TASK_POLL_INTERVAL_SEC,  # noqa: E501
                 logger_debug: logging.Logger = NULL_LOGGER,
                 logger_wire: logging.Logger = NULL_LOGGER):
        if not host:
            raise ValueError("vCD host is required")
        if '://' not in host:
            host = f"https://{host}"
        parsed_url = urlparse(host)
        self._host_url = f"{parsed_url.scheme}://{parsed_url.netloc}"
        self.api_href = f"{self._host_url}/api/"
        self.cloudapi_href = f"{self._host_url}/cloudapi/"

        if api_version is None:
            api_version = config_utils.get_api_version_from_env(
                default=shared_constants.DEFAULT_API_VERSION)
        self.api_version = config_utils.validate_api_version(api_version)

        self.verify_ssl = verify_ssl
        self.http_timeout = http_timeout
        self.task_timeout = task_timeout
        self.task_poll_interval = task_poll_interval
        self.ignored_metadata = list(ignored_metadata or [])
        self.LOGGER = logger_debug
        self.LOGGER_WIRE = logger_wire

        self._custom_headers = dict(custom_headers or {})
        if user_agent:
            self._custom_headers[RequestHeader.USER_AGENT.value] = user_agent
        self._session = requests.Session()
        self._token = None
        self._is_jwt_token = True
        self._org_name = None
        self._session_href = None
        self._supported_versions = None
        self.cloudapi_client = CloudApiClient(
            base_url=self.cloudapi_href,
            token=None,
            is_jwt_token=True,
            api_version=self.api_version,
            logger_debug=logger_debug,
            logger_wire=logger_wire,
            verify_ssl=verify_ssl,
            session=self._session,
            timeout=http_timeout,
            additional_headers=self._custom_headers)

    @classmethod
    def from_config(cls, config, authenticate=True):
        """Create a client out of a validated config dictionary.

        :param dict config: output of config_utils.validate_config
        :param bool authenticate: log in if the config has credentials

        :rtype: VcdClient
        """
        vcd_config = config['vcd']
        service_config = config.get('service') or {}
        logger_wire = NULL_LOGGER
        if service_config.get('log_wire') or service_config.get('log_dir'):
            configure_all_file_loggers(service_config.get('log_dir'))
            if service_config.get('log_wire'):
                logger_wire = SDK_WIRE_LOGGER
        client = cls(
            host=vcd_config['host'],
            api_version=vcd_config.get('api_version'),
            verify_ssl=vcd_config.get('verify', True),
            http_timeout=service_config.get('http_timeout', shared_constants.DEFAULT_HTTP_TIMEOUT_SEC),  # noqa: E501
            user_agent=service_config.get('user_agent', shared_constants.DEFAULT_USER_AGENT),  # noqa: E501
            custom_headers=service_config.get('custom_headers'),
            ignored_metadata=[IgnoredMetadata.from_dict(rule) for rule in service_config.get('ignored_metadata') or []],  # noqa: E501
            task_timeout=service_config.get('task_timeout', shared_constants.DEFAULT_TASK_TIMEOUT_SEC),  # noqa: E501
            task_poll_interval=service_config.get('task_poll_interval', shared_constants.DEFAULT_TASK_POLL_INTERVAL_SEC),  # noqa: E501
            logger_debug=SDK_LOGGER,
            logger_wire=logger_wire)
        if authenticate and vcd_config.get('username'):
            client.authenticate(vcd_config.get('username'),
                                vcd_config.get('password'),
                                vcd_config.get('org'))
        return client

    # Versions

    def get_supported_versions(self) -> List[str]:
        """Get the non deprecated api versions supported by the server.

        :return: versions as reported by the server, e.g. ['36.0', '37.0']
        :rtype: list
        """
        if self._supported_versions is None:
            versions = self.do_xml_request(RequestMethod.GET,
                                           f"{self.api_href}versions",
                                           use_auth=False)
            supported_versions = []
            for version_info in versions.findall(
                    f"{{{NSMAP['versioning']}}}VersionInfo"):
                if version_info.get('deprecated') == 'true':
                    continue
                supported_versions.append(str(version_info.Version.text))
            self._supported_versions = sorted(supported_versions,
                                              key=to_semantic_version)
        return self._supported_versions

    def get_max_supported_version(self) -> str:
        return self.get_supported_versions()[-1]

    def is_api_version_supported(self, api_version) -> bool:
        wanted = to_semantic_version(api_version)
        return any(to_semantic_version(version) == wanted
                   for version in self.get_supported_versions())

    def validate_api_version(self):
        """Ensure that the server supports the api version of the client.

        :raises ApiVersionNotSupportedError: if it doesn't
        """
        if not self.is_api_version_supported(self.api_version):
            raise ApiVersionNotSupportedError(
                f"API version {self.api_version} is not supported: "
                f"supported versions are {self.get_supported_versions()}")

    def check_openapi_endpoint_compatibility(self, endpoint) -> str:
        """Check that the client api version can use an OpenAPI endpoint.

        :param CloudApiResource endpoint: endpoint or its string value

        :return: minimum api version of the endpoint
        :rtype: str

        :raises ApiVersionNotSupportedError: if the endpoint is unknown or
            the client api version is too low
        """
        endpoint = CloudApiResource(endpoint)
        min_version = ENDPOINT_MIN_API_VERSIONS.get(endpoint)
        if min_version is None:
            raise ApiVersionNotSupportedError(
                f"minimum API version for endpoint '{endpoint.value}' is "
                "not defined")
        if to_semantic_version(self.api_version) < \
                to_semantic_version(min_version):
            raise ApiVersionNotSupportedError(
                f"endpoint '{endpoint.value}' requires API version "
                f"{min_version} or higher, client uses {self.api_version}")
        return min_version

    def get_openapi_endpoint_version(self, endpoint) -> str:
        """Get the api version to talk to an OpenAPI endpoint with.

        The highest elevated version not above the client api version is
        picked, the minimum version of the endpoint otherwise.

        :param CloudApiResource endpoint: endpoint or its string value

        :rtype: str
        """
        endpoint = CloudApiResource(endpoint)
        min_version = self.check_openapi_endpoint_compatibility(endpoint)
        client_version = to_semantic_version(self.api_version)
        usable_versions = [
            version for version in ENDPOINT_ELEVATED_API_VERSIONS.get(endpoint, [])  # noqa: E501
            if to_semantic_version(version) <= client_version
        ]
        if usable_versions:
            return max(usable_versions, key=to_semantic_version)
        return min_version

    # Authentication

    def is_authenticated(self) -> bool:
        return self._token is not None

    def is_sysadmin(self) -> bool:
        return bool(self._org_name) and \
            self._org_name.lower() == shared_constants.SYSTEM_ORG_NAME

    def get_org_name(self):
        return self._org_name

    def get_access_token(self):
        return self._token

    def _set_auth(self, token, is_jwt_token, org_name):
        self._token = token
        self._is_jwt_token = is_jwt_token
        self._org_name = org_name
        self.cloudapi_client.set_token(token, is_jwt_token)
        self.cloudapi_client.is_sys_admin = self.is_sysadmin()

    def authenticate(self, username, password, org):
        """Log in with user name and password.

        :param str username: user to log in with
        :param str password: password of the user
        :param str org: organization of the user, 'System' for providers

        :raises AuthenticationError: on missing credentials or on a 401
        :raises ApiVersionNotSupportedError: if the server doesn't support
            the api version of the client
        """
        missing = [name for name, value in (('user', username),
                                            ('password', password),
                                            ('org', org)) if not value]
        if missing:
            raise AuthenticationError(
                f"authorization is not possible because of these missing "
                f"items: {', '.join(missing)}")
        self.validate_api_version()

        if org.lower() == shared_constants.SYSTEM_ORG_NAME:
            endpoint = CloudApiResource.SESSIONS_PROVIDER
        else:
            endpoint = CloudApiResource.SESSIONS
        url = f"{self.cloudapi_href}{endpoint.value}"
        headers = dict(self._custom_headers)
        headers[RequestHeader.ACCEPT.value] = \
            f"{MediaType.JSON.value};version={self.api_version}"
        self.LOGGER_WIRE.debug(f"Request uri : POST {url}")
        response = self._session.request(
            RequestMethod.POST.value,
            url,
            headers=headers,
            auth=(f"{username}@{org}", password),
            verify=self.verify_ssl,
            timeout=self.http_timeout)
        self.LOGGER_WIRE.debug(f"Response status code: {response.status_code}")  # noqa: E501
        self.LOGGER_WIRE.debug(f"Response headers : {response.headers}")
        if response.status_code == requests.codes.unauthorized:
            raise AuthenticationError(shared_constants.UNAUTHORIZED_MESSAGE)
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            raise process_http_error(err, 'error logging in') from err
        token = response.headers.get(RequestHeader.ACCESS_TOKEN.value)
        if not token:
            raise AuthenticationError(
                f"login response doesn't contain the "
                f"{RequestHeader.ACCESS_TOKEN.value} header")
        session = response.json() if response.text else {}
        org_name = (session.get('org') or {}).get('name') or org
        self._set_auth(token, True, org_name)
        self._session_href = \
            f"{self.cloudapi_href}{CloudApiResource.SESSIONS_CURRENT.value}"
        self.LOGGER.info(f"Logged in to {self._host_url} as {username}@{org_name}")  # noqa: E501

    def set_token(self, token, org=None,
                  auth_header_type=AuthHeaderType.BEARER):
        """Use an existing session token.

        The token is verified by fetching the org list.

        :param str token: bearer token or legacy x-vcloud-authorization token
        :param str org: organization the token belongs to, looked up from the
            current session when not given
        :param AuthHeaderType auth_header_type: kind of token

        :raises AuthenticationError: if the token is empty
        :raises VcdResponseError: if the token is rejected
        """
        if not token:
            raise AuthenticationError("token is empty")
        if auth_header_type == AuthHeaderType.API_TOKEN:
            self.set_api_token(token, org)
            return
        is_jwt_token = auth_header_type != AuthHeaderType.VCLOUD_AUTHORIZATION
        self._set_auth(token, is_jwt_token, org)
        self.do_xml_request(RequestMethod.GET, f"{self.api_href}org")
        if org is None:
            session = self.cloudapi_client.do_request(
                RequestMethod.GET,
                resource_url_relative_path=CloudApiResource.SESSIONS_CURRENT.value)  # noqa: E501
            org = ((session or {}).get('org') or {}).get('name')
            self._set_auth(token, is_jwt_token, org)
        self._session_href = \
            f"{self.cloudapi_href}{CloudApiResource.SESSIONS_CURRENT.value}"

    def set_api_token(self, api_token, org):
        """Exchange an API token for an access token and use it.

        :param str api_token: API (refresh) token generated in the UI
        :param str org: organization the token belongs to

        :raises AuthenticationError: on missing arguments or on a 401
        """
        if not api_token or not org:
            raise AuthenticationError("API token and org are required")
        if org.lower() == shared_constants.SYSTEM_ORG_NAME:
            url = f"{self._host_url}/oauth/provider/token"
        else:
            url = f"{self._host_url}/oauth/tenant/{org}/token"
        headers = dict(self._custom_headers)
        headers[RequestHeader.ACCEPT.value] = MediaType.JSON.value
        headers[RequestHeader.CONTENT_TYPE.value] = \
            MediaType.FORM_URLENCODED.value
        response = self._session.request(
            RequestMethod.POST.value,
            url,
            headers=headers,
            data={'grant_type': 'refresh_token', 'refresh_token': api_token},
            verify=self.verify_ssl,
            timeout=self.http_timeout)
        if response.status_code == requests.codes.unauthorized:
            raise AuthenticationError(shared_constants.UNAUTHORIZED_MESSAGE)
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            raise process_http_error(err, 'error getting access token from API token') from err  # noqa: E501
        self.set_token(response.json()['access_token'], org)

    def disconnect(self):
        """Log out and forget the session token.

        :raises AuthenticationError: if the client is not logged in
        """
        if not self.is_authenticated():
            raise AuthenticationError("cannot disconnect, client is not "
                                      "authenticated")
        session_href = self._session_href or \
            f"{self.cloudapi_href}{CloudApiResource.SESSIONS_CURRENT.value}"
        try:
            self.cloudapi_client.do_request(
                RequestMethod.DELETE,
                resource_url_absolute_path=session_href)
        finally:
            self._set_auth(None, True, None)
            self._session_href = None
        self.LOGGER.info(f"Logged out from {self._host_url}")

    # Request execution

    def _get_auth_headers(self):
        if not self._token:
            return {}
        if self._is_jwt_token:
            return {RequestHeader.AUTHORIZATION.value: f"Bearer {self._token}"}  # noqa: E501
        return {RequestHeader.VCLOUD_AUTHORIZATION.value: self._token}

    def do_xml_request(self, method, href, payload=None, content_type=None,
                       additional_headers=None, params=None,
                       return_response=False, use_auth=True):
        """Make a request to the legacy xml api of vCD.

        :param RequestMethod method: http verb
        :param str href: absolute url of the resource
        :param payload: lxml element or serialized xml
        :param str content_type: media type of the payload
        :param dict additional_headers: request specific headers
        :param dict params: query parameters
        :param bool return_response: return the requests.Response object
        :param bool use_auth: send the session token

        :return: the objectified response body, None for empty bodies

        :raises VcdResponseError: if the server answers with an error. 404
            answers raise VcdNotFoundResponseError.
        """
        method = method.value if hasattr(method, 'value') else method
        headers = dict(self._custom_headers)
        headers[RequestHeader.ACCEPT.value] = \
            f"{MediaType.ANY_XML.value};version={self.api_version}"
        if use_auth:
            headers.update(self._get_auth_headers())
        if content_type:
            headers[RequestHeader.CONTENT_TYPE.value] = content_type
        if additional_headers:
            headers.update(additional_headers)
        if payload is not None and not isinstance(payload, (str, bytes)):
            payload = etree.tostring(payload, encoding='utf-8')

        self.LOGGER_WIRE.debug(f"Request uri : {method.upper()} {href}")
        response = self._session.request(
            method,
            href,
            headers=headers,
            params=params,
            data=payload,
            verify=self.verify_ssl,
            timeout=self.http_timeout)
        if response.request is not None:
            self.LOGGER_WIRE.debug("Request headers :"
                                   f" {response.request.headers}")
            self.LOGGER_WIRE.debug(f"Request body : {response.request.body}")
        self.LOGGER_WIRE.debug(f"Response status code: {response.status_code}")  # noqa: E501
        self.LOGGER_WIRE.debug(f"Response headers : {response.headers}")
        self.LOGGER_WIRE.debug(f"Response body : {response.text}")

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            raise process_http_error(err) from err
        if return_response:
            return response
        if response.content:
            return objectify.fromstring(response.content)
        return None

    def execute_task_request(self, method, href, payload=None,
                             content_type=None, additional_headers=None):
        """Make a request answered with a task, and return the Task.

        :rtype: Task
        """
        resource = self.do_xml_request(method, href, payload=payload,
                                       content_type=content_type,
                                       additional_headers=additional_headers)
        return Task(self, resource=resource, logger_debug=self.LOGGER)

    def wait_task_request(self, method, href, payload=None,
                          content_type=None, additional_headers=None):
        """Make a request answered with a task and wait for the task.

        :return: the finished task resource
        """
        task = self.execute_task_request(method, href, payload=payload,
                                         content_type=content_type,
                                         additional_headers=additional_headers)  # noqa: E501
        return task.wait_for_completion()

    def get_task(self, href) -> Task:
        return Task(self, href=href, logger_debug=self.LOGGER)

    # Tenant context

    def get_tenant_context(self, org_href_or_id) -> TenantContext:
        """Get the tenant context of an organization.

        Lookups are cached per org id for the life of the process.

        :param str org_href_or_id: href, urn or uuid of the org

        :rtype: TenantContext
        """
        org_uuid = extract_uuid(org_href_or_id)
        tenant_context = ORG_TENANT_CONTEXT_CACHE.get(org_uuid)
        if tenant_context is None:
            org = self.do_xml_request(RequestMethod.GET,
                                      f"{self.api_href}org/{org_uuid}")
            tenant_context = TenantContext(
                org_id=org.get('id') or build_urn('org', org_uuid),
                org_name=org.get('name'))
            ORG_TENANT_CONTEXT_CACHE[org_uuid] = tenant_context
        return tenant_context

    def get_admin_href(self):
        return f"{self.api_href}admin/"

    def get_extension_href(self):
        return f"{self.api_href}admin/extension/"
