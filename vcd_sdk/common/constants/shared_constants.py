# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from enum import Enum
from enum import unique


# API version used when neither the caller nor the environment picks one
DEFAULT_API_VERSION = '36.0'
API_VERSION_ENV_VAR = 'VCD_SDK_API_VERSION'
PASSWORD_ENV_VAR = 'VCD_SDK_PASSWORD'

DEFAULT_HTTP_TIMEOUT_SEC = 600
DEFAULT_TASK_TIMEOUT_SEC = 600
DEFAULT_TASK_POLL_INTERVAL_SEC = 3
DEFAULT_USER_AGENT = 'vcd-sdk'

SYSTEM_ORG_NAME = 'system'

# OpenAPI and query API page size
DEFAULT_PAGE_SIZE = 128

ENTITY_NOT_FOUND_MESSAGE = '[ENF] entity not found'

UNAUTHORIZED_MESSAGE = 'Unauthorized. Please check if your credentials are valid'  # noqa: E501


@unique
class RequestMethod(str, Enum):
    GET = 'GET'
    HEAD = 'HEAD'
    POST = 'POST'
    PUT = 'PUT'
    DELETE = 'DELETE'
    PATCH = 'PATCH'


@unique
class RequestHeader(str, Enum):
    ACCEPT = 'Accept'
    AUTHORIZATION = 'Authorization'
    CONTENT_TYPE = 'Content-Type'
    USER_AGENT = 'User-Agent'
    LOCATION = 'Location'
    LINK = 'Link'
    VCLOUD_AUTHORIZATION = 'x-vcloud-authorization'
    ACCESS_TOKEN = 'X-VMWARE-VCLOUD-ACCESS-TOKEN'
    TENANT_CONTEXT = 'X-VMWARE-VCLOUD-TENANT-CONTEXT'
    AUTH_CONTEXT = 'X-VMWARE-VCLOUD-AUTH-CONTEXT'


@unique
class MediaType(str, Enum):
    """Versioned mime types exchanged with the server."""

    ANY_XML = 'application/*+xml'
    JSON = 'application/json'
    FORM_URLENCODED = 'application/x-www-form-urlencoded'
    ADMIN_CATALOG = 'application/vnd.vmware.admin.catalog+xml'
    ADMIN_VDC = 'application/vnd.vmware.admin.vdc+xml'
    ADMIN_VDC_STORAGE_PROFILE = 'application/vnd.vmware.admin.vdcStorageProfile+xml'  # noqa: E501
    UPDATE_VDC_STORAGE_PROFILES = 'application/vnd.vmware.admin.updateVdcStorageProfiles+xml'  # noqa: E501
    CONTROL_ACCESS = 'application/vnd.vmware.vcloud.controlAccess+xml'
    METADATA = 'application/vnd.vmware.vcloud.metadata+xml'
    METADATA_VALUE = 'application/vnd.vmware.vcloud.metadata.value+xml'


@unique
class PaginationKey(str, Enum):
    PAGE_NUMBER = 'page'
    PAGE_SIZE = 'pageSize'
    PAGE_COUNT = 'pageCount'
    RESULT_TOTAL = 'resultTotal'
    VALUES = 'values'
    FILTER = 'filter'
    NEXT_PAGE_REL = 'nextPage'


@unique
class AuthHeaderType(str, Enum):
    """How a token given to the client is to be interpreted."""

    BEARER = 'Bearer'
    VCLOUD_AUTHORIZATION = 'x-vcloud-authorization'
    API_TOKEN = 'API-token'


# XML namespaces used by the legacy API
NSMAP = {
    'vcloud': 'http://www.vmware.com/vcloud/v1.5',
    'vmext': 'http://www.vmware.com/vcloud/extension/v1.5',
    'versioning': 'http://www.vmware.com/vcloud/versions',
    'xsi': 'http://www.w3.org/2001/XMLSchema-instance',
}


# Response keys
ERROR_MESSAGE_KEY = 'message'
ERROR_MINOR_CODE_KEY = 'minorErrorCode'
ERROR_MAJOR_CODE_KEY = 'majorErrorCode'
