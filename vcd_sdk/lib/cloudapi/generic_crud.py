# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Generic get/create/update/delete helpers for OpenAPI endpoints.

Every helper takes a CrudConfig describing the endpoint and an optional
inner type, a dataclass_json class the json payloads are decoded to. With no
inner type payloads are returned as dictionaries. Outer variants wrap each
inner entity with a callable, typically the constructor of a resource
wrapper holding the client.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

import requests

from vcd_sdk.common.constants.shared_constants import DEFAULT_PAGE_SIZE
from vcd_sdk.common.constants.shared_constants import PaginationKey
from vcd_sdk.common.constants.shared_constants import RequestHeader
from vcd_sdk.common.constants.shared_constants import RequestMethod
from vcd_sdk.common.utils.core_utils import one_or_error
from vcd_sdk.common.utils.core_utils import query_parameter_filter_and
from vcd_sdk.common.utils.core_utils import remove_none_values
from vcd_sdk.exception.exceptions import VcdError
from vcd_sdk.lib.cloudapi.cloudapi_client import CloudApiClient


def _endpoint_value(endpoint):
    return endpoint.value if hasattr(endpoint, 'value') else endpoint


@dataclass
class CrudConfig:
    """Description of an OpenAPI endpoint for the generic helpers.

    :param str endpoint: CloudApiResource value, may contain %s placeholders
    :param str entity_label: human readable name used in error messages
    :param tuple endpoint_params: values for the placeholders
    :param dict query_parameters: query parameters of list calls
    :param dict additional_header: extra headers, e.g. tenant context
    """

    endpoint: str
    entity_label: str
    endpoint_params: Sequence[str] = ()
    query_parameters: Optional[Dict[str, str]] = None
    additional_header: Optional[Dict[str, str]] = None

    def validate(self):
        endpoint = _endpoint_value(self.endpoint)
        if not endpoint:
            raise ValueError("CrudConfig requires an endpoint")
        if not self.entity_label:
            raise ValueError(f"CrudConfig for endpoint '{self.endpoint}' "
                             "requires an entity label")
        placeholder_count = endpoint.count('%s')
        if placeholder_count != len(self.endpoint_params):
            raise ValueError(
                f"endpoint '{self.endpoint}' has {placeholder_count} "
                f"placeholders but {len(self.endpoint_params)} params were "
                "given")
        for param in self.endpoint_params:
            if not param:
                raise ValueError(f"empty endpoint param for endpoint "
                                 f"'{self.endpoint}'")

    def get_exact_endpoint(self):
        self.validate()
        if self.endpoint_params:
            return _endpoint_value(self.endpoint) % tuple(self.endpoint_params)  # noqa: E501
        return _endpoint_value(self.endpoint)


def _prepare(client, config: CrudConfig):
    """Check compatibility and build the endpoint url.

    :return: endpoint url, api version to use
    :rtype: tuple
    """
    exact_endpoint = config.get_exact_endpoint()
    api_version = client.get_openapi_endpoint_version(config.endpoint)
    return client.cloudapi_client.build_url(exact_endpoint), api_version


def _decode(payload, inner_type):
    if payload is None or inner_type is None:
        return payload
    return inner_type.from_dict(payload)


def _encode(entity):
    if entity is None:
        return None
    if hasattr(entity, 'to_dict'):
        entity = entity.to_dict()
    return remove_none_values(entity)


def _wait_for_task(client, response):
    task_href = response.headers.get(RequestHeader.LOCATION.value)
    if not task_href:
        raise VcdError("asynchronous request was accepted but no task "
                       "location was returned")
    task = client.get_task(task_href)
    task.wait_for_completion()
    return task


def get_all_pages(cloudapi_client: CloudApiClient, url, api_version,
                  query_parameters=None, additional_header=None):
    """Get the values of every page of a list endpoint, in order.

    Pages are followed through the nextPage link of the Link header. An
    error on any page aborts the whole retrieval.

    :return: list of json values
    :rtype: list
    """
    params = dict(query_parameters or {})
    params.setdefault(PaginationKey.PAGE_SIZE.value, DEFAULT_PAGE_SIZE)
    values = []
    next_url = url
    while next_url:
        body, headers = cloudapi_client.do_request(
            RequestMethod.GET,
            resource_url_absolute_path=next_url,
            params=params,
            api_version=api_version,
            additional_request_headers=additional_header,
            return_response_headers=True)
        if body:
            values.extend(body.get(PaginationKey.VALUES.value) or [])
        next_url = cloudapi_client.get_next_page_url(headers)
        # the next page link already carries all query parameters
        params = None
    return values


def get_all_inner_entities(client, config: CrudConfig, inner_type=None):
    """Get all entities of an endpoint, following pagination.

    :param VcdClient client: authenticated client
    :param CrudConfig config: endpoint description
    :param type inner_type: dataclass_json class to decode values to

    :rtype: list
    """
    try:
        url, api_version = _prepare(client, config)
        values = get_all_pages(client.cloudapi_client, url, api_version,
                               query_parameters=config.query_parameters,
                               additional_header=config.additional_header)
    except VcdError as err:
        raise err.add_prefix(f"error getting all {config.entity_label}")
    return [_decode(value, inner_type) for value in values]


def get_all_outer_entities(client, wrap: Callable, config: CrudConfig,
                           inner_type=None):
    return [wrap(inner) for inner in
            get_all_inner_entities(client, config, inner_type)]


def get_inner_entity(client, config: CrudConfig, entity_id='',
                     inner_type=None):
    """Get a single entity by id.

    entity_id is appended to the endpoint, leave it empty for endpoints that
    point at a single entity already e.g. vdcs/%s/networkProfile.

    :raises EntityNotFoundError: if there is no such entity
    """
    try:
        url, api_version = _prepare(client, config)
        body = client.cloudapi_client.do_request(
            RequestMethod.GET,
            resource_url_absolute_path=f"{url}{entity_id or ''}",
            api_version=api_version,
            additional_request_headers=config.additional_header)
    except VcdError as err:
        raise err.add_prefix(f"error getting {config.entity_label}")
    return _decode(body, inner_type)


def get_outer_entity(client, wrap: Callable, config: CrudConfig,
                     entity_id='', inner_type=None):
    return wrap(get_inner_entity(client, config, entity_id, inner_type))


def get_inner_entity_by_name(client, config: CrudConfig, name,
                             inner_type=None, name_field='name'):
    """Get a single entity by name with a FIQL filter.

    :raises EntityNotFoundError: if no entity has this name
    :raises MultipleEntitiesFoundError: if several entities have this name
    """
    if not name:
        raise ValueError(f"{config.entity_label} lookup requires a "
                         f"{name_field}")
    query_parameters = query_parameter_filter_and(
        f"{name_field}=={name}", config.query_parameters)
    filtered_config = CrudConfig(endpoint=config.endpoint,
                                 entity_label=config.entity_label,
                                 endpoint_params=config.endpoint_params,
                                 query_parameters=query_parameters,
                                 additional_header=config.additional_header)
    entities = get_all_inner_entities(client, filtered_config, inner_type)
    return one_or_error(name_field, name, entities)


def create_inner_entity(client, config: CrudConfig, entity, inner_type=None):
    """Create an entity with a POST.

    Asynchronous endpoints answer 202 with a task location. The task is
    waited for and the created entity is fetched by the task owner id.
    Synchronous endpoints return the created entity in the body.

    :return: created entity, None if the endpoint returns nothing
    """
    try:
        url, api_version = _prepare(client, config)
        response = client.cloudapi_client.do_request(
            RequestMethod.POST,
            resource_url_absolute_path=url,
            payload=_encode(entity),
            api_version=api_version,
            additional_request_headers=config.additional_header,
            return_response=True)
        if response.status_code == requests.codes.accepted:
            task = _wait_for_task(client, response)
            if not task.owner_id:
                raise VcdError(f"task {task.href} has no owner, the "
                               "created entity cannot be retrieved")
            return get_inner_entity(client, config, task.owner_id,
                                    inner_type)
    except VcdError as err:
        raise err.add_prefix(f"error creating {config.entity_label}")
    return _decode(response.json() if response.text else None, inner_type)


def create_outer_entity(client, wrap: Callable, config: CrudConfig, entity,
                        inner_type=None):
    return wrap(create_inner_entity(client, config, entity, inner_type))


def update_inner_entity(client, config: CrudConfig, entity_id, entity,
                        inner_type=None):
    """Update an entity with a PUT.

    Asynchronous endpoints answer 202, the task is waited for and the entity
    is fetched again.

    :return: updated entity
    """
    try:
        url, api_version = _prepare(client, config)
        response = client.cloudapi_client.do_request(
            RequestMethod.PUT,
            resource_url_absolute_path=f"{url}{entity_id or ''}",
            payload=_encode(entity),
            api_version=api_version,
            additional_request_headers=config.additional_header,
            return_response=True)
        if response.status_code == requests.codes.accepted:
            _wait_for_task(client, response)
            return get_inner_entity(client, config, entity_id, inner_type)
    except VcdError as err:
        raise err.add_prefix(f"error updating {config.entity_label}")
    return _decode(response.json() if response.text else None, inner_type)


def update_outer_entity(client, wrap: Callable, config: CrudConfig,
                        entity_id, entity, inner_type=None):
    return wrap(update_inner_entity(client, config, entity_id, entity,
                                    inner_type))


def delete_entity_by_id(client, config: CrudConfig, entity_id=''):
    """Delete an entity, waiting for the task of asynchronous endpoints."""
    try:
        url, api_version = _prepare(client, config)
        response = client.cloudapi_client.do_request(
            RequestMethod.DELETE,
            resource_url_absolute_path=f"{url}{entity_id or ''}",
            api_version=api_version,
            additional_request_headers=config.additional_header,
            return_response=True)
        if response.status_code == requests.codes.accepted:
            _wait_for_task(client, response)
    except VcdError as err:
        raise err.add_prefix(f"error deleting {config.entity_label}")
