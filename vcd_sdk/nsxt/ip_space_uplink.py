# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from typing import List

from vcd_sdk.client import VcdClient
from vcd_sdk.common.utils.core_utils import one_or_error
from vcd_sdk.common.utils.core_utils import query_parameter_filter_and
from vcd_sdk.exception.exceptions import VcdError
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.models import openapi_models


def _config(query_parameters=None):
    return generic_crud.CrudConfig(
        endpoint=CloudApiResource.IP_SPACE_UPLINKS,
        entity_label='IP Space Uplink',
        query_parameters=query_parameters)


class IpSpaceUplink:
    """Uplink connecting an IP Space to a provider gateway."""

    def __init__(self, client: VcdClient,
                 ip_space_uplink: openapi_models.IpSpaceUplink):
        self.client = client
        self.ip_space_uplink = ip_space_uplink

    @classmethod
    def create(cls, client: VcdClient,
               ip_space_uplink: openapi_models.IpSpaceUplink) -> 'IpSpaceUplink':  # noqa: E501
        return generic_crud.create_outer_entity(
            client, lambda uplink: cls(client, uplink), _config(),
            ip_space_uplink, openapi_models.IpSpaceUplink)

    @classmethod
    def get_all(cls, client: VcdClient, external_network_id,
                query_parameters=None) -> List['IpSpaceUplink']:
        """Get the uplinks of a provider gateway.

        :param str external_network_id: urn of the provider gateway
        :param dict query_parameters: extra filters, ANDed with the
            external network one
        """
        if not external_network_id:
            raise ValueError("mandatory external network id is empty")
        query_parameters = query_parameter_filter_and(
            f"externalNetworkRef.id=={external_network_id}",
            query_parameters)
        return generic_crud.get_all_outer_entities(
            client, lambda uplink: cls(client, uplink),
            _config(query_parameters), openapi_models.IpSpaceUplink)

    @classmethod
    def get_by_name(cls, client: VcdClient, external_network_id,
                    name) -> 'IpSpaceUplink':
        if not name:
            raise ValueError("empty IP Space Uplink name")
        try:
            uplinks = cls.get_all(
                client, external_network_id,
                query_parameter_filter_and(f"name=={name}"))
        except VcdError as err:
            raise err.add_prefix(
                f"error getting IP Space Uplink by name '{name}'")
        return one_or_error('name', name, uplinks)

    @classmethod
    def get_by_id(cls, client: VcdClient, ip_space_uplink_id) -> 'IpSpaceUplink':  # noqa: E501
        if not ip_space_uplink_id:
            raise ValueError("empty IP Space Uplink id")
        return generic_crud.get_outer_entity(
            client, lambda uplink: cls(client, uplink), _config(),
            ip_space_uplink_id, openapi_models.IpSpaceUplink)

    @property
    def id(self):
        return self.ip_space_uplink.id

    @property
    def name(self):
        return self.ip_space_uplink.name

    def update(self, ip_space_uplink: openapi_models.IpSpaceUplink = None) -> 'IpSpaceUplink':  # noqa: E501
        """Update the uplink with the given definition, or its current one."""
        if ip_space_uplink is not None:
            ip_space_uplink.id = self.id
            self.ip_space_uplink = ip_space_uplink
        self.ip_space_uplink = generic_crud.update_inner_entity(
            self.client, _config(), self.id, self.ip_space_uplink,
            openapi_models.IpSpaceUplink)
        return self

    def delete(self):
        if not self.id:
            raise ValueError("IP Space Uplink must have id")
        generic_crud.delete_entity_by_id(self.client, _config(), self.id)
