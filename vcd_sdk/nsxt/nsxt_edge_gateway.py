# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from typing import List

from vcd_sdk.client import get_tenant_context_headers
from vcd_sdk.client import TenantContext
from vcd_sdk.client import VcdClient
from vcd_sdk.exception.exceptions import VcdError
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.logging.logger import NULL_LOGGER
from vcd_sdk.models import openapi_models
from vcd_sdk.models.openapi_models import NsxtAlbServiceConfig
from vcd_sdk.models.openapi_models import NsxtEdgeGatewayDns
from vcd_sdk.models.openapi_models import RouteAdvertisement


def _config(query_parameters=None, tenant_context=None):
    return generic_crud.CrudConfig(
        endpoint=CloudApiResource.EDGE_GATEWAYS,
        entity_label='NSX-T Edge Gateway',
        query_parameters=query_parameters,
        additional_header=get_tenant_context_headers(tenant_context))


class NsxtEdgeGateway:
    """An NSX-T backed edge gateway and its DNS, routing and ALB settings."""

    def __init__(self, client: VcdClient,
                 edge_gateway: openapi_models.NsxtEdgeGateway,
                 logger_debug=NULL_LOGGER):
        self.client = client
        self.edge_gateway = edge_gateway
        self.LOGGER = logger_debug

    @classmethod
    def _wrapper(cls, client):
        return lambda edge_gateway: cls(client, edge_gateway)

    @classmethod
    def get_all(cls, client: VcdClient, query_parameters=None,
                tenant_context: TenantContext = None) -> List['NsxtEdgeGateway']:  # noqa: E501
        return generic_crud.get_all_outer_entities(
            client, cls._wrapper(client),
            _config(query_parameters, tenant_context),
            openapi_models.NsxtEdgeGateway)

    @classmethod
    def get_by_id(cls, client: VcdClient, edge_gateway_id,
                  tenant_context: TenantContext = None) -> 'NsxtEdgeGateway':
        if not edge_gateway_id:
            raise ValueError("empty NSX-T Edge Gateway id")
        return generic_crud.get_outer_entity(
            client, cls._wrapper(client), _config(None, tenant_context),
            edge_gateway_id, openapi_models.NsxtEdgeGateway)

    @classmethod
    def get_by_name(cls, client: VcdClient, name,
                    tenant_context: TenantContext = None) -> 'NsxtEdgeGateway':
        return cls(client, generic_crud.get_inner_entity_by_name(
            client, _config(None, tenant_context), name,
            openapi_models.NsxtEdgeGateway))

    @property
    def id(self):
        return self.edge_gateway.id

    @property
    def name(self):
        return self.edge_gateway.name

    def get_tenant_context(self) -> TenantContext:
        """Get the tenant context of the org owning the edge gateway."""
        org_ref = self.edge_gateway.org_ref
        if org_ref is None or not org_ref.id:
            raise ValueError(f"edge gateway '{self.name}' has no org "
                             "reference")
        if org_ref.name:
            return TenantContext(org_id=org_ref.id, org_name=org_ref.name)
        return self.client.get_tenant_context(org_ref.id)

    def _setting_config(self, endpoint, entity_label,
                        use_tenant_context=False):
        if not self.id:
            raise ValueError("the edge gateway id is empty, the edge "
                             "gateway must be fetched first")
        tenant_context = self.get_tenant_context() if use_tenant_context \
            else None
        return generic_crud.CrudConfig(
            endpoint=endpoint,
            entity_label=entity_label,
            endpoint_params=(self.id,),
            additional_header=get_tenant_context_headers(tenant_context))

    # DNS forwarder

    def _dns_config(self):
        return self._setting_config(CloudApiResource.EDGE_GATEWAY_DNS,
                                    'NSX-T Edge Gateway DNS configuration')

    def get_dns_config(self) -> NsxtEdgeGatewayDns:
        return generic_crud.get_inner_entity(self.client, self._dns_config(),
                                             inner_type=NsxtEdgeGatewayDns)

    def update_dns_config(self, dns_config: NsxtEdgeGatewayDns) -> NsxtEdgeGatewayDns:  # noqa: E501
        """Replace the DNS forwarder configuration.

        :return: the configuration as saved by vCD
        """
        generic_crud.update_inner_entity(self.client, self._dns_config(), '',
                                         dns_config)
        return self.get_dns_config()

    def delete_dns_config(self):
        """Remove the DNS forwarder configuration, disabling the service."""
        generic_crud.delete_entity_by_id(self.client, self._dns_config())

    # Route advertisement

    def _route_advertisement_config(self, use_tenant_context):
        return self._setting_config(
            CloudApiResource.EDGE_GATEWAY_ROUTE_ADVERTISEMENT,
            'NSX-T Edge Gateway route advertisement',
            use_tenant_context=use_tenant_context)

    def get_route_advertisement(self, use_tenant_context=True) -> RouteAdvertisement:  # noqa: E501
        """Get the subnets advertised to the connected external network."""
        return generic_crud.get_inner_entity(
            self.client, self._route_advertisement_config(use_tenant_context),
            inner_type=RouteAdvertisement)

    def update_route_advertisement(self, enable, subnets: List[str],
                                   use_tenant_context=True) -> RouteAdvertisement:  # noqa: E501
        generic_crud.update_inner_entity(
            self.client, self._route_advertisement_config(use_tenant_context),
            '', RouteAdvertisement(enable=enable, subnets=list(subnets)))
        return self.get_route_advertisement(use_tenant_context)

    def delete_route_advertisement(self, use_tenant_context=True):
        """Stop advertising subnets.

        The endpoint has no DELETE, an empty disabled configuration is saved
        instead.
        """
        self.update_route_advertisement(False, [], use_tenant_context)

    # NSX-T ALB

    def _alb_config(self):
        return self._setting_config(CloudApiResource.EDGE_GATEWAY_ALB,
                                    'NSX-T ALB settings')

    def get_alb_settings(self) -> NsxtAlbServiceConfig:
        return generic_crud.get_inner_entity(
            self.client, self._alb_config(), inner_type=NsxtAlbServiceConfig)

    def update_alb_settings(self, alb_config: NsxtAlbServiceConfig) -> NsxtAlbServiceConfig:  # noqa: E501
        return generic_crud.update_inner_entity(
            self.client, self._alb_config(), '', alb_config,
            NsxtAlbServiceConfig)

    def disable_alb(self):
        try:
            self.update_alb_settings(NsxtAlbServiceConfig(enabled=False))
        except VcdError as err:
            raise err.add_prefix("error disabling NSX-T ALB")
        self.LOGGER.debug(f"Disabled NSX-T ALB on edge gateway '{self.name}'")  # noqa: E501
