# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from vcd_sdk.client import VcdClient
from vcd_sdk.common.constants.shared_constants import RequestMethod
from vcd_sdk.common.utils.core_utils import extract_uuid
from vcd_sdk.common.utils.core_utils import str_to_bool
from vcd_sdk.exception.exception_handler import handle_vcd_exception
from vcd_sdk.metadata.metadata_service import MetadataMixin
from vcd_sdk.query import QueryService
from vcd_sdk.query import QueryType


class ProviderVdc(MetadataMixin):
    """Provider VDC, in its admin view.

    The extension view, with the backing vCenter resources, is available
    through get_extended().
    """

    def __init__(self, client: VcdClient, href=None, resource=None):
        if href is None and resource is None:
            raise ValueError("ProviderVdc initialization failed as "
                             "arguments are either invalid or None")
        self.client = client
        self.href = href if href else resource.get('href')
        self.resource = resource

    @classmethod
    @handle_vcd_exception('error retrieving Provider VDC')
    def get_by_href(cls, client: VcdClient, href) -> 'ProviderVdc':
        return cls(client, href=href,
                   resource=client.do_xml_request(RequestMethod.GET, href))

    @classmethod
    def get_by_id(cls, client: VcdClient, provider_vdc_id) -> 'ProviderVdc':
        if not provider_vdc_id:
            raise ValueError("empty Provider VDC id")
        return cls.get_by_href(
            client,
            f"{client.get_admin_href()}providervdc/{extract_uuid(provider_vdc_id)}")  # noqa: E501

    @classmethod
    def get_by_name(cls, client: VcdClient, name) -> 'ProviderVdc':
        """Get a Provider VDC by name.

        :raises EntityNotFoundError: if there is no such Provider VDC
        :raises MultipleEntitiesFoundError: if several have this name
        """
        if not name:
            raise ValueError("empty Provider VDC name")
        record = QueryService(client).query_one(QueryType.PROVIDER_VDC,
                                                'name', name)
        return cls.get_by_href(client, record.get('href'))

    def refresh(self):
        self.resource = self.client.do_xml_request(RequestMethod.GET,
                                                   self.href)
        return self.resource

    def get_resource(self):
        if self.resource is None:
            self.refresh()
        return self.resource

    @property
    def name(self):
        return self.get_resource().get('name')

    @property
    def id(self):
        return self.get_resource().get('id')

    def is_enabled(self):
        resource = self.get_resource()
        return hasattr(resource, 'IsEnabled') and \
            str_to_bool(resource.IsEnabled.text)

    def get_extension_href(self):
        return f"{self.client.get_extension_href()}providervdc/{extract_uuid(self.href)}"  # noqa: E501

    @handle_vcd_exception('error retrieving extended Provider VDC')
    def get_extended(self):
        """Get the VMWProviderVdc extension view of the Provider VDC."""
        return self.client.do_xml_request(RequestMethod.GET,
                                          self.get_extension_href())
