# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from copy import deepcopy
from typing import List

from lxml import etree

from vcd_sdk import access_control
from vcd_sdk.access_control import AccessLevel
from vcd_sdk.client import VcdClient
from vcd_sdk.common.constants.shared_constants import MediaType
from vcd_sdk.common.constants.shared_constants import RequestMethod
from vcd_sdk.common.utils.core_utils import construct_filter_string
from vcd_sdk.common.utils.core_utils import extract_uuid
from vcd_sdk.common.utils.core_utils import str_to_bool
from vcd_sdk.exception.exception_handler import handle_vcd_exception
from vcd_sdk.exception.exceptions import EntityNotFoundError
from vcd_sdk.logging.logger import NULL_LOGGER
from vcd_sdk.metadata.metadata_service import E
from vcd_sdk.metadata.metadata_service import MetadataMixin
from vcd_sdk.query import QueryService
from vcd_sdk.query import QueryType
from vcd_sdk.task import wait_if_task

ADMIN_ORG_MEDIA_TYPE = 'application/vnd.vmware.admin.organization+xml'


def to_admin_catalog_href(href):
    return href.replace('/api/catalog', '/api/admin/catalog', 1)


class CatalogItem(MetadataMixin):
    """Catalog item, pointing to a vApp template or a media."""

    def __init__(self, client: VcdClient, href=None, resource=None):
        if href is None and resource is None:
            raise ValueError("CatalogItem initialization failed as "
                             "arguments are either invalid or None")
        self.client = client
        self.href = href if href else resource.get('href')
        self.resource = resource

    @classmethod
    @handle_vcd_exception('error retrieving catalog item')
    def get_by_href(cls, client: VcdClient, href) -> 'CatalogItem':
        return cls(client, href=href,
                   resource=client.do_xml_request(RequestMethod.GET, href))

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

    def get_entity_href(self):
        """Href of the vApp template or media of the item."""
        resource = self.get_resource()
        if hasattr(resource, 'Entity'):
            return resource.Entity.get('href')

    @handle_vcd_exception('error deleting catalog item')
    def delete(self):
        wait_if_task(self.client, self.client.do_xml_request(
            RequestMethod.DELETE, self.href))


class AdminCatalog(MetadataMixin):
    """Admin view of a catalog."""

    def __init__(self, client: VcdClient, href=None, resource=None,
                 logger_debug=NULL_LOGGER):
        if href is None and resource is None:
            raise ValueError("AdminCatalog initialization failed as "
                             "arguments are either invalid or None")
        self.client = client
        self.href = to_admin_catalog_href(
            href if href else resource.get('href'))
        self.resource = resource
        self.LOGGER = logger_debug

    @classmethod
    @handle_vcd_exception('error retrieving catalog')
    def get_by_href(cls, client: VcdClient, href) -> 'AdminCatalog':
        href = to_admin_catalog_href(href)
        return cls(client, href=href,
                   resource=client.do_xml_request(RequestMethod.GET, href),
                   logger_debug=client.LOGGER)

    @classmethod
    def get_by_id(cls, client: VcdClient, catalog_id) -> 'AdminCatalog':
        if not catalog_id:
            raise ValueError("empty catalog id")
        return cls.get_by_href(
            client,
            f"{client.get_admin_href()}catalog/{extract_uuid(catalog_id)}")

    @classmethod
    def get_by_name(cls, client: VcdClient, org_name, catalog_name) -> 'AdminCatalog':  # noqa: E501
        """Get a catalog by name within an org.

        :raises EntityNotFoundError: if the org has no such catalog. Other
            orgs having a catalog with that name are listed in the message.
        """
        if not catalog_name:
            raise ValueError("empty catalog name")
        records = QueryService(client).query(
            QueryType.ADMIN_CATALOG,
            filter=construct_filter_string({'name': catalog_name}))
        parent_orgs = []
        for record in records:
            if record.get('name') != catalog_name:
                continue
            if record.get('orgName') == org_name:
                return cls.get_by_href(client, record.get('href'))
            parent_orgs.append(record.get('orgName'))
        message = f"no catalog '{catalog_name}' found in org {org_name}"
        if parent_orgs:
            message += f" - found catalog {catalog_name} in orgs " \
                       f"{parent_orgs}"
        raise EntityNotFoundError(message)

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

    def get_org_href(self):
        for link in self.get_resource().iterchildren():
            if not isinstance(link.tag, str) or \
                    etree.QName(link).localname != 'Link':
                continue
            if link.get('rel') == 'up' and \
                    link.get('type') == ADMIN_ORG_MEDIA_TYPE:
                return link.get('href')
        raise EntityNotFoundError(f"catalog '{self.name}' has no parent "
                                  "org link")

    def get_tenant_context(self):
        return self.client.get_tenant_context(self.get_org_href())

    @handle_vcd_exception('error updating catalog')
    def update(self, name=None, description=None, is_published=None):
        """Update the catalog name, description or publication.

        Values left to None are kept as they are.
        """
        resource = self.get_resource()
        if description is None and hasattr(resource, 'Description'):
            description = str(resource.Description.text or '')
        if is_published is None and hasattr(resource, 'IsPublished'):
            is_published = str_to_bool(resource.IsPublished.text)

        catalog = E.AdminCatalog(name=name or self.name)
        if description is not None:
            catalog.append(E.Description(description))
        if is_published is not None:
            catalog.append(E.IsPublished(str(is_published).lower()))
        if hasattr(resource, 'CatalogStorageProfiles'):
            catalog.append(deepcopy(resource.CatalogStorageProfiles))
        self.resource = self.client.do_xml_request(
            RequestMethod.PUT, self.href, payload=catalog,
            content_type=MediaType.ADMIN_CATALOG.value)
        return self.resource

    @handle_vcd_exception('error deleting catalog')
    def delete(self, force=False, recursive=False):
        """Delete the catalog and wait for the task.

        :param bool force: delete even if items are in use
        :param bool recursive: delete the catalog items too
        """
        href = f"{self.href}?force={str(force).lower()}" \
               f"&recursive={str(recursive).lower()}"
        wait_if_task(self.client, self.client.do_xml_request(
            RequestMethod.DELETE, href))
        self.LOGGER.debug(f"Deleted catalog {self.href}")

    def get_catalog_items(self) -> List[CatalogItem]:
        """Get the items of the catalog, not fetched yet.

        Tenant sessions can only run the catalogItem query, the admin
        variant is reserved to system administrators.
        """
        query_type = QueryType.ADMIN_CATALOG_ITEM \
            if self.client.is_sysadmin() else QueryType.CATALOG_ITEM
        records = QueryService(self.client).query(
            query_type,
            filter=construct_filter_string({'catalog': self.id}))
        return [CatalogItem(self.client, href=record.get('href'))
                for record in records]

    # Access control, on the tenant view of the catalog

    def _tenant_href(self):
        return self.href.replace('/admin/', '/', 1)

    def _access_tenant_context(self, use_tenant_context):
        return self.get_tenant_context() if use_tenant_context else None

    def get_access_control(self, use_tenant_context=False):
        return access_control.get_access_control(
            self.client, self._tenant_href(),
            self._access_tenant_context(use_tenant_context))

    def set_access_control(self, settings=None, everyone_access_level=None,
                           use_tenant_context=False):
        return access_control.set_access_control(
            self.client, self._tenant_href(), settings=settings,
            everyone_access_level=everyone_access_level,
            tenant_context=self._access_tenant_context(use_tenant_context))

    def share_with_everyone(self, access_level=AccessLevel.READ_ONLY,
                            use_tenant_context=False):
        return access_control.share_with_everyone(
            self.client, self._tenant_href(), access_level,
            self._access_tenant_context(use_tenant_context))

    def unshare_from_everyone(self, use_tenant_context=False):
        return access_control.unshare_from_everyone(
            self.client, self._tenant_href(),
            self._access_tenant_context(use_tenant_context))

    def remove_access_control(self, use_tenant_context=False):
        return access_control.remove_access_control(
            self.client, self._tenant_href(),
            self._access_tenant_context(use_tenant_context))

    def is_shared(self, use_tenant_context=False):
        return self.get_access_control(use_tenant_context).is_shared()
