# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from copy import deepcopy
from typing import List

from lxml import etree

from vcd_sdk.client import VcdClient
from vcd_sdk.common.constants.shared_constants import MediaType
from vcd_sdk.common.constants.shared_constants import RequestMethod
from vcd_sdk.common.utils.core_utils import construct_filter_string
from vcd_sdk.common.utils.core_utils import extract_uuid
from vcd_sdk.common.utils.core_utils import str_to_bool
from vcd_sdk.exception.exception_handler import handle_vcd_exception
from vcd_sdk.exception.exceptions import EntityNotFoundError
from vcd_sdk.exception.exceptions import MultipleEntitiesFoundError
from vcd_sdk.logging.logger import NULL_LOGGER
from vcd_sdk.metadata.metadata_service import E
from vcd_sdk.metadata.metadata_service import MetadataMixin
from vcd_sdk.query import QueryService
from vcd_sdk.query import QueryType
from vcd_sdk.task import wait_if_task


def to_admin_vdc_href(href):
    return href.replace('/api/vdc/', '/api/admin/vdc/', 1)


def _localname(element):
    return etree.QName(element).localname


def _bool_text(value):
    return str(bool(value)).lower()


class AdminVdc(MetadataMixin):
    """Admin view of an organization VDC."""

    def __init__(self, client: VcdClient, href=None, resource=None,
                 logger_debug=NULL_LOGGER):
        if href is None and resource is None:
            raise ValueError("AdminVdc initialization failed as "
                             "arguments are either invalid or None")
        self.client = client
        self.href = to_admin_vdc_href(href if href else resource.get('href'))
        self.resource = resource
        self.LOGGER = logger_debug

    @classmethod
    @handle_vcd_exception('error retrieving VDC')
    def get_by_href(cls, client: VcdClient, href) -> 'AdminVdc':
        href = to_admin_vdc_href(href)
        return cls(client, href=href,
                   resource=client.do_xml_request(RequestMethod.GET, href),
                   logger_debug=client.LOGGER)

    @classmethod
    def get_by_id(cls, client: VcdClient, vdc_id) -> 'AdminVdc':
        if not vdc_id:
            raise ValueError("empty VDC id")
        return cls.get_by_href(
            client, f"{client.get_admin_href()}vdc/{extract_uuid(vdc_id)}")

    @classmethod
    def get_by_name(cls, client: VcdClient, org_name, vdc_name) -> 'AdminVdc':  # noqa: E501
        """Get a VDC by name within an org.

        :raises EntityNotFoundError: if the org has no such VDC
        """
        if not vdc_name:
            raise ValueError("empty VDC name")
        record = QueryService(client).query_one(
            QueryType.ADMIN_ORG_VDC, 'name', vdc_name,
            filter=construct_filter_string({'name': vdc_name,
                                            'orgName': org_name}))
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

    @handle_vcd_exception('error updating VDC')
    def update(self, name=None, description=None):
        """Update the VDC from its current resource.

        Changes made to the resource by the caller are sent along with the
        name and description given here. The VDC is refreshed once the
        update task is done.
        """
        vdc = deepcopy(self.get_resource())
        if name:
            vdc.set('name', name)
        if description is not None:
            new_description = E.Description(description)
            if hasattr(vdc, 'Description'):
                vdc.replace(vdc.Description, new_description)
            else:
                links = [child for child in vdc.iterchildren()
                         if _localname(child) == 'Link']
                vdc.insert(vdc.index(links[-1]) + 1 if links else 0,
                           new_description)
        # read only, rejected by the server
        for child in list(vdc.iterchildren()):
            if _localname(child) == 'ResourcePoolRefs':
                vdc.remove(child)
        wait_if_task(self.client, self.client.do_xml_request(
            RequestMethod.PUT, self.href, payload=vdc,
            content_type=MediaType.ADMIN_VDC.value))
        self.LOGGER.debug(f"Updated VDC {self.href}")
        return self.refresh()

    # Storage profiles

    def get_storage_profile_references(self) -> List:
        resource = self.get_resource()
        if not hasattr(resource, 'VdcStorageProfiles'):
            return []
        return list(getattr(resource.VdcStorageProfiles,
                            'VdcStorageProfile', []))

    def _get_storage_profile_reference(self, name):
        for reference in self.get_storage_profile_references():
            if reference.get('name') == name:
                return reference
        raise EntityNotFoundError(f"storage profile '{name}' not found in "
                                  f"VDC {self.name}")

    def get_storage_profile(self, href):
        return self.client.do_xml_request(RequestMethod.GET, href)

    def _update_storage_profile(self, profile, enabled, default):
        """Save a VDC storage profile with new enabled and default flags."""
        updated = E.AdminVdcStorageProfile(
            E.Enabled(_bool_text(enabled)),
            E.Units(str(profile.Units.text)),
            E.Limit(str(profile.Limit.text)),
            E.Default(_bool_text(default)),
            E.ProviderVdcStorageProfile(
                href=profile.ProviderVdcStorageProfile.get('href')),
            name=profile.get('name'))
        return self.client.do_xml_request(
            RequestMethod.PUT,
            f"{self.client.get_admin_href()}vdcStorageProfile/"
            f"{extract_uuid(profile.get('href'))}",
            payload=updated,
            content_type=MediaType.ADMIN_VDC_STORAGE_PROFILE.value)

    def _update_storage_profiles(self, update):
        wait_if_task(self.client, self.client.do_xml_request(
            RequestMethod.POST, f"{self.href}/vdcStorageProfiles",
            payload=update,
            content_type=MediaType.UPDATE_VDC_STORAGE_PROFILES.value))
        return self.refresh()

    @handle_vcd_exception('error adding VDC storage profile')
    def add_storage_profile(self, provider_vdc_storage_profile_href, name,
                            limit=0, units='MB', enabled=True, default=False,
                            description=''):
        """Add a storage profile of the Provider VDC to the VDC.

        :param str provider_vdc_storage_profile_href: storage profile of the
            Provider VDC backing this VDC
        :param str name: name of the storage profile
        :param int limit: storage limit in units, 0 means unlimited

        :return: the refreshed VDC resource
        """
        return self._update_storage_profiles(E.UpdateVdcStorageProfiles(
            E.Description(description),
            E.AddStorageProfile(
                E.Enabled(_bool_text(enabled)),
                E.Units(units),
                E.Limit(str(limit)),
                E.Default(_bool_text(default)),
                E.ProviderVdcStorageProfile(
                    href=provider_vdc_storage_profile_href, name=name)),
            name=name))

    @handle_vcd_exception('error removing VDC storage profile')
    def remove_storage_profile(self, name):
        """Remove a storage profile from the VDC.

        Enabled storage profiles are disabled first, the server refuses to
        remove them otherwise.
        """
        reference = self._get_storage_profile_reference(name)
        profile = self.get_storage_profile(reference.get('href'))
        if hasattr(profile, 'Enabled') and str_to_bool(profile.Enabled.text):
            self._update_storage_profile(profile, enabled=False,
                                         default=False)
        result = self._update_storage_profiles(E.UpdateVdcStorageProfiles(
            E.Description(''),
            E.RemoveStorageProfile(href=reference.get('href')),
            name=profile.get('name')))
        self.LOGGER.debug(f"Removed storage profile {name} from VDC "
                          f"{self.href}")
        return result

    @handle_vcd_exception('error setting VDC default storage profile')
    def set_default_storage_profile(self, name):
        """Make a storage profile the default one of the VDC.

        The previous default storage profile is unset by the server.
        """
        reference = self._get_storage_profile_reference(name)
        profile = self.get_storage_profile(reference.get('href'))
        self._update_storage_profile(profile, enabled=True, default=True)
        return self.refresh()

    @handle_vcd_exception('error getting VDC default storage profile')
    def get_default_storage_profile_reference(self):
        """Find the reference of the default storage profile of the VDC.

        :raises EntityNotFoundError: if no storage profile is the default
        :raises MultipleEntitiesFoundError: if several are
        """
        references = self.get_storage_profile_references()
        if not references:
            raise EntityNotFoundError(
                f"no storage profiles found in VDC {self.name}")
        default_references = []
        for reference in references:
            profile = self.get_storage_profile(reference.get('href'))
            if hasattr(profile, 'Default') and \
                    str_to_bool(profile.Default.text):
                default_references.append(reference)
        if not default_references:
            raise EntityNotFoundError(
                f"no default storage profile found for VDC {self.name}")
        if len(default_references) > 1:
            raise MultipleEntitiesFoundError(
                f"more than one default storage profile found for VDC "
                f"{self.name}: "
                f"{[reference.get('name') for reference in default_references]}")  # noqa: E501
        return default_references[0]
