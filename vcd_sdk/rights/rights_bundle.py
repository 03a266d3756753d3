# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from dataclasses import replace
from typing import List

from vcd_sdk.client import VcdClient
from vcd_sdk.common.utils.core_utils import build_urn
from vcd_sdk.exception.exceptions import EntityNotFoundError
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.logging.logger import NULL_LOGGER
from vcd_sdk.models import openapi_models
from vcd_sdk.models.openapi_models import DEFAULT_RIGHTS_BUNDLE_KEY
from vcd_sdk.models.openapi_models import OpenApiReference
from vcd_sdk.models.openapi_models import OpenApiReferences
from vcd_sdk.models.openapi_models import Right


def _references_payload(references):
    return OpenApiReferences(values=list(references))


def to_org_reference(org_id) -> OpenApiReference:
    """Build an org reference out of an org urn or bare uuid."""
    return OpenApiReference(id=build_urn('org', org_id))


class RightsBundleManager:
    """Lookup and creation of rights bundles. Needs a provider session."""

    def __init__(self, client: VcdClient, logger_debug=NULL_LOGGER):
        self.client = client
        self.LOGGER = logger_debug

    def _config(self, query_parameters=None):
        return generic_crud.CrudConfig(
            endpoint=CloudApiResource.RIGHTS_BUNDLES,
            entity_label='rights bundle',
            query_parameters=query_parameters)

    def _wrap(self, rights_bundle):
        return RightsBundle(self.client, rights_bundle, self.LOGGER)

    def get_all_rights_bundles(self, query_parameters=None) -> List['RightsBundle']:  # noqa: E501
        return generic_crud.get_all_outer_entities(
            self.client, self._wrap, self._config(query_parameters),
            openapi_models.RightsBundle)

    def get_rights_bundle_by_name(self, name) -> 'RightsBundle':
        return self._wrap(generic_crud.get_inner_entity_by_name(
            self.client, self._config(), name, openapi_models.RightsBundle))

    def get_rights_bundle_by_id(self, rights_bundle_id) -> 'RightsBundle':
        if not rights_bundle_id:
            raise ValueError("empty rights bundle id")
        return generic_crud.get_outer_entity(
            self.client, self._wrap, self._config(), rights_bundle_id,
            openapi_models.RightsBundle)

    def create_rights_bundle(self, rights_bundle: openapi_models.RightsBundle) -> 'RightsBundle':  # noqa: E501
        """Create a rights bundle.

        The bundle key defaults to com.vmware.vcloud.undefined.key and the
        bundle is not published to any tenant.
        """
        if not rights_bundle.bundle_key:
            rights_bundle = replace(rights_bundle,
                                    bundle_key=DEFAULT_RIGHTS_BUNDLE_KEY)
        self.LOGGER.debug(f"Creating rights bundle '{rights_bundle.name}'")
        return generic_crud.create_outer_entity(
            self.client, self._wrap, self._config(), rights_bundle,
            openapi_models.RightsBundle)


class RightsBundle:
    """A rights bundle and the operations on its rights and tenants."""

    def __init__(self, client: VcdClient,
                 rights_bundle: openapi_models.RightsBundle,
                 logger_debug=NULL_LOGGER):
        self.client = client
        self.rights_bundle = rights_bundle
        self.LOGGER = logger_debug

    @property
    def id(self):
        return self.rights_bundle.id

    @property
    def name(self):
        return self.rights_bundle.name

    def _config(self, endpoint, entity_label, query_parameters=None):
        if not self.id:
            raise ValueError("rights bundle has no id, it must be created "
                             "or fetched first")
        if endpoint == CloudApiResource.RIGHTS_BUNDLES:
            endpoint_params = ()
        else:
            endpoint_params = (self.id,)
        return generic_crud.CrudConfig(endpoint=endpoint,
                                       entity_label=entity_label,
                                       endpoint_params=endpoint_params,
                                       query_parameters=query_parameters)

    def update(self) -> 'RightsBundle':
        self.rights_bundle = generic_crud.update_inner_entity(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLES, 'rights bundle'),
            self.id, self.rights_bundle, openapi_models.RightsBundle)
        return self

    def delete(self):
        generic_crud.delete_entity_by_id(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLES, 'rights bundle'),
            self.id)
        self.rights_bundle.id = None

    # Rights

    def get_rights(self, query_parameters=None) -> List[Right]:
        return generic_crud.get_all_inner_entities(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLE_RIGHTS,
                         'rights bundle rights', query_parameters),
            Right)

    def _put_rights(self, rights: List[OpenApiReference]):
        generic_crud.update_inner_entity(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLE_RIGHTS,
                         'rights bundle rights'),
            '', _references_payload(rights))

    def add_rights(self, new_rights: List[OpenApiReference]):
        """Add rights to the bundle, keeping the ones already in it."""
        rights = [OpenApiReference(name=right.name, id=right.id)
                  for right in self.get_rights()]
        existing_ids = {right.id for right in rights}
        added = [right for right in new_rights if right.id not in existing_ids]  # noqa: E501
        if not added:
            self.LOGGER.debug(f"No new rights to add to rights bundle "
                              f"'{self.name}'")
            return
        self._put_rights(rights + added)

    def update_rights(self, new_rights: List[OpenApiReference]):
        """Replace the rights of the bundle with the given ones."""
        self._put_rights(new_rights)

    def remove_rights(self, remove_rights: List[OpenApiReference]):
        """Remove rights from the bundle.

        :raises EntityNotFoundError: if one of the rights is not in the
            bundle
        """
        rights = [OpenApiReference(name=right.name, id=right.id)
                  for right in self.get_rights()]
        existing_ids = {right.id for right in rights}
        for right in remove_rights:
            if right.id not in existing_ids:
                raise EntityNotFoundError(
                    f"right '{right.name or right.id}' not found in rights "
                    f"bundle '{self.name}'")
        removed_ids = {right.id for right in remove_rights}
        self._put_rights([right for right in rights
                          if right.id not in removed_ids])

    def remove_all_rights(self):
        self._put_rights([])

    # Tenants

    def get_tenants(self, query_parameters=None) -> List[OpenApiReference]:
        return generic_crud.get_all_inner_entities(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLE_TENANTS,
                         'rights bundle tenants', query_parameters),
            OpenApiReference)

    def publish_tenants(self, tenants: List[OpenApiReference]):
        generic_crud.create_inner_entity(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLE_TENANTS_PUBLISH,
                         'rights bundle publication'),
            _references_payload(tenants))

    def unpublish_tenants(self, tenants: List[OpenApiReference]):
        generic_crud.create_inner_entity(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLE_TENANTS_UNPUBLISH,
                         'rights bundle publication'),
            _references_payload(tenants))

    def replace_tenants(self, tenants: List[OpenApiReference]):
        """Publish the bundle to the given tenants only."""
        generic_crud.update_inner_entity(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLE_TENANTS,
                         'rights bundle publication'),
            '', _references_payload(tenants))

    def publish_all_tenants(self):
        generic_crud.create_inner_entity(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLE_TENANTS_PUBLISH_ALL,
                         'rights bundle publication'),
            None)
        self.rights_bundle.publish_all = True

    def unpublish_all_tenants(self):
        generic_crud.create_inner_entity(
            self.client,
            self._config(CloudApiResource.RIGHTS_BUNDLE_TENANTS_UNPUBLISH_ALL,
                         'rights bundle publication'),
            None)
        self.rights_bundle.publish_all = False
