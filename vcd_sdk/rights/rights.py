# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from typing import List

from vcd_sdk.client import get_tenant_context_headers
from vcd_sdk.client import TenantContext
from vcd_sdk.client import VcdClient
from vcd_sdk.exception.exceptions import EntityNotFoundError
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.models.openapi_models import Right
from vcd_sdk.models.openapi_models import RightsCategory


class RightsService:
    """Read access to the rights and rights categories of vCD.

    With a tenant context the rights are the ones visible to that org.
    """

    def __init__(self, client: VcdClient,
                 tenant_context: TenantContext = None):
        self.client = client
        self.tenant_context = tenant_context

    def _config(self, endpoint, entity_label, query_parameters=None):
        return generic_crud.CrudConfig(
            endpoint=endpoint,
            entity_label=entity_label,
            query_parameters=query_parameters,
            additional_header=get_tenant_context_headers(self.tenant_context))  # noqa: E501

    def get_all_rights(self, query_parameters=None) -> List[Right]:
        return generic_crud.get_all_inner_entities(
            self.client,
            self._config(CloudApiResource.RIGHTS, 'rights', query_parameters),
            Right)

    def get_right_by_id(self, right_id) -> Right:
        if not right_id:
            raise ValueError("empty right id")
        return generic_crud.get_inner_entity(
            self.client, self._config(CloudApiResource.RIGHTS, 'right'),
            right_id, Right)

    def get_right_by_name(self, name) -> Right:
        """Get a right by its exact name.

        Names with commas or semicolons can't be used in a filter, all rights
        are fetched and compared instead. The first right with that name is
        returned in that case.

        :raises EntityNotFoundError: if there is no such right
        :raises MultipleEntitiesFoundError: if several rights match the
            filter
        """
        if not name:
            raise ValueError("empty right name")
        config = self._config(CloudApiResource.RIGHTS, 'right')
        if ',' not in name and ';' not in name:
            return generic_crud.get_inner_entity_by_name(self.client, config,
                                                         name, Right)
        for right in self.get_all_rights():
            if right.name == name:
                return right
        raise EntityNotFoundError(
            f"{EntityNotFoundError().msg}: got zero entities by name '{name}'")  # noqa: E501

    def get_rights_categories(self, query_parameters=None) -> List[RightsCategory]:  # noqa: E501
        return generic_crud.get_all_inner_entities(
            self.client,
            self._config(CloudApiResource.RIGHTS_CATEGORIES,
                         'rights categories', query_parameters),
            RightsCategory)

    def get_rights_category_by_id(self, category_id) -> RightsCategory:
        if not category_id:
            raise ValueError("empty rights category id")
        return generic_crud.get_inner_entity(
            self.client,
            self._config(CloudApiResource.RIGHTS_CATEGORIES, 'rights category'),  # noqa: E501
            category_id, RightsCategory)
