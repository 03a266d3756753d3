# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from typing import List

from vcd_sdk.client import VcdClient
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.models import openapi_models
from vcd_sdk.models.openapi_models import NsxtGlobalDefaultSegmentProfileTemplate  # noqa: E501


def _config(query_parameters=None):
    return generic_crud.CrudConfig(
        endpoint=CloudApiResource.SEGMENT_PROFILE_TEMPLATES,
        entity_label='NSX-T Segment Profile Template',
        query_parameters=query_parameters)


def _global_default_config():
    return generic_crud.CrudConfig(
        endpoint=CloudApiResource.SEGMENT_PROFILE_TEMPLATES_GLOBAL_DEFAULT,
        entity_label='global default NSX-T Segment Profile Templates')


class NsxtSegmentProfileTemplate:
    def __init__(self, client: VcdClient,
                 template: openapi_models.NsxtSegmentProfileTemplate):
        self.client = client
        self.template = template

    @classmethod
    def _wrapper(cls, client):
        return lambda template: cls(client, template)

    @classmethod
    def create(cls, client: VcdClient,
               template: openapi_models.NsxtSegmentProfileTemplate) -> 'NsxtSegmentProfileTemplate':  # noqa: E501
        return generic_crud.create_outer_entity(
            client, cls._wrapper(client), _config(), template,
            openapi_models.NsxtSegmentProfileTemplate)

    @classmethod
    def get_all(cls, client: VcdClient, query_parameters=None) -> List['NsxtSegmentProfileTemplate']:  # noqa: E501
        return generic_crud.get_all_outer_entities(
            client, cls._wrapper(client), _config(query_parameters),
            openapi_models.NsxtSegmentProfileTemplate)

    @classmethod
    def get_by_id(cls, client: VcdClient, template_id) -> 'NsxtSegmentProfileTemplate':  # noqa: E501
        if not template_id:
            raise ValueError("empty NSX-T Segment Profile Template id")
        return generic_crud.get_outer_entity(
            client, cls._wrapper(client), _config(), template_id,
            openapi_models.NsxtSegmentProfileTemplate)

    @classmethod
    def get_by_name(cls, client: VcdClient, name) -> 'NsxtSegmentProfileTemplate':  # noqa: E501
        return cls(client, generic_crud.get_inner_entity_by_name(
            client, _config(), name,
            openapi_models.NsxtSegmentProfileTemplate))

    @property
    def id(self):
        return self.template.id

    @property
    def name(self):
        return self.template.name

    def update(self) -> 'NsxtSegmentProfileTemplate':
        self.template = generic_crud.update_inner_entity(
            self.client, _config(), self.id, self.template,
            openapi_models.NsxtSegmentProfileTemplate)
        return self

    def delete(self):
        if not self.id:
            raise ValueError("NSX-T Segment Profile Template must have id")
        generic_crud.delete_entity_by_id(self.client, _config(), self.id)


def get_global_default_segment_profile_templates(client: VcdClient) -> NsxtGlobalDefaultSegmentProfileTemplate:  # noqa: E501
    """Get the templates used by new VDC and vApp networks by default."""
    return generic_crud.get_inner_entity(
        client, _global_default_config(),
        inner_type=NsxtGlobalDefaultSegmentProfileTemplate)


def update_global_default_segment_profile_templates(
        client: VcdClient,
        defaults: NsxtGlobalDefaultSegmentProfileTemplate) -> NsxtGlobalDefaultSegmentProfileTemplate:  # noqa: E501
    return generic_crud.update_inner_entity(
        client, _global_default_config(), '', defaults,
        NsxtGlobalDefaultSegmentProfileTemplate)
