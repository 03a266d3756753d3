# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from typing import List

from vcd_sdk.client import VcdClient
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.models import openapi_models


def _config(query_parameters=None):
    return generic_crud.CrudConfig(endpoint=CloudApiResource.VGPU_PROFILES,
                                   entity_label='vGPU profile',
                                   query_parameters=query_parameters)


class VgpuProfile:
    """A vGPU profile, synchronized from the vCenter hosts by vCD.

    Profiles can't be created or deleted, only their tenant facing name and
    instructions can be changed.
    """

    def __init__(self, client: VcdClient,
                 vgpu_profile: openapi_models.VgpuProfile):
        self.client = client
        self.vgpu_profile = vgpu_profile

    @classmethod
    def get_all(cls, client: VcdClient, query_parameters=None) -> List['VgpuProfile']:  # noqa: E501
        return generic_crud.get_all_outer_entities(
            client, lambda profile: cls(client, profile),
            _config(query_parameters), openapi_models.VgpuProfile)

    @classmethod
    def get_by_id(cls, client: VcdClient, vgpu_profile_id) -> 'VgpuProfile':
        if not vgpu_profile_id:
            raise ValueError("empty vGPU profile id")
        return cls(client, generic_crud.get_inner_entity(
            client, _config(), vgpu_profile_id, openapi_models.VgpuProfile))

    @classmethod
    def get_by_name(cls, client: VcdClient, name) -> 'VgpuProfile':
        return cls(client, generic_crud.get_inner_entity_by_name(
            client, _config(), name, openapi_models.VgpuProfile))

    @property
    def id(self):
        return self.vgpu_profile.id

    @property
    def name(self):
        return self.vgpu_profile.name

    def update(self) -> 'VgpuProfile':
        self.vgpu_profile = generic_crud.update_inner_entity(
            self.client, _config(), self.id, self.vgpu_profile,
            openapi_models.VgpuProfile)
        return self
