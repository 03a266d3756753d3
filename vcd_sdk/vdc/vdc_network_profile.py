# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Network profile of an org VDC.

A VDC always has exactly one network profile, so the profile is read and
written as a whole. Deleting it resets every field to its default.
"""

from vcd_sdk.client import VcdClient
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.models.openapi_models import VdcNetworkProfile


def _config(vdc_id):
    if not vdc_id:
        raise ValueError("empty VDC id")
    return generic_crud.CrudConfig(
        endpoint=CloudApiResource.VDC_NETWORK_PROFILE,
        entity_label='VDC network profile',
        endpoint_params=(vdc_id,))


def get_vdc_network_profile(client: VcdClient, vdc_id) -> VdcNetworkProfile:
    return generic_crud.get_inner_entity(client, _config(vdc_id),
                                         inner_type=VdcNetworkProfile)


def update_vdc_network_profile(client: VcdClient, vdc_id,
                               network_profile: VdcNetworkProfile) -> VdcNetworkProfile:  # noqa: E501
    """Replace the network profile of a VDC.

    :return: the profile as saved by vCD
    """
    return generic_crud.update_inner_entity(client, _config(vdc_id), '',
                                            network_profile,
                                            VdcNetworkProfile)


def delete_vdc_network_profile(client: VcdClient, vdc_id):
    generic_crud.delete_entity_by_id(client, _config(vdc_id))
