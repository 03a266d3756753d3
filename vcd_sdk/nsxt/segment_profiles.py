# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Read-only NSX-T segment profiles, the building blocks of templates.

Listing any of them needs a context filter on an NSX-T manager, an org
VDC or a VDC group, see segment_profile_context_filter().
"""

from enum import Enum
from enum import unique
from typing import List

from vcd_sdk.client import VcdClient
from vcd_sdk.common.constants.shared_constants import PaginationKey
from vcd_sdk.common.utils.core_utils import construct_filter_string
from vcd_sdk.common.utils.core_utils import one_or_error
from vcd_sdk.exception.exceptions import VcdError
import vcd_sdk.lib.cloudapi.generic_crud as generic_crud
from vcd_sdk.lib.cloudapi.constants import CloudApiResource
from vcd_sdk.models import openapi_models


@unique
class SegmentProfileType(Enum):
    IP_DISCOVERY = (CloudApiResource.SEGMENT_IP_DISCOVERY_PROFILES,
                    'IP Discovery Profiles',
                    openapi_models.NsxtIpDiscoveryProfile)
    MAC_DISCOVERY = (CloudApiResource.SEGMENT_MAC_DISCOVERY_PROFILES,
                     'MAC Discovery Profiles',
                     openapi_models.NsxtMacDiscoveryProfile)
    SPOOF_GUARD = (CloudApiResource.SEGMENT_SPOOF_GUARD_PROFILES,
                   'Spoof Guard Profiles',
                   openapi_models.NsxtSpoofGuardProfile)
    QOS = (CloudApiResource.SEGMENT_QOS_PROFILES,
           'QoS Profiles',
           openapi_models.NsxtQosProfile)
    SEGMENT_SECURITY = (CloudApiResource.SEGMENT_SECURITY_PROFILES,
                        'Segment Security Profiles',
                        openapi_models.NsxtSegmentSecurityProfile)

    def __init__(self, endpoint, entity_label, model):
        self.endpoint = endpoint
        self.entity_label = entity_label
        self.model = model


def _config(profile_type: SegmentProfileType, query_parameters=None):
    return generic_crud.CrudConfig(
        endpoint=profile_type.endpoint,
        entity_label=profile_type.entity_label,
        query_parameters=query_parameters)


def segment_profile_context_filter(nsxt_manager_id=None, org_vdc_id=None,
                                   vdc_group_id=None) -> dict:
    """Build the query parameters scoping a segment profile listing.

    :return: query parameters with a filter on the given context
    :rtype: dict

    :raises ValueError: if no context is given
    """
    filter_string = construct_filter_string({
        'nsxTManagerRef.id': nsxt_manager_id,
        'orgVdcId': org_vdc_id,
        'vdcGroupId': vdc_group_id})
    if not filter_string:
        raise ValueError("segment profiles can only be listed within an "
                         "NSX-T manager, org VDC or VDC group")
    return {PaginationKey.FILTER.value: filter_string}


def get_all_segment_profiles(client: VcdClient,
                             profile_type: SegmentProfileType,
                             query_parameters=None) -> List[openapi_models.NsxtSegmentProfile]:  # noqa: E501
    """Get all the segment profiles of a type.

    :param SegmentProfileType profile_type: kind of profile listed
    :param dict query_parameters: must carry a context filter
    """
    return generic_crud.get_all_inner_entities(
        client, _config(profile_type, query_parameters), profile_type.model)


def get_segment_profile_by_name(client: VcdClient,
                                profile_type: SegmentProfileType, name,
                                query_parameters=None) -> openapi_models.NsxtSegmentProfile:  # noqa: E501
    """Get a segment profile by its display name.

    The endpoints do not filter on displayName, matching is done on the
    listing.

    :raises EntityNotFoundError: if no profile has this name
    :raises MultipleEntitiesFoundError: if several profiles have this name
    """
    if not name:
        raise ValueError(f"empty {profile_type.entity_label} name")
    try:
        profiles = get_all_segment_profiles(client, profile_type,
                                            query_parameters)
    except VcdError as err:
        raise err.add_prefix(
            f"error getting {profile_type.entity_label} by name '{name}'")
    return one_or_error(
        'displayName', name,
        [profile for profile in profiles if profile.display_name == name])
