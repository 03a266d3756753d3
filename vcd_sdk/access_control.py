# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Sharing of xml api objects (catalogs, vApps, VDCs) with users and groups."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from enum import unique
from typing import List, Optional

from lxml import etree
from lxml import objectify

from vcd_sdk.client import get_tenant_context_headers
from vcd_sdk.client import TenantContext
from vcd_sdk.common.constants.shared_constants import MediaType
from vcd_sdk.common.constants.shared_constants import NSMAP
from vcd_sdk.common.constants.shared_constants import RequestMethod
from vcd_sdk.common.utils.core_utils import str_to_bool
from vcd_sdk.exception.exception_handler import handle_vcd_exception

E = objectify.ElementMaker(annotate=False,
                           namespace=NSMAP['vcloud'],
                           nsmap={None: NSMAP['vcloud']})


@unique
class AccessLevel(str, Enum):
    FULL_CONTROL = 'FullControl'
    CHANGE = 'Change'
    READ_ONLY = 'ReadOnly'


def validate_access_level(access_level) -> str:
    """Get the value of an access level, rejecting unknown ones.

    :raises ValueError: if the access level is not one of FullControl,
        Change or ReadOnly
    """
    try:
        return AccessLevel(access_level).value
    except ValueError:
        raise ValueError(
            f"invalid access level '{access_level}', expected one of "
            f"{[level.value for level in AccessLevel]}")


def _localname(element):
    return etree.QName(element).localname


@dataclass
class AccessSetting:
    subject_href: str
    subject_type: str
    access_level: str
    subject_name: Optional[str] = None

    def __post_init__(self):
        self.access_level = validate_access_level(self.access_level)

    @classmethod
    def from_xml(cls, element):
        subject = element.Subject
        return cls(subject_href=subject.get('href'),
                   subject_type=subject.get('type'),
                   subject_name=subject.get('name'),
                   access_level=str(element.AccessLevel.text))

    def to_xml(self):
        subject = E.Subject(href=self.subject_href, type=self.subject_type)
        if self.subject_name:
            subject.set('name', self.subject_name)
        return E.AccessSetting(subject, E.AccessLevel(self.access_level))


@dataclass
class ControlAccessParams:
    is_shared_to_everyone: bool = False
    everyone_access_level: Optional[str] = None
    access_settings: List[AccessSetting] = field(default_factory=list)

    @classmethod
    def from_xml(cls, element):
        params = cls()
        for child in element.iterchildren():
            if not isinstance(child.tag, str):
                continue
            name = _localname(child)
            if name == 'IsSharedToEveryone':
                params.is_shared_to_everyone = str_to_bool(child.text)
            elif name == 'EveryoneAccessLevel':
                params.everyone_access_level = str(child.text)
            elif name == 'AccessSettings':
                params.access_settings = [
                    AccessSetting.from_xml(setting)
                    for setting in child.iterchildren()
                    if isinstance(setting.tag, str)
                ]
        return params

    def validate(self):
        """Check the parameters before they are sent to vCD.

        :raises ValueError: if sharing with everyone and with subjects at the
            same time, if a subject appears twice or has no type
        """
        if self.is_shared_to_everyone:
            if self.access_settings:
                raise ValueError("can't share with everyone and set access "
                                 "settings at the same time")
            if not self.everyone_access_level:
                raise ValueError("everyone access level needs to be set when "
                                 "sharing with everyone")
            validate_access_level(self.everyone_access_level)
        seen = set()
        for setting in self.access_settings:
            if setting.subject_href in seen:
                raise ValueError(f"subject {setting.subject_name} "
                                 f"({setting.subject_href}) used more than "
                                 "once")
            seen.add(setting.subject_href)
            if not setting.subject_type:
                raise ValueError(f"subject {setting.subject_name} "
                                 f"({setting.subject_href}) has no type "
                                 "defined")

    def to_xml(self):
        params = E.ControlAccessParams(
            E.IsSharedToEveryone(str(self.is_shared_to_everyone).lower()))
        if self.is_shared_to_everyone:
            params.append(E.EveryoneAccessLevel(self.everyone_access_level))
        if self.access_settings:
            params.append(E.AccessSettings(
                *[setting.to_xml() for setting in self.access_settings]))
        return params

    def is_shared(self):
        return self.is_shared_to_everyone or bool(self.access_settings)


@handle_vcd_exception('error retrieving access control')
def get_access_control(client, href,
                       tenant_context: TenantContext = None) -> ControlAccessParams:  # noqa: E501
    """Get the sharing settings of an object.

    :param VcdClient client: authenticated client
    :param str href: href of the object, non admin view
    :param TenantContext tenant_context: org to act in, for providers

    :rtype: ControlAccessParams
    """
    resource = client.do_xml_request(
        RequestMethod.GET, f"{href}/controlAccess",
        additional_headers=get_tenant_context_headers(tenant_context))
    return ControlAccessParams.from_xml(resource)


@handle_vcd_exception('error setting access control')
def set_access_control(client, href, settings: List[AccessSetting] = None,
                       everyone_access_level=None,
                       tenant_context: TenantContext = None,
                       method=RequestMethod.POST) -> ControlAccessParams:
    """Replace the sharing settings of an object.

    With an everyone access level the object is shared with the whole org,
    otherwise with the subjects of the settings only. No settings and no
    everyone access level means the object is not shared.

    VDCs take the settings with PUT, other objects with POST.

    :return: the settings as saved by vCD
    :rtype: ControlAccessParams
    """
    params = ControlAccessParams(
        is_shared_to_everyone=everyone_access_level is not None,
        everyone_access_level=everyone_access_level,
        access_settings=list(settings or []))
    params.validate()
    resource = client.do_xml_request(
        method, f"{href}/action/controlAccess",
        payload=params.to_xml(),
        content_type=MediaType.CONTROL_ACCESS.value,
        additional_headers=get_tenant_context_headers(tenant_context))
    if resource is None:
        return params
    return ControlAccessParams.from_xml(resource)


def share_with_everyone(client, href, access_level=AccessLevel.READ_ONLY,
                        tenant_context: TenantContext = None):
    return set_access_control(client, href,
                              everyone_access_level=validate_access_level(access_level),  # noqa: E501
                              tenant_context=tenant_context)


def unshare_from_everyone(client, href,
                          tenant_context: TenantContext = None):
    """Stop sharing with everyone, keeping the subject settings if any."""
    current = get_access_control(client, href, tenant_context)
    return set_access_control(client, href,
                              settings=current.access_settings,
                              tenant_context=tenant_context)


def remove_access_control(client, href,
                          tenant_context: TenantContext = None):
    """Stop sharing the object with anyone."""
    return set_access_control(client, href, tenant_context=tenant_context)
