# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from enum import Enum
from enum import unique
from typing import List, Optional

from lxml import objectify

from vcd_sdk.common.constants.shared_constants import MediaType
from vcd_sdk.common.constants.shared_constants import NSMAP
from vcd_sdk.common.constants.shared_constants import RequestMethod
from vcd_sdk.common.utils.core_utils import str_to_bool
from vcd_sdk.exception.exception_handler import handle_vcd_exception
from vcd_sdk.exception.exceptions import VcdResponseError
from vcd_sdk.metadata import ignored_metadata

E = objectify.ElementMaker(annotate=False,
                           namespace=NSMAP['vcloud'],
                           nsmap={None: NSMAP['vcloud'],
                                  'xsi': NSMAP['xsi']})

XSI_TYPE = f"{{{NSMAP['xsi']}}}type"


@unique
class MetadataValueType(str, Enum):
    STRING = 'MetadataStringValue'
    NUMBER = 'MetadataNumberValue'
    DATETIME = 'MetadataDateTimeValue'
    BOOLEAN = 'MetadataBooleanValue'


@unique
class MetadataVisibility(str, Enum):
    READ_WRITE = 'READWRITE'
    READ_ONLY = 'READONLY'
    # hidden from tenants
    PRIVATE = 'PRIVATE'


@unique
class MetadataDomain(str, Enum):
    GENERAL = 'GENERAL'
    SYSTEM = 'SYSTEM'


def _vcloud_tag(name):
    return f"{{{NSMAP['vcloud']}}}{name}"


def _child_text(element, name):
    child = element.find(_vcloud_tag(name))
    if child is None or child.text is None:
        return None
    return str(child.text)


@dataclass
class MetadataEntry:
    """A single metadata entry.

    value is kept in its textual form, typed_value() converts it according
    to the value type.
    """

    key: str
    value: str
    type: str = MetadataValueType.STRING.value
    domain: str = MetadataDomain.GENERAL.value
    visibility: str = MetadataVisibility.READ_WRITE.value

    @property
    def is_system(self):
        return self.domain == MetadataDomain.SYSTEM.value

    def typed_value(self):
        if self.value is None:
            return None
        if self.type == MetadataValueType.NUMBER.value:
            number = float(self.value)
            return int(number) if number.is_integer() else number
        if self.type == MetadataValueType.BOOLEAN.value:
            return str_to_bool(self.value)
        if self.type == MetadataValueType.DATETIME.value:
            return datetime.fromisoformat(self.value.replace('Z', '+00:00'))
        return self.value

    @classmethod
    def from_xml(cls, element, key=None):
        """Build an entry out of a MetadataEntry or a MetadataValue element.

        :param lxml.objectify.ObjectifiedElement element: the xml element
        :param str key: key of the entry, MetadataValue elements don't carry
            it
        """
        domain = element.find(_vcloud_tag('Domain'))
        typed_value = element.find(_vcloud_tag('TypedValue'))
        entry = cls(key=key if key is not None else _child_text(element, 'Key'),  # noqa: E501
                    value=None)
        if typed_value is not None:
            entry.type = typed_value.get(XSI_TYPE, entry.type)
            entry.value = _child_text(typed_value, 'Value')
        if domain is not None:
            entry.domain = str(domain.text)
            entry.visibility = domain.get('visibility', entry.visibility)
        return entry

    def _typed_value_xml(self):
        return E.TypedValue({XSI_TYPE: self.type}, E.Value(self.value))

    def to_value_xml(self):
        return E.MetadataValue(E.Domain(self.domain,
                                        visibility=self.visibility),
                               self._typed_value_xml())

    def to_entry_xml(self):
        return E.MetadataEntry(E.Domain(self.domain,
                                        visibility=self.visibility),
                               E.Key(self.key),
                               self._typed_value_xml())


@dataclass
class Metadata:
    href: Optional[str] = None
    entries: List[MetadataEntry] = field(default_factory=list)

    @classmethod
    def from_xml(cls, element):
        entries = [MetadataEntry.from_xml(entry) for entry in
                   element.findall(_vcloud_tag('MetadataEntry'))]
        return cls(href=element.get('href'), entries=entries)

    def to_xml(self):
        return E.Metadata(*[entry.to_entry_xml() for entry in self.entries])

    def get_entry(self, key, is_system=False):
        for entry in self.entries:
            if entry.key == key and entry.is_system == is_system:
                return entry
        return None

    def as_dict(self):
        """Map general entry keys and 'SYSTEM/'-prefixed system keys to values."""  # noqa: E501
        return {(f"SYSTEM/{entry.key}" if entry.is_system else entry.key): entry.typed_value()  # noqa: E501
                for entry in self.entries}


def get_metadata_href(href, key=None, is_system=False):
    """Build the url of the metadata of an object, or of one of its keys."""
    metadata_href = f"{href.rstrip('/')}/metadata"
    if key is None:
        return metadata_href
    if is_system:
        return f"{metadata_href}/{MetadataDomain.SYSTEM.value}/{key}"
    return f"{metadata_href}/{key}"


class MetadataService:
    """Metadata operations on any object of the xml api.

    The ignored metadata rules of the client apply to every operation.
    """

    def __init__(self, client):
        self.client = client

    @property
    def rules(self):
        return self.client.ignored_metadata

    @handle_vcd_exception('error retrieving metadata')
    def get_metadata(self, href, object_name=None) -> Metadata:
        """Get all metadata entries of an object, minus the ignored ones.

        :param str href: href of the object
        :param str object_name: name of the object, used by the rules

        :rtype: Metadata
        """
        resource = self.client.do_xml_request(
            RequestMethod.GET, f"{get_metadata_href(href)}/")
        metadata = Metadata.from_xml(resource)
        metadata.entries = ignored_metadata.filter_metadata(
            metadata.entries, href, object_name, self.rules)
        return metadata

    def get_metadata_entry(self, href, key, object_name=None,
                           is_system=False) -> MetadataEntry:
        """Get one metadata entry of an object.

        :raises IgnoredMetadataError: if the entry is ignored
        :raises EntityNotFoundError: if the object has no such key
        """
        resource = self._get_metadata_value(href, key, is_system)
        entry = MetadataEntry.from_xml(resource, key=key)
        ignored_metadata.filter_single_metadata_entry(
            key, entry.value, href, object_name, self.rules)
        return entry

    @handle_vcd_exception('error retrieving metadata by key')
    def _get_metadata_value(self, href, key, is_system):
        return self.client.do_xml_request(
            RequestMethod.GET,
            get_metadata_href(href, key=key, is_system=is_system))

    def add_metadata_entry(self, href, entry: MetadataEntry,
                           object_name=None):
        """Add or update a metadata entry and wait for the task.

        Entries outside of the SYSTEM domain are always sent as GENERAL and
        READWRITE.

        :raises IgnoredMetadataError: if the entry is ignored
        :raises VcdResponseError: if vCD rejects the entry
        """
        requested_visibility = entry.visibility
        if entry.is_system:
            value = MetadataEntry(key=entry.key, value=entry.value,
                                  type=entry.type,
                                  domain=MetadataDomain.SYSTEM.value,
                                  visibility=entry.visibility)
        else:
            value = MetadataEntry(key=entry.key, value=entry.value,
                                  type=entry.type,
                                  domain=MetadataDomain.GENERAL.value,
                                  visibility=MetadataVisibility.READ_WRITE.value)  # noqa: E501
        ignored_metadata.filter_single_metadata_entry(
            value.key, value.value, href, object_name, self.rules)
        try:
            return self.client.wait_task_request(
                RequestMethod.PUT,
                get_metadata_href(href, key=value.key,
                                  is_system=value.is_system),
                payload=value.to_value_xml(),
                content_type=MediaType.METADATA_VALUE.value)
        except VcdResponseError as err:
            # vCD answers a plain 'visibility' when the pair is invalid
            if str(err).endswith('visibility'):
                err.add_prefix(
                    f"error adding metadata with key {value.key}: "
                    f"visibility cannot be {requested_visibility} when "
                    f"domain is {value.domain}")
            else:
                err.add_prefix('error adding metadata')
            raise

    @handle_vcd_exception('error merging metadata')
    def merge_metadata(self, href, entries: List[MetadataEntry],
                       object_name=None):
        """Create or update several entries at once and wait for the task.

        Ignored entries are left out of the request.

        :raises ValueError: if no entry is left after filtering
        """
        entries = ignored_metadata.filter_metadata(entries, href,
                                                   object_name, self.rules)
        if not entries:
            raise ValueError(
                "after filtering metadata, there is no metadata to merge")
        return self.client.wait_task_request(
            RequestMethod.POST,
            get_metadata_href(href),
            payload=Metadata(entries=entries).to_xml(),
            content_type=MediaType.METADATA.value)

    def delete_metadata_entry(self, href, key, object_name=None,
                              is_system=False):
        """Delete a metadata entry and wait for the task.

        :raises IgnoredMetadataError: if the entry is ignored
        """
        def value_getter():
            resource = self._get_metadata_value(href, key, is_system)
            return MetadataEntry.from_xml(resource, key=key).value

        ignored_metadata.filter_metadata_to_delete(
            key, href, object_name, self.rules, value_getter)
        return self._delete_metadata_entry(href, key, is_system)

    @handle_vcd_exception('error deleting metadata')
    def _delete_metadata_entry(self, href, key, is_system):
        return self.client.wait_task_request(
            RequestMethod.DELETE,
            get_metadata_href(href, key=key, is_system=is_system))


class MetadataMixin:
    """Metadata operations for resource wrappers.

    Classes using the mixin must provide client, href and name.
    """

    def _metadata_service(self):
        return MetadataService(self.client)

    def get_metadata(self) -> Metadata:
        return self._metadata_service().get_metadata(self.href, self.name)

    def get_metadata_entry(self, key, is_system=False) -> MetadataEntry:
        return self._metadata_service().get_metadata_entry(
            self.href, key, object_name=self.name, is_system=is_system)

    def add_metadata_entry(self, key, value,
                           value_type=MetadataValueType.STRING,
                           visibility=MetadataVisibility.READ_WRITE,
                           is_system=False):
        domain = MetadataDomain.SYSTEM if is_system else MetadataDomain.GENERAL  # noqa: E501
        entry = MetadataEntry(key=key, value=str(value),
                              type=MetadataValueType(value_type).value,
                              domain=domain.value,
                              visibility=MetadataVisibility(visibility).value)  # noqa: E501
        return self._metadata_service().add_metadata_entry(
            self.href, entry, object_name=self.name)

    def merge_metadata(self, entries: List[MetadataEntry]):
        return self._metadata_service().merge_metadata(
            self.href, entries, object_name=self.name)

    def delete_metadata_entry(self, key, is_system=False):
        return self._metadata_service().delete_metadata_entry(
            self.href, key, object_name=self.name, is_system=is_system)
