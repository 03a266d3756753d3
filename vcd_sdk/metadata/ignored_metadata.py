# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Rules that hide metadata entries from the sdk.

A rule matches an entry when every field set on the rule matches the
corresponding attribute of the entry. Matching entries are removed from
read results and can't be added, merged or deleted.
"""

from dataclasses import dataclass
import re
from typing import Callable, List, Optional, Pattern, Union

from vcd_sdk.exception.exceptions import IgnoredMetadataError


@dataclass(frozen=True)
class NormalisedMetadata:
    """Attributes of a metadata entry the ignore rules are evaluated on."""

    object_type: str
    object_name: str
    key: str
    value: str


@dataclass(frozen=True)
class IgnoredMetadata:
    """Rule describing metadata entries to ignore.

    object_type is the type of the owning object as it appears in its href
    e.g. 'catalog', 'vApp', 'network'. Regular expressions are matched
    anywhere in the key or value, anchor them to match the whole text.
    """

    object_type: Optional[str] = None
    object_name: Optional[str] = None
    key_regex: Optional[Union[str, Pattern]] = None
    value_regex: Optional[Union[str, Pattern]] = None

    def __post_init__(self):
        # frozen dataclass, compiled patterns are set through object
        for field_name in ('key_regex', 'value_regex'):
            value = getattr(self, field_name)
            if isinstance(value, str):
                object.__setattr__(self, field_name, re.compile(value))

    @classmethod
    def from_dict(cls, rule: dict):
        return cls(object_type=rule.get('object_type'),
                   object_name=rule.get('object_name'),
                   key_regex=rule.get('key_regex'),
                   value_regex=rule.get('value_regex'))

    def is_empty(self):
        return self.object_type is None and self.object_name is None and \
            self.key_regex is None and self.value_regex is None

    def matches_object_type(self, object_type):
        return self.object_type is None or self.object_type.strip() == '' \
            or self.object_type == object_type

    def matches_object_name(self, object_name):
        return self.object_name is None or self.object_name.strip() == '' \
            or not object_name or not object_name.strip() \
            or self.object_name == object_name

    def matches_key(self, key):
        return self.key_regex is None or \
            self.key_regex.search(key or '') is not None

    def matches_value(self, value):
        return self.value_regex is None or \
            self.value_regex.search(value or '') is not None

    def matches(self, entry: NormalisedMetadata):
        if self.is_empty():
            return False
        return self.matches_object_type(entry.object_type) and \
            self.matches_object_name(entry.object_name) and \
            self.matches_key(entry.key) and \
            self.matches_value(entry.value)

    def __str__(self):
        key_regex = self.key_regex.pattern if self.key_regex else None
        value_regex = self.value_regex.pattern if self.value_regex else None
        return f"IgnoredMetadata(object_type={self.object_type}, " \
               f"object_name={self.object_name}, key_regex={key_regex}, " \
               f"value_regex={value_regex})"


def get_object_type_from_href(href):
    """Get the object type out of an href.

    'https://vcd/api/catalog/f4b4b6a0' returns 'catalog'

    :param str href: href of the object owning the metadata

    :rtype: str

    :raises ValueError: if the href has less than two path segments
    """
    segments = (href or '').split('/')
    if len(segments) < 2:
        raise ValueError(f"could not extract the object type from href "
                         f"'{href}'")
    return segments[-2]


def filter_metadata_entry(entry: NormalisedMetadata,
                          rules: List[IgnoredMetadata]) -> bool:
    """Decide whether a metadata entry is ignored.

    :param NormalisedMetadata entry: the entry
    :param list rules: list of IgnoredMetadata

    :return: True if any rule matches the entry, i.e. it must be ignored
    :rtype: bool
    """
    return any(rule.matches(entry) for rule in rules or [])


def filter_single_metadata_entry(key, value, href, object_name,
                                 rules: List[IgnoredMetadata]):
    """Raise if one metadata entry is ignored.

    :raises IgnoredMetadataError: if the entry is ignored
    """
    if not rules:
        return
    entry = NormalisedMetadata(object_type=get_object_type_from_href(href),
                               object_name=object_name,
                               key=key,
                               value=value)
    if filter_metadata_entry(entry, rules):
        raise IgnoredMetadataError(
            f"the metadata entry with key '{key}' and value '{value}' is "
            "being ignored")


def filter_metadata(entries, href, object_name,
                    rules: List[IgnoredMetadata]):
    """Remove ignored entries from a list of metadata entries.

    :param list entries: objects with key and value attributes
    :param str href: href of the object owning the metadata
    :param str object_name: name of the object owning the metadata
    :param list rules: list of IgnoredMetadata

    :return: new list with the entries that are not ignored
    :rtype: list
    """
    if not rules:
        return list(entries)
    object_type = get_object_type_from_href(href)
    return [entry for entry in entries
            if not filter_metadata_entry(
                NormalisedMetadata(object_type=object_type,
                                   object_name=object_name,
                                   key=entry.key,
                                   value=entry.value),
                rules)]


def filter_metadata_to_delete(key, href, object_name,
                              rules: List[IgnoredMetadata],
                              value_getter: Callable[[], str]):
    """Raise if the metadata entry about to be deleted is ignored.

    The value of the entry is needed only by rules having a value regex, it
    is fetched at most once, and only when such a rule matches type, name
    and key of the entry.

    :param str key: key of the entry to delete
    :param str href: href of the object owning the metadata
    :param str object_name: name of the object owning the metadata
    :param list rules: list of IgnoredMetadata
    :param callable value_getter: returns the current value of the entry

    :raises IgnoredMetadataError: if the entry is ignored
    """
    if not rules:
        return
    object_type = get_object_type_from_href(href)
    value_fetched = False
    value = None
    for rule in rules:
        if rule.is_empty():
            continue
        if not (rule.matches_object_type(object_type)
                and rule.matches_object_name(object_name)
                and rule.matches_key(key)):
            continue
        if rule.value_regex is not None:
            if not value_fetched:
                value = value_getter()
                value_fetched = True
            if not rule.matches_value(value):
                continue
        raise IgnoredMetadataError(
            f"can't delete metadata entry {key} as it is ignored")
