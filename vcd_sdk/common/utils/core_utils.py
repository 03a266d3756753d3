# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Basic utility methods to perform data transformation."""

import urllib.parse

import click

from vcd_sdk.common.constants.shared_constants import PaginationKey
from vcd_sdk.exception.exceptions import EntityNotFoundError
from vcd_sdk.exception.exceptions import MultipleEntitiesFoundError


_type_to_string = {
    str: 'string',
    int: 'number',
    float: 'number',
    bool: 'true/false',
    dict: 'mapping',
    list: 'sequence',
}


class NullPrinter:
    """Callback object which does nothing."""

    def general(self, msg):
        pass

    def info(self, msg):
        pass

    def error(self, msg):
        pass


class ConsoleMessagePrinter(NullPrinter):
    """Callback object to print color coded message on console."""

    def general(self, msg):
        click.secho(msg, fg='green')

    def info(self, msg):
        click.secho(msg, fg='yellow')

    def error(self, msg):
        click.secho(msg, fg='red')


def check_keys_and_value_types(dikt, ref_dict, location='dictionary',
                               excluded_keys=None,
                               msg_update_callback=NullPrinter()):
    """Compare a dictionary with a reference dictionary.

    The method ensures that all keys and value types are the same in the
    dictionaries. Keys of @dikt that are unknown to @ref_dict are reported
    as invalid.

    :param dict dikt: the dictionary to check for validity
    :param dict ref_dict: the dictionary to check against
    :param str location: where this check is taking place, so error messages
        can be more descriptive.
    :param list excluded_keys: list of str, representing the list of key which
        if missing won't raise an exception.
    :param NullPrinter msg_update_callback: Callback object.

    :raises KeyError: if @dikt has missing or invalid keys
    :raises TypeError: if the value of a property in @dikt does not match with
        the value of the same property in @ref_dict
    """
    if excluded_keys is None:
        excluded_keys = []
    ref_keys = set(ref_dict.keys())
    keys = set(dikt.keys())

    missing_keys = ref_keys - keys - set(excluded_keys)
    invalid_keys = keys - ref_keys

    if missing_keys:
        msg_update_callback.error(
            f"Missing keys in {location}: {missing_keys}")
    if invalid_keys:
        msg_update_callback.error(
            f"Invalid keys in {location}: {invalid_keys}")
    bad_value = False
    for k in ref_keys:
        if k not in keys or dikt[k] is None:
            continue
        value_type = type(ref_dict[k])
        # an int is acceptable wherever a float is expected
        if value_type is float and isinstance(dikt[k], int) \
                and not isinstance(dikt[k], bool):
            continue
        if not isinstance(dikt[k], value_type):
            msg_update_callback.error(
                f"{location} key '{k}': value type should be "
                f"'{_type_to_string[value_type]}'")
            bad_value = True

    if missing_keys or invalid_keys:
        raise KeyError(f"Missing and/or invalid key in {location}")
    if bad_value:
        raise TypeError(f"Incorrect type for property value(s) in {location}")


def str_to_bool(s):
    """Convert string boolean values to bool.

    The conversion is case insensitive.

    :param s: input string

    :return: True if val is 'true' otherwise False
    """
    return str(s).lower() == 'true'


def escape_query_filter_expression_value(value):
    value_str = str(value)
    value_str = value_str.replace('(', "\\(")
    value_str = value_str.replace(')', "\\)")
    value_str = value_str.replace(';', "\\;")
    value_str = value_str.replace(',', "\\,")
    return value_str


def construct_filter_string(filters: dict, quote=False):
    """Construct ;-ed (FIQL AND) filter string from the dict.

    :param dict filters: dictionary containing key and values for the filters
    :param bool quote: url quote the values, needed only when the filter is
        put verbatim in the url instead of being passed as a request param.

    :rtype: str
    """
    filter_string = ""
    if filters:
        filter_expressions = []
        for (key, value) in filters.items():
            if key and value is not None and value != '':
                escaped_value = escape_query_filter_expression_value(value)
                if quote:
                    escaped_value = urllib.parse.quote(escaped_value)
                filter_expressions.append(f"{key}=={escaped_value}")
        filter_string = ";".join(filter_expressions)
    return filter_string


def query_parameter_filter_and(filter_string, query_parameters=None):
    """AND a filter expression with the filter already in the parameters.

    The input dictionary is not modified.

    :param str filter_string: FIQL expression e.g. name==foo
    :param dict query_parameters: existing query parameters, can be None

    :return: a copy of the query parameters containing the combined filter
    :rtype: dict
    """
    new_query_parameters = dict(query_parameters or {})
    existing_filter = new_query_parameters.get(PaginationKey.FILTER.value)
    if existing_filter:
        new_query_parameters[PaginationKey.FILTER.value] = \
            f"{existing_filter};{filter_string}"
    else:
        new_query_parameters[PaginationKey.FILTER.value] = filter_string
    return new_query_parameters


def one_or_error(key, value, entities):
    """Return the only element of a list of lookup results.

    :param str key: name of the looked up attribute e.g. 'name'
    :param str value: value of the looked up attribute
    :param list entities: results of the lookup

    :return: the single entity

    :raises EntityNotFoundError: if the list is empty
    :raises MultipleEntitiesFoundError: if the list has more than one element
    """
    if not entities:
        raise EntityNotFoundError(
            f"{EntityNotFoundError().msg}: got zero entities by {key} '{value}'")  # noqa: E501
    if len(entities) > 1:
        raise MultipleEntitiesFoundError(
            f"got more than one entity by {key} '{value}': {len(entities)}")
    return entities[0]


def extract_id_from_href(href):
    """Extract id from an href.

    'https://vmware.com/api/admin/user/123456' will return 123456

    :param str href: an href

    :return: id
    """
    if not href:
        return None
    href = href.rstrip('/')
    if '/' in href:
        return href.split('/')[-1]
    return href


def extract_uuid(urn_or_href):
    """Extract the trailing uuid out of an urn or an href.

    'urn:vcloud:org:a93c9db9-7471-3192-8d09-a8f7eeda85f9' and
    'https://vcd/api/org/a93c9db9-7471-3192-8d09-a8f7eeda85f9' both return
    'a93c9db9-7471-3192-8d09-a8f7eeda85f9'

    :param str urn_or_href: urn or href

    :rtype: str
    """
    if not urn_or_href:
        return None
    last_segment = extract_id_from_href(urn_or_href)
    return last_segment.split(':')[-1]


def build_urn(entity_type, uuid):
    """Build an urn like urn:vcloud:org:<uuid>.

    :param str entity_type: e.g. org, vdc, catalog
    :param str uuid: bare uuid, urns are returned as is

    :rtype: str
    """
    if uuid.startswith('urn:'):
        return uuid
    return f"urn:vcloud:{entity_type}:{uuid}"


def remove_none_values(obj):
    """Recursively drop keys whose value is None.

    :param object obj: dict, list or scalar

    :return: a copy of obj without None-valued keys
    """
    if isinstance(obj, dict):
        return {k: remove_none_values(v) for k, v in obj.items()
                if v is not None}
    if isinstance(obj, list):
        return [remove_none_values(item) for item in obj]
    return obj
