# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Typed queries of the legacy api (/api/query)."""

from enum import Enum
from enum import unique

from lxml import etree

from vcd_sdk.common.constants.shared_constants import DEFAULT_PAGE_SIZE
from vcd_sdk.common.constants.shared_constants import PaginationKey
from vcd_sdk.common.constants.shared_constants import RequestMethod
from vcd_sdk.common.utils.core_utils import construct_filter_string
from vcd_sdk.common.utils.core_utils import one_or_error
from vcd_sdk.exception.exception_handler import handle_vcd_exception


@unique
class QueryType(str, Enum):
    ORGANIZATION = 'organization'
    ADMIN_CATALOG = 'adminCatalog'
    ADMIN_CATALOG_ITEM = 'adminCatalogItem'
    CATALOG_ITEM = 'catalogItem'
    PROVIDER_VDC = 'providerVdc'
    ADMIN_ORG_VDC = 'adminOrgVdc'


class QueryService:
    """Run typed queries and collect the records of all result pages."""

    def __init__(self, client):
        self.client = client

    @handle_vcd_exception('error running query')
    def query(self, query_type, filter=None, fields=None, sort_asc=None,
              page_size=DEFAULT_PAGE_SIZE, additional_headers=None):
        """Run a typed query in records format.

        :param QueryType query_type: type of the records to look for
        :param str filter: FIQL filter e.g. name==foo;isPublished==true
        :param list fields: attributes to return, all when empty
        :param str sort_asc: attribute to sort the results by
        :param int page_size: records per page
        :param dict additional_headers: e.g. tenant context headers

        :return: record elements of all pages, in order
        :rtype: list
        """
        if not query_type:
            raise ValueError("query type is required")
        query_type = query_type.value if hasattr(query_type, 'value') \
            else query_type
        params = {
            'type': query_type,
            'format': 'records',
            PaginationKey.PAGE_SIZE.value: page_size,
        }
        if filter:
            params[PaginationKey.FILTER.value] = filter
        if fields:
            params['fields'] = ','.join(fields)
        if sort_asc:
            params['sortAsc'] = sort_asc

        records = []
        next_href = f"{self.client.api_href}query"
        while next_href:
            result = self.client.do_xml_request(
                RequestMethod.GET, next_href, params=params,
                additional_headers=additional_headers)
            next_href = None
            for child in result.iterchildren():
                if not isinstance(child.tag, str):
                    continue
                local_name = etree.QName(child).localname
                if local_name == 'Link':
                    if child.get('rel') == PaginationKey.NEXT_PAGE_REL.value:
                        next_href = child.get('href')
                elif local_name.endswith('Record'):
                    records.append(child)
            # the next page link already carries all query parameters
            params = None
        return records

    def query_one(self, query_type, key, value, filter=None,
                  additional_headers=None):
        """Run a typed query expecting exactly one record.

        :param str key: attribute filtered on, used in error messages
        :param str value: value of the attribute

        :raises EntityNotFoundError: if nothing matches
        :raises MultipleEntitiesFoundError: if several records match
        """
        records = self.query(query_type,
                             filter=filter or construct_filter_string({key: value}),  # noqa: E501
                             additional_headers=additional_headers)
        return one_or_error(key, value, records)


def record_to_dict(record):
    """Get the attributes of a query record as a dictionary."""
    return dict(record.attrib)
