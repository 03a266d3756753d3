# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

import functools
import json

from lxml import etree
import requests

from vcd_sdk.common.constants.shared_constants import ERROR_MAJOR_CODE_KEY
from vcd_sdk.common.constants.shared_constants import ERROR_MESSAGE_KEY
from vcd_sdk.common.constants.shared_constants import ERROR_MINOR_CODE_KEY
from vcd_sdk.exception.exceptions import VcdError
from vcd_sdk.exception.exceptions import VcdNotFoundResponseError
from vcd_sdk.exception.exceptions import VcdResponseError


def _parse_error_body(response):
    """Extract message and error codes out of a vCD error response.

    OpenAPI endpoints answer with a json body, the legacy API with an xml
    Error element. Anything else is returned as raw text.

    :param requests.Response response: the failed response

    :return: message, minor error code, major error code
    :rtype: tuple
    """
    text = response.text if response is not None else ''
    if not text:
        return response.reason if response is not None else None, None, None
    try:
        body = json.loads(text)
        if isinstance(body, dict):
            return (body.get(ERROR_MESSAGE_KEY, text),
                    body.get(ERROR_MINOR_CODE_KEY),
                    body.get(ERROR_MAJOR_CODE_KEY))
    except ValueError:
        pass
    try:
        element = etree.fromstring(response.content)
        if etree.QName(element).localname == 'Error':
            return (element.get(ERROR_MESSAGE_KEY, text),
                    element.get(ERROR_MINOR_CODE_KEY),
                    element.get(ERROR_MAJOR_CODE_KEY))
    except etree.XMLSyntaxError:
        pass
    return text, None, None


def process_http_error(error: requests.exceptions.HTTPError,
                       error_prefix: str = '') -> VcdResponseError:
    """Convert an HTTPError raised by requests into a vcd-sdk error.

    404 responses are mapped to VcdNotFoundResponseError, which is also an
    EntityNotFoundError.

    :param requests.exceptions.HTTPError error: error raised by
        response.raise_for_status()
    :param str error_prefix: contextual message to prepend

    :return: the converted error, ready to be raised
    :rtype: VcdResponseError
    """
    response = error.response
    status_code = response.status_code if response is not None else None
    message, minor_code, major_code = _parse_error_body(response)
    if status_code == requests.codes.not_found:
        cls = VcdNotFoundResponseError
    else:
        cls = VcdResponseError
    converted = cls(status_code, message, minor_error_code=minor_code,
                    major_error_code=major_code)
    return converted.add_prefix(error_prefix)


def handle_vcd_exception(error_prefix=''):
    """Decorate to convert requests and vcd-sdk errors.

    HTTPErrors are converted to VcdResponseError (or its not found
    flavour), existing VcdErrors get the prefix prepended. The class of the
    error is preserved in both cases.

    :param str error_prefix: contextual message to prepend

    :return: decorator
    """
    def decorator(func):
        @functools.wraps(func)
        def exception_handler_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except requests.exceptions.HTTPError as err:
                raise process_http_error(err, error_prefix) from err
            except VcdError as err:
                raise err.add_prefix(error_prefix)
        return exception_handler_wrapper
    return decorator
