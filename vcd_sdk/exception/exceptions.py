# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from vcd_sdk.common.constants.shared_constants import ENTITY_NOT_FOUND_MESSAGE  # noqa: E501


class VcdError(Exception):
    """Base class for all errors raised by vcd-sdk."""

    def __init__(self, msg=None):
        self.msg = msg
        super().__init__(msg)

    def __str__(self):
        return str(self.msg) if self.msg is not None else ''

    def add_prefix(self, prefix):
        """Prepend contextual information to the message.

        The exception object is modified in place so that callers can keep
        catching on the original class.

        :param str prefix: text to put in front of the current message.

        :return: the same exception
        """
        if prefix:
            self.msg = f"{prefix}: {self}"
        return self


class VcdResponseError(VcdError):
    """Raised when vCD answers a request with an error status."""

    def __init__(self, status_code, error_message=None,
                 minor_error_code=None, major_error_code=None):
        self.status_code = status_code
        self.error_message = error_message
        self.minor_error_code = minor_error_code
        self.major_error_code = major_error_code
        super().__init__(f"API Error: {status_code}: {error_message}")


class EntityNotFoundError(VcdError):
    """Raised when a lookup does not find any entity."""

    def __init__(self, msg=ENTITY_NOT_FOUND_MESSAGE):
        super().__init__(msg)


class VcdNotFoundResponseError(VcdResponseError, EntityNotFoundError):
    """Raised when vCD answers with 404."""


class MultipleEntitiesFoundError(VcdError):
    """Raised when a lookup expected to be unique finds several entities."""


class AuthenticationError(VcdError):
    """Raised when the client can't (or didn't) authenticate."""


class ApiVersionNotSupportedError(VcdError):
    """Raised when an api version is not usable against an endpoint."""


class IgnoredMetadataError(VcdError):
    """Raised when an operation targets metadata covered by an ignore rule."""


class TaskError(VcdError):
    """Raised when a vCD task finishes in any state other than success."""

    def __init__(self, task_href, status, error_message=None):
        self.task_href = task_href
        self.status = status
        self.error_message = error_message
        super().__init__(error_message if error_message else f"task {status}")


class TaskTimeoutError(VcdError):
    """Raised when a vCD task doesn't finish in the allotted time."""

    def __init__(self, task_href, timeout, last_status=None):
        self.task_href = task_href
        self.timeout = timeout
        self.last_status = last_status
        super().__init__(f"task {task_href} did not complete in {timeout} "
                         f"seconds, last known status: {last_status}")
