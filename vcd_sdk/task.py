# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from datetime import datetime
from datetime import timedelta
from enum import Enum
from enum import unique
import time

from lxml import etree
import requests

from vcd_sdk.common.constants.shared_constants import DEFAULT_TASK_POLL_INTERVAL_SEC  # noqa: E501
from vcd_sdk.common.constants.shared_constants import DEFAULT_TASK_TIMEOUT_SEC  # noqa: E501
from vcd_sdk.common.constants.shared_constants import RequestMethod
from vcd_sdk.common.utils.core_utils import extract_uuid
from vcd_sdk.exception.exceptions import TaskError
from vcd_sdk.exception.exceptions import TaskTimeoutError
from vcd_sdk.logging.logger import NULL_LOGGER


@unique
class TaskStatus(str, Enum):
    QUEUED = 'queued'
    PRE_RUNNING = 'preRunning'
    RUNNING = 'running'
    SUCCESS = 'success'
    ERROR = 'error'
    CANCELED = 'canceled'
    ABORTED = 'aborted'

    def is_terminal(self):
        return self in _TERMINAL_STATUSES


_TERMINAL_STATUSES = (TaskStatus.SUCCESS, TaskStatus.ERROR,
                      TaskStatus.CANCELED, TaskStatus.ABORTED)


class Task:
    """Handle to a server side asynchronous operation.

    The task resource is an lxml objectified Task element. Only href is
    needed to create a task, the resource is fetched lazily.
    """

    def __init__(self, client, href=None, resource=None,
                 logger_debug=NULL_LOGGER):
        if href is None and resource is None:
            raise ValueError("Task initialization failed as arguments are "
                             "either invalid or None")
        self.client = client
        self.resource = resource
        self.href = href if href else resource.get('href')
        self.LOGGER = logger_debug

    def refresh(self):
        """Fetch the latest representation of the task from vCD."""
        self.resource = self.client.do_xml_request(RequestMethod.GET,
                                                   self.href)
        return self.resource

    def get_resource(self):
        if self.resource is None:
            self.refresh()
        return self.resource

    @property
    def status(self) -> TaskStatus:
        return TaskStatus(self.get_resource().get('status'))

    @property
    def owner_id(self):
        """Id of the entity the task operates on, as an urn if possible."""
        resource = self.get_resource()
        if not hasattr(resource, 'Owner'):
            return None
        owner = resource.Owner
        return owner.get('id') or extract_uuid(owner.get('href'))

    @property
    def owner_href(self):
        resource = self.get_resource()
        if hasattr(resource, 'Owner'):
            return resource.Owner.get('href')

    @property
    def error_message(self):
        resource = self.get_resource()
        if hasattr(resource, 'Error'):
            return resource.Error.get('message')

    def wait_for_completion(self, timeout=None, poll_interval=None,
                            callback=None):
        """Block until the task reaches a terminal status.

        Connection errors and timeouts while polling are logged and the task
        is polled again on the next round. Any other error is raised.

        :param float timeout: seconds to wait for, defaults to the timeout
            configured on the client
        :param float poll_interval: seconds between two polls
        :param callable callback: called with the task resource after every
            poll

        :return: the task resource in its final status

        :raises TaskError: if the task ends in error, canceled or aborted
            status. Its message is the server side message, verbatim.
        :raises TaskTimeoutError: if the task is not done within timeout
        """
        if timeout is None:
            timeout = getattr(self.client, 'task_timeout',
                              DEFAULT_TASK_TIMEOUT_SEC)
        if poll_interval is None:
            poll_interval = getattr(self.client, 'task_poll_interval',
                                    DEFAULT_TASK_POLL_INTERVAL_SEC)

        start_time = datetime.now()
        last_status = None
        while True:
            try:
                resource = self.refresh()
                last_status = TaskStatus(resource.get('status'))
                self.LOGGER.debug(f"Task {self.href} is in {last_status.value} status")  # noqa: E501
                if callback is not None:
                    callback(resource)
                if last_status.is_terminal():
                    break
            except (requests.exceptions.ConnectionError,
                    requests.exceptions.Timeout) as err:
                self.LOGGER.warning(f"Error while polling task {self.href}, "
                                    f"retrying: {err}")

            if datetime.now() - start_time > timedelta(seconds=timeout):
                self.LOGGER.error(f"Task {self.href} timed out")
                raise TaskTimeoutError(self.href, timeout,
                                       last_status.value if last_status else None)  # noqa: E501
            time.sleep(poll_interval)

        if last_status != TaskStatus.SUCCESS:
            raise TaskError(self.href, last_status.value, self.error_message)
        return resource

    def cancel(self):
        """Request cancellation of the task."""
        return self.client.do_xml_request(RequestMethod.POST,
                                          f"{self.href}/action/cancel")


def wait_if_task(client, resource):
    """Wait for resource if it is a task, some requests answer with one."""
    if resource is not None and etree.QName(resource).localname == 'Task':
        return Task(client, resource=resource,
                    logger_debug=client.LOGGER).wait_for_completion()
    return resource
