# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

import logging
import re


class RedactingFilter(logging.Filter):
    """Filter class to redact sensitive information in logs.

    This filter looks for certain sensitive keys and if a match is found, the
    value will be redacted. Dictionaries are redacted key by key, lists and
    tuples item by item, everything else is converted to a string and
    scanned for `key: value` and `key=value` pairs.
    """

    _SENSITIVE_KEYS = ['authorization',
                       'x-vcloud-authorization',
                       'x-vmware-vcloud-access-token',
                       'access_token',
                       'refresh_token',
                       'password',
                       'secret',
                       'privatekey',
                       'privatekeypassphrase']

    _REDACTED_MSG = r"[REDACTED]"

    def __init__(self):
        super().__init__()

        pattern_key = r"|".join(re.escape(key) for key in self._SENSITIVE_KEYS)

        # Matches the following forms, value being accessible as group 4
        # key: value
        # 'key': 'value'
        # "key": "value"
        # key=value
        self._pattern = \
            r"((" + pattern_key + r")(\"|')?(?::\s*|=)[{\[]*['\"]?)([^'\",}&\n]+)"  # noqa: E501

    def filter(self, record):
        """Overridden filter method to redact log records.

        :param logging.LogRecord record: logRecord object that needs redaction

        :returns: True, which forces the filter chain processing to continue.

        :rtype: boolean
        """
        record.msg = self.redact(record.msg)
        if record.args:
            record.args = self.redact(record.args)
        return True

    def redact(self, obj):
        """Redact sensitive data in an object.

        :param object obj: the object which contains sensitive data to be
            redacted.

        :return: the redacted version of the object.

        :rtype: object
        """
        if obj is None or isinstance(obj, (bool, int, float)):
            return obj
        if isinstance(obj, dict):
            result = {}
            for k in obj.keys():
                if str(k).lower() in self._SENSITIVE_KEYS:
                    result[k] = self._REDACTED_MSG
                else:
                    result[k] = self.redact(obj[k])
            return result
        if isinstance(obj, (list, tuple)):
            return tuple(self.redact(item) for item in obj)
        return re.sub(pattern=self._pattern,
                      string=str(obj),
                      repl=r"\1" + self._REDACTED_MSG,
                      flags=re.IGNORECASE)
