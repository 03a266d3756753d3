# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

import functools


def run_once(f):
    """Ensure that a function is only run once using this decorator.

    Later calls return whatever the first call returned.
    """
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        if not wrapper.has_run:
            wrapper.has_run = True
            wrapper.result = f(*args, **kwargs)
        return wrapper.result
    wrapper.has_run = False
    wrapper.result = None
    return wrapper
