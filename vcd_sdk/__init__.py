# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

import vcd_sdk.logging.logger
from vcd_sdk.logging.logger import configure_null_logger

configure_null_logger()
vcd_sdk.logging.logger.configure_library_loggers()
