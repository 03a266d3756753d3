# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause
