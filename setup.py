#!/usr/bin/env python

# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from setuptools import find_namespace_packages
from setuptools import setup

setup(
    name='vcd-sdk',
    version='1.0.0',
    description='Client library for the VMware Cloud Director xml and '
                'OpenAPI rest apis',
    license='BSD-2-Clause',
    python_requires='>=3.7',
    setup_requires=['setuptools>=17.1'],
    packages=find_namespace_packages(include=['vcd_sdk', 'vcd_sdk.*']),
    install_requires=[
        'click>=7.1.2',
        'dataclasses-json>=0.5.7',
        'lxml>=4.6.0',
        'pyyaml>=5.4.1',
        'requests>=2.25.1',
        'semantic_version>=2.8.5',
    ],
    extras_require={
        'test': ['pytest>=6.2.0'],
    },
    entry_points={
        'console_scripts': ['vcd-sdk=vcd_sdk.cli:cli'],
    },
)
