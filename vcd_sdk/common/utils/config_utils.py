# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""Loading and validation of vcd-sdk yaml configuration files."""

import os

import semantic_version
import yaml

from vcd_sdk.common.constants import shared_constants
from vcd_sdk.common.utils.core_utils import check_keys_and_value_types
from vcd_sdk.common.utils.core_utils import NullPrinter
from vcd_sdk.logging.logger import NULL_LOGGER

SAMPLE_VCD_CONFIG = {
    'vcd': {
        'host': 'vcd.example.com',
        'org': 'System',
        'username': 'administrator',
        'password': 'my_secret_password',
        'api_version': shared_constants.DEFAULT_API_VERSION,
        'verify': True,
    }
}

SAMPLE_SERVICE_CONFIG = {
    'service': {
        'http_timeout': shared_constants.DEFAULT_HTTP_TIMEOUT_SEC,
        'task_timeout': shared_constants.DEFAULT_TASK_TIMEOUT_SEC,
        'task_poll_interval': float(shared_constants.DEFAULT_TASK_POLL_INTERVAL_SEC),  # noqa: E501
        'user_agent': shared_constants.DEFAULT_USER_AGENT,
        'log_wire': False,
        'log_dir': '~/.vcd-sdk-logs',
        'custom_headers': {},
        'ignored_metadata': [],
    }
}

# keys that may be left out of the config file
OPTIONAL_VCD_KEYS = ['org', 'username', 'password', 'api_version', 'verify']
OPTIONAL_SERVICE_KEYS = list(SAMPLE_SERVICE_CONFIG['service'].keys())

SAMPLE_IGNORED_METADATA_RULE = {
    'object_type': 'catalog',
    'object_name': 'my-catalog',
    'key_regex': '^department$',
    'value_regex': 'finance',
}


def validate_api_version(api_version):
    """Ensure that the api version looks like a vCD api version e.g. 37.1.

    :param str api_version: version to validate

    :return: the version, as a string

    :raises ValueError: if the version can't be parsed
    """
    try:
        semantic_version.Version.coerce(str(api_version))
    except ValueError:
        raise ValueError(f"invalid api version '{api_version}'")
    return str(api_version)


def get_api_version_from_env(default=None):
    """Read the api version override from the environment.

    :param str default: value to return when the variable is not set

    :rtype: str
    """
    api_version = os.environ.get(shared_constants.API_VERSION_ENV_VAR)
    if not api_version:
        return default
    return validate_api_version(api_version)


def get_validated_config(config_file_name,
                         logger_debug=NULL_LOGGER,
                         msg_update_callback=NullPrinter()):
    """Get the config file as a dictionary and check for validity.

    Ensures that all properties exist and all values are the expected type.
    Missing optional properties are filled with their default values and the
    environment overrides are applied.

    :param str config_file_name: path to config file.
    :param logging.Logger logger_debug: logger to log with.
    :param NullPrinter msg_update_callback: Callback object.

    :return: vcd-sdk config

    :rtype: dict

    :raises KeyError: if config file has missing or extra properties.
    :raises TypeError: if the value type for a config file property
        is incorrect.
    :raises ValueError: if the api version is malformed.
    """
    msg_update_callback.info(f"Validating config file '{config_file_name}'")
    with open(config_file_name) as config_file:
        config = yaml.safe_load(config_file) or {}
    config = validate_config(config, msg_update_callback=msg_update_callback)
    logger_debug.debug(f"Validated config file '{config_file_name}'")
    msg_update_callback.general(
        f"Config file '{config_file_name}' is valid")
    return config


def validate_config(config, msg_update_callback=NullPrinter()):
    """Validate an already loaded config dictionary.

    :param dict config: config to validate, it is not modified
    :param NullPrinter msg_update_callback: Callback object.

    :return: config with defaults and environment overrides applied

    :rtype: dict
    """
    check_keys_and_value_types(config,
                               {**SAMPLE_VCD_CONFIG, **SAMPLE_SERVICE_CONFIG},
                               location='config file',
                               excluded_keys=['service'],
                               msg_update_callback=msg_update_callback)
    check_keys_and_value_types(config['vcd'],
                               SAMPLE_VCD_CONFIG['vcd'],
                               location="config file 'vcd' section",
                               excluded_keys=OPTIONAL_VCD_KEYS,
                               msg_update_callback=msg_update_callback)
    service_config = config.get('service') or {}
    check_keys_and_value_types(service_config,
                               SAMPLE_SERVICE_CONFIG['service'],
                               location="config file 'service' section",
                               excluded_keys=OPTIONAL_SERVICE_KEYS,
                               msg_update_callback=msg_update_callback)
    for rule in service_config.get('ignored_metadata') or []:
        if not isinstance(rule, dict):
            raise TypeError("Incorrect type for ignored_metadata rule in "
                            "config file 'service' section")
        check_keys_and_value_types(rule,
                                   SAMPLE_IGNORED_METADATA_RULE,
                                   location='ignored_metadata rule',
                                   excluded_keys=list(SAMPLE_IGNORED_METADATA_RULE.keys()),  # noqa: E501
                                   msg_update_callback=msg_update_callback)

    vcd_config = dict(config['vcd'])
    vcd_config.setdefault('verify', True)
    api_version = get_api_version_from_env(
        default=vcd_config.get('api_version'))
    vcd_config['api_version'] = validate_api_version(api_version) \
        if api_version else shared_constants.DEFAULT_API_VERSION
    password = os.environ.get(shared_constants.PASSWORD_ENV_VAR)
    if password:
        vcd_config['password'] = password

    full_service_config = dict(SAMPLE_SERVICE_CONFIG['service'])
    full_service_config['log_dir'] = None
    full_service_config.update(service_config)

    return {
        'vcd': vcd_config,
        'service': full_service_config,
    }


def generate_sample_config_text(output_file_name=None):
    """Generate a sample vcd-sdk config file.

    If output file name is provided, config is dumped into the file.

    :param str output_file_name: file to write the sample config to

    :return: sample config

    :rtype: str
    """
    sample_config_text = yaml.safe_dump(SAMPLE_VCD_CONFIG, default_flow_style=False) + '\n'  # noqa: E501
    service_config = dict(SAMPLE_SERVICE_CONFIG['service'])
    service_config['ignored_metadata'] = [SAMPLE_IGNORED_METADATA_RULE]
    sample_config_text += yaml.safe_dump({'service': service_config}, default_flow_style=False)  # noqa: E501

    if output_file_name:
        with open(output_file_name, 'w') as output_file:
            output_file.write(sample_config_text)
    return sample_config_text
