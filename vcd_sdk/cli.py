# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

"""vcd-sdk command line: sample and check of the config file."""

import sys

import click
import requests

from vcd_sdk.client import VcdClient
from vcd_sdk.common.utils.config_utils import generate_sample_config_text
from vcd_sdk.common.utils.config_utils import get_validated_config
from vcd_sdk.common.utils.core_utils import ConsoleMessagePrinter
from vcd_sdk.exception.exceptions import VcdError
from vcd_sdk.logging.logger import SDK_LOGGER

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.group(context_settings=CONTEXT_SETTINGS)
def cli():
    """Tooling around vcd-sdk configuration files.

\b
    Examples
        vcd-sdk sample -o config.yaml
            Write a sample configuration file.
\b
        vcd-sdk check config.yaml --check-login
            Validate the configuration file and log in to vCD with it.
    """


@cli.command(short_help='Generate sample vcd-sdk configuration')
@click.pass_context
@click.option(
    '-o',
    '--output',
    'output',
    required=False,
    default=None,
    metavar='OUTPUT_FILE_NAME',
    help="Filepath to write configuration file to")
def sample(ctx, output):
    """Display sample vcd-sdk config file contents."""
    SDK_LOGGER.debug(f"Executing command: {ctx.command_path}")
    console_message_printer = ConsoleMessagePrinter()
    try:
        sample_config = generate_sample_config_text(output_file_name=output)
    except OSError as err:
        console_message_printer.error(str(err))
        SDK_LOGGER.error(str(err))
        sys.exit(1)
    click.echo(sample_config)


@cli.command(short_help="Checks that the config file is valid. Can also "
                        "check that its credentials can log in to vCD")
@click.pass_context
@click.argument('config_file_path', metavar='CONFIG_FILE_NAME',
                envvar='VCD_SDK_CONFIG',
                default='config.yaml',
                type=click.Path(exists=True))
@click.option(
    '-l',
    '--check-login',
    'check_login',
    is_flag=True,
    help='Log in to vCD with the credentials of the config file')
def check(ctx, config_file_path, check_login):
    """Validate vcd-sdk config file."""
    SDK_LOGGER.debug(f"Executing command: {ctx.command_path}")
    console_message_printer = ConsoleMessagePrinter()
    try:
        config = get_validated_config(
            config_file_path,
            logger_debug=SDK_LOGGER,
            msg_update_callback=console_message_printer)
        if check_login:
            client = VcdClient.from_config(config)
            if not client.is_authenticated():
                raise VcdError("no credentials in config file")
            client.validate_api_version()
            console_message_printer.general(
                f"Logged in to {config['vcd']['host']} as "
                f"{config['vcd']['username']}@{client.get_org_name()} "
                f"with api version {client.api_version}")
            client.disconnect()
    except (KeyError, TypeError, ValueError, VcdError,
            requests.exceptions.RequestException) as err:
        console_message_printer.error(str(err))
        SDK_LOGGER.error(str(err))
        sys.exit(1)
