#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

import argparse
import json
import logging
import os
import re
import shlex
import sys
from pathlib import Path
from typing import Optional

import certifi

from . import __version__
from . import cli
from .params import PassboltParams


def get_params_from_config(config_filename=None):    # type: (Optional[str]) -> PassboltParams
    if os.getenv('PASSBOLT_COMMANDER_DEBUG'):
        logging.getLogger().setLevel(logging.DEBUG)
        logging.info('Debug ON')

    def get_env_config():
        path = os.getenv('PASSBOLT_CONFIG_FILE')
        if path:
            logging.debug('Setting config file from PASSBOLT_CONFIG_FILE env variable %s', path)
        return path

    config_filename = config_filename or get_env_config()
    if not config_filename:
        config_filename = 'config.json'
        if os.path.isfile(config_filename):
            config_filename = os.path.join(os.getcwd(), config_filename)
        else:
            config_filename = os.path.join(Path.home().joinpath('.passbolt'), config_filename)
    else:
        config_filename = os.path.expanduser(config_filename)

    params = PassboltParams(config_filename=config_filename)
    if os.path.exists(config_filename):
        try:
            with open(config_filename) as config_file:
                try:
                    params.config = json.load(config_file)
                except ValueError as e:
                    logging.error('Unable to parse JSON configuration file "%s"', os.path.abspath(config_filename))
                    raise e
        except IOError as ioe:
            logging.warning('Error: Unable to open config file %s: %s', config_filename, ioe)

    config = params.config
    if 'server' in config:
        params.server = config['server']
    if 'access_token' in config:
        params.access_token = config['access_token']
    if 'proxy' in config:
        params.proxy = config['proxy']
    if 'timeout' in config:
        params.timeout = config['timeout']
    if 'deadline' in config:
        params.deadline = float(config['deadline']) if config['deadline'] else None
    if 'certificate_check' in config:
        params.rest_context.certificate_check = config['certificate_check'] is True
    if config.get('commands'):
        params.commands.extend(config['commands'])
    if config.get('debug') is True:
        params.debug = True

    server = os.getenv('PASSBOLT_URL')
    if server:
        params.server = server
    token = os.getenv('PASSBOLT_TOKEN')
    if token:
        params.access_token = token

    return params


def usage(m):
    print(m)
    parser.print_help()
    cli.display_command_help()
    sys.exit(1)


parser = argparse.ArgumentParser(prog='passbolt', add_help=False, allow_abbrev=False)
parser.add_argument('--server', '-ps', dest='server', action='store', help='Passbolt server address.')
parser.add_argument('--token', '-pt', dest='token', action='store', help='API access token.')
parser.add_argument('--version', dest='version', action='store_true', help='Display version')
parser.add_argument('--config', dest='config', action='store', help='Config file to use')
parser.add_argument('--debug', dest='debug', action='store_true', help='Turn on debug mode')
parser.add_argument('--batch-mode', dest='batch_mode', action='store_true', help='Run commander in batch or basic UI mode.')
parser.add_argument('--proxy', dest='proxy', action='store', help='Proxy server')
parser.add_argument('--timeout', dest='timeout', type=float, action='store', help='Request timeout in seconds')
parser.add_argument('--deadline', dest='deadline', type=float, action='store',
                    help='Time limit in seconds for a whole command')
parser.add_argument('command', nargs='?', type=str, action='store', help='Command')
parser.add_argument('options', nargs='*', action='store', help='Options')
parser.error = usage


def main():
    os.environ['SSL_CERT_FILE'] = certifi.where()
    logging.basicConfig(format='%(message)s')

    sys.argv[0] = re.sub(r'(-script\.pyw?|\.exe)?$', '', sys.argv[0])
    opts, flags = parser.parse_known_args(sys.argv[1:])

    params = get_params_from_config(opts.config)

    if opts.batch_mode:
        params.batch_mode = True

    if opts.debug:
        params.debug = opts.debug

    logging.getLogger().setLevel(logging.WARNING if params.batch_mode else logging.DEBUG if params.debug else logging.INFO)

    if opts.proxy:
        params.proxy = opts.proxy

    if opts.server:
        params.server = opts.server

    if opts.token:
        params.access_token = opts.token

    if opts.timeout:
        params.timeout = opts.timeout

    if opts.deadline:
        params.deadline = opts.deadline

    if opts.version:
        print(f'Passbolt Commander, version {__version__}')
        return

    if flags and len(flags) > 0:
        if flags[0] in ('-h', '--help'):
            flags.clear()
            opts.command = '?'
    elif opts.command == 'help' and len(opts.options) == 0:
        opts.command = '?'
    if (opts.command or '') == '?':
        usage('')

    if opts.command in {'shell', '-'}:
        if opts.command == '-':
            params.batch_mode = True
    elif opts.command and os.path.isfile(opts.command):
        with open(opts.command, 'r') as f:
            lines = f.readlines()
            params.commands.extend([x.strip() for x in lines])
        params.commands.append('q')
        params.batch_mode = True
    elif opts.command:
        flags = ' '.join([shlex.quote(x) for x in flags]) if flags is not None else ''
        options = ' '.join([shlex.quote(x) for x in opts.options]) if opts.options is not None else ''
        options = ' -- ' + options if options.startswith('-') else options
        command = ' '.join([opts.command, options, flags])
        params.commands.append(command)
        params.commands.append('q')
        params.batch_mode = True

    errno = cli.loop(params)
    sys.exit(errno)


if __name__ == '__main__':
    main()
