#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

import logging
import os
import re
from typing import Union

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.enums import EditingMode
from prompt_toolkit.shortcuts import CompleteStyle

from . import api, display
from .commands import register_commands, aliases, commands, command_info
from .commands.base import CliCommand, dump_report_data
from .error import CommandError, Error, RemoteError
from .params import PassboltParams

current_command = None  # type: Union[None, CliCommand]
stack = []
register_commands(commands, aliases, command_info)

command_info['server'] = 'Sets or displays current Passbolt server'
command_info['debug'] = 'Turns debug mode on/off'
command_info['history'] = 'Show command history'
command_info['quit'] = 'Quit'

logging.getLogger('urllib3').setLevel(logging.WARNING)


def display_command_help():
    alias_lookup = {}
    for alias, command in aliases.items():
        alias_lookup[command] = alias

    table = []
    for cmd, description in command_info.items():
        table.append([cmd, alias_lookup.get(cmd) or '', description or ''])
    print('\nCommands:')
    dump_report_data(table, ['Command', 'Alias', 'Description'], no_header=True)
    print('\nType \'command -h\' to display help on command')


def command_and_args_from_cmd(command_line):
    args = ''
    pos = command_line.find(' ')
    if pos > 0:
        cmd = command_line[:pos]
        args = command_line[pos + 1:].strip()
    else:
        cmd = command_line
    if len(cmd) > 0:
        cmd = cmd.lower()
    return cmd, args


def toggle_debug(params):    # type: (PassboltParams) -> None
    params.debug = not params.debug
    logging.getLogger().setLevel(logging.DEBUG if params.debug else logging.WARNING if params.batch_mode
                                 else logging.INFO)
    logging.info('Debug %s', 'ON' if params.debug else 'OFF')


def do_command(params, command_line):
    # type: (PassboltParams, str) -> any
    command_line = command_line.strip()
    if not command_line:
        return

    if command_line.lower() in ('h', 'history'):
        for i, line in enumerate(stack):
            print(f'{i + 1:>4}  {line}')
        return

    if command_line.lower() in ('help', '?'):
        display_command_help()
        return

    if command_line.lower().startswith('server'):
        _, sp, server = command_line.partition(' ')
        if server:
            if params.rest_context.is_connected:
                logging.warning('Cannot change Passbolt server while connected')
            else:
                params.server = server.strip()
                logging.info('Passbolt server is set to %s', params.server)
        else:
            print(params.server or 'Passbolt server is not set')
        return

    if len(stack) == 0 or stack[0] != command_line:
        stack.insert(0, command_line)

    if command_line.lower() == 'debug':
        toggle_debug(params)
        return

    cmd, args = command_and_args_from_cmd(command_line)
    if cmd:
        orig_cmd = cmd
        if cmd in aliases and cmd not in commands:
            cmd = aliases[cmd]

        if cmd in commands:
            command = commands[cmd]
            global current_command
            current_command = command

            if command.is_authorised() and not params.rest_context.is_connected:
                api.connect(params)

            return command.execute_args(params, args, command=orig_cmd)
        else:
            display_command_help()
            raise CommandError('', f'Invalid command: {orig_cmd}')


def read_command_with_continuation(prompt_session, params):
    """Read command with support for line continuation using backslash."""
    command_lines = []
    current_prompt = get_prompt(params)

    while True:
        if prompt_session is not None:
            line = prompt_session.prompt(current_prompt)
        else:
            line = input(current_prompt)

        stripped_line = line.rstrip()
        if stripped_line.endswith('\\'):
            line_content = stripped_line[:-1].strip()
            if line_content:
                command_lines.append(line_content)
            current_prompt = '... '
        else:
            if stripped_line:
                command_lines.append(stripped_line)
            break

    return re.sub(r'\s+', ' ', ' '.join(command_lines)).strip()


def loop(params):  # type: (PassboltParams) -> int
    global current_command
    error_no = 0
    suppress_errno = False

    logging.getLogger().setLevel(logging.DEBUG if params.debug else logging.WARNING if params.batch_mode else logging.INFO)
    prompt_session = None
    if not params.batch_mode:
        if os.isatty(0) and os.isatty(1):
            completer = WordCompleter(sorted(set(commands.keys()) | set(aliases.keys())), WORD=True)
            prompt_session = PromptSession(multiline=False,
                                           editing_mode=EditingMode.VI,
                                           completer=completer,
                                           complete_style=CompleteStyle.MULTI_COLUMN,
                                           complete_while_typing=False)

        display.welcome()
        if not params.server:
            logging.info('Use "server" command to set Passbolt server > "server passbolt.example.com"')

    try:
        while True:
            command = ''
            if len(params.commands) > 0:
                command = params.commands[0].strip()
                params.commands = params.commands[1:]

            try:
                if not command:
                    command = read_command_with_continuation(prompt_session, params)

                if command.lower() == 'q' or command.lower() == "quit":
                    break

                suppress_errno = False
                command = command.strip()
                if command.startswith("@"):
                    suppress_errno = True
                    command = command[1:]
                if params.batch_mode:
                    logging.info('> %s', command)
                error_no = 1
                result = do_command(params, command)
                error_no = 0
                if result:
                    print(result)
            except EOFError:
                break
            except KeyboardInterrupt:
                pass
            except CommandError as e:
                if e.command:
                    logging.warning('%s: %s', e.command, e.message)
                else:
                    logging.warning('%s', e.message)
            except RemoteError as e:
                logging.error("Communication Error: %s", e)
            except Error as e:
                logging.error("%s", e)
            except Exception as e:
                logging.debug(e, exc_info=True)
                logging.error('An unexpected error occurred: %s. Type "debug" to toggle verbose error output', e)
            finally:
                try:
                    if current_command:
                        current_command.clean_up()
                finally:
                    current_command = None

            if params.batch_mode and error_no != 0 and not suppress_errno:
                break
    finally:
        api.disconnect(params)

    if not params.batch_mode:
        logging.info('\nGoodbye.\n')

    return error_no


def get_prompt(params):    # type: (PassboltParams) -> str
    if params.batch_mode:
        return ''
    if params.rest_context.is_connected:
        return 'Passbolt> '
    return 'Not connected> '
