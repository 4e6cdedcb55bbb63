#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

import abc
import argparse
import csv
import io
import json
import logging
import os
import re
import shlex
import sys
from collections import OrderedDict
from typing import Optional, Sequence, List, Any, Dict

from tabulate import tabulate

from ..operation import OperationContext
from ..params import PassboltParams

aliases = {}                 # type: Dict[str, str]
commands = {}                # type: Dict[str, Command]
command_info = OrderedDict()


report_output_parser = argparse.ArgumentParser(add_help=False)
report_output_parser.add_argument('--format', dest='format', action='store', choices=['table', 'csv', 'json'],
                                  default='table', help='format of output')
report_output_parser.add_argument('--output', dest='output', action='store',
                                  help='path to resulting output file (ignored for "table" format)')


class ParseError(Exception):
    pass


def register_commands(commands, aliases, command_info):
    from .share import register_commands as share_commands, register_command_info as share_command_info
    share_commands(commands)
    share_command_info(aliases, command_info)

    from .folder import register_commands as folder_commands, register_command_info as folder_command_info
    folder_commands(commands)
    folder_command_info(aliases, command_info)


def raise_parse_exception(m):
    raise ParseError(m)


def suppress_exit(*args):
    raise ParseError()


def is_json_value_field(obj):
    if obj is None:
        return False
    if isinstance(obj, str):
        return len(obj) > 0
    return True


TITLE_ACRONYMS = {'id', 'aro', 'aco'}


def fields_to_titles(fields):  # type: (List[str]) -> List[str]
    return [field_to_title(f) for f in fields]


def field_to_title(field):   # type: (str) -> str
    return ' '.join(x.upper() if x in TITLE_ACRONYMS else x.capitalize() for x in field.split('_') if x)


def _report_path(filename, ext):    # type: (str, str) -> str
    if not os.path.splitext(filename)[1]:
        filename += ext
    logging.info('Report path: %s', os.path.abspath(filename))
    return filename


def _dump_csv(data, headers, filename):
    with open(_report_path(filename, '.csv'), 'w', newline='', encoding='utf-8') if filename else io.StringIO() as fd:
        csv_writer = csv.writer(fd)
        if headers:
            csv_writer.writerow(headers)
        csv_writer.writerows(data)
        if isinstance(fd, io.StringIO):
            return fd.getvalue()


def _dump_json(data, headers, filename):
    rows = [{headers[i]: value for i, value in enumerate(row) if i < len(headers) and is_json_value_field(value)}
            for row in data]
    if filename:
        with open(_report_path(filename, '.json'), 'w', encoding='utf-8') as fd:
            json.dump(rows, fd, indent=2, default=str)
        return None
    return json.dumps(rows, indent=2, default=str)


def dump_report_data(data, headers, title=None, fmt='', filename=None, **kwargs):
    # type: (List[List], Sequence[str], Optional[str], Optional[str], Optional[str], ...) -> Optional[str]
    """Renders rows as a table (printed) or as csv / json (returned, or written to filename).

    kwargs: sort_by (column index), row_number and no_header (table only)
    """
    sort_by = kwargs.get('sort_by')
    if isinstance(sort_by, int):
        data.sort(key=lambda r: str(r[sort_by] if r[sort_by] is not None else '').casefold())

    if fmt == 'csv':
        return _dump_csv(data, headers, filename)
    if fmt == 'json':
        return _dump_json(data, headers, filename)

    if title:
        print(f'\n{title}\n')
    if kwargs.get('row_number') is True and headers:
        headers = ['#'] + list(headers)
        data = [[i + 1] + list(row) for i, row in enumerate(data)]
    if kwargs.get('no_header'):
        print(tabulate(data, tablefmt='plain'))
    else:
        print(tabulate(data, headers=headers, tablefmt='simple'))
    return None


parameter_pattern = re.compile(r'\${(\w+)}')


def expand_cmd_args(args, envvars, pattern=parameter_pattern):    # type: (str, dict, re.Pattern) -> str
    """Replaces ${NAME} with the variable value. Unknown names are left as typed."""
    return pattern.sub(lambda m: envvars.get(m.group(1), m.group(0)), args)


class CliCommand(abc.ABC):
    @abc.abstractmethod
    def execute_args(self, params, args, **kwargs):   # type: (PassboltParams, str, ...) -> Any
        pass

    def clean_up(self):
        print('', end='\r', file=sys.stderr, flush=True)

    def is_authorised(self):
        return True


class Command(CliCommand):
    def execute(self, params, **kwargs):     # type: (PassboltParams, Any) -> Any
        raise NotImplementedError()

    def execute_args(self, params, args, **kwargs):
        # type: (PassboltParams, str, ...) -> Any
        options = dict(kwargs)
        parser = self._get_parser_safe()
        if parser:
            try:
                opts = parser.parse_args(shlex.split(expand_cmd_args(args or '', os.environ)))
            except ParseError as e:
                if str(e):
                    logging.error(e)
                return
            options.update(vars(opts))
        return self.execute(params, **options)

    def get_parser(self):   # type: () -> Optional[argparse.ArgumentParser]
        return None

    @staticmethod
    def new_operation_context(params, **kwargs):    # type: (PassboltParams, ...) -> OperationContext
        """Every command invocation gets its own deadline"""
        op_context = kwargs.get('op_context')
        if isinstance(op_context, OperationContext):
            return op_context
        deadline = kwargs.get('deadline')
        return OperationContext(timeout=deadline if deadline is not None else params.deadline)

    def _ensure_parser(func):
        def _wrapper(self):
            parser = func(self)
            if parser:
                if parser.exit != suppress_exit:
                    parser.exit = suppress_exit
                if parser.error != raise_parse_exception:
                    parser.error = raise_parse_exception
            return parser
        return _wrapper

    @_ensure_parser
    def _get_parser_safe(self):
        return self.get_parser()
    _ensure_parser = staticmethod(_ensure_parser)
