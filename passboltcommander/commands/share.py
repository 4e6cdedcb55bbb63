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
from typing import List, Optional, Tuple

from .base import dump_report_data, fields_to_titles, report_output_parser, Command
from .. import resolver, permission
from ..display import format_action
from ..error import CommandError, Error, ValidationError, OperationCancelledError, DeadlineExceededError
from ..params import PassboltParams
from ..permission import ARO_GROUP, ARO_USER
from ..share import GrantIntent, SharePlan, ShareAction, plan_grant, apply_plan


def register_commands(commands):
    commands['share-folder'] = ShareFolderCommand()
    commands['share-report'] = ShareReportCommand()
    commands['share-apply'] = ShareApplyCommand()


def register_command_info(aliases, command_info):
    aliases['sf'] = 'share-folder'
    aliases['sr'] = 'share-report'

    for p in [share_folder_parser, share_report_parser, share_apply_parser]:
        command_info[p.prog] = p.description


PERMISSION_ALIASES = {
    'read': '1',
    'update': '7',
    'owner': '15',
    'delete': '-1',
}

share_folder_parser = argparse.ArgumentParser(prog='share-folder', description='Change a shared folder\'s permissions.')
share_folder_parser.add_argument('-a', '--action', dest='action', choices=['grant', 'remove'], default='grant',
                                 action='store', help='shared folder action. \'grant\' if omitted')
share_folder_parser.add_argument('-u', '--user', dest='user', action='append', help='username (email)')
share_folder_parser.add_argument('-g', '--group', dest='group', action='append', help='group name')
share_folder_parser.add_argument('-p', '--permission', dest='permission', action='store',
                                 help='share permission: -1 (delete), 1 (read), 7 (update), 15 (owner) '
                                      'or read, update, owner')
share_folder_parser.add_argument('--dry-run', dest='dry_run', action='store_true',
                                 help='display the permission changes without committing them')
share_folder_parser.add_argument('folder', type=str, action='store', help='shared folder name')

share_report_parser = argparse.ArgumentParser(prog='share-report', parents=[report_output_parser],
                                              description='Display permissions of a shared folder.')
share_report_parser.add_argument('-u', '--user', dest='user', action='append', help='username (email)')
share_report_parser.add_argument('-g', '--group', dest='group', action='append', help='group name')
share_report_parser.add_argument('folder', type=str, action='store', help='shared folder name')

share_apply_parser = argparse.ArgumentParser(prog='share-apply',
                                             description='Reconcile folder shares declared in a JSON file.')
share_apply_parser.add_argument('--dry-run', dest='dry_run', action='store_true',
                                help='display the permission changes without committing them')
share_apply_parser.add_argument('--format', dest='format', action='store', choices=['table', 'json'],
                                default='table', help='format of output')
share_apply_parser.add_argument('filename', type=str, action='store',
                                help='JSON file with a list of shares: '
                                     '{"name", "share_target_type", "share_target_value", "share_permission", '
                                     '"state": "present"|"absent"}')

PLAN_FIELDS = ['folder', 'share_target_type', 'share_target_value', 'action', 'current', 'desired', 'status']


def permission_code(value):    # type: (Optional[str]) -> Optional[str]
    if value is None:
        return None
    return PERMISSION_ALIASES.get(value.lower(), value)


def plan_to_row(plan, colorize=True):    # type: (SharePlan, bool) -> list
    current = permission.level_to_string(plan.existing.type) if plan.existing else None
    desired = None
    if plan.action in (ShareAction.CREATE, ShareAction.UPDATE_LEVEL):
        desired = permission.level_to_string(plan.permission.type)
    elif plan.intent.is_removal:
        desired = 'None'
    elif plan.existing:
        desired = current
    if plan.action == ShareAction.NOOP:
        status = 'up to date'
    else:
        status = 'applied' if plan.applied else 'planned'
    return [plan.folder.name, plan.intent.aro, plan.intent.aro_name,
            format_action(plan.action.value, colorize), current, desired, status]


class ShareFolderCommand(Command):
    def get_parser(self):
        return share_folder_parser

    def execute(self, params, **kwargs):
        folder_name = kwargs.get('folder')
        if not folder_name:
            raise CommandError('share-folder', 'Enter name of an existing shared folder')

        subjects = [(ARO_USER, x) for x in kwargs.get('user') or []]
        subjects.extend((ARO_GROUP, x) for x in kwargs.get('group') or [])
        if len(subjects) == 0:
            logging.info('Nothing to do')
            return

        action = kwargs.get('action') or 'grant'
        level = permission_code(kwargs.get('permission'))
        if action == 'grant':
            if not level:
                raise CommandError('share-folder', '"--permission" option is required to grant access')
            permission.decode(level)

        dry_run = kwargs.get('dry_run') is True
        op_context = self.new_operation_context(params, **kwargs)
        plans = []    # type: List[SharePlan]
        for aro, aro_name in subjects:
            intent = GrantIntent(folder_name=folder_name, aro=aro, aro_name=aro_name, level=level,
                                 remove=action == 'remove')
            plan = plan_grant(params, intent, op_context=op_context)
            if not dry_run:
                apply_plan(params, plan, op_context=op_context)
            plans.append(plan)

        if dry_run:
            table = [plan_to_row(x) for x in plans]
            dump_report_data(table, fields_to_titles(PLAN_FIELDS))


class ShareReportCommand(Command):
    def get_parser(self):
        return share_report_parser

    def execute(self, params, **kwargs):
        folder_name = kwargs.get('folder')
        if not folder_name:
            raise CommandError('share-report', 'Enter name of an existing shared folder')

        op_context = self.new_operation_context(params, **kwargs)
        folder = resolver.find_folder(params, folder_name, op_context=op_context)
        names = resolver.subject_names(params, op_context=op_context)

        filters = {(ARO_USER, x) for x in kwargs.get('user') or []}
        filters.update((ARO_GROUP, x) for x in kwargs.get('group') or [])

        fmt = kwargs.get('format') or 'table'
        table = []
        for p in folder.permissions:
            aro_name = names.get((p.aro, p.aro_foreign_key))
            if filters and (p.aro, aro_name) not in filters:
                continue
            table.append([p.aro, aro_name or p.aro_foreign_key, p.aro_foreign_key,
                          p.type if fmt == 'json' else permission.level_to_string(p.type)])

        if filters and len(table) == 0:
            logging.info('No permissions on folder "%s" for %s', folder.name,
                         ', '.join(f'{x[0]} "{x[1]}"' for x in sorted(filters)))

        fields = ['share_target_type', 'share_target_value', 'share_target_id', 'share_permission']
        headers = fields if fmt == 'json' else fields_to_titles(fields)
        title = f'Folder "{folder.name}" ({folder.folder_id})' if fmt == 'table' else None
        return dump_report_data(table, headers, title=title, fmt=fmt, filename=kwargs.get('output'), sort_by=1)


class ShareApplyCommand(Command):
    def get_parser(self):
        return share_apply_parser

    @staticmethod
    def load_shares(filename):    # type: (str) -> list
        filename = os.path.expanduser(filename)
        if not os.path.isfile(filename):
            raise CommandError('share-apply', f'File "{filename}" not found')
        with open(filename, 'r', encoding='utf-8') as fd:
            try:
                data = json.load(fd)
            except json.JSONDecodeError as e:
                raise CommandError('share-apply', f'Invalid JSON file "{filename}": {e}')
        if isinstance(data, dict):
            data = data.get('shares')
        if not isinstance(data, list):
            raise CommandError('share-apply', 'Expected a list of shares')
        return data

    @staticmethod
    def prepare_intent(share):    # type: (dict) -> Tuple[GrantIntent, Optional[Error]]
        """Loads and validates one declared share. A rejected entry is returned with its error."""
        intent = GrantIntent()
        try:
            intent.load(share)
            intent.aro = permission.normalize_aro(intent.aro)
            if not intent.is_removal:
                intent.level = permission_code(intent.level)
                if intent.level is None:
                    raise ValidationError(f'Share permission is required to grant {intent}')
                permission.decode(intent.level)
        except ValidationError as e:
            return intent, e
        return intent, None

    @staticmethod
    def error_row(intent, status, message):    # type: (GrantIntent, str, str) -> list
        return [intent.folder_name, intent.aro, intent.aro_name, status, None, intent.level, message]

    def execute(self, params, **kwargs):    # type: (PassboltParams, ...) -> Optional[str]
        shares = self.load_shares(kwargs.get('filename') or '')
        entries = [self.prepare_intent(x) for x in shares]

        dry_run = kwargs.get('dry_run') is True
        fmt = kwargs.get('format') or 'table'
        op_context = self.new_operation_context(params, **kwargs)

        table = []
        failed = 0
        stopped_by = None    # type: Optional[Error]
        for intent, error in entries:
            if error is None and stopped_by is not None:
                failed += 1
                table.append(self.error_row(intent, 'skipped', str(stopped_by)))
                continue
            if error is None:
                try:
                    plan = plan_grant(params, intent, op_context=op_context)
                    if not dry_run:
                        apply_plan(params, plan, op_context=op_context)
                    table.append(plan_to_row(plan, colorize=fmt == 'table'))
                    continue
                except (OperationCancelledError, DeadlineExceededError) as e:
                    error = stopped_by = e
                except Error as e:
                    error = e
            failed += 1
            logging.error('%s: %s', intent, error)
            table.append(self.error_row(intent, 'error', str(error)))

        headers = PLAN_FIELDS if fmt == 'json' else fields_to_titles(PLAN_FIELDS)
        report = dump_report_data(table, headers, fmt=fmt)
        if failed > 0:
            if report:
                print(report)
            raise CommandError('share-apply', f'{failed} of {len(entries)} share(s) failed')
        return report
