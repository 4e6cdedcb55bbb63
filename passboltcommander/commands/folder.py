#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

import argparse

from .base import dump_report_data, fields_to_titles, report_output_parser, Command
from .. import api


def register_commands(commands):
    commands['folder-list'] = FolderListCommand()
    commands['group-list'] = GroupListCommand()
    commands['user-list'] = UserListCommand()


def register_command_info(aliases, command_info):
    aliases['fl'] = 'folder-list'
    aliases['gl'] = 'group-list'
    aliases['ul'] = 'user-list'

    for p in [folder_list_parser, group_list_parser, user_list_parser]:
        command_info[p.prog] = p.description


folder_list_parser = argparse.ArgumentParser(prog='folder-list', parents=[report_output_parser],
                                             description='Display folders.')
folder_list_parser.add_argument('-s', '--search', dest='search', action='store', help='folder name search string')
folder_list_parser.add_argument('--personal', dest='personal', action='store_true',
                                help='include personal folders')

group_list_parser = argparse.ArgumentParser(prog='group-list', parents=[report_output_parser],
                                            description='Display groups.')

user_list_parser = argparse.ArgumentParser(prog='user-list', parents=[report_output_parser],
                                           description='Display users.')
user_list_parser.add_argument('--all', dest='all', action='store_true', help='include inactive users')


class FolderListCommand(Command):
    def get_parser(self):
        return folder_list_parser

    def execute(self, params, **kwargs):
        op_context = self.new_operation_context(params, **kwargs)
        folders = api.list_folders(params, search=kwargs.get('search'), include_permissions=True,
                                   op_context=op_context)
        show_personal = kwargs.get('personal') is True
        fmt = kwargs.get('format') or 'table'

        table = []
        for f in folders:
            if f.personal and not show_personal:
                continue
            table.append([f.folder_id, f.name, f.personal, f.folder_parent_id, len(f.permissions), f.modified])

        fields = ['folder_id', 'name', 'personal', 'folder_parent_id', 'permissions', 'modified']
        headers = fields if fmt == 'json' else fields_to_titles(fields)
        return dump_report_data(table, headers, fmt=fmt, filename=kwargs.get('output'), sort_by=1,
                                row_number=True)


class GroupListCommand(Command):
    def get_parser(self):
        return group_list_parser

    def execute(self, params, **kwargs):
        op_context = self.new_operation_context(params, **kwargs)
        groups = api.list_groups(params, op_context=op_context)
        fmt = kwargs.get('format') or 'table'

        table = [[g.group_id, g.name] for g in groups if g.deleted is not True]
        fields = ['group_id', 'name']
        headers = fields if fmt == 'json' else fields_to_titles(fields)
        return dump_report_data(table, headers, fmt=fmt, filename=kwargs.get('output'), sort_by=1,
                                row_number=True)


class UserListCommand(Command):
    def get_parser(self):
        return user_list_parser

    def execute(self, params, **kwargs):
        op_context = self.new_operation_context(params, **kwargs)
        users = api.list_users(params, op_context=op_context)
        show_all = kwargs.get('all') is True
        fmt = kwargs.get('format') or 'table'

        table = []
        for u in users:
            if not show_all and (u.deleted or not u.active):
                continue
            table.append([u.user_id, u.username, u.full_name, u.active])
        fields = ['user_id', 'username', 'name', 'active']
        headers = fields if fmt == 'json' else fields_to_titles(fields)
        return dump_report_data(table, headers, fmt=fmt, filename=kwargs.get('output'), sort_by=1,
                                row_number=True)
