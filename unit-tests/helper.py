import copy
import itertools
import re

import data_server
from passboltcommander.error import PassboltApiError


class PassboltApiHelper:
    """In-memory Passbolt server. Replaces passboltcommander.rest_api.execute_rest"""

    _folders = []
    _groups = []
    _users = []
    _share_requests = []
    _failures = {}
    _permission_ids = itertools.count(100)

    @staticmethod
    def reset():
        PassboltApiHelper._folders = data_server.get_folders()
        PassboltApiHelper._groups = data_server.get_groups()
        PassboltApiHelper._users = data_server.get_users()
        PassboltApiHelper._share_requests.clear()
        PassboltApiHelper._failures.clear()

    @staticmethod
    def share_requests():
        # type: () -> list
        return PassboltApiHelper._share_requests

    @staticmethod
    def fail_endpoint(endpoint, error):
        # type: (str, Exception) -> None
        PassboltApiHelper._failures[endpoint] = error

    @staticmethod
    def folder(folder_id):
        # type: (str) -> dict
        return next((x for x in PassboltApiHelper._folders if x['id'] == folder_id), None)

    @staticmethod
    def execute_rest(context, method, endpoint, query=None, payload=None, op_context=None, operation=None):
        if op_context:
            op_context.check()
        if endpoint in PassboltApiHelper._failures:
            raise PassboltApiHelper._failures[endpoint]
        query = query or {}

        if method == 'GET' and endpoint == '/folders.json':
            search = (query.get('filter[search]') or '').lower()
            folders = [copy.deepcopy(x) for x in PassboltApiHelper._folders if search in x['name'].lower()]
            if not query.get('contain[permissions]'):
                for f in folders:
                    f.pop('permissions', None)
            return folders

        if method == 'GET' and endpoint == '/groups.json':
            return copy.deepcopy(PassboltApiHelper._groups)

        if method == 'GET' and endpoint == '/users.json':
            return copy.deepcopy(PassboltApiHelper._users)

        m = re.fullmatch(r'/share/folder/([\w-]+)\.json', endpoint)
        if method == 'PUT' and m:
            folder_id = m.group(1)
            PassboltApiHelper._share_requests.append((folder_id, copy.deepcopy(payload)))
            folder = PassboltApiHelper.folder(folder_id)
            if folder is None:
                raise PassboltApiError(404, 'The folder does not exist.', operation)
            permissions = folder['permissions']
            for p in payload['permissions']:
                if p.get('delete'):
                    folder['permissions'] = permissions = [x for x in permissions if x['id'] != p['id']]
                elif p.get('is_new'):
                    entry = {x: p[x] for x in ('aco', 'aco_foreign_key', 'aro', 'aro_foreign_key', 'type')}
                    entry['id'] = f'P{next(PassboltApiHelper._permission_ids)}'
                    permissions.append(entry)
                else:
                    for x in permissions:
                        if x['id'] == p['id']:
                            x['type'] = p['type']
            return copy.deepcopy(permissions)

        raise PassboltApiError(404, f'{method} {endpoint} is not supported', operation)
