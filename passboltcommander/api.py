#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

import logging
from typing import List, Optional, Iterable

import requests

from . import rest_api, __version__
from .error import Error
from .folder import Folder
from .group import Group
from .operation import OperationContext
from .params import PassboltParams
from .permission import Permission
from .user import User


def connect(params):    # type: (PassboltParams) -> None
    """Opens the HTTP session used by every remote call. The access token is obtained elsewhere."""
    context = params.rest_context
    if context.session is not None:
        return
    if not context.server_base:
        raise Error('Passbolt server is not configured. Use "server" command or "--server" option.')
    if not context.access_token:
        raise Error('Passbolt access token is not configured. Set "access_token" in the configuration file '
                    'or PASSBOLT_TOKEN environment variable.')

    session = requests.Session()
    session.headers.update({
        'Authorization': f'Bearer {context.access_token}',
        'Accept': 'application/json',
        'User-Agent': f'PassboltCommander/{__version__}',
    })
    context.session = session
    logging.debug('Connected to %s', context.server_base)


def disconnect(params):    # type: (PassboltParams) -> None
    context = params.rest_context
    if context.session is not None:
        try:
            context.session.close()
        finally:
            context.session = None
        logging.debug('Disconnected from %s', context.server_base)


def list_folders(params, search=None, include_permissions=True, op_context=None):
    # type: (PassboltParams, Optional[str], bool, Optional[OperationContext]) -> List[Folder]
    query = {}
    if search:
        query['filter[search]'] = search
    if include_permissions:
        query['contain[permission]'] = 1
        query['contain[permissions]'] = 1
        query['contain[permissions.user.profile]'] = 1
        query['contain[permissions.group]'] = 1
    operation = f'List folders "{search}"' if search else 'List folders'
    rs = rest_api.execute_rest(params.rest_context, 'GET', '/folders.json', query=query,
                               op_context=op_context, operation=operation)
    return [Folder.from_dict(x) for x in rs or []]


def list_groups(params, op_context=None):    # type: (PassboltParams, Optional[OperationContext]) -> List[Group]
    rs = rest_api.execute_rest(params.rest_context, 'GET', '/groups.json',
                               op_context=op_context, operation='List groups')
    return [Group.from_dict(x) for x in rs or []]


def list_users(params, op_context=None):    # type: (PassboltParams, Optional[OperationContext]) -> List[User]
    rs = rest_api.execute_rest(params.rest_context, 'GET', '/users.json',
                               op_context=op_context, operation='List users')
    return [User.from_dict(x) for x in rs or []]


def apply_folder_permissions(params, folder_id, permissions, op_context=None):
    # type: (PassboltParams, str, Iterable[Permission], Optional[OperationContext]) -> None
    """Sends permission changes of a folder in one call. The call is not retried."""
    rq = {
        'permissions': [x.to_request() for x in permissions]
    }
    rest_api.execute_rest(params.rest_context, 'PUT', f'/share/folder/{folder_id}.json', payload=rq,
                          op_context=op_context, operation=f'Share folder {folder_id}')
