#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

"""Name to identifier resolution.

Collections are scanned in the order the server returned them and the first
exact match wins. Duplicate names are not reported: a second folder, group or
user with the same name is never selected.
"""

from typing import Callable, Iterable, List, Optional, TypeVar

from . import api
from .error import NotFoundError, FolderNotFoundError, SubjectNotFoundError, ValidationError
from .folder import Folder
from .group import Group
from .operation import OperationContext
from .params import PassboltParams
from .permission import ARO_GROUP, ARO_USER, normalize_aro
from .user import User

T = TypeVar('T')


def first_match(collection, predicate):    # type: (Iterable[T], Callable[[T], bool]) -> Optional[T]
    return next((x for x in collection if predicate(x)), None)


def resolve(collection, predicate, get_id, kind='Entity', name=''):
    # type: (Iterable[T], Callable[[T], bool], Callable[[T], str], str, str) -> str
    item = first_match(collection, predicate)
    if item is None:
        raise NotFoundError(kind, name)
    return get_id(item)


def _ensure_name(kind, name):
    if not isinstance(name, str) or not name:
        raise ValidationError(f'{kind} name cannot be empty')


def resolve_folder(folders, name):    # type: (Iterable[Folder], str) -> Folder
    """Returns the first shared folder with the exact name. Personal folders are skipped."""
    _ensure_name('Folder', name)
    folder = first_match((x for x in folders if not x.personal), lambda x: x.name == name)
    if folder is None:
        raise FolderNotFoundError(name)
    return folder


def resolve_group(groups, name):    # type: (Iterable[Group], str) -> str
    _ensure_name(ARO_GROUP, name)
    try:
        return resolve(groups, lambda x: x.name == name, lambda x: x.group_id, ARO_GROUP, name)
    except NotFoundError:
        raise SubjectNotFoundError(ARO_GROUP, name)


def resolve_user(users, username):    # type: (Iterable[User], str) -> str
    _ensure_name(ARO_USER, username)
    try:
        return resolve(users, lambda x: x.username == username, lambda x: x.user_id, ARO_USER, username)
    except NotFoundError:
        raise SubjectNotFoundError(ARO_USER, username)


def find_folder(params, name, op_context=None):
    # type: (PassboltParams, str, Optional[OperationContext]) -> Folder
    _ensure_name('Folder', name)
    folders = api.list_folders(params, search=name, include_permissions=True, op_context=op_context)
    return resolve_folder(folders, name)


def find_subject(params, aro, name, op_context=None):
    # type: (PassboltParams, str, str, Optional[OperationContext]) -> str
    aro = normalize_aro(aro)
    _ensure_name(aro, name)
    if aro == ARO_GROUP:
        groups = api.list_groups(params, op_context=op_context)
        return resolve_group(groups, name)
    users = api.list_users(params, op_context=op_context)
    return resolve_user(users, name)


def subject_names(params, op_context=None):
    # type: (PassboltParams, Optional[OperationContext]) -> dict
    """Maps (aro, id) to the display name of every group and user. Used by reports."""
    names = {}
    groups = api.list_groups(params, op_context=op_context)   # type: List[Group]
    for g in groups:
        names.setdefault((ARO_GROUP, g.group_id), g.name)
    users = api.list_users(params, op_context=op_context)    # type: List[User]
    for u in users:
        names.setdefault((ARO_USER, u.user_id), u.username)
    return names
