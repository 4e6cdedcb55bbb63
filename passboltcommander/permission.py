#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

import enum
from typing import Optional, Tuple

from .error import InvalidLevelError, ValidationError

ACO_FOLDER = 'Folder'
ACO_RESOURCE = 'Resource'
ARO_USER = 'User'
ARO_GROUP = 'Group'

ACO_TYPES = (ACO_FOLDER, ACO_RESOURCE)
ARO_TYPES = (ARO_USER, ARO_GROUP)


class ShareLevel(enum.IntEnum):
    DELETE = -1
    READ = 1
    UPDATE = 7
    OWNER = 15


LEVEL_CODES = {
    '-1': ShareLevel.DELETE,
    '1': ShareLevel.READ,
    '7': ShareLevel.UPDATE,
    '15': ShareLevel.OWNER,
}

LEVEL_NAMES = {
    ShareLevel.DELETE: 'Delete',
    ShareLevel.READ: 'Read',
    ShareLevel.UPDATE: 'Update',
    ShareLevel.OWNER: 'Owner',
}


def decode(code):    # type: (str) -> ShareLevel
    """Converts a permission code string into a share level.

    Only the literal codes "-1", "1", "7" and "15" are accepted.
    """
    if isinstance(code, str) and code in LEVEL_CODES:
        return LEVEL_CODES[code]
    raise InvalidLevelError(code)


def encode(level):   # type: (ShareLevel) -> int
    return int(ShareLevel(level))


def level_to_code(level):    # type: (ShareLevel) -> str
    return str(encode(level))


def level_to_string(level):   # type: (int) -> str
    try:
        return LEVEL_NAMES[ShareLevel(level)]
    except ValueError:
        return str(level)


def normalize_aro(aro):    # type: (str) -> str
    if isinstance(aro, str):
        value = aro.strip().capitalize()
        if value in ARO_TYPES:
            return value
    raise ValidationError(f'invalid share target type, expected one of: {", ".join(ARO_TYPES)}, got input: {aro}')


class Permission:
    """Defines a Passbolt permission entry"""

    def __init__(self, aco=ACO_FOLDER, aco_foreign_key='', aro=ARO_USER, aro_foreign_key='',
                 type=ShareLevel.READ, delete=False, permission_id=None):
        self.permission_id = permission_id   # type: Optional[str]
        self.aco = aco
        self.aco_foreign_key = aco_foreign_key
        self.aro = aro
        self.aro_foreign_key = aro_foreign_key
        self.type = int(type)
        self.delete = delete

    def load(self, permission):   # type: (dict) -> None
        self.permission_id = permission.get('id')
        self.aco = permission['aco']
        if self.aco not in ACO_TYPES:
            raise ValidationError(f'invalid permission object type, expected one of: {", ".join(ACO_TYPES)}, '
                                  f'got input: {self.aco}')
        self.aco_foreign_key = permission['aco_foreign_key']
        self.aro = permission['aro']
        if self.aro not in ARO_TYPES:
            raise ValidationError(f'invalid share target type, expected one of: {", ".join(ARO_TYPES)}, '
                                  f'got input: {self.aro}')
        self.aro_foreign_key = permission['aro_foreign_key']
        self.type = encode(decode(str(permission['type'])))
        self.delete = False

    @staticmethod
    def from_dict(permission):    # type: (dict) -> Permission
        p = Permission()
        p.load(permission)
        return p

    @property
    def key(self):    # type: () -> Tuple[str, str, str, str]
        return self.aco, self.aco_foreign_key, self.aro, self.aro_foreign_key

    def to_request(self):    # type: () -> dict
        rq = {
            'aco': self.aco,
            'aco_foreign_key': self.aco_foreign_key,
            'aro': self.aro,
            'aro_foreign_key': self.aro_foreign_key,
            'type': self.type,
        }
        if self.permission_id:
            rq['id'] = self.permission_id
        else:
            rq['is_new'] = True
        if self.delete:
            rq['delete'] = True
        return rq

    def copy(self, **kwargs):    # type: (...) -> Permission
        p = Permission(aco=self.aco, aco_foreign_key=self.aco_foreign_key, aro=self.aro,
                       aro_foreign_key=self.aro_foreign_key, type=self.type, delete=self.delete,
                       permission_id=self.permission_id)
        for name, value in kwargs.items():
            setattr(p, name, value)
        return p

    def __eq__(self, other):
        if not isinstance(other, Permission):
            return NotImplemented
        return self.key == other.key and self.type == other.type and self.delete == other.delete

    def __repr__(self):
        return f'Permission({self.aco}:{self.aco_foreign_key} -> {self.aro}:{self.aro_foreign_key}, ' \
               f'type={self.type}, delete={self.delete})'
