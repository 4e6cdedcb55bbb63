import copy

import requests

from passboltcommander.params import PassboltParams

_SERVER = 'https://passbolt.company.com'
_ACCESS_TOKEN = 'unit-test-access-token'

FOLDER_FINANCE_ID = 'F1'
FOLDER_ENGINEERING_ID = 'F2'
FOLDER_PRIVATE_ID = 'F3'

GROUP_DEVELOPERS_ID = 'G1'
GROUP_ACCOUNTING_ID = 'G9'

USER_ADMIN_ID = 'U1'
USER_TEST_ID = 'U2'
USER_FORMER_ID = 'U3'

_FOLDERS = [
    {
        'id': FOLDER_FINANCE_ID,
        'name': 'Finance',
        'personal': False,
        'folder_parent_id': None,
        'created': '2024-01-10T09:00:00+00:00',
        'modified': '2024-01-10T09:00:00+00:00',
        'created_by': USER_ADMIN_ID,
        'modified_by': USER_ADMIN_ID,
        'permissions': []
    },
    {
        'id': FOLDER_ENGINEERING_ID,
        'name': 'Engineering',
        'personal': False,
        'folder_parent_id': None,
        'created': '2024-02-01T12:30:00+00:00',
        'modified': '2024-03-15T08:45:00+00:00',
        'created_by': USER_ADMIN_ID,
        'modified_by': USER_ADMIN_ID,
        'permissions': [
            {
                'id': 'P1',
                'aco': 'Folder',
                'aco_foreign_key': FOLDER_ENGINEERING_ID,
                'aro': 'Group',
                'aro_foreign_key': GROUP_DEVELOPERS_ID,
                'type': 1
            },
            {
                'id': 'P2',
                'aco': 'Folder',
                'aco_foreign_key': FOLDER_ENGINEERING_ID,
                'aro': 'User',
                'aro_foreign_key': USER_ADMIN_ID,
                'type': 15
            }
        ]
    },
    {
        'id': FOLDER_PRIVATE_ID,
        'name': 'Private',
        'personal': True,
        'folder_parent_id': None,
        'permissions': [
            {
                'id': 'P3',
                'aco': 'Folder',
                'aco_foreign_key': FOLDER_PRIVATE_ID,
                'aro': 'User',
                'aro_foreign_key': USER_TEST_ID,
                'type': 15
            }
        ]
    }
]

_GROUPS = [
    {'id': GROUP_DEVELOPERS_ID, 'name': 'Developers', 'deleted': False},
    {'id': GROUP_ACCOUNTING_ID, 'name': 'Accounting', 'deleted': False},
]

_USERS = [
    {
        'id': USER_ADMIN_ID,
        'username': 'admin@company.com',
        'role_id': 'R1',
        'active': True,
        'deleted': False,
        'profile': {'first_name': 'Ada', 'last_name': 'Admin'}
    },
    {
        'id': USER_TEST_ID,
        'username': 'unit.test@company.com',
        'role_id': 'R2',
        'active': True,
        'deleted': False,
        'profile': {'first_name': 'Unit', 'last_name': 'Test'}
    },
    {
        'id': USER_FORMER_ID,
        'username': 'former@company.com',
        'role_id': 'R2',
        'active': False,
        'deleted': False,
        'profile': {'first_name': 'Former'}
    },
]


def get_folders():    # type: () -> list
    return copy.deepcopy(_FOLDERS)


def get_groups():    # type: () -> list
    return copy.deepcopy(_GROUPS)


def get_users():    # type: () -> list
    return copy.deepcopy(_USERS)


def get_user_params():
    p = PassboltParams(config_filename='NONE', server=_SERVER)
    p.access_token = _ACCESS_TOKEN
    return p


def get_connected_params():
    p = get_user_params()
    p.rest_context.session = requests.Session()
    return p
