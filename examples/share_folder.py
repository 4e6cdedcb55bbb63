import argparse
import logging
import sys

from passboltcommander import api, share
from passboltcommander.__main__ import get_params_from_config
from passboltcommander.error import Error
from passboltcommander.operation import OperationContext
from passboltcommander.share import GrantIntent

parser = argparse.ArgumentParser(description='Share a Passbolt folder with users and groups')
parser.add_argument('--config', dest='config', action='store', help='Config file to use')
parser.add_argument('--debug', dest='debug', action='store_true', help='Enables debug logging')
parser.add_argument('--dry-run', dest='dry_run', action='store_true', help='Display changes without applying them')
parser.add_argument('--timeout', dest='timeout', type=float, action='store', help='Time limit in seconds')
parser.add_argument('-p', '--permission', dest='permission', action='store', default='1',
                    help='share permission: 1 (read), 7 (update), 15 (owner)')
parser.add_argument('--user', dest='users', action='append', help='Users to grant access.')
parser.add_argument('--group', dest='groups', action='append', help='Groups to grant access.')
parser.add_argument('--remove-user', dest='remove_users', action='append', help='Users to remove from folder.')
parser.add_argument('--remove-group', dest='remove_groups', action='append', help='Groups to remove from folder.')
parser.add_argument('folder', help='Shared folder name')
opts, flags = parser.parse_known_args(sys.argv[1:])

logging.basicConfig(level=logging.DEBUG if opts.debug is True else logging.INFO, format='%(message)s')

my_params = get_params_from_config(opts.config or '')

intents = []
intents.extend(GrantIntent(opts.folder, 'User', x, opts.permission) for x in opts.users or [])
intents.extend(GrantIntent(opts.folder, 'Group', x, opts.permission) for x in opts.groups or [])
intents.extend(GrantIntent(opts.folder, 'User', x, remove=True) for x in opts.remove_users or [])
intents.extend(GrantIntent(opts.folder, 'Group', x, remove=True) for x in opts.remove_groups or [])
if not intents:
    print('Nothing to do')
    exit(0)

op_context = OperationContext(timeout=opts.timeout)
api.connect(my_params)
try:
    for intent in intents:
        plan = share.reconcile_grant(my_params, intent, dry_run=opts.dry_run, op_context=op_context)
        print(f'{intent}: {plan.action.value}')
except Error as e:
    logging.error(e)
    exit(1)
finally:
    api.disconnect(my_params)
