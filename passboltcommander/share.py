#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

"""Folder share reconciliation.

A grant intent names a shared folder, a user or group and the desired permission
level. Planning resolves the names against freshly fetched collections and compares
the intent with the permission entries found on the folder. Applying sends at most
one permission change to the server. Running the same intent again after a
successful apply plans a no-op.
"""

import enum
import logging
from typing import Optional

from . import api, permission, resolver
from .error import ValidationError
from .folder import Folder
from .operation import OperationContext
from .params import PassboltParams
from .permission import Permission, ShareLevel, ACO_FOLDER, ARO_USER

STATE_PRESENT = 'present'
STATE_ABSENT = 'absent'


class ShareAction(enum.Enum):
    NOOP = 'noop'
    CREATE = 'create'
    UPDATE_LEVEL = 'update'
    DELETE = 'delete'


class GrantIntent:
    """Desired share of a folder with a user or group"""

    def __init__(self, folder_name='', aro=ARO_USER, aro_name='', level=None, remove=False):
        self.folder_name = folder_name
        self.aro = aro
        self.aro_name = aro_name
        self.level = level      # type: Optional[str]
        self.remove = remove

    def load(self, grant):    # type: (dict) -> None
        if not isinstance(grant, dict):
            raise ValidationError(f'Share entry should be an object: {grant}')
        self.folder_name = grant.get('name') or ''
        self.aro = grant.get('share_target_type') or ''
        self.aro_name = grant.get('share_target_value') or ''
        level = grant.get('share_permission')
        self.level = str(level) if level is not None else None
        state = grant.get('state') or STATE_PRESENT
        if state not in (STATE_PRESENT, STATE_ABSENT):
            raise ValidationError(f'Invalid share state "{state}", expected one of: {STATE_PRESENT}, {STATE_ABSENT}')
        self.remove = state == STATE_ABSENT

    @staticmethod
    def from_dict(grant):    # type: (dict) -> GrantIntent
        intent = GrantIntent()
        intent.load(grant)
        return intent

    @property
    def is_removal(self):    # type: () -> bool
        return self.remove or self.level == permission.level_to_code(ShareLevel.DELETE)

    def __str__(self):
        return f'{self.aro} "{self.aro_name}" on folder "{self.folder_name}"'


class SharePlan:
    """Single decision computed for a grant intent"""

    def __init__(self, intent, action, folder, aro_id, existing=None, permission=None):
        # type: (GrantIntent, ShareAction, Folder, str, Optional[Permission], Optional[Permission]) -> None
        self.intent = intent
        self.action = action
        self.folder = folder
        self.aro_id = aro_id
        self.existing = existing
        self.permission = permission
        self.applied = False


def compute_action(existing, level, remove):
    # type: (Optional[Permission], Optional[ShareLevel], bool) -> ShareAction
    if remove:
        return ShareAction.DELETE if existing else ShareAction.NOOP
    if existing is None:
        return ShareAction.CREATE
    if existing.type == permission.encode(level):
        return ShareAction.NOOP
    return ShareAction.UPDATE_LEVEL


def plan_grant(params, intent, op_context=None):
    # type: (PassboltParams, GrantIntent, Optional[OperationContext]) -> SharePlan
    """Resolves the intent and computes the change. Nothing is sent to the server."""
    aro = permission.normalize_aro(intent.aro)
    remove = intent.is_removal
    level = None    # type: Optional[ShareLevel]
    if not remove:
        if intent.level is None:
            raise ValidationError(f'Share permission is required to grant {intent}')
        level = permission.decode(intent.level)

    folder = resolver.find_folder(params, intent.folder_name, op_context=op_context)
    aro_id = resolver.find_subject(params, aro, intent.aro_name, op_context=op_context)
    existing = folder.find_permission(aro, aro_id)
    action = compute_action(existing, level, remove)

    change = None    # type: Optional[Permission]
    if action == ShareAction.CREATE:
        change = Permission(aco=ACO_FOLDER, aco_foreign_key=folder.folder_id, aro=aro, aro_foreign_key=aro_id,
                            type=permission.encode(level), delete=False)
    elif action == ShareAction.UPDATE_LEVEL:
        change = existing.copy(type=permission.encode(level), delete=False)
    elif action == ShareAction.DELETE:
        change = existing.copy(delete=True)

    return SharePlan(intent, action, folder, aro_id, existing=existing, permission=change)


def apply_plan(params, plan, op_context=None):
    # type: (PassboltParams, SharePlan, Optional[OperationContext]) -> None
    if plan.action == ShareAction.NOOP:
        logging.debug('%s share \'%s\' is up to date on folder \'%s\'',
                      plan.intent.aro, plan.intent.aro_name, plan.folder.name)
        return

    if op_context:
        op_context.check()
    api.apply_folder_permissions(params, plan.folder.folder_id, [plan.permission], op_context=op_context)
    plan.applied = True
    logging.info('%s share \'%s\' %s folder \'%s\'', plan.intent.aro, plan.intent.aro_name,
                 'added to' if plan.action == ShareAction.CREATE else
                 'updated on' if plan.action == ShareAction.UPDATE_LEVEL else
                 'removed from', plan.folder.name)


def reconcile_grant(params, intent, dry_run=False, op_context=None):
    # type: (PassboltParams, GrantIntent, bool, Optional[OperationContext]) -> SharePlan
    plan = plan_grant(params, intent, op_context=op_context)
    if not dry_run:
        apply_plan(params, plan, op_context=op_context)
    return plan


def read_grant(params, folder_name, aro, aro_name, op_context=None):
    # type: (PassboltParams, str, str, str, Optional[OperationContext]) -> Optional[Permission]
    """Returns the current permission entry of the user or group on the folder, if any"""
    aro = permission.normalize_aro(aro)
    folder = resolver.find_folder(params, folder_name, op_context=op_context)
    aro_id = resolver.find_subject(params, aro, aro_name, op_context=op_context)
    return folder.find_permission(aro, aro_id)
