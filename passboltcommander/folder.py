#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

from typing import List, Optional

from .permission import Permission, ACO_FOLDER


class Folder:
    """Defines a Passbolt Folder"""

    def __init__(self, folder_id='', name='', personal=False, folder_parent_id=None, permissions=None):
        self.folder_id = folder_id
        self.name = name
        self.personal = personal
        self.folder_parent_id = folder_parent_id    # type: Optional[str]
        self.created = None         # type: Optional[str]
        self.modified = None        # type: Optional[str]
        self.created_by = None      # type: Optional[str]
        self.modified_by = None     # type: Optional[str]
        self.permissions = permissions or []    # type: List[Permission]

    def load(self, folder):    # type: (dict) -> None
        self.folder_id = folder['id']
        self.name = folder.get('name') or ''
        self.personal = folder.get('personal') is True
        self.folder_parent_id = folder.get('folder_parent_id') or None
        self.created = folder.get('created') or None
        self.modified = folder.get('modified') or None
        self.created_by = folder.get('created_by') or None
        self.modified_by = folder.get('modified_by') or None
        self.permissions = [Permission.from_dict(x) for x in folder.get('permissions') or []]

    @staticmethod
    def from_dict(folder):    # type: (dict) -> Folder
        f = Folder()
        f.load(folder)
        return f

    def find_permission(self, aro, aro_id):    # type: (str, str) -> Optional[Permission]
        """Returns the folder permission entry granted to the user or group"""
        return next((x for x in self.permissions
                     if x.aco == ACO_FOLDER and x.aco_foreign_key == self.folder_id
                     and x.aro == aro and x.aro_foreign_key == aro_id), None)

    def __repr__(self):
        return f'Folder({self.folder_id}, {self.name!r}, personal={self.personal})'
