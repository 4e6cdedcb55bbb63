#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

from typing import Optional


class Group:
    """Defines a Passbolt Group """

    def __init__(self, group_id='', name=''):
        self.group_id = group_id
        self.name = name
        self.deleted = None    # type: Optional[bool]

    def load(self, group):
        self.group_id = group['id']
        self.name = group.get('name') or ''
        if 'deleted' in group:
            self.deleted = group['deleted'] is True

    @staticmethod
    def from_dict(group):    # type: (dict) -> Group
        g = Group()
        g.load(group)
        return g

    def __repr__(self):
        return f'Group({self.group_id}, {self.name!r})'
