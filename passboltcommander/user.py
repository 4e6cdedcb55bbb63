#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

from typing import Optional


class User:
    """Defines a Passbolt User """

    def __init__(self, user_id='', username=''):
        self.user_id = user_id
        self.username = username
        self.first_name = None    # type: Optional[str]
        self.last_name = None     # type: Optional[str]
        self.role_id = None       # type: Optional[str]
        self.active = False
        self.deleted = False

    def load(self, user):
        self.user_id = user['id']
        self.username = user.get('username') or ''
        self.role_id = user.get('role_id') or None
        self.active = user.get('active') is True
        self.deleted = user.get('deleted') is True
        profile = user.get('profile')
        if isinstance(profile, dict):
            self.first_name = profile.get('first_name') or None
            self.last_name = profile.get('last_name') or None

    @staticmethod
    def from_dict(user):    # type: (dict) -> User
        u = User()
        u.load(user)
        return u

    @property
    def full_name(self):    # type: () -> str
        return ' '.join(x for x in (self.first_name, self.last_name) if x)

    def __repr__(self):
        return f'User({self.user_id}, {self.username!r})'
