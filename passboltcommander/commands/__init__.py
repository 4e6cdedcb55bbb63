#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

from .base import register_commands, aliases, commands, command_info

__all__ = ['register_commands', 'aliases', 'commands', 'command_info']
