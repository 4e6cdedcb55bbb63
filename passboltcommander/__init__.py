# -*- coding: utf-8 -*-
#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

__version__ = '1.2.0'
