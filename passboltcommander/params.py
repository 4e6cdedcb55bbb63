#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

import warnings
from typing import Optional
from urllib.parse import urlparse, urlunparse

import requests
from urllib3.exceptions import InsecureRequestWarning

DEFAULT_TIMEOUT = 30


class RestApiContext:
    def __init__(self, server='', access_token=None):
        self.server_base = server
        self.access_token = access_token     # type: Optional[str]
        self.proxies = None
        self.timeout = DEFAULT_TIMEOUT       # type: Optional[float]
        self.session = None                  # type: Optional[requests.Session]
        self._certificate_check = True

    def __get_server_base(self):
        return self.__server_base

    def __set_server_base(self, value):    # type: (str) -> None
        if value and not value.startswith('http'):
            value = 'https://' + value
        if value:
            p = urlparse(value)
            path = p.path.rstrip('/')
            value = urlunparse((p.scheme or 'https', p.netloc, path, None, None, None))
        self.__server_base = value or ''

    def set_proxy(self, proxy_server):
        if proxy_server:
            self.proxies = {
                'http': proxy_server,
                'https': proxy_server
            }
        else:
            self.proxies = None

    @property
    def certificate_check(self):
        return self._certificate_check

    @certificate_check.setter
    def certificate_check(self, value):
        if isinstance(value, bool):
            self._certificate_check = value
            if value:
                warnings.simplefilter('default', InsecureRequestWarning)
            else:
                warnings.simplefilter('ignore', InsecureRequestWarning)

    @property
    def is_connected(self):    # type: () -> bool
        return self.session is not None

    server_base = property(__get_server_base, __set_server_base)


class PassboltParams:
    """ Storage of the session handle and settings. Nothing fetched from the server is cached here. """

    def __init__(self, config_filename='', config=None, server=''):
        self.config_filename = config_filename
        self.config = config or {}
        self.commands = []
        self.debug = False
        self.batch_mode = False
        self.deadline = None    # type: Optional[float]
        self.rest_context = RestApiContext(server=server)

    def __get_server(self):
        return self.rest_context.server_base

    def __set_server(self, value):
        self.rest_context.server_base = value

    def __get_access_token(self):
        return self.rest_context.access_token

    def __set_access_token(self, value):
        self.rest_context.access_token = value

    def __get_proxy(self):
        if self.rest_context.proxies:
            return self.rest_context.proxies.get('https')

    def __set_proxy(self, value):
        self.rest_context.set_proxy(value)

    def __get_timeout(self):
        return self.rest_context.timeout

    def __set_timeout(self, value):
        self.rest_context.timeout = float(value) if value else None

    server = property(__get_server, __set_server)
    access_token = property(__get_access_token, __set_access_token)
    proxy = property(__get_proxy, __set_proxy)
    timeout = property(__get_timeout, __set_timeout)
