#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

import json
import logging
import ssl
from typing import Optional, Any

import requests

from .error import Error, RemoteError, PassboltApiError, DeadlineExceededError
from .operation import OperationContext
from .params import RestApiContext

CERTIFICATE_HELP = 'Certificate validation error. Set "certificate_check": false in the configuration ' \
                   'file only if the server uses a self-signed certificate.'


def _is_certificate_error(e):    # type: (requests.exceptions.SSLError) -> bool
    if len(e.args) > 0:
        inner_e = e.args[0]
        if hasattr(inner_e, 'reason'):
            reason = getattr(inner_e, 'reason')
            if isinstance(reason, Exception) and hasattr(reason, 'args'):
                args = getattr(reason, 'args')
                if isinstance(args, tuple) and len(args) > 0:
                    return isinstance(args[0], ssl.SSLCertVerificationError)
    return False


def _load_json(rs, operation):    # type: (requests.Response, str) -> Any
    try:
        return rs.json()
    except ValueError as e:
        logging.debug('<<< Response Content: [%s]', rs.text)
        raise RemoteError(f'HTTP {rs.status_code}: response is not valid JSON: {e}', operation)


def execute_rest(context, method, endpoint, query=None, payload=None, op_context=None, operation=None):
    # type: (RestApiContext, str, str, Optional[dict], Optional[dict], Optional[OperationContext], Optional[str]) -> Any
    """Issues a single Passbolt API call and returns the body of the response envelope.

    operation names the call in raised errors. Nothing is retried.
    """
    operation = operation or f'{method} {endpoint}'
    if context.session is None:
        raise Error('Not connected. Configure "server" and "access_token" first.')

    if op_context:
        op_context.check()
        timeout = op_context.request_timeout(context.timeout)
    else:
        timeout = context.timeout

    if endpoint.startswith('https://') or endpoint.startswith('http://'):
        url = endpoint
    else:
        url = context.server_base + endpoint

    logger = logging.getLogger()
    if logger.level <= logging.DEBUG:
        logger.debug('>>> Request: [%s %s] %s', method, url, json.dumps(query or {}, sort_keys=True))
        if payload is not None:
            logger.debug('>>> Request JSON: [%s]', json.dumps(payload, sort_keys=True, indent=4))

    try:
        rs = context.session.request(method, url, params=query, json=payload, timeout=timeout,
                                     proxies=context.proxies, verify=context.certificate_check)
    except requests.exceptions.Timeout as e:
        if op_context and op_context.remaining() == 0:
            raise DeadlineExceededError(f'{operation}: request timed out at the operation deadline')
        raise RemoteError(str(e), operation)
    except requests.exceptions.SSLError as e:
        if _is_certificate_error(e):
            raise RemoteError(f'{e}\n{CERTIFICATE_HELP}', operation)
        raise RemoteError(str(e), operation)
    except requests.exceptions.RequestException as e:
        raise RemoteError(str(e), operation)

    content_type = rs.headers.get('Content-Type') or ''
    if 200 <= rs.status_code < 300:
        if not content_type.startswith('application/json'):
            return None
        rs_json = _load_json(rs, operation)
        if logger.level <= logging.DEBUG:
            logger.debug('<<< Response JSON: [%s]', json.dumps(rs_json, sort_keys=True, indent=4))
        if isinstance(rs_json, dict) and 'header' in rs_json:
            header = rs_json.get('header') or {}
            if header.get('status') == 'error':
                raise PassboltApiError(header.get('code') or rs.status_code, header.get('message') or '',
                                       operation)
            return rs_json.get('body')
        return rs_json

    if content_type.startswith('application/json'):
        failure = _load_json(rs, operation)
        logging.debug('<<< Response Error: [%s]', failure)
        header = failure.get('header') if isinstance(failure, dict) else None
        if isinstance(header, dict):
            raise PassboltApiError(header.get('code') or rs.status_code, header.get('message') or rs.reason,
                                   operation)
        raise PassboltApiError(rs.status_code, rs.reason, operation)

    if logger.level <= logging.DEBUG:
        if rs.text:
            logger.debug('<<< Response Content: [%s]', rs.text)
        else:
            logger.debug('<<< HTTP Status: [%s]  Reason: [%s]', rs.status_code, rs.reason)
    raise PassboltApiError(rs.status_code, rs.reason, operation)
