import json
import os
import tempfile
from unittest import TestCase, mock

import requests

from data_server import get_connected_params, FOLDER_FINANCE_ID, FOLDER_ENGINEERING_ID, GROUP_ACCOUNTING_ID
from helper import PassboltApiHelper
from passboltcommander.commands import share
from passboltcommander.error import CommandError, InvalidLevelError
from passboltcommander.operation import OperationContext


class TestShareFolder(TestCase):
    def setUp(self):
        PassboltApiHelper.reset()
        self.execute_mock = mock.patch('passboltcommander.rest_api.execute_rest').start()
        self.execute_mock.side_effect = PassboltApiHelper.execute_rest

    def tearDown(self):
        mock.patch.stopall()

    def test_grant(self):
        params = get_connected_params()
        cmd = share.ShareFolderCommand()
        cmd.execute(params, folder='Finance', group=['Accounting'], user=['unit.test@company.com'],
                    permission='update')

        requests = PassboltApiHelper.share_requests()
        self.assertEqual(len(requests), 2)
        self.assertTrue(all(x[0] == FOLDER_FINANCE_ID for x in requests))
        self.assertEqual({x[1]['permissions'][0]['aro'] for x in requests}, {'User', 'Group'})
        self.assertTrue(all(x[1]['permissions'][0]['type'] == 7 for x in requests))

    def test_grant_args(self):
        params = get_connected_params()
        cmd = share.ShareFolderCommand()
        cmd.execute_args(params, '-g Accounting -p 15 Finance')
        _, rq = PassboltApiHelper.share_requests()[0]
        self.assertEqual(rq['permissions'][0]['aro_foreign_key'], GROUP_ACCOUNTING_ID)
        self.assertEqual(rq['permissions'][0]['type'], 15)

    def test_remove(self):
        params = get_connected_params()
        cmd = share.ShareFolderCommand()
        cmd.execute(params, folder='Engineering', action='remove', group=['Developers'])
        folder_id, rq = PassboltApiHelper.share_requests()[0]
        self.assertEqual(folder_id, FOLDER_ENGINEERING_ID)
        self.assertTrue(rq['permissions'][0]['delete'])

        cmd.execute(params, folder='Engineering', action='remove', group=['Developers'])
        self.assertEqual(len(PassboltApiHelper.share_requests()), 1)

    def test_dry_run(self):
        params = get_connected_params()
        cmd = share.ShareFolderCommand()
        with mock.patch('builtins.print') as mock_print:
            cmd.execute(params, folder='Finance', group=['Accounting'], permission='7', dry_run=True)
            mock_print.assert_called()
        self.assertEqual(len(PassboltApiHelper.share_requests()), 0)

    def test_invalid_input(self):
        params = get_connected_params()
        cmd = share.ShareFolderCommand()
        with self.assertRaises(CommandError):
            cmd.execute(params, folder='Finance', group=['Accounting'])
        with self.assertRaises(InvalidLevelError):
            cmd.execute(params, folder='Finance', group=['Accounting'], permission='write')
        with self.assertRaises(CommandError):
            cmd.execute(params, group=['Accounting'], permission='7')
        self.execute_mock.assert_not_called()

        cmd.execute(params, folder='Finance', permission='7')
        self.execute_mock.assert_not_called()


class TestShareReport(TestCase):
    def setUp(self):
        PassboltApiHelper.reset()
        self.execute_mock = mock.patch('passboltcommander.rest_api.execute_rest').start()
        self.execute_mock.side_effect = PassboltApiHelper.execute_rest

    def tearDown(self):
        mock.patch.stopall()

    def test_report(self):
        params = get_connected_params()
        cmd = share.ShareReportCommand()
        report = json.loads(cmd.execute(params, folder='Engineering', format='json'))
        self.assertEqual(len(report), 2)
        by_name = {x['share_target_value']: x for x in report}
        self.assertEqual(by_name['Developers']['share_target_type'], 'Group')
        self.assertEqual(by_name['Developers']['share_permission'], 1)
        self.assertEqual(by_name['admin@company.com']['share_permission'], 15)

        report = json.loads(cmd.execute(params, folder='Engineering', format='json', group=['Developers']))
        self.assertEqual(len(report), 1)

    def test_report_table(self):
        params = get_connected_params()
        cmd = share.ShareReportCommand()
        with mock.patch('builtins.print'):
            self.assertIsNone(cmd.execute(params, folder='Engineering'))

    def test_report_csv(self):
        params = get_connected_params()
        cmd = share.ShareReportCommand()
        report = cmd.execute(params, folder='Engineering', format='csv')
        lines = report.splitlines()
        self.assertEqual(lines[0], 'Share Target Type,Share Target Value,Share Target ID,Share Permission')
        self.assertEqual(lines[1], 'User,admin@company.com,U1,Owner')


class TestShareApply(TestCase):
    def setUp(self):
        PassboltApiHelper.reset()
        self.execute_mock = mock.patch('passboltcommander.rest_api.execute_rest').start()
        self.execute_mock.side_effect = PassboltApiHelper.execute_rest
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        mock.patch.stopall()
        self.temp_dir.cleanup()

    def write_shares(self, shares):
        filename = os.path.join(self.temp_dir.name, 'shares.json')
        with open(filename, 'w') as f:
            json.dump(shares, f)
        return filename

    def test_apply(self):
        params = get_connected_params()
        filename = self.write_shares([
            {'name': 'Finance', 'share_target_type': 'Group', 'share_target_value': 'Accounting',
             'share_permission': '7'},
            {'name': 'Engineering', 'share_target_type': 'Group', 'share_target_value': 'Developers',
             'state': 'absent'},
            {'name': 'Engineering', 'share_target_type': 'user', 'share_target_value': 'admin@company.com',
             'share_permission': 'owner'},
        ])
        cmd = share.ShareApplyCommand()
        report = json.loads(cmd.execute(params, filename=filename, format='json'))
        self.assertEqual([x['action'] for x in report], ['create', 'delete', 'noop'])
        self.assertEqual([x['status'] for x in report], ['applied', 'applied', 'up to date'])
        self.assertEqual(len(PassboltApiHelper.share_requests()), 2)

        report = json.loads(cmd.execute(params, filename=filename, format='json'))
        self.assertEqual([x['action'] for x in report], ['noop', 'noop', 'noop'])
        self.assertEqual(len(PassboltApiHelper.share_requests()), 2)

    def test_apply_dry_run(self):
        params = get_connected_params()
        filename = self.write_shares({'shares': [
            {'name': 'Engineering', 'share_target_type': 'Group', 'share_target_value': 'Developers',
             'share_permission': 15},
        ]})
        cmd = share.ShareApplyCommand()
        report = json.loads(cmd.execute(params, filename=filename, format='json', dry_run=True))
        self.assertEqual(report[0]['action'], 'update')
        self.assertEqual(report[0]['current'], 'Read')
        self.assertEqual(report[0]['desired'], 'Owner')
        self.assertEqual(report[0]['status'], 'planned')
        self.assertEqual(len(PassboltApiHelper.share_requests()), 0)

    def test_entries_fail_independently(self):
        params = get_connected_params()
        filename = self.write_shares([
            {'name': 'Sales', 'share_target_type': 'Group', 'share_target_value': 'Accounting',
             'share_permission': '7'},
            {'name': 'Finance', 'share_target_type': 'Group', 'share_target_value': 'Accounting',
             'share_permission': '7'},
        ])
        cmd = share.ShareApplyCommand()
        with mock.patch('builtins.print'), self.assertLogs(level='ERROR'):
            with self.assertRaises(CommandError) as cm:
                cmd.execute(params, filename=filename, format='json')
        self.assertEqual(cm.exception.message, '1 of 2 share(s) failed')
        self.assertEqual(len(PassboltApiHelper.share_requests()), 1)

    def test_invalid_level_in_file(self):
        params = get_connected_params()
        filename = self.write_shares([
            {'name': 'Finance', 'share_target_type': 'Group', 'share_target_value': 'Accounting',
             'share_permission': '7'},
            {'name': 'Finance', 'share_target_type': 'User', 'share_target_value': 'admin@company.com',
             'share_permission': '8'},
        ])
        cmd = share.ShareApplyCommand()
        with mock.patch('builtins.print') as mock_print, self.assertLogs(level='ERROR'):
            with self.assertRaises(CommandError) as cm:
                cmd.execute(params, filename=filename, format='json')
        self.assertEqual(cm.exception.message, '1 of 2 share(s) failed')
        report = json.loads(mock_print.call_args[0][0])
        self.assertEqual([x['action'] for x in report], ['create', 'error'])
        self.assertEqual(len(PassboltApiHelper.share_requests()), 1)
        self.assertEqual(PassboltApiHelper.share_requests()[0][1]['permissions'][0]['aro'], 'Group')
        self.assertFalse(any(x[0][2] == '/users.json' for x in self.execute_mock.call_args_list))

    def test_cancelled_entries_are_skipped(self):
        params = get_connected_params()
        filename = self.write_shares([
            {'name': 'Finance', 'share_target_type': 'Group', 'share_target_value': 'Accounting',
             'share_permission': '7'},
            {'name': 'Finance', 'share_target_type': 'User', 'share_target_value': 'unit.test@company.com',
             'share_permission': '7'},
            {'name': 'Engineering', 'share_target_type': 'Group', 'share_target_value': 'Developers',
             'share_permission': '15'},
        ])
        op_context = OperationContext()
        op_context.cancel()
        cmd = share.ShareApplyCommand()
        with mock.patch('builtins.print') as mock_print, self.assertLogs(level='ERROR'):
            with self.assertRaises(CommandError) as cm:
                cmd.execute(params, filename=filename, format='json', op_context=op_context)
        self.assertEqual(cm.exception.message, '3 of 3 share(s) failed')
        report = json.loads(mock_print.call_args[0][0])
        self.assertEqual([x['action'] for x in report], ['error', 'skipped', 'skipped'])
        self.assertEqual(report[1]['status'], 'Operation cancelled')
        self.assertEqual(len(PassboltApiHelper.share_requests()), 0)

    def test_invalid_file(self):
        params = get_connected_params()
        cmd = share.ShareApplyCommand()
        with self.assertRaises(CommandError):
            cmd.execute(params, filename=os.path.join(self.temp_dir.name, 'missing.json'))
        with self.assertRaises(CommandError):
            cmd.execute(params, filename=self.write_shares({'name': 'Finance'}))


class TestShareApplyTransport(TestCase):
    """share-apply over the real REST call with the HTTP session mocked"""

    def setUp(self):
        PassboltApiHelper.reset()
        self.params = get_connected_params()
        self.request_mock = mock.patch.object(self.params.rest_context.session, 'request').start()
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        mock.patch.stopall()
        self.temp_dir.cleanup()

    def write_shares(self, shares):
        filename = os.path.join(self.temp_dir.name, 'shares.json')
        with open(filename, 'w') as f:
            json.dump(shares, f)
        return filename

    def serve(self, method, url, **kwargs):
        server = self.params.rest_context.server_base
        body = PassboltApiHelper.execute_rest(None, method, url[len(server):], query=kwargs.get('params'),
                                              payload=kwargs.get('json'))
        rs = mock.Mock()
        rs.status_code = 200
        rs.reason = 'OK'
        rs.headers = {'Content-Type': 'application/json'}
        rs.json.return_value = {'header': {'status': 'success', 'code': 200, 'message': 'OK'}, 'body': body}
        return rs

    def test_invalid_json_response(self):
        def serve(method, url, **kwargs):
            if (kwargs.get('params') or {}).get('filter[search]') == 'Sales':
                rs = mock.Mock()
                rs.status_code = 200
                rs.reason = 'OK'
                rs.headers = {'Content-Type': 'application/json'}
                rs.text = '<html>proxy login</html>'
                rs.json.side_effect = ValueError('Expecting value: line 1 column 1 (char 0)')
                return rs
            return self.serve(method, url, **kwargs)

        self.request_mock.side_effect = serve
        filename = self.write_shares([
            {'name': 'Sales', 'share_target_type': 'Group', 'share_target_value': 'Accounting',
             'share_permission': '7'},
            {'name': 'Finance', 'share_target_type': 'Group', 'share_target_value': 'Accounting',
             'share_permission': '7'},
        ])
        cmd = share.ShareApplyCommand()
        with mock.patch('builtins.print') as mock_print, self.assertLogs(level='ERROR'):
            with self.assertRaises(CommandError) as cm:
                cmd.execute(self.params, filename=filename, format='json')
        self.assertEqual(cm.exception.message, '1 of 2 share(s) failed')
        report = json.loads(mock_print.call_args[0][0])
        self.assertEqual([x['action'] for x in report], ['error', 'create'])
        self.assertEqual(len(PassboltApiHelper.share_requests()), 1)

    def test_request_timeout_without_deadline(self):
        calls = []

        def serve(method, url, **kwargs):
            calls.append(url)
            if len(calls) == 1:
                raise requests.exceptions.ReadTimeout('read timed out')
            return self.serve(method, url, **kwargs)

        self.request_mock.side_effect = serve
        self.params.deadline = None
        filename = self.write_shares([
            {'name': 'Finance', 'share_target_type': 'Group', 'share_target_value': 'Accounting',
             'share_permission': '7'},
            {'name': 'Finance', 'share_target_type': 'User', 'share_target_value': 'unit.test@company.com',
             'share_permission': '7'},
            {'name': 'Engineering', 'share_target_type': 'Group', 'share_target_value': 'Developers',
             'share_permission': '15'},
        ])
        cmd = share.ShareApplyCommand()
        with mock.patch('builtins.print') as mock_print, self.assertLogs(level='ERROR'):
            with self.assertRaises(CommandError) as cm:
                cmd.execute(self.params, filename=filename, format='json')
        self.assertEqual(cm.exception.message, '1 of 3 share(s) failed')
        report = json.loads(mock_print.call_args[0][0])
        self.assertEqual([x['action'] for x in report], ['error', 'create', 'update'])
        self.assertIn('read timed out', report[0]['status'])
        self.assertEqual(len(PassboltApiHelper.share_requests()), 2)
