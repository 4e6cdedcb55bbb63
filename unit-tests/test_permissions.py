from unittest import TestCase

from passboltcommander import permission
from passboltcommander.error import InvalidLevelError, ValidationError
from passboltcommander.permission import Permission, ShareLevel


class TestPermissionCodec(TestCase):
    def test_decode_codes(self):
        self.assertEqual(permission.decode('-1'), ShareLevel.DELETE)
        self.assertEqual(permission.decode('1'), ShareLevel.READ)
        self.assertEqual(permission.decode('7'), ShareLevel.UPDATE)
        self.assertEqual(permission.decode('15'), ShareLevel.OWNER)

    def test_round_trip(self):
        for level in ShareLevel:
            self.assertEqual(permission.decode(permission.level_to_code(level)), level)
        for code in ('-1', '1', '7', '15'):
            self.assertEqual(permission.encode(permission.decode(code)), int(code))

    def test_decode_invalid(self):
        for code in ('0', '2', '3', '-2', '16', ' 7', '07', '+1', '15.0', 'read', '', None, 7):
            with self.assertRaises(InvalidLevelError) as cm:
                permission.decode(code)
            self.assertIsInstance(cm.exception, ValidationError)
            self.assertEqual(cm.exception.code, code)

    def test_invalid_level_message(self):
        with self.assertRaises(ValidationError) as cm:
            permission.decode('3')
        self.assertIn('got input: 3', str(cm.exception))

    def test_level_to_string(self):
        self.assertEqual(permission.level_to_string(1), 'Read')
        self.assertEqual(permission.level_to_string(ShareLevel.OWNER), 'Owner')
        self.assertEqual(permission.level_to_string(3), '3')

    def test_normalize_aro(self):
        self.assertEqual(permission.normalize_aro('group'), 'Group')
        self.assertEqual(permission.normalize_aro(' USER '), 'User')
        with self.assertRaises(ValidationError):
            permission.normalize_aro('Team')
        with self.assertRaises(ValidationError):
            permission.normalize_aro(None)


class TestPermission(TestCase):
    def test_load(self):
        p = Permission.from_dict({
            'id': 'P1', 'aco': 'Folder', 'aco_foreign_key': 'F1', 'aro': 'Group', 'aro_foreign_key': 'G1', 'type': 7
        })
        self.assertEqual(p.permission_id, 'P1')
        self.assertEqual(p.type, 7)
        self.assertFalse(p.delete)
        self.assertEqual(p.key, ('Folder', 'F1', 'Group', 'G1'))

    def test_load_unknown_type(self):
        with self.assertRaises(ValidationError):
            Permission.from_dict({
                'id': 'P1', 'aco': 'Folder', 'aco_foreign_key': 'F1', 'aro': 'User', 'aro_foreign_key': 'U1', 'type': 3
            })

    def test_load_unknown_object(self):
        with self.assertRaises(ValidationError) as cm:
            Permission.from_dict({
                'id': 'P1', 'aco': 'Team', 'aco_foreign_key': 'F1', 'aro': 'User', 'aro_foreign_key': 'U1', 'type': 1
            })
        self.assertIn('got input: Team', str(cm.exception))
        with self.assertRaises(ValidationError) as cm:
            Permission.from_dict({
                'id': 'P1', 'aco': 'Resource', 'aco_foreign_key': 'R1', 'aro': 'Role', 'aro_foreign_key': 'U1',
                'type': 1
            })
        self.assertIn('got input: Role', str(cm.exception))

    def test_new_entry_request(self):
        p = Permission(aco_foreign_key='F1', aro='Group', aro_foreign_key='G9', type=ShareLevel.UPDATE)
        rq = p.to_request()
        self.assertEqual(rq, {
            'aco': 'Folder', 'aco_foreign_key': 'F1', 'aro': 'Group', 'aro_foreign_key': 'G9', 'type': 7,
            'is_new': True
        })

    def test_delete_request(self):
        p = Permission(aco_foreign_key='F1', aro='User', aro_foreign_key='U1', type=1, permission_id='P5')
        rq = p.copy(delete=True).to_request()
        self.assertEqual(rq['id'], 'P5')
        self.assertTrue(rq['delete'])
        self.assertNotIn('is_new', rq)
        self.assertFalse(p.delete)

    def test_equality_ignores_id(self):
        p1 = Permission(aco_foreign_key='F1', aro='User', aro_foreign_key='U1', type=1, permission_id='P5')
        p2 = Permission(aco_foreign_key='F1', aro='User', aro_foreign_key='U1', type=1)
        self.assertEqual(p1, p2)
        self.assertNotEqual(p1, p2.copy(type=7))
        self.assertNotEqual(p1, p1.copy(delete=True))
