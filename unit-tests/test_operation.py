import threading
import time
from unittest import TestCase

from passboltcommander.error import OperationCancelledError, DeadlineExceededError
from passboltcommander.operation import OperationContext


class TestOperationContext(TestCase):
    def test_no_deadline(self):
        op_context = OperationContext()
        self.assertIsNone(op_context.remaining())
        self.assertEqual(op_context.request_timeout(30), 30)
        self.assertIsNone(op_context.request_timeout())
        op_context.check()

    def test_deadline(self):
        op_context = OperationContext(timeout=5)
        self.assertLessEqual(op_context.remaining(), 5)
        self.assertLessEqual(op_context.request_timeout(30), 5)
        self.assertLess(op_context.request_timeout(1), 1.5)

        op_context.deadline = time.monotonic() - 1
        self.assertEqual(op_context.remaining(), 0)
        with self.assertRaises(DeadlineExceededError):
            op_context.check()

    def test_cancel_from_another_thread(self):
        op_context = OperationContext()
        t = threading.Thread(target=op_context.cancel)
        t.start()
        t.join()
        self.assertTrue(op_context.cancelled)
        with self.assertRaises(OperationCancelledError):
            op_context.check()
