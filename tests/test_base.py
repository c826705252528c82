#!/usr/bin/env python
# -*- coding: utf-8 -*-

import pytest
import unittest

import numpy as np

import pyfixint.base as base
from pyfixint.errors import FixedUintError, MalformedInput


def arr(*values):
    return np.array(values, dtype=np.uint8)


class BaseTestCase(unittest.TestCase):

    def test_as_byte_array(self):
        result = base.as_byte_array(b'\x01\x02', 2)
        self.assertEqual(result.dtype, np.uint8)
        self.assertFalse(result.flags.writeable)
        self.assertEqual(base.as_byte_array([1, 2], 2).tobytes(), b'\x01\x02')
        self.assertEqual(base.as_byte_array(arr(1, 2), 2).tobytes(), b'\x01\x02')
        with pytest.raises(MalformedInput):
            base.as_byte_array(b'\x01', 2)
        with pytest.raises(MalformedInput):
            base.as_byte_array([-1, 2], 2)
        with pytest.raises(MalformedInput):
            base.as_byte_array('0102', 2)

    def test_clean_hex(self):
        self.assertEqual(base.clean_hex('0xAB CD'), 'ABCD')
        self.assertEqual(base.clean_hex('0XabCD'), 'abCD')
        self.assertEqual(base.clean_hex('ab cd '), 'abcd')

    def test_decode_hex(self):
        self.assertEqual(base.decode_hex('0x0aFf', 2).tobytes(), b'\x0a\xff')
        with pytest.raises(MalformedInput):
            base.decode_hex('0x0aF', 2)
        with pytest.raises(MalformedInput):
            base.decode_hex('0x0xFF', 2)
        with pytest.raises(MalformedInput):
            base.decode_hex(b'0aff', 2)

    def test_encode_hex(self):
        self.assertEqual(base.encode_hex(arr(0x0A, 0xFF, 0x00)), '0aff00')

    def test_uint64_to_bytes(self):
        num = 0x007FBCAD73DCE4A7
        self.assertEqual(base.uint64_to_bytes(num, 1).tobytes(), b'\xa7')
        self.assertEqual(base.uint64_to_bytes(num, 3).tobytes(), b'\xdc\xe4\xa7')
        self.assertEqual(base.uint64_to_bytes(num, 10).tobytes(), b'\x00\x00\x00\x7f\xbc\xad\x73\xdc\xe4\xa7')
        self.assertEqual(base.uint64_to_bytes(base.MAX_UINT64, 8).tobytes(), b'\xff' * 8)
        self.assertEqual(base.uint64_to_bytes(np.uint16(258), 2).tobytes(), b'\x01\x02')
        with pytest.raises(MalformedInput):
            base.uint64_to_bytes(True, 2)

    def test_compare_bytes(self):
        self.assertEqual(base.compare_bytes(arr(1, 2, 3), arr(1, 2, 3)), 0)
        self.assertEqual(base.compare_bytes(arr(1, 2, 3), arr(1, 3, 0)), -1)
        self.assertEqual(base.compare_bytes(arr(2, 0, 0), arr(1, 255, 255)), 1)

    def test_add_bytes(self):
        total_sum, carry = base.add_bytes(arr(0x01, 0xFF), arr(0x00, 0x01))
        self.assertEqual((total_sum.tobytes(), carry), (b'\x02\x00', 0))
        total_sum, carry = base.add_bytes(arr(0xFF, 0xFF), arr(0x00, 0x01))
        self.assertEqual((total_sum.tobytes(), carry), (b'\x00\x00', 1))

    def test_sub_bytes(self):
        diff, borrow = base.sub_bytes(arr(0x02, 0x00), arr(0x00, 0x01))
        self.assertEqual((diff.tobytes(), borrow), (b'\x01\xff', 0))
        diff, borrow = base.sub_bytes(arr(0x00, 0x00), arr(0x00, 0x01))
        self.assertEqual((diff.tobytes(), borrow), (b'\xff\xff', 1))
        diff, borrow = base.sub_bytes(arr(0x01, 0x00), arr(0x01, 0x00))
        self.assertEqual((diff.tobytes(), borrow), (b'\x00\x00', 0))

    def test_error_hierarchy(self):
        self.assertTrue(issubclass(MalformedInput, FixedUintError))
        self.assertTrue(issubclass(MalformedInput, ValueError))


if __name__ == '__main__':
    unittest.main()
