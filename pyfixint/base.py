#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging
import string

import numpy as np

from pyfixint.errors import MalformedInput

'''
Stateless functions over big-endian byte arrays that are used throughout the
fixed-width unsigned integer classes.
'''

BYTE_BASE = 256
BYTE_MASK = 0xFF
MAX_UINT64 = 2 ** 64 - 1
HEX_PREFIXES = ('0x', '0X')

_HEX_DIGITS = frozenset(string.hexdigits)


def as_byte_array(data, num_bytes):
    '''
    Copy a bytes-like object or a sequence of integers into a read-only numpy
    array of exactly num_bytes unsigned bytes.
    :param data: bytes, bytearray, list of ints or numpy array
    :param num_bytes: Required length, in bytes
    '''
    if isinstance(data, str):
        raise MalformedInput("Use from_hex() for strings")
    if isinstance(data, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(bytes(data), dtype=np.uint8).copy()
    else:
        values = [int(x) for x in data]
        if any(x < 0 or x > BYTE_MASK for x in values):
            raise MalformedInput(f"Byte values must be within 0-255, got {values}")
        arr = np.array(values, dtype=np.uint8)
    if arr.shape != (num_bytes,):
        raise MalformedInput(f"Expected {num_bytes:,d} bytes, got {arr.size:,d}")
    arr.flags.writeable = False
    return arr


def clean_hex(hex_str):
    '''
    Strip the optional 0x or 0X prefix and any ASCII spaces from a hex string.
    '''
    cleaned = hex_str.strip(' ')
    if cleaned.startswith(HEX_PREFIXES):
        cleaned = cleaned[2:]
    return cleaned.replace(' ', '')


def decode_hex(hex_str, num_bytes):
    '''
    Decode a hex string, most significant byte first, into exactly num_bytes
    bytes. Decoding is case-insensitive.
    '''
    if not isinstance(hex_str, str):
        raise MalformedInput(f"Expected a hex string, got {type(hex_str).__name__}")
    cleaned = clean_hex(hex_str)
    if len(cleaned) != 2 * num_bytes:
        logging.debug(f"Rejecting hex '{hex_str}' of {len(cleaned)} digits for a {num_bytes}-byte value.")
        raise MalformedInput(f"Expected {2 * num_bytes:,d} hex digits, got {len(cleaned):,d} in '{hex_str}'")
    bad = sorted(set(cleaned) - _HEX_DIGITS)
    if bad:
        logging.debug(f"Rejecting hex '{hex_str}' w/ non-hex characters {bad}.")
        raise MalformedInput(f"Non-hex characters {bad} in '{hex_str}'")
    return as_byte_array(bytes.fromhex(cleaned), num_bytes)


def encode_hex(arr):
    '''
    Lowercase hex, two digits per byte, no prefix.
    '''
    return arr.tobytes().hex()


def uint64_to_bytes(num, num_bytes):
    '''
    Place the low-order min(num_bytes, 8) bytes of a native unsigned 64-bit
    integer at the least significant end of a num_bytes array. Higher bytes are
    zero when num_bytes > 8, and high bits are dropped when num_bytes < 8.
    '''
    if isinstance(num, bool) or not isinstance(num, (int, np.integer)):
        raise MalformedInput(f"Expected an unsigned integer, got {type(num).__name__}")
    num = int(num)
    if num < 0 or num > MAX_UINT64:
        raise MalformedInput(f"Value {num} out-of-range for an unsigned 64-bit integer")
    raw = num.to_bytes(8, byteorder='big')
    kept = raw[-min(num_bytes, 8):]
    return as_byte_array(bytes(num_bytes - len(kept)) + kept, num_bytes)


def compare_bytes(a, b):
    '''
    Three-way comparison of two equal-length big-endian byte arrays: -1, 0 or
    1. The first differing byte, scanning from the most significant end,
    decides.
    '''
    diff = np.flatnonzero(a != b)
    if diff.size == 0:
        return 0
    i = diff[0]
    return -1 if a[i] < b[i] else 1


def add_bytes(a, b):
    '''
    Ripple-carry addition of two equal-length big-endian byte arrays. Returns
    the wrapped sum and the carry out of the most significant byte.
    '''
    total_sum = np.zeros(len(a), dtype=np.uint8)
    carry = 0
    for i in range(len(a) - 1, -1, -1):
        total = int(a[i]) + int(b[i]) + carry
        carry = 1 if total > BYTE_MASK else 0
        total_sum[i] = total % BYTE_BASE
    total_sum.flags.writeable = False
    return total_sum, carry


def sub_bytes(a, b):
    '''
    Borrow-propagating subtraction of two equal-length big-endian byte arrays.
    Returns the wrapped difference and the borrow out of the most significant
    byte, which is 1 exactly when b > a.
    '''
    result = np.zeros(len(a), dtype=np.uint8)
    borrow = 0
    for i in range(len(a) - 1, -1, -1):
        digit1, digit2 = int(a[i]), int(b[i])
        temp = digit1 - borrow
        if temp < digit2:
            borrow = 1
            temp += BYTE_BASE
        else:
            borrow = 0
        result[i] = (temp - digit2) % BYTE_BASE
    result.flags.writeable = False
    return result, borrow
