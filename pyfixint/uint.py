#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

import numpy as np

import pyfixint.base as base
from pyfixint.errors import DivisionByZero, MalformedInput, Overflow, WidthMismatch


class FixedUint:
    '''
    Fixed-width unsigned integers, stored as exactly NUM_BYTES big-endian bytes,
    that explicitly wrap on over- or under-flow. The width is part of the type:
    use one of the subclasses in this module, or fixed_uint() for any other
    width. Values are immutable, every operator returns a new instance.

    Arithmetic works byte-by-byte on the big-endian array: ripple-carry add,
    borrow-propagating subtract, and double-and-add style multiply and divide.
    Native integer operands are converted with from_uint64() first.
    '''

    NUM_BYTES = None

    def __init__(self, data):
        '''
        Initialize from exactly NUM_BYTES bytes, most significant byte first.
        :param data: bytes-like object, or a sequence of integers in 0-255
        '''
        self._check_width()
        self.data = base.as_byte_array(data, self.NUM_BYTES)

    @classmethod
    def _check_width(cls):
        if cls.NUM_BYTES is None:
            raise TypeError("FixedUint has no width, use fixed_uint(num_bytes) or one of the UintN classes")

    @classmethod
    def _wrap(cls, arr):
        # arr is already a validated, read-only array of the right length
        obj = cls.__new__(cls)
        obj.data = arr
        return obj

    @classmethod
    def from_bytes(cls, data):
        return cls(data)

    @classmethod
    def from_little_endian_bytes(cls, data):
        cls._check_width()
        arr = base.as_byte_array(data, cls.NUM_BYTES)[::-1].copy()
        arr.flags.writeable = False
        return cls._wrap(arr)

    @classmethod
    def from_hex(cls, hex_str):
        '''
        Decode a hex string w/ an optional 0x or 0X prefix. Spaces are ignored,
        and the remaining digits must encode exactly NUM_BYTES bytes.
        '''
        cls._check_width()
        return cls._wrap(base.decode_hex(hex_str, cls.NUM_BYTES))

    @classmethod
    def from_uint64(cls, num):
        '''
        Widen (or truncate) a native unsigned 64-bit integer into this width.
        :param num: Integer in 0 to 2**64 - 1
        '''
        cls._check_width()
        return cls._wrap(base.uint64_to_bytes(num, cls.NUM_BYTES))

    @classmethod
    def value_of(cls, byte):
        '''
        Single byte placed at the least significant end.
        '''
        if isinstance(byte, bool) or not isinstance(byte, (int, np.integer)) or not 0 <= byte <= base.BYTE_MASK:
            raise MalformedInput(f"Value {byte} is not a single unsigned byte")
        return cls.from_uint64(int(byte))

    @classmethod
    def zero(cls):
        return cls(bytes(cls.NUM_BYTES))

    @classmethod
    def one(cls):
        return cls.value_of(1)

    @classmethod
    def max_value(cls):
        return cls(b'\xff' * cls.NUM_BYTES)

    def to_bytes(self):
        return self.data.tobytes()

    def to_little_endian_bytes(self):
        return self.data[::-1].tobytes()

    def to_hex(self):
        return base.encode_hex(self.data)

    def is_zero(self):
        return not self.data.any()

    def __int__(self):
        return int.from_bytes(self.to_bytes(), byteorder='big')

    def __bool__(self):
        return not self.is_zero()

    def __format__(self, *fmt_args):
        '''
        Just use the underlying Python int()'s formatting.
        '''
        return int(self).__format__(*fmt_args)

    def __repr__(self):
        return f"uint{self.NUM_BYTES * 8}(0x{self.to_hex()})"

    def __hash__(self):
        return hash((self.NUM_BYTES, self.to_bytes()))

    def _coerce(self, o):
        '''
        Same-width value for the other operand, or None when the operand is
        not something this type does arithmetic with.
        '''
        if isinstance(o, FixedUint):
            if o.NUM_BYTES != self.NUM_BYTES:
                raise WidthMismatch(f"Cannot combine {self.NUM_BYTES}-byte and {o.NUM_BYTES}-byte values")
            return o
        if isinstance(o, (int, np.integer)) and not isinstance(o, bool):
            return self.from_uint64(o)
        return None

    def _wider_than_width(self, o):
        '''
        Whether a native integer operand loses bits when narrowed to this width.
        '''
        return not isinstance(o, FixedUint) and int(o) >= base.BYTE_BASE ** self.NUM_BYTES

    def _coerce_divisor(self, o):
        other = self._coerce(o)
        if other is not None and self._wider_than_width(o):
            raise MalformedInput(f"Divisor {o} does not fit in {self.NUM_BYTES:,d} bytes")
        return other

    '''
    Comparison dunders all reduce to one three-way comparison of the big-endian
    bytes, which matches numeric order because every value has the same width.
    '''
    def _cmp(self, o):
        if not isinstance(o, FixedUint):
            raise TypeError(f"Cannot compare {type(self).__name__} w/ {type(o).__name__}")
        if o.NUM_BYTES != self.NUM_BYTES:
            raise WidthMismatch(f"Cannot compare {self.NUM_BYTES}-byte and {o.NUM_BYTES}-byte values")
        return base.compare_bytes(self.data, o.data)

    def __eq__(self, o):
        if not isinstance(o, FixedUint) or o.NUM_BYTES != self.NUM_BYTES:
            return NotImplemented
        return self._cmp(o) == 0

    def __ne__(self, o):
        if not isinstance(o, FixedUint) or o.NUM_BYTES != self.NUM_BYTES:
            return NotImplemented
        return self._cmp(o) != 0

    def __lt__(self, o): return self._cmp(o) < 0
    def __le__(self, o): return self._cmp(o) <= 0
    def __gt__(self, o): return self._cmp(o) > 0
    def __ge__(self, o): return self._cmp(o) >= 0

    '''
    Addition & subtraction
    '''
    def overflowing_add(self, o):
        '''
        Wrapped sum, and whether the exact sum exceeded the width.
        '''
        other = self._coerce(o)
        if other is None:
            return NotImplemented
        total_sum, carry = base.add_bytes(self.data, other.data)
        return self._wrap(total_sum), bool(carry) or self._wider_than_width(o)

    def overflowing_sub(self, o):
        '''
        Wrapped difference, and whether the subtrahend was larger.
        '''
        other = self._coerce(o)
        if other is None:
            return NotImplemented
        diff, borrow = base.sub_bytes(self.data, other.data)
        return self._wrap(diff), bool(borrow) or self._wider_than_width(o)

    def __add__(self, o):
        result = self.overflowing_add(o)
        return result if result is NotImplemented else result[0]

    def __radd__(self, o):
        return self.__add__(o)

    def __sub__(self, o):
        result = self.overflowing_sub(o)
        return result if result is NotImplemented else result[0]

    def overflowing_mul(self, o):
        '''
        Double-and-add product. Each pass finds the largest power of two not
        exceeding what is left of the multiplier, doubling a copy of this value
        the same number of times, then adds that partial product and moves on
        to the rest of the multiplier.
        :return: Wrapped product, and whether any partial sum overflowed
        '''
        other = self._coerce(o)
        if other is None:
            return NotImplemented
        one = self.one()
        product = self.zero()
        remaining = other
        overflowed = False
        while not remaining.is_zero():
            multiplier, partial = one, self
            doubled, carry = one.overflowing_add(one)
            while not carry and doubled <= remaining:
                multiplier = doubled
                partial, partial_carry = partial.overflowing_add(partial)
                overflowed = overflowed or partial_carry
                doubled, carry = doubled.overflowing_add(doubled)
            remaining = remaining - multiplier
            product, product_carry = product.overflowing_add(partial)
            overflowed = overflowed or product_carry
        if self._wider_than_width(o) and not self.is_zero():
            overflowed = True
        return product, overflowed

    def __mul__(self, o):
        result = self.overflowing_mul(o)
        return result if result is NotImplemented else result[0]

    def __rmul__(self, o):
        return self.__mul__(o)

    '''
    Checked arithmetic, for callers that must not silently wrap.
    '''
    def _checked(self, result, op):
        if result is NotImplemented:
            raise TypeError(f"Unsupported operand for checked {op} on {type(self).__name__}")
        value, overflowed = result
        if overflowed:
            raise Overflow(f"{op} overflowed {self.NUM_BYTES * 8} bits")
        return value

    def checked_add(self, o):
        return self._checked(self.overflowing_add(o), 'add')

    def checked_sub(self, o):
        return self._checked(self.overflowing_sub(o), 'sub')

    def checked_mul(self, o):
        return self._checked(self.overflowing_mul(o), 'mul')

    '''
    Division & modulo
    '''
    def _divide(self, divisor):
        '''
        Long division by repeated doubling of the divisor. While the remaining
        dividend is at least the divisor, double the divisor (and a matching
        power of two) up to the largest multiple that still fits, subtract that
        multiple and add the power of two to the quotient.
        '''
        if divisor.is_zero():
            raise DivisionByZero(f"Division of {self!r} by zero")
        quotient = self.zero()
        remaining = self
        while remaining >= divisor:
            total, multiplier = divisor, self.one()
            while True:
                next_total, carry = total.overflowing_add(total)
                if carry or next_total > remaining:
                    break
                total = next_total
                multiplier = multiplier + multiplier
            remaining = remaining - total
            quotient = quotient + multiplier
        return quotient

    def __truediv__(self, o):
        other = self._coerce_divisor(o)
        if other is None:
            return NotImplemented
        return self._divide(other)

    __floordiv__ = __truediv__

    def __mod__(self, o):
        '''
        Remainder as dividend - quotient * divisor. With a native integer
        divisor the remainder is narrowed to its least significant byte and
        returned as an int, which is only exact for divisors up to 256.
        '''
        other = self._coerce_divisor(o)
        if other is None:
            return NotImplemented
        remainder = self - self._divide(other) * other
        if isinstance(o, FixedUint):
            return remainder
        return int(remainder.data[-1])

    def __divmod__(self, o):
        other = self._coerce_divisor(o)
        if other is None:
            return NotImplemented
        quotient = self._divide(other)
        return quotient, self - quotient * other


_WIDTHS = {}


def _register(cls):
    _WIDTHS[cls.NUM_BYTES] = cls
    return cls


def fixed_uint(num_bytes):
    '''
    The FixedUint subclass for a byte width, created on first use. Repeated
    calls return the same class, so values of one width always share a type.
    :param num_bytes: Width in bytes, a positive integer
    '''
    if isinstance(num_bytes, bool) or not isinstance(num_bytes, int) or num_bytes < 1:
        raise ValueError(f"Width must be a positive number of bytes, got {num_bytes!r}")
    if num_bytes in _WIDTHS:
        return _WIDTHS[num_bytes]
    logging.debug(f"Creating fixed-width unsigned type for {num_bytes:,d} bytes.")
    return _register(type(f"Uint{num_bytes * 8}", (FixedUint,), {'NUM_BYTES': num_bytes}))


@_register
class Uint8(FixedUint):
    NUM_BYTES = 1


@_register
class Uint16(FixedUint):
    NUM_BYTES = 2


@_register
class Uint32(FixedUint):
    NUM_BYTES = 4


@_register
class Uint64(FixedUint):
    NUM_BYTES = 8


@_register
class Uint128(FixedUint):
    NUM_BYTES = 16


@_register
class Uint160(FixedUint):
    '''
    Common width for 20-byte hashes and addresses.
    '''
    NUM_BYTES = 20


@_register
class Uint256(FixedUint):
    '''
    Common width for 32-byte hashes and keys, e.g. a SHA-256 digest.
    '''
    NUM_BYTES = 32


@_register
class Uint512(FixedUint):
    NUM_BYTES = 64
