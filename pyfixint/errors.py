#!/usr/bin/env python
# -*- coding: utf-8 -*-

'''
Exceptions raised by the fixed-width unsigned integer types. Each one also
derives from the closest builtin, so callers can catch either.
'''


class FixedUintError(Exception):
    '''
    Base class for every error raised by this package.
    '''


class MalformedInput(FixedUintError, ValueError):
    '''
    Hex string, byte sequence or native integer that cannot become a value
    of the requested width.
    '''


class DivisionByZero(FixedUintError, ZeroDivisionError):
    pass


class Overflow(FixedUintError, ArithmeticError):
    '''
    Raised by the checked arithmetic methods when the exact result does not
    fit in the width. The plain operators wrap instead.
    '''


class WidthMismatch(FixedUintError, TypeError):
    pass
