"""Overflow-checked integer arithmetic for sizes, offsets and counts."""

from safe_arith.arithmetic import (
    TypedArithmetic,
    checked_convert_to_signed,
    checked_convert_unsigned,
    convert_unsigned,
    int32_add,
    int32_sub,
    int64_add,
    int64_mult,
    sizet_mult,
    try_convert_uint32_to_int32,
    try_int32_add,
    try_int32_sub,
    try_round_up_uint32_to_multiple,
    try_uint32_add,
    try_uint32_mult,
    uint32_add,
    uint32_divide_up,
    uint32_mult,
)
from safe_arith.bounds import (
    INT8,
    INT16,
    INT32,
    INT64,
    SIZE_T,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    IntType,
)
from safe_arith.errors import (
    ArithmeticOverflow,
    DivisionByZero,
    ErrorKind,
    InvalidArgument,
    SafeArithmeticError,
    Truncation,
)
from safe_arith.result import Err, Ok, Result, Slot

__all__ = [
    "TypedArithmetic",
    "checked_convert_to_signed",
    "checked_convert_unsigned",
    "convert_unsigned",
    "int32_add",
    "int32_sub",
    "int64_add",
    "int64_mult",
    "sizet_mult",
    "try_convert_uint32_to_int32",
    "try_int32_add",
    "try_int32_sub",
    "try_round_up_uint32_to_multiple",
    "try_uint32_add",
    "try_uint32_mult",
    "uint32_add",
    "uint32_divide_up",
    "uint32_mult",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "SIZE_T",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "IntType",
    "ArithmeticOverflow",
    "DivisionByZero",
    "ErrorKind",
    "InvalidArgument",
    "SafeArithmeticError",
    "Truncation",
    "Err",
    "Ok",
    "Result",
    "Slot",
]
