"""
Bencode package for decoding Bencoded data and rendering it as text.
"""
from .config import DecoderConfig
from .decoder import BencodeDecoder, decode, decode_all, iter_decode
from .encoder import RenderMode, render
from .errors import (
    BencodeDecodeError,
    InvalidDict,
    InvalidInt,
    InvalidList,
    InvalidStr,
    NestingTooDeep,
    UnrecognizedValue,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, release

__all__ = [
    'decode', 'decode_all', 'iter_decode', 'BencodeDecoder', 'DecoderConfig',
    'render', 'RenderMode', 'release',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeDecodeError', 'InvalidInt', 'InvalidStr', 'InvalidList', 'InvalidDict',
    'UnrecognizedValue', 'NestingTooDeep',
]
