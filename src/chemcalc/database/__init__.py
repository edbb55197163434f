from .base import ElemData, ElementDatabase
from .flatfile import FlatFileDatabase, MappingDatabase, decode_line

__all__ = [
    "ElemData",
    "ElementDatabase",
    "FlatFileDatabase",
    "MappingDatabase",
    "decode_line",
]
