"""flexjson_core: type-directed mapping between JSON value trees and native records."""

from .builder import arr, field, from_python, obj, primitive
from .decoder import construct, decode_value
from .encoder import as_value, encode_value, fill
from .errors import (
    CyclicType,
    DecodeError,
    DescriptorError,
    EncodeError,
    FlexJsonError,
    MissingField,
    NumericConversionError,
    ParseError,
    TypeMismatch,
    UnknownEnumValue,
    UnsupportedType,
)
from .keys import flex_get, flex_key, normalize, to_underscore
from .model import Kind, KindTag
from .registry import DescriptorRegistry, default_registry, describe
from .settings import DEFAULT_SETTINGS, MappingSettings, MatchOptions, NullPolicy
from .text import dumps, loads, parse, parse_array, parse_object, pretty, serialize
from .typedef import Describable, FieldSpec, TypeDescriptor
from .values import JSON_NULL, JsonType, Value, VArray, VObject, VPrimitive

__all__ = [
    "construct",
    "decode_value",
    "fill",
    "as_value",
    "encode_value",
    "parse",
    "parse_object",
    "parse_array",
    "serialize",
    "pretty",
    "loads",
    "dumps",
    "describe",
    "DescriptorRegistry",
    "default_registry",
    "Describable",
    "FieldSpec",
    "TypeDescriptor",
    "Kind",
    "KindTag",
    "Value",
    "VObject",
    "VArray",
    "VPrimitive",
    "JsonType",
    "JSON_NULL",
    "obj",
    "arr",
    "field",
    "primitive",
    "from_python",
    "flex_get",
    "flex_key",
    "normalize",
    "to_underscore",
    "MappingSettings",
    "MatchOptions",
    "NullPolicy",
    "DEFAULT_SETTINGS",
    "FlexJsonError",
    "ParseError",
    "DecodeError",
    "TypeMismatch",
    "MissingField",
    "UnknownEnumValue",
    "NumericConversionError",
    "EncodeError",
    "DescriptorError",
    "UnsupportedType",
    "CyclicType",
]
