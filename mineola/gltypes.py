"""Engine data types and their OpenGL enumerants."""

from __future__ import annotations

from enum import IntEnum, IntFlag
from typing import NamedTuple


class DataType(IntEnum):
    """Scalar component types used by vertex streams and uniforms."""

    UNKNOWN = 0
    BOOL = 1
    BYTE = 2
    UBYTE = 3
    INT16 = 4
    UINT16 = 5
    INT32 = 6
    UINT32 = 7
    FLOAT16 = 8
    FLOAT32 = 9
    FLOAT64 = 10


class BarrierType(IntFlag):
    """Memory barrier bits."""

    VERTEX_ATTRIB_ARRAY_BARRIER = 1 << 0
    ELEMENT_ARRAY_BARRIER = 1 << 1
    UNIFORM_BARRIER = 1 << 2
    TEXTURE_FETCH_BARRIER = 1 << 3
    SHADER_IMAGE_ACCESS_BARRIER = 1 << 4
    COMMAND_BARRIER = 1 << 5
    PIXEL_BUFFER_BARRIER = 1 << 6
    TEXTURE_UPDATE_BARRIER = 1 << 7
    BUFFER_UPDATE_BARRIER = 1 << 8
    FRAMEBUFFER_BARRIER = 1 << 9
    TRANSFORM_FEEDBACK_BARRIER = 1 << 10
    ATOMIC_COUNTER_BARRIER = 1 << 11
    SHADER_STORAGE_BARRIER = 1 << 12


class Frequency(IntEnum):
    """How often a graphics buffer's contents change."""

    STATIC = 0
    DYNAMIC = 1
    STREAM = 2


class Direction(IntEnum):
    """Which way data flows through a graphics buffer."""

    SEND = 0
    READ = 1
    COPY = 2


class Access(IntEnum):
    """Mapping access of a graphics buffer."""

    READ_ONLY = 0
    WRITE_ONLY = 1
    READ_WRITE = 2


class GL(IntEnum):
    """OpenGL ES 3 enumerant values used by the engine."""

    MAP_READ_BIT = 0x0001
    MAP_WRITE_BIT = 0x0002

    BYTE = 0x1400
    UNSIGNED_BYTE = 0x1401
    SHORT = 0x1402
    UNSIGNED_SHORT = 0x1403
    INT = 0x1404
    UNSIGNED_INT = 0x1405
    FLOAT = 0x1406
    HALF_FLOAT = 0x140B
    UNSIGNED_SHORT_4_4_4_4 = 0x8033
    UNSIGNED_SHORT_5_5_5_1 = 0x8034
    UNSIGNED_SHORT_5_6_5 = 0x8363
    UNSIGNED_INT_2_10_10_10_REV = 0x8368
    UNSIGNED_INT_24_8 = 0x84FA

    DEPTH_COMPONENT = 0x1902
    RED = 0x1903
    RGB = 0x1907
    RGBA = 0x1908
    RG = 0x8227
    DEPTH_STENCIL = 0x84F9

    RGB8 = 0x8051
    RGBA4 = 0x8056
    RGB5_A1 = 0x8057
    RGBA8 = 0x8058
    RGB10_A2 = 0x8059
    R8 = 0x8229
    RG8 = 0x822B
    R16F = 0x822D
    R32F = 0x822E
    RG16F = 0x822F
    RG32F = 0x8230
    R8I = 0x8231
    R8UI = 0x8232
    R16I = 0x8233
    R16UI = 0x8234
    R32I = 0x8235
    R32UI = 0x8236
    RG8I = 0x8237
    RG8UI = 0x8238
    RG16I = 0x8239
    RG16UI = 0x823A
    RG32I = 0x823B
    RG32UI = 0x823C
    RGBA32F = 0x8814
    RGB32F = 0x8815
    RGBA16F = 0x881A
    RGB16F = 0x881B
    R11F_G11F_B10F = 0x8C3A
    RGB9_E5 = 0x8C3D
    SRGB8 = 0x8C41
    SRGB8_ALPHA8 = 0x8C43
    RGBA32UI = 0x8D70
    RGB32UI = 0x8D71
    RGBA16UI = 0x8D76
    RGB16UI = 0x8D77
    RGBA8UI = 0x8D7C
    RGB8UI = 0x8D7D
    RGBA32I = 0x8D82
    RGB32I = 0x8D83
    RGBA16I = 0x8D88
    RGB16I = 0x8D89
    RGBA8I = 0x8D8E
    RGB8I = 0x8D8F
    R8_SNORM = 0x8F94
    RG8_SNORM = 0x8F95
    RGB8_SNORM = 0x8F96
    RGBA8_SNORM = 0x8F97
    RGB10_A2UI = 0x906F

    DEPTH_COMPONENT16 = 0x81A5
    DEPTH_COMPONENT24 = 0x81A6
    DEPTH24_STENCIL8 = 0x88F0
    DEPTH_COMPONENT32F = 0x8CAC
    DEPTH32F_STENCIL8 = 0x8CAD

    FLOAT_VEC2 = 0x8B50
    FLOAT_VEC3 = 0x8B51
    FLOAT_VEC4 = 0x8B52
    INT_VEC2 = 0x8B53
    INT_VEC3 = 0x8B54
    INT_VEC4 = 0x8B55
    BOOL = 0x8B56
    FLOAT_MAT2 = 0x8B5A
    FLOAT_MAT3 = 0x8B5B
    FLOAT_MAT4 = 0x8B5C
    FLOAT_MAT2x3 = 0x8B65
    FLOAT_MAT2x4 = 0x8B66
    FLOAT_MAT3x2 = 0x8B67
    FLOAT_MAT3x4 = 0x8B68
    FLOAT_MAT4x2 = 0x8B69
    FLOAT_MAT4x3 = 0x8B6A
    UNSIGNED_INT_VEC2 = 0x8DC6
    UNSIGNED_INT_VEC3 = 0x8DC7
    UNSIGNED_INT_VEC4 = 0x8DC8

    STREAM_DRAW = 0x88E0
    STREAM_READ = 0x88E1
    STREAM_COPY = 0x88E2
    STATIC_DRAW = 0x88E4
    STATIC_READ = 0x88E5
    STATIC_COPY = 0x88E6
    DYNAMIC_DRAW = 0x88E8
    DYNAMIC_READ = 0x88E9
    DYNAMIC_COPY = 0x88EA


class FormatInfo(NamedTuple):
    """Bits per channel, channel count and float-ness of a texture format."""

    bpc: int
    num_channels: int
    is_float: bool


class TypeInfo(NamedTuple):
    """Component type and component count of a shader variable type."""

    data_type: DataType
    size: int


class DepthFormat(NamedTuple):
    """Internal format and pixel data type of a depth texture."""

    internal_format: GL
    data_type: GL


class DepthInfo(NamedTuple):
    """Depth bits and stencil presence of a depth format."""

    bits: int
    stencil: bool


_SIZES = {
    DataType.BOOL: 1,
    DataType.BYTE: 1,
    DataType.UBYTE: 1,
    DataType.INT16: 2,
    DataType.UINT16: 2,
    DataType.FLOAT16: 2,
    DataType.INT32: 4,
    DataType.UINT32: 4,
    DataType.FLOAT32: 4,
    DataType.FLOAT64: 8,
}

_GL_TYPE_SIZES = {
    GL.UNSIGNED_BYTE: 1,
    GL.BYTE: 1,
    GL.SHORT: 2,
    GL.UNSIGNED_SHORT: 2,
    GL.UNSIGNED_SHORT_5_6_5: 2,
    GL.UNSIGNED_SHORT_4_4_4_4: 2,
    GL.UNSIGNED_SHORT_5_5_5_1: 2,
    GL.INT: 4,
    GL.UNSIGNED_INT: 4,
    GL.UNSIGNED_INT_2_10_10_10_REV: 4,
    GL.FLOAT: 4,
}

_CHANNELS = {
    GL.RED: 1,
    GL.DEPTH_COMPONENT: 1,
    GL.DEPTH_STENCIL: 1,
    GL.RG: 2,
    GL.RGB: 3,
    GL.RGBA: 4,
}


def _formats(names: str, bpc: int, channels: int, is_float: bool = False) -> dict:
    info = FormatInfo(bpc, channels, is_float)
    return {GL[name]: info for name in names.split()}


# Compact formats are not described in detail, matching the engine's table.
_FORMATS: dict = {
    **_formats("R8 R8_SNORM R8I R8UI", 8, 1),
    **_formats("R16I R16UI", 16, 1),
    **_formats("RG8 RG8_SNORM RG8I RG8UI", 8, 2),
    **_formats("RG16I RG16UI", 8, 2),
    **_formats("RGB8 RGB8_SNORM RGB8I RGB8UI", 8, 3),
    **_formats("RGB16I RGB16UI", 16, 3),
    **_formats("RGBA4", 4, 4),
    **_formats("RGB5_A1", 16, 1),
    **_formats("RGBA8 RGBA8_SNORM RGBA8I RGBA8UI", 8, 4),
    **_formats("RGB10_A2 RGB10_A2UI", 16, 2),
    **_formats("RGBA16I RGBA16UI", 16, 4),
    **_formats("SRGB8", 8, 3),
    **_formats("SRGB8_ALPHA8", 8, 4),
    **_formats("R16F", 16, 1, True),
    **_formats("RG16F", 16, 2, True),
    **_formats("RGB16F", 16, 3, True),
    **_formats("RGBA16F", 16, 4, True),
    **_formats("R32F", 32, 1, True),
    **_formats("RG32F", 32, 2, True),
    **_formats("RGB32F", 32, 3, True),
    **_formats("RGBA32F", 32, 4, True),
    **_formats("R11F_G11F_B10F", 32, 1, True),
    **_formats("RGB9_E5", 32, 1, True),
    **_formats("R32I R32UI", 32, 1),
    **_formats("RG32I RG32UI", 32, 2),
    **_formats("RGB32I RGB32UI", 32, 3),
    **_formats("RGBA32I RGBA32UI", 32, 4),
}

_GL_TYPES = {
    GL.HALF_FLOAT: TypeInfo(DataType.FLOAT16, 1),
    GL.FLOAT: TypeInfo(DataType.FLOAT32, 1),
    GL.FLOAT_VEC2: TypeInfo(DataType.FLOAT32, 2),
    GL.FLOAT_VEC3: TypeInfo(DataType.FLOAT32, 3),
    GL.FLOAT_VEC4: TypeInfo(DataType.FLOAT32, 4),
    GL.FLOAT_MAT2: TypeInfo(DataType.FLOAT32, 4),
    GL.FLOAT_MAT3: TypeInfo(DataType.FLOAT32, 9),
    GL.FLOAT_MAT4: TypeInfo(DataType.FLOAT32, 16),
    GL.FLOAT_MAT2x3: TypeInfo(DataType.FLOAT32, 6),
    GL.FLOAT_MAT2x4: TypeInfo(DataType.FLOAT32, 8),
    GL.FLOAT_MAT3x2: TypeInfo(DataType.FLOAT32, 6),
    GL.FLOAT_MAT3x4: TypeInfo(DataType.FLOAT32, 12),
    GL.FLOAT_MAT4x2: TypeInfo(DataType.FLOAT32, 8),
    GL.FLOAT_MAT4x3: TypeInfo(DataType.FLOAT32, 12),
    GL.INT: TypeInfo(DataType.INT32, 1),
    GL.INT_VEC2: TypeInfo(DataType.INT32, 2),
    GL.INT_VEC3: TypeInfo(DataType.INT32, 3),
    GL.INT_VEC4: TypeInfo(DataType.INT32, 4),
    GL.UNSIGNED_INT: TypeInfo(DataType.UINT32, 1),
    GL.UNSIGNED_INT_VEC2: TypeInfo(DataType.UINT32, 2),
    GL.UNSIGNED_INT_VEC3: TypeInfo(DataType.UINT32, 3),
    GL.UNSIGNED_INT_VEC4: TypeInfo(DataType.UINT32, 4),
}

_TO_GL = {
    DataType.BOOL: GL.BOOL,
    DataType.BYTE: GL.BYTE,
    DataType.UBYTE: GL.UNSIGNED_BYTE,
    DataType.INT16: GL.SHORT,
    DataType.UINT16: GL.UNSIGNED_SHORT,
    DataType.INT32: GL.INT,
    DataType.UINT32: GL.UNSIGNED_INT,
    DataType.FLOAT16: GL.HALF_FLOAT,
    DataType.FLOAT32: GL.FLOAT,
}

_DEPTH_INFO = {
    GL.DEPTH_COMPONENT16: DepthInfo(16, False),
    GL.DEPTH_COMPONENT24: DepthInfo(24, False),
    GL.DEPTH24_STENCIL8: DepthInfo(24, True),
    GL.DEPTH_COMPONENT32F: DepthInfo(32, False),
    GL.DEPTH32F_STENCIL8: DepthInfo(32, True),
}

_USAGE = {
    Frequency.STATIC: (GL.STATIC_DRAW, GL.STATIC_READ, GL.STATIC_COPY),
    Frequency.DYNAMIC: (GL.DYNAMIC_DRAW, GL.DYNAMIC_READ, GL.DYNAMIC_COPY),
    Frequency.STREAM: (GL.STREAM_DRAW, GL.STREAM_READ, GL.STREAM_COPY),
}

_ACCESS = {
    Access.READ_ONLY: GL.MAP_READ_BIT,
    Access.WRITE_ONLY: GL.MAP_WRITE_BIT,
    Access.READ_WRITE: GL.MAP_READ_BIT | GL.MAP_WRITE_BIT,
}


def size_of(data_type: int) -> int:
    """Size in bytes of an engine data type, 0 if unknown."""
    return _SIZES.get(data_type, 0)


def size_of_gl_type(gl_type: int) -> int:
    """Size in bytes of a GL pixel data type, 0 if unknown."""
    return _GL_TYPE_SIZES.get(gl_type, 0)


def num_channels(gl_format: int) -> int:
    """Number of channels of a GL pixel format, 0 if unknown."""
    return _CHANNELS.get(gl_format, 0)


def map_gl_format(internal_format: int) -> FormatInfo:
    """Describe a GL internal texture format; unknown formats give zeros."""
    return _FORMATS.get(internal_format, FormatInfo(0, 0, False))


def map_gl_type(gl_type: int) -> TypeInfo:
    """Component type and count of a GL variable type."""
    return _GL_TYPES.get(gl_type, TypeInfo(DataType.UNKNOWN, 0))


def map_to_gl_type(data_type: int) -> GL:
    """GL type for an engine data type; anything unmapped becomes FLOAT."""
    return _TO_GL.get(data_type, GL.FLOAT)


def gl_type_for(bpc: int, is_float: bool, is_signed: bool) -> GL:
    """GL pixel data type for a channel width given in bits."""
    byte_count = (bpc & 0xFF) >> 3
    if byte_count == 1:
        return GL.BYTE if is_signed else GL.UNSIGNED_BYTE
    if byte_count == 2:
        if is_float:
            return GL.HALF_FLOAT
        return GL.SHORT if is_signed else GL.UNSIGNED_SHORT
    if byte_count == 4:
        if is_float:
            return GL.FLOAT
        return GL.INT if is_signed else GL.UNSIGNED_INT
    return GL.UNSIGNED_BYTE


def depth_format_for(bits: int, stencil: bool) -> DepthFormat:
    """Depth texture format for a bit depth; raises ValueError if unsupported."""
    if bits == 16:
        return DepthFormat(GL.DEPTH_COMPONENT16, GL.UNSIGNED_SHORT)
    if bits == 24:
        if stencil:
            return DepthFormat(GL.DEPTH24_STENCIL8, GL.UNSIGNED_INT_24_8)
        return DepthFormat(GL.DEPTH_COMPONENT24, GL.UNSIGNED_INT)
    if bits == 32:
        if stencil:
            return DepthFormat(GL.DEPTH32F_STENCIL8, GL.FLOAT)
        return DepthFormat(GL.DEPTH_COMPONENT32F, GL.FLOAT)
    raise ValueError(f"unsupported depth bits: {bits}")


def map_gl_depth_format(internal_format: int) -> DepthInfo:
    """Depth bits and stencil flag of a depth format; unknown gives (0, False)."""
    return _DEPTH_INFO.get(internal_format, DepthInfo(0, False))


def usage_to_gl(frequency: int, direction: int) -> GL:
    """GL buffer usage hint for an update frequency and data direction."""
    return _USAGE[Frequency(frequency)][Direction(direction)]


def access_to_gl(access: int) -> int:
    """GL buffer map access bits."""
    return _ACCESS[Access(access)]