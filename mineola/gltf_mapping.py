"""Mapping of glTF enumerations and effect names to engine values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from .gltypes import DataType


class Semantics(IntEnum):
    """Vertex attribute semantics understood by the engine."""

    UNKNOWN = -1
    POSITION = 0
    NORMAL = 1
    TANGENT = 2
    TEXCOORD0 = 3
    TEXCOORD1 = 4
    DIFFUSE_COLOR = 5
    BLEND_INDEX = 6
    BLEND_WEIGHT = 7
    INDEX = 8


class Filter(IntEnum):
    """Texture minification and magnification filters."""

    NEAREST = 0
    LINEAR = 1
    NEAREST_MIPMAP_NEAREST = 2
    LINEAR_MIPMAP_NEAREST = 3
    NEAREST_MIPMAP_LINEAR = 4
    LINEAR_MIPMAP_LINEAR = 5


class WrapMode(IntEnum):
    """Texture coordinate wrapping modes."""

    REPEAT = 0
    CLAMP_TO_EDGE = 1
    MIRROR_REPEAT = 2


class BufferViewUsage(IntEnum):
    """What a glTF buffer view's bytes are used for."""

    UNKNOWN = -1
    TEXTURE = 1
    CPU = 2
    VBO = 0x8892  # GL_ARRAY_BUFFER
    IBO = 0x8893  # GL_ELEMENT_ARRAY_BUFFER


@dataclass(frozen=True)
class SFXFlags:
    """Special effect options selected through a built-in PBR effect name."""

    srgb_encoding: bool = False
    receive_shadow: bool = False


class ShadowmapEffectType(Enum):
    """Kind of shadow map effect requested for a model."""

    NONE = "none"
    BUILTIN = "builtin"
    CUSTOM = "custom"


BUILTIN_PBR_EFFECT = "mineola:effect:pbr"

_SEMANTICS = {
    "POSITION": Semantics.POSITION,
    "NORMAL": Semantics.NORMAL,
    "TANGENT": Semantics.TANGENT,
    "TEXCOORD_0": Semantics.TEXCOORD0,
    "TEXCOORD_1": Semantics.TEXCOORD1,
    "COLOR_0": Semantics.DIFFUSE_COLOR,
    "JOINTS_0": Semantics.BLEND_INDEX,
    "WEIGHTS_0": Semantics.BLEND_WEIGHT,
}

# glTF accessor component types are GL enumerants.
_COMPONENT_TYPES = {
    5120: DataType.BYTE,
    5121: DataType.UBYTE,
    5122: DataType.INT16,
    5123: DataType.UINT16,
    5125: DataType.UINT32,
    5126: DataType.FLOAT32,
}

_VEC_LENGTHS = {
    "SCALAR": 1,
    "VEC2": 2,
    "VEC3": 3,
    "VEC4": 4,
    "MAT2": 4,
    "MAT3": 9,
    "MAT4": 16,
}

_MAG_FILTERS = {
    9728: Filter.NEAREST,
    9729: Filter.LINEAR,
}

_MIN_FILTERS = {
    9728: Filter.NEAREST,
    9729: Filter.LINEAR,
    9984: Filter.NEAREST_MIPMAP_NEAREST,
    9985: Filter.LINEAR_MIPMAP_NEAREST,
    9986: Filter.NEAREST_MIPMAP_LINEAR,
    9987: Filter.LINEAR_MIPMAP_LINEAR,
}

_WRAP_MODES = {
    33071: WrapMode.CLAMP_TO_EDGE,
    33648: WrapMode.MIRROR_REPEAT,
    10497: WrapMode.REPEAT,
}


def map_semantics(name: str) -> Semantics:
    """Engine semantics of a glTF attribute name; UNKNOWN if not supported."""
    return _SEMANTICS.get(name, Semantics.UNKNOWN)


def map_component_type(component_type: int | None) -> DataType:
    """Engine data type of a glTF accessor component type; UNKNOWN otherwise."""
    return _COMPONENT_TYPES.get(component_type, DataType.UNKNOWN)


def vec_length(accessor_type: str | None) -> int:
    """Number of components of a glTF accessor type; 0 if unknown."""
    return _VEC_LENGTHS.get(accessor_type, 0)


def map_mag_filter(value: int | None) -> Filter:
    """Magnification filter of a glTF sampler, LINEAR when unset."""
    return _MAG_FILTERS.get(value, Filter.LINEAR)


def map_min_filter(value: int | None) -> Filter:
    """Minification filter of a glTF sampler, trilinear when unset."""
    return _MIN_FILTERS.get(value, Filter.LINEAR_MIPMAP_LINEAR)


def map_wrap_mode(value: int | None) -> WrapMode:
    """Wrap mode of a glTF sampler, REPEAT when unset."""
    return _WRAP_MODES.get(value, WrapMode.REPEAT)


def abbrev_texture_mode(min_filter: int, mag_filter: int, wrap_s: int, wrap_t: int) -> str:
    """Short key for a sampler configuration, used in texture resource names."""
    return "".join(str(int(v)) for v in (min_filter, mag_filter, wrap_s, wrap_t))


def effect_sfx_flags(effect_name: str) -> SFXFlags | None:
    """Flags of a built-in PBR effect name; None for any other effect."""
    if not effect_name.startswith(BUILTIN_PBR_EFFECT):
        return None
    parts = effect_name.split(":")
    return SFXFlags(
        srgb_encoding="srgb" in parts,
        receive_shadow="shadowed" in parts,
    )


def shadowmap_effect_type(name: str | None) -> ShadowmapEffectType:
    """Classify the requested shadow map effect."""
    if name is None:
        return ShadowmapEffectType.NONE
    if name == BUILTIN_PBR_EFFECT:
        return ShadowmapEffectType.BUILTIN
    return ShadowmapEffectType.CUSTOM