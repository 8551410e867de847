"""Reading glTF documents and turning their animation data into key frames."""

from __future__ import annotations

import base64
import bisect
import json
import struct
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from .animation import AnimTarget, Interpolation, KeyFrame
from .gltf_mapping import BufferViewUsage, vec_length

_GLB_MAGIC = b"glTF"
_CHUNK_JSON = 0x4E4F534A
_CHUNK_BIN = 0x004E4942

# Resampling step in seconds; matches a 25 fps channel.
_SAMPLE_STEP = np.float32(0.04)

_COMPONENT_DTYPES = {
    5120: np.dtype("<i1"),
    5121: np.dtype("<u1"),
    5122: np.dtype("<i2"),
    5123: np.dtype("<u2"),
    5125: np.dtype("<u4"),
    5126: np.dtype("<f4"),
}

_PATH_COMPONENTS = {"translation": 3, "rotation": 4, "scale": 3}

_PATH_TARGETS = {
    "translation": AnimTarget.TRANSLATION,
    "rotation": AnimTarget.ROTATION,
    "scale": AnimTarget.SCALE,
}

_INTERPOLATIONS = {
    "STEP": Interpolation.STEP,
    "LINEAR": Interpolation.LINEAR,
    "CUBICSPLINE": Interpolation.CUBIC_SPLINE,
}

_TARGET_USAGES = {
    34962: BufferViewUsage.VBO,
    34963: BufferViewUsage.IBO,
}


@dataclass
class ChannelData:
    """Resampled key frames of one animation channel and the node index they drive."""

    node: int
    type: AnimTarget
    interp: Interpolation
    key_frames: list = field(default_factory=list)


def _resolve_uri(uri: str, base: Path) -> bytes:
    if uri.startswith("data:"):
        header, _, payload = uri.partition(",")
        if header.endswith(";base64"):
            return base64.b64decode(payload)
        raise ValueError("only base64 data URIs are supported")
    return (base / uri).read_bytes()


def _load_glb(raw: bytes) -> tuple[dict, bytes | None]:
    if len(raw) < 12:
        raise ValueError("file too short for a GLB header")
    magic, version, length = struct.unpack_from("<4sII", raw, 0)
    if magic != _GLB_MAGIC:
        raise ValueError("not a GLB file")
    if version != 2:
        raise ValueError(f"unsupported GLB version {version}")
    if length > len(raw):
        raise ValueError("GLB file is truncated")
    document = None
    binary = None
    pos = 12
    while pos + 8 <= length:
        chunk_length, chunk_type = struct.unpack_from("<II", raw, pos)
        start = pos + 8
        chunk = raw[start:start + chunk_length]
        if len(chunk) != chunk_length:
            raise ValueError("GLB chunk is truncated")
        if chunk_type == _CHUNK_JSON and document is None:
            document = json.loads(chunk.decode("utf-8"))
        elif chunk_type == _CHUNK_BIN and binary is None:
            binary = bytes(chunk)
        pos = start + chunk_length
    if document is None:
        raise ValueError("GLB file has no JSON chunk")
    return document, binary


def load_document(path) -> dict:
    """Load a .gltf or .glb file; every buffer gets its bytes under ``"data"``."""
    path = Path(path)
    name = str(path)
    if name.endswith(".gltf"):
        document = json.loads(path.read_text(encoding="utf-8"))
        binary = None
    elif name.endswith(".glb"):
        document, binary = _load_glb(path.read_bytes())
    else:
        raise ValueError(f"not a glTF file: {name}")

    base = path.parent
    for index, buffer in enumerate(document.get("buffers", [])):
        uri = buffer.get("uri")
        if uri:
            data = _resolve_uri(uri, base)
        elif index == 0 and binary is not None:
            data = binary
        else:
            data = b""
        byte_length = buffer.get("byteLength", len(data))
        if len(data) < byte_length:
            raise ValueError(f"buffer {index} holds fewer bytes than declared")
        buffer["data"] = data[:byte_length]
    return document


def parse_normalized_floats(document: dict, accessor_index: int) -> np.ndarray:
    """Read an accessor's tightly packed values as floats, normalising integers."""
    accessor = document["accessors"][accessor_index]
    view_index = accessor.get("bufferView", -1)
    if view_index is None or view_index < 0:
        raise ValueError(f"accessor {accessor_index} has no buffer view")
    view = document["bufferViews"][view_index]
    data = document["buffers"][view["buffer"]]["data"]
    offset = view.get("byteOffset", 0) + accessor.get("byteOffset", 0)
    count = vec_length(accessor.get("type")) * accessor.get("count", 0)
    component = accessor.get("componentType")
    dtype = _COMPONENT_DTYPES.get(component)
    if dtype is None:
        return np.zeros(count, dtype=np.float32)

    raw = np.frombuffer(data, dtype=dtype, count=count, offset=offset)
    values = raw.astype(np.float32)
    if component == 5120:
        return np.maximum(values / np.float32(127.0), np.float32(-1.0))
    if component == 5121:
        return values / np.float32(255.0)
    if component == 5122:
        return np.maximum(values / np.float32(32767.0), np.float32(-1.0))
    if component == 5123:
        return values / np.float32(65535.0)
    if component == 5126:
        return values
    return np.zeros(count, dtype=np.float32)


def _raw_key_frames(path: str, cubic: bool, values) -> tuple[list, list, list]:
    components = _PATH_COMPONENTS.get(path)
    if components is None:
        raise ValueError(f"unsupported animation path: {path!r}")
    multiplier = 3 if cubic else 1
    flat = np.asarray(values, dtype=float).reshape(-1)
    frame_count = len(flat) // (multiplier * components)
    grouped = flat[:frame_count * multiplier * components].reshape(
        frame_count, multiplier, components)
    if path == "rotation":
        # glTF stores quaternions as (x, y, z, w).
        grouped = grouped[:, :, [3, 0, 1, 2]]

    def frames(slot: int) -> list:
        return [KeyFrame(**{path: sample}) for sample in grouped[:, slot]]

    if cubic:
        return frames(1), frames(0), frames(2)
    return frames(0), [], []


def resample_channel(path: str, interp, timestamps, values) -> list:
    """Resample irregular samples of one transform component every 0.04 s."""
    interp = Interpolation(interp)
    cubic = interp is Interpolation.CUBIC_SPLINE
    key_frames, in_tangents, out_tangents = _raw_key_frames(path, cubic, values)
    if not key_frames:
        raise ValueError("animation channel has no key frames")
    times = [np.float32(t) for t in np.asarray(timestamps, dtype=np.float32).reshape(-1)]

    result = []
    time_point = np.float32(0.0)
    while True:
        idx = bisect.bisect_left(times, time_point)
        if idx == len(times):
            result.append(key_frames[-1])
            break
        if idx == 0:
            result.append(key_frames[0])
        else:
            prev = idx - 1
            time0 = times[prev]
            time1 = times[idx]
            interval = np.float32(time1 - time0)
            t = float(np.float32((time_point - time0) / interval))
            if interp is Interpolation.STEP:
                result.append(key_frames[prev])
            elif interp is Interpolation.LINEAR:
                result.append(KeyFrame.lerp(key_frames[prev], key_frames[idx], t))
            else:
                result.append(KeyFrame.cubic_spline(
                    key_frames[prev], out_tangents[prev],
                    key_frames[idx], in_tangents[idx],
                    float(interval), t))
        time_point = np.float32(time_point + _SAMPLE_STEP)
    return result


def _accessor_view(document: dict, accessor_index) -> int:
    if accessor_index is None or accessor_index < 0:
        return -1
    view = document["accessors"][accessor_index].get("bufferView", -1)
    return -1 if view is None else view


def buffer_view_usages(document: dict) -> list[BufferViewUsage]:
    """Infer what each buffer view is used for; anything unclaimed is vertex data."""
    usages = [
        _TARGET_USAGES.get(view.get("target"), BufferViewUsage.UNKNOWN)
        for view in document.get("bufferViews", [])
    ]

    for mesh in document.get("meshes", []):
        for primitive in mesh.get("primitives", []):
            view = _accessor_view(document, primitive.get("indices", -1))
            if view >= 0:
                usages[view] = BufferViewUsage.IBO

    for image in document.get("images", []):
        view = image.get("bufferView", -1)
        if not image.get("uri") and view is not None and view >= 0:
            usages[view] = BufferViewUsage.TEXTURE

    for anim in document.get("animations", []):
        for sampler in anim.get("samplers", []):
            for key in ("input", "output"):
                view = _accessor_view(document, sampler.get(key, -1))
                if view >= 0:
                    usages[view] = BufferViewUsage.CPU

    return [BufferViewUsage.VBO if u is BufferViewUsage.UNKNOWN else u for u in usages]


def load_animations(document: dict) -> list[tuple[str, list[ChannelData]]]:
    """Resampled channels of every animation, named ``animation:N`` when unnamed."""
    result = []
    for number, anim in enumerate(document.get("animations", [])):
        samplers = anim.get("samplers", [])
        channels = []
        for ch in anim.get("channels", []):
            target = ch.get("target", {})
            node = target.get("node", -1)
            sampler_index = ch.get("sampler", -1)
            if node is None or node < 0 or sampler_index is None or sampler_index < 0:
                continue
            sampler = samplers[sampler_index]
            interp = _INTERPOLATIONS.get(
                sampler.get("interpolation", "LINEAR"), Interpolation.LINEAR)
            path = target.get("path")
            timestamps = parse_normalized_floats(document, sampler["input"])
            values = parse_normalized_floats(document, sampler["output"])
            key_frames = resample_channel(path, interp, timestamps, values)
            channels.append(ChannelData(node, _PATH_TARGETS[path], interp, key_frames))
        name = anim.get("name") or f"animation:{number}"
        result.append((name, channels))
    return result