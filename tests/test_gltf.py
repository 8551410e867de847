import base64
import json
import struct

import numpy as np
import pytest

from mineola.animation import AnimTarget, Interpolation
from mineola.gltf import (
    ChannelData,
    buffer_view_usages,
    load_animations,
    load_document,
    parse_normalized_floats,
    resample_channel,
)
from mineola.gltf_mapping import BufferViewUsage


def _glb(document: dict, binary: bytes) -> bytes:
    js = json.dumps(document).encode("utf-8")
    js += b" " * (-len(js) % 4)
    binary += b"\0" * (-len(binary) % 4)
    body = struct.pack("<II", len(js), 0x4E4F534A) + js
    body += struct.pack("<II", len(binary), 0x004E4942) + binary
    return struct.pack("<4sII", b"glTF", 2, 12 + len(body)) + body


def _float_document(times, values):
    data = np.asarray(times, dtype="<f4").tobytes() + np.asarray(values, dtype="<f4").tobytes()
    return {
        "buffers": [{"byteLength": len(data), "data": data}],
        "bufferViews": [
            {"buffer": 0, "byteOffset": 0, "byteLength": 4 * len(times)},
            {"buffer": 0, "byteOffset": 4 * len(times), "byteLength": 4 * len(values)},
        ],
        "accessors": [
            {"bufferView": 0, "componentType": 5126, "count": len(times), "type": "SCALAR"},
            {"bufferView": 1, "componentType": 5126, "count": len(values) // 3,
             "type": "VEC3"},
        ],
    }


def test_load_glb_attaches_binary_chunk(tmp_path):
    payload = bytes(range(8))
    doc = {"asset": {"version": "2.0"}, "buffers": [{"byteLength": 8}]}
    path = tmp_path / "model.glb"
    path.write_bytes(_glb(doc, payload))
    loaded = load_document(path)
    assert loaded["asset"]["version"] == "2.0"
    assert loaded["buffers"][0]["data"] == payload


def test_load_gltf_with_data_uri(tmp_path):
    payload = b"\x01\x02\x03\x04"
    uri = "data:application/octet-stream;base64," + base64.b64encode(payload).decode()
    path = tmp_path / "model.gltf"
    path.write_text(json.dumps({"buffers": [{"byteLength": 4, "uri": uri}]}))
    assert load_document(path)["buffers"][0]["data"] == payload


def test_load_gltf_with_external_buffer(tmp_path):
    (tmp_path / "data.bin").write_bytes(b"abcdef")
    path = tmp_path / "model.gltf"
    path.write_text(json.dumps({"buffers": [{"byteLength": 6, "uri": "data.bin"}]}))
    assert load_document(path)["buffers"][0]["data"] == b"abcdef"


def test_load_rejects_other_extensions(tmp_path):
    path = tmp_path / "model.obj"
    path.write_text("")
    with pytest.raises(ValueError):
        load_document(path)


def test_load_rejects_bad_magic(tmp_path):
    path = tmp_path / "model.glb"
    path.write_bytes(b"nope" + bytes(8))
    with pytest.raises(ValueError):
        load_document(path)


def test_parse_float_accessor_with_offsets():
    doc = _float_document([0.0, 1.0], [1.5, 2.5, 3.5, 4.5, 5.5, 6.5])
    values = parse_normalized_floats(doc, 1)
    assert values.tolist() == [1.5, 2.5, 3.5, 4.5, 5.5, 6.5]


def test_parse_normalized_integer_accessors():
    ubytes = bytes([0, 255])
    shorts = np.array([32767, -32768], dtype="<i2").tobytes()
    data = ubytes + shorts
    doc = {
        "buffers": [{"data": data}],
        "bufferViews": [
            {"buffer": 0, "byteLength": 2},
            {"buffer": 0, "byteOffset": 2, "byteLength": 4},
        ],
        "accessors": [
            {"bufferView": 0, "componentType": 5121, "count": 2, "type": "SCALAR"},
            {"bufferView": 1, "componentType": 5122, "count": 2, "type": "SCALAR"},
        ],
    }
    assert parse_normalized_floats(doc, 0).tolist() == [0.0, 1.0]
    assert parse_normalized_floats(doc, 1).tolist() == [1.0, -1.0]


def test_parse_accessor_without_view_raises():
    doc = {"accessors": [{"componentType": 5126, "count": 1, "type": "SCALAR"}]}
    with pytest.raises(ValueError):
        parse_normalized_floats(doc, 0)


def test_resample_linear_translation():
    frames = resample_channel(
        "translation", Interpolation.LINEAR, [0.0, 0.08], [0, 0, 0, 8, 0, 0])
    xs = [f.translation[0] for f in frames]
    assert len(frames) == 4
    assert xs[0] == pytest.approx(0.0)
    assert xs[1] == pytest.approx(4.0, rel=1e-5)
    assert xs[2] == pytest.approx(8.0)
    assert xs[3] == pytest.approx(8.0)


def test_resample_step_keeps_previous_value():
    frames = resample_channel("scale", Interpolation.STEP, [0.0, 0.08], [1, 1, 1, 2, 2, 2])
    assert np.allclose(frames[1].scale, [1, 1, 1])
    assert np.allclose(frames[-1].scale, [2, 2, 2])


def test_resample_rotation_reorders_to_wxyz():
    frames = resample_channel("rotation", Interpolation.LINEAR, [0.0], [0, 0, 0, 1])
    assert len(frames) == 2
    assert np.allclose(frames[0].rotation, [1, 0, 0, 0])


def test_resample_cubic_spline_hits_key_frames():
    values = [0, 0, 0, 1, 2, 3, 0, 0, 0,
              0, 0, 0, 5, 6, 7, 0, 0, 0]
    frames = resample_channel("translation", Interpolation.CUBIC_SPLINE, [0.0, 0.08], values)
    assert np.allclose(frames[0].translation, [1, 2, 3])
    assert np.allclose(frames[-1].translation, [5, 6, 7])
    mid = frames[1].translation
    assert np.all((mid >= [1, 2, 3]) & (mid <= [5, 6, 7]))


def test_resample_unknown_path_raises():
    with pytest.raises(ValueError):
        resample_channel("weights", Interpolation.LINEAR, [0.0], [1.0])


def test_resample_empty_raises():
    with pytest.raises(ValueError):
        resample_channel("translation", Interpolation.LINEAR, [], [])


def test_buffer_view_usages():
    doc = {
        "bufferViews": [
            {"buffer": 0, "target": 34962},
            {"buffer": 0},
            {"buffer": 0},
            {"buffer": 0},
            {"buffer": 0},
        ],
        "accessors": [{"bufferView": 1}, {"bufferView": 3}, {}],
        "meshes": [{"primitives": [{"attributes": {}, "indices": 0}]}],
        "images": [{"bufferView": 2, "mimeType": "image/png"}],
        "animations": [{"samplers": [{"input": 1, "output": 2}], "channels": []}],
    }
    assert buffer_view_usages(doc) == [
        BufferViewUsage.VBO,
        BufferViewUsage.IBO,
        BufferViewUsage.TEXTURE,
        BufferViewUsage.CPU,
        BufferViewUsage.VBO,
    ]


def test_load_animations_names_and_channels():
    doc = _float_document([0.0, 0.08], [0, 0, 0, 8, 0, 0])
    doc["animations"] = [
        {
            "samplers": [{"input": 0, "output": 1, "interpolation": "LINEAR"}],
            "channels": [
                {"sampler": 0, "target": {"node": 3, "path": "translation"}},
                {"sampler": 0, "target": {"path": "translation"}},
            ],
        },
        {
            "name": "walk",
            "samplers": [{"input": 0, "output": 1, "interpolation": "STEP"}],
            "channels": [{"sampler": 0, "target": {"node": 1, "path": "scale"}}],
        },
    ]
    result = load_animations(doc)
    assert [name for name, _ in result] == ["animation:0", "walk"]
    first = result[0][1]
    assert len(first) == 1
    channel = first[0]
    assert isinstance(channel, ChannelData)
    assert channel.node == 3
    assert channel.type == AnimTarget.TRANSLATION
    assert channel.interp == Interpolation.LINEAR
    assert len(channel.key_frames) == 4
    second = result[1][1][0]
    assert second.type == AnimTarget.SCALE
    assert second.interp == Interpolation.STEP