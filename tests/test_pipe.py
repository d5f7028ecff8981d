import io

import pytest

from windengine.assets.pipe import AssetPipe, PipeRegister, asset_hash


class _EchoPipe(AssetPipe):
    def compile(self, source, destination):
        raise OSError("unused")

    def load(self, stream):
        return stream.read()


def test_asset_hash_empty_is_offset_basis():
    assert asset_hash("") == 0x811C9DC5


def test_asset_hash_known_value():
    assert asset_hash("a") == 0xE40C292C


def test_asset_hash_is_stable_and_32_bit():
    first = asset_hash("textures/player.png")
    assert first == asset_hash("textures/player.png")
    assert 0 <= first < 2**32
    assert first != asset_hash("textures/enemy.png")


def test_pipe_id_is_hash_of_name():
    pipe = _EchoPipe("echo")
    assert pipe.id == asset_hash("echo")
    assert pipe.name == "echo"


def test_configure_keeps_identity():
    pipe = _EchoPipe("echo")
    pipe.configure({"pipe": "echo"})
    assert pipe.id == asset_hash("echo")


def test_abstract_pipe_cannot_be_created():
    with pytest.raises(TypeError):
        AssetPipe("abstract")


def test_register_lookup():
    first, second = _EchoPipe("one"), _EchoPipe("two")
    register = PipeRegister([first])
    assert register.get_pipe(first.id) is first
    assert register.get_pipe(second.id) is None
    register.register(second)
    assert register.get_pipe(second.id) is second
    assert len(register) == 2
    assert list(register) == [first, second]


def test_pipe_found_by_name_hash_reads_stream():
    register = PipeRegister([_EchoPipe("echo")])
    found = register.get_pipe(asset_hash("echo"))
    assert found.load(io.BytesIO(b"data")) == b"data"