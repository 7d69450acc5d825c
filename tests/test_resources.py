import pytest

from pocketarcade.resources import (
    FILE_HEART,
    RES_HEART,
    CompParams,
    ResDescriptor,
    ResourceManager,
)


def write(base, relative, data):
    path = base / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def test_comp_params_truthiness():
    assert not CompParams()
    assert not CompParams(lookahead=4)
    assert CompParams(lookahead=4, expansion=8)


def test_in_ram_resource_rewound(tmp_path):
    write(tmp_path, "Games/Space/bg.raw", b"pixels")
    with ResourceManager("/Games/Space", tmp_path) as manager:
        manager.load([ResDescriptor("/bg.raw", in_ram=True)])
        first = manager.get_resource("/bg.raw")
        assert first.read() == b"pixels"
        assert manager.get_resource("/bg.raw").read() == b"pixels"


def test_common_prefix(tmp_path):
    write(tmp_path, "Games/Common/heart.raw", b"heart")
    manager = ResourceManager("/Games/Space", tmp_path)
    manager.load([RES_HEART])
    assert manager.get_resource(FILE_HEART).read() == b"heart"
    manager.close()


def test_missing_file_skipped(tmp_path):
    manager = ResourceManager("/x", tmp_path)
    manager.load([ResDescriptor("/nothing.raw", in_ram=True)])
    assert manager.get_resource("/nothing.raw") is None
    assert "/nothing.raw" not in manager


def test_file_kept_on_disk_when_not_in_ram(tmp_path):
    path = write(tmp_path, "g/anim.gif", b"GIF89a")
    manager = ResourceManager("/g", tmp_path)
    manager.load([ResDescriptor("/anim.gif")])
    file = manager.get_resource("/anim.gif")
    assert file.name == str(path)
    assert file.read() == b"GIF89a"
    manager.close()
    assert file.closed


def test_compressed_uses_decompressor(tmp_path):
    write(tmp_path, "g/data.hs", b"abc")
    seen = []

    def decompress(data, params):
        seen.append(params)
        return data[::-1]

    params = CompParams(lookahead=4, expansion=8)
    manager = ResourceManager("/g", tmp_path, decompress)
    manager.load([ResDescriptor("/data.hs", params, in_ram=True)])
    assert manager.get_resource("/data.hs").read() == b"cba"
    assert seen == [params]


def test_compressed_without_decompressor_raises(tmp_path):
    write(tmp_path, "g/data.hs", b"abc")
    manager = ResourceManager("/g", tmp_path)
    with pytest.raises(ValueError):
        manager.load([ResDescriptor("/data.hs", CompParams(4, 8), in_ram=True)])


def test_close_empties(tmp_path):
    write(tmp_path, "g/a.raw", b"a")
    manager = ResourceManager("/g", tmp_path)
    manager.load([ResDescriptor("/a.raw", in_ram=True)])
    manager.close()
    assert manager.get_resource("/a.raw") is None