import pytest

from nachoskit.noff import (
    NOFF_MAGIC,
    NoffHeader,
    Segment,
    header_size,
    pack_header,
    unpack_header,
)


def make_header(rdata=False):
    return NoffHeader(
        code=Segment(0, header_size(rdata), 0x300),
        init_data=Segment(0x300, header_size(rdata) + 0x300, 0x40),
        uninit_data=Segment(0x400, 0, 0x80),
        readonly_data=Segment(0x340, header_size(rdata) + 0x340, 0x20) if rdata else None,
    )


def test_header_sizes():
    assert header_size(False) == 40
    assert header_size(True) == 52


def test_packed_length_matches_header_size():
    assert len(pack_header(make_header(False))) == header_size(False)
    assert len(pack_header(make_header(True))) == header_size(True)


@pytest.mark.parametrize("rdata", [False, True])
def test_round_trip(rdata):
    header = make_header(rdata)
    assert unpack_header(pack_header(header), rdata) == header


def test_default_header_round_trip():
    header = unpack_header(pack_header(NoffHeader()))
    assert header.magic == NOFF_MAGIC
    assert header.code == Segment()
    assert header.readonly_data is None


def test_segment_order_places_readonly_before_uninit():
    header = make_header(True)
    segments = list(header.segments())
    assert segments == [header.code, header.init_data, header.readonly_data, header.uninit_data]


def test_unpack_ignores_trailing_bytes():
    header = make_header(False)
    assert unpack_header(pack_header(header) + b"extra") == header


def test_unpack_short_data_raises():
    with pytest.raises(ValueError):
        unpack_header(pack_header(make_header(False)), rdata=True)


def test_has_readonly_data():
    assert make_header(True).has_readonly_data
    assert not make_header(False).has_readonly_data