import pytest

from playerclock.frames import (
    ACK_COMMAND,
    FRAME_END,
    FRAME_HEADER,
    FrameError,
    FrameReader,
    Message,
    MessageType,
    checksum,
    encode_frame,
    interpret,
)


def feed_all(reader, data):
    results = [reader.feed(b) for b in data]
    return [r for r in results if r is not None]


def test_documented_volume_frame():
    assert encode_frame(0x06, 30, ack=False) == bytes.fromhex("7EFF06060000 1EFED7EF".replace(" ", ""))


def test_frame_layout():
    frame = encode_frame(0x03, 0x0102, ack=True)
    assert len(frame) == 10
    assert frame[0] == FRAME_HEADER
    assert frame[-1] == FRAME_END
    assert frame[3] == 0x03
    assert frame[4] == 1
    assert frame[5:7] == bytes([0x01, 0x02])


def test_ack_flag_off():
    assert encode_frame(0x01, ack=False)[4] == 0


def test_checksum_matches_stored_bytes():
    frame = encode_frame(0x12, 345)
    assert checksum(frame) == int.from_bytes(frame[7:9], "big")


def test_checksum_plus_sum_is_zero():
    frame = encode_frame(0x4E, 999, ack=False)
    assert (checksum(frame) + sum(frame[1:7])) & 0xFFFF == 0


def test_checksum_too_short():
    with pytest.raises(ValueError):
        checksum(b"\x7e\xff")


@pytest.mark.parametrize("command,argument", [(0x01, 0), (0x43, 20), (0x3F, 2), (0x14, 0xFFFF)])
def test_reader_round_trip(command, argument):
    reader = FrameReader()
    assert feed_all(reader, encode_frame(command, argument)) == [(command, argument)]


def test_argument_truncated_to_16_bits():
    reader = FrameReader()
    assert feed_all(reader, encode_frame(0x03, 0x10005)) == [(0x03, 0x0005)]


def test_reader_skips_leading_garbage():
    reader = FrameReader()
    data = b"\x00\x12\xef" + encode_frame(0x3D, 7)
    assert feed_all(reader, data) == [(0x3D, 7)]


def test_reader_returns_none_until_complete():
    reader = FrameReader()
    frame = encode_frame(0x43, 5)
    assert all(reader.feed(b) is None for b in frame[:-1])
    assert reader.feed(frame[-1]) == (0x43, 5)


@pytest.mark.parametrize("position,value", [(1, 0x00), (2, 0x07), (9, 0x00)])
def test_reader_rejects_bad_fixed_bytes(position, value):
    frame = bytearray(encode_frame(0x43, 5))
    frame[position] = value
    reader = FrameReader()
    assert feed_all(reader, frame[:position]) == []
    with pytest.raises(FrameError):
        reader.feed(frame[position])
    assert feed_all(reader, encode_frame(0x43, 5)) == [(0x43, 5)]


def test_reader_rejects_bad_checksum():
    frame = bytearray(encode_frame(0x43, 5))
    frame[8] ^= 0x01
    with pytest.raises(FrameError):
        feed_all(FrameReader(), frame)


def test_reader_recovers_after_error():
    reader = FrameReader()
    with pytest.raises(FrameError):
        feed_all(reader, b"\x7e\x00")
    assert feed_all(reader, encode_frame(0x4F, 3)) == [(0x4F, 3)]


def test_reset_discards_partial_frame():
    reader = FrameReader()
    frame = encode_frame(0x43, 9)
    feed_all(reader, frame[:5])
    reader.reset()
    assert feed_all(reader, frame) == [(0x43, 9)]


@pytest.mark.parametrize(
    "command,parameter,expected",
    [
        (0x3C, 4, MessageType.PLAY_FINISHED),
        (0x3D, 4, MessageType.PLAY_FINISHED),
        (0x3F, 1, MessageType.USB_ONLINE),
        (0x3F, 2, MessageType.CARD_ONLINE),
        (0x3F, 3, MessageType.USB_ONLINE),
        (0x3A, 1, MessageType.USB_INSERTED),
        (0x3A, 2, MessageType.CARD_INSERTED),
        (0x3B, 1, MessageType.USB_REMOVED),
        (0x3B, 2, MessageType.CARD_REMOVED),
        (0x40, 4, MessageType.ERROR),
        (0x3E, 0, MessageType.FEEDBACK),
        (0x43, 20, MessageType.FEEDBACK),
        (0x4F, 2, MessageType.FEEDBACK),
    ],
)
def test_interpret_types(command, parameter, expected):
    assert interpret(command, parameter) == Message(expected, command, parameter)


@pytest.mark.parametrize("command", [0x3F, 0x3A, 0x3B])
def test_interpret_without_status_bits(command):
    assert interpret(command, 0) is None


def test_interpret_ack_is_none():
    assert interpret(ACK_COMMAND, 0) is None


@pytest.mark.parametrize("command", [0x4A, 0x00, 0x99])
def test_interpret_unknown_is_wrong_stack(command):
    assert interpret(command, 55) == Message(MessageType.WRONG_STACK, command, 0)