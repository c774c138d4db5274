"""Serial frames exchanged with a DFPlayer Mini MP3 module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

FRAME_LENGTH = 10
FRAME_HEADER = 0x7E
FRAME_VERSION = 0xFF
FRAME_DATA_LENGTH = 0x06
FRAME_END = 0xEF
ACK_COMMAND = 0x41

_VERSION = 1
_LENGTH = 2
_COMMAND = 3
_ACK = 4
_PARAMETER = 5
_CHECKSUM = 7
_END = 9

_FEEDBACK_COMMANDS = frozenset(
    {0x3E, 0x42, 0x43, 0x44, 0x45, 0x46, 0x47, 0x48, 0x49, 0x4B, 0x4C, 0x4D, 0x4E, 0x4F}
)


class MessageType(IntEnum):
    """Kinds of event a player can report."""

    TIME_OUT = 0
    WRONG_STACK = 1
    CARD_INSERTED = 2
    CARD_REMOVED = 3
    CARD_ONLINE = 4
    PLAY_FINISHED = 5
    ERROR = 6
    USB_INSERTED = 7
    USB_REMOVED = 8
    USB_ONLINE = 9
    CARD_USB_ONLINE = 10
    FEEDBACK = 11


class Equalizer(IntEnum):
    """Equalizer presets."""

    NORMAL = 0
    POP = 1
    ROCK = 2
    JAZZ = 3
    CLASSIC = 4
    BASS = 5


class Device(IntEnum):
    """Playback sources and output states."""

    U_DISK = 1
    SD = 2
    AUX = 3
    SLEEP = 4
    FLASH = 5


class PlayerError(IntEnum):
    """Error codes carried by an ERROR message's parameter."""

    BUSY = 1
    SLEEPING = 2
    SERIAL_WRONG_STACK = 3
    CHECKSUM_NOT_MATCH = 4
    FILE_INDEX_OUT = 5
    FILE_MISMATCH = 6
    ADVERTISE = 7


class FrameError(ValueError):
    """A received frame was malformed or failed its checksum."""


@dataclass(frozen=True)
class Message:
    """An event decoded from a frame sent by the player."""

    type: MessageType
    command: int
    parameter: int


def checksum(frame: bytes) -> int:
    """The 16-bit checksum over the version through parameter bytes."""
    if len(frame) < _CHECKSUM:
        raise ValueError("frame too short for a checksum")
    return -sum(frame[_VERSION:_CHECKSUM]) & 0xFFFF


def encode_frame(command: int, argument: int = 0, ack: bool = True) -> bytes:
    """Build the ten-byte frame that sends ``command`` with ``argument``."""
    argument &= 0xFFFF
    frame = bytearray(
        [
            FRAME_HEADER,
            FRAME_VERSION,
            FRAME_DATA_LENGTH,
            command & 0xFF,
            1 if ack else 0,
            argument >> 8,
            argument & 0xFF,
            0,
            0,
            FRAME_END,
        ]
    )
    frame[_CHECKSUM:_END] = checksum(frame).to_bytes(2, "big")
    return bytes(frame)


def interpret(command: int, parameter: int) -> Message | None:
    """Decode a reply; ``None`` for acknowledgements and unmatched status bits."""
    if command == ACK_COMMAND:
        return None
    if command in (0x3C, 0x3D):
        return Message(MessageType.PLAY_FINISHED, command, parameter)
    if command == 0x3F:
        if parameter & 0x01:
            return Message(MessageType.USB_ONLINE, command, parameter)
        if parameter & 0x02:
            return Message(MessageType.CARD_ONLINE, command, parameter)
        if parameter & 0x03:
            return Message(MessageType.CARD_USB_ONLINE, command, parameter)
        return None
    if command == 0x3A:
        if parameter & 0x01:
            return Message(MessageType.USB_INSERTED, command, parameter)
        if parameter & 0x02:
            return Message(MessageType.CARD_INSERTED, command, parameter)
        return None
    if command == 0x3B:
        if parameter & 0x01:
            return Message(MessageType.USB_REMOVED, command, parameter)
        if parameter & 0x02:
            return Message(MessageType.CARD_REMOVED, command, parameter)
        return None
    if command == 0x40:
        return Message(MessageType.ERROR, command, parameter)
    if command in _FEEDBACK_COMMANDS:
        return Message(MessageType.FEEDBACK, command, parameter)
    return Message(MessageType.WRONG_STACK, command, 0)


class FrameReader:
    """Assembles incoming bytes into validated frames."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def reset(self) -> None:
        """Discard any partly received frame."""
        self._buffer.clear()

    def feed(self, byte: int) -> tuple[int, int] | None:
        """Add one byte; return ``(command, parameter)`` once a frame completes.

        Bytes before a frame header are skipped. A malformed frame raises
        :class:`FrameError` and the reader starts over.
        """
        byte &= 0xFF
        if not self._buffer:
            if byte == FRAME_HEADER:
                self._buffer.append(byte)
            return None

        self._buffer.append(byte)
        index = len(self._buffer) - 1
        if index == _VERSION and byte != FRAME_VERSION:
            self._fail(f"bad version byte 0x{byte:02X}")
        if index == _LENGTH and byte != FRAME_DATA_LENGTH:
            self._fail(f"bad length byte 0x{byte:02X}")
        if index < _END:
            return None

        frame = bytes(self._buffer)
        self.reset()
        if byte != FRAME_END:
            raise FrameError(f"bad end byte 0x{byte:02X}")
        if checksum(frame) != int.from_bytes(frame[_CHECKSUM:_END], "big"):
            raise FrameError("checksum mismatch")
        return frame[_COMMAND], int.from_bytes(frame[_PARAMETER:_CHECKSUM], "big")

    def _fail(self, reason: str) -> None:
        self.reset()
        raise FrameError(reason)