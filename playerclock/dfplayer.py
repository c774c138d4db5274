"""Driver for a DFPlayer Mini MP3 module over a byte stream."""

from __future__ import annotations

import time
from typing import Protocol

from playerclock.frames import (
    ACK_COMMAND,
    Device,
    FrameError,
    FrameReader,
    MessageType,
    encode_frame,
    interpret,
)

DEFAULT_TIMEOUT_MS = 500


class Stream(Protocol):
    """A non-blocking byte stream: ``read`` returns b"" when nothing waits."""

    def read(self, size: int = 1) -> bytes: ...

    def write(self, data: bytes) -> object: ...


class PlayerTimeout(TimeoutError):
    """The player did not answer in time."""


class DFPlayer:
    """Controls a DFPlayer Mini and collects the events it reports.

    Times are in milliseconds. With ``ack`` on, each command asks the player
    to acknowledge it and the next command waits for that acknowledgement.
    """

    def __init__(self, stream: Stream, ack: bool = True, timeout: int = DEFAULT_TIMEOUT_MS) -> None:
        self.stream = stream
        self.ack = bool(ack)
        self.timeout = timeout
        self._reader = FrameReader()
        self._handle_type: MessageType | None = None
        self._handle_command = 0
        self._handle_parameter = 0
        self._is_available = False
        self._is_sending = False

    def begin(self, reset: bool = True) -> bool:
        """Start talking to the player; True when a storage device is online."""
        if reset:
            self.reset()
            self.wait_available(2000)
            time.sleep(0.2)
        else:
            self._handle_type = MessageType.CARD_ONLINE
        return (
            self.read_type() == MessageType.CARD_ONLINE
            or self.read_type() == MessageType.USB_ONLINE
            or not self.ack
        )

    def send(self, command: int, argument: int = 0) -> None:
        """Send one command frame."""
        if self.ack:
            while self._is_sending:
                time.sleep(0)
                self.wait_available()
        self.stream.write(encode_frame(command, argument & 0xFFFF, self.ack))
        self._is_sending = self.ack
        if not self.ack:
            time.sleep(0.01)

    def _handle_message(self, kind: MessageType, parameter: int = 0) -> bool:
        self._reader.reset()
        self._handle_type = kind
        self._handle_parameter = parameter
        self._is_available = True
        return True

    def _handle_error(self, kind: MessageType, parameter: int = 0) -> bool:
        self._handle_message(kind, parameter)
        self._is_sending = False
        return False

    def _parse(self, command: int, parameter: int) -> None:
        if command == ACK_COMMAND:
            self._is_sending = False
            return
        self._handle_command = command
        self._handle_parameter = parameter
        message = interpret(command, parameter)
        if message is None:
            return
        if message.type is MessageType.WRONG_STACK:
            self._handle_error(MessageType.WRONG_STACK)
        else:
            self._handle_message(message.type, message.parameter)

    def available(self) -> bool:
        """Process waiting bytes; True when an unread event is held."""
        while True:
            chunk = self.stream.read(1)
            if not chunk:
                break
            try:
                frame = self._reader.feed(chunk[0])
            except FrameError:
                return self._handle_error(MessageType.WRONG_STACK)
            if frame is not None:
                self._parse(*frame)
                return self._is_available
        return self._is_available

    def wait_available(self, duration: int = 0) -> bool:
        """Wait up to ``duration`` ms (default: the timeout) for an event."""
        limit = duration or self.timeout
        started = time.monotonic()
        while not self.available():
            if (time.monotonic() - started) * 1000 > limit:
                return self._handle_error(MessageType.TIME_OUT)
            time.sleep(0)
        return True

    def read_type(self) -> MessageType | None:
        """The kind of the last event, marking it read."""
        self._is_available = False
        return self._handle_type

    def read(self) -> int:
        """The parameter of the last event, marking it read."""
        self._is_available = False
        return self._handle_parameter

    def read_command(self) -> int:
        """The command byte of the last reply, marking it read."""
        self._is_available = False
        return self._handle_command

    def next(self) -> None:
        self.send(0x01)

    def previous(self) -> None:
        self.send(0x02)

    def play(self, file_number: int = 1) -> None:
        self.send(0x03, file_number)

    def volume_up(self) -> None:
        self.send(0x04)

    def volume_down(self) -> None:
        self.send(0x05)

    def volume(self, level: int) -> None:
        self.send(0x06, level & 0xFF)

    def eq(self, eq: int) -> None:
        self.send(0x07, int(eq) & 0xFF)

    def loop(self, file_number: int) -> None:
        self.send(0x08, file_number)

    def output_device(self, device: int) -> None:
        self.send(0x09, int(device) & 0xFF)
        time.sleep(0.2)

    def sleep(self) -> None:
        self.send(0x0A)

    def reset(self) -> None:
        self.send(0x0C)

    def start(self) -> None:
        self.send(0x0D)

    def pause(self) -> None:
        self.send(0x0E)

    def play_folder(self, folder_number: int, file_number: int) -> None:
        self.send(0x0F, ((folder_number & 0xFF) << 8) | (file_number & 0xFF))

    def output_setting(self, enable: bool, gain: int) -> None:
        self.send(0x10, (int(bool(enable)) << 8) | (gain & 0xFF))

    def enable_loop_all(self) -> None:
        self.send(0x11, 0x01)

    def disable_loop_all(self) -> None:
        self.send(0x11, 0x00)

    def play_mp3_folder(self, file_number: int) -> None:
        self.send(0x12, file_number)

    def advertise(self, file_number: int) -> None:
        self.send(0x13, file_number)

    def play_large_folder(self, folder_number: int, file_number: int) -> None:
        self.send(0x14, ((folder_number & 0xFF) << 12) | (file_number & 0xFFFF))

    def stop_advertise(self) -> None:
        self.send(0x15)

    def stop(self) -> None:
        self.send(0x16)

    def loop_folder(self, folder_number: int) -> None:
        self.send(0x17, folder_number)

    def random_all(self) -> None:
        self.send(0x18)

    def enable_loop(self) -> None:
        self.send(0x19, 0x00)

    def disable_loop(self) -> None:
        self.send(0x19, 0x01)

    def enable_dac(self) -> None:
        self.send(0x1A, 0x00)

    def disable_dac(self) -> None:
        self.send(0x1A, 0x01)

    def _query(self, command: int | None, argument: int = 0, check_type: bool = True) -> int | None:
        if command is not None:
            self.send(command, argument)
        if not self.wait_available():
            raise PlayerTimeout("no reply from the player")
        if check_type and self.read_type() != MessageType.FEEDBACK:
            return None
        return self.read()

    def read_state(self) -> int | None:
        """The play state, or None if another event answered."""
        return self._query(0x42)

    def read_volume(self) -> int | None:
        """The current volume."""
        return self._query(0x43, check_type=False)

    def read_eq(self) -> int | None:
        """The equalizer preset, or None if another event answered."""
        return self._query(0x44)

    def read_file_counts(self, device: int = Device.SD) -> int | None:
        """Number of files on ``device``, or None if another event answered."""
        commands = {Device.U_DISK: 0x47, Device.SD: 0x48, Device.FLASH: 0x49}
        return self._query(commands.get(device))

    def read_current_file_number(self, device: int = Device.SD) -> int | None:
        """The current file number on ``device``, or None if another event answered."""
        commands = {Device.U_DISK: 0x4B, Device.SD: 0x4C, Device.FLASH: 0x4D}
        return self._query(commands.get(device))

    def read_file_counts_in_folder(self, folder_number: int) -> int | None:
        """Number of files in a folder, or None if another event answered."""
        return self._query(0x4E, folder_number)

    def read_folder_counts(self) -> int | None:
        """Number of folders, or None if another event answered."""
        return self._query(0x4F)