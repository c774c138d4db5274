"""DS1307 real-time clock driven through a register-addressed I2C device."""

from __future__ import annotations

from enum import IntEnum

from playerclock.rtctime import DateTime

DS1307_ADDRESS = 0x68
DS1307_CONTROL = 0x07
DS1307_NVRAM = 0x08
DS1307_NVRAM_SIZE = 56
DS1307_REGISTER_COUNT = 64


def bcd2bin(val: int) -> int:
    """Convert a binary-coded decimal byte to its binary value."""
    val &= 0xFF
    return (val - 6 * (val >> 4)) & 0xFF


def bin2bcd(val: int) -> int:
    """Convert a binary value (0--99) to a binary-coded decimal byte."""
    val &= 0xFF
    return (val + 6 * (val // 10)) & 0xFF


class SqwPinMode(IntEnum):
    """Settings of the DS1307 SQW/OUT pin."""

    OFF = 0x00
    ON = 0x80
    SQUARE_WAVE_1HZ = 0x10
    SQUARE_WAVE_4KHZ = 0x11
    SQUARE_WAVE_8KHZ = 0x12
    SQUARE_WAVE_32KHZ = 0x13


class I2CDevice:
    """A register-addressed I2C device held in memory.

    The first byte of every write sets the register pointer; further bytes
    are stored from there on. Reads return bytes from the pointer onwards.
    The pointer wraps around at the end of the register file, as it does on
    the DS1307. Subclass and override the methods to talk to a real bus.
    """

    def __init__(self, address: int = DS1307_ADDRESS, size: int = DS1307_REGISTER_COUNT) -> None:
        if size <= 0:
            raise ValueError("register file size must be positive")
        self.address = address
        self.registers = bytearray(size)
        self._pointer = 0

    def begin(self) -> bool:
        """Check that the device answers; the in-memory device always does."""
        return True

    def write(self, data: bytes) -> bool:
        """Set the register pointer from the first byte and store the rest."""
        data = bytes(data)
        if not data:
            return True
        size = len(self.registers)
        self._pointer = data[0] % size
        for value in data[1:]:
            self.registers[self._pointer] = value
            self._pointer = (self._pointer + 1) % size
        return True

    def read(self, size: int) -> bytes:
        """Read ``size`` bytes starting at the register pointer."""
        if size < 0:
            raise ValueError("read size must not be negative")
        count = len(self.registers)
        out = bytearray()
        for _ in range(size):
            out.append(self.registers[self._pointer])
            self._pointer = (self._pointer + 1) % count
        return bytes(out)

    def write_then_read(self, data: bytes, size: int) -> bytes:
        """Write ``data`` and then read ``size`` bytes back."""
        self.write(data)
        return self.read(size)


class RTCDS1307:
    """A DS1307 clock chip reached through an :class:`I2CDevice`."""

    def __init__(self, device: I2CDevice | None = None) -> None:
        self.device = device if device is not None else I2CDevice()

    def begin(self) -> bool:
        """Check that the chip can be reached."""
        return bool(self.device.begin())

    def read_register(self, reg: int) -> int:
        """Read one register."""
        self.device.write(bytes([reg & 0xFF]))
        return self.device.read(1)[0]

    def write_register(self, reg: int, val: int) -> None:
        """Write one register."""
        self.device.write(bytes([reg & 0xFF, val & 0xFF]))

    def is_running(self) -> bool:
        """Whether the clock halt bit in register 0 is clear."""
        return not (self.read_register(0) >> 7)

    def adjust(self, dt: DateTime) -> None:
        """Set the clock to ``dt``; this also clears the clock halt bit."""
        self.device.write(
            bytes(
                [
                    0,
                    bin2bcd(dt.second()),
                    bin2bcd(dt.minute()),
                    bin2bcd(dt.hour()),
                    0,
                    bin2bcd(dt.day()),
                    bin2bcd(dt.month()),
                    bin2bcd(dt.year() - 2000),
                ]
            )
        )

    def now(self) -> DateTime:
        """Read the current date and time."""
        buf = self.device.write_then_read(bytes([0]), 7)
        return DateTime(
            bcd2bin(buf[6]) + 2000,
            bcd2bin(buf[5]),
            bcd2bin(buf[4]),
            bcd2bin(buf[2]),
            bcd2bin(buf[1]),
            bcd2bin(buf[0] & 0x7F),
        )

    def read_sqw_pin_mode(self) -> SqwPinMode:
        """Read the SQW pin mode; unknown bit patterns raise ValueError."""
        return SqwPinMode(self.read_register(DS1307_CONTROL) & 0x93)

    def write_sqw_pin_mode(self, mode: SqwPinMode) -> None:
        """Set the SQW pin mode."""
        self.write_register(DS1307_CONTROL, int(mode))

    def read_nvram(self, address: int, size: int = 1) -> bytes:
        """Read ``size`` bytes of battery-backed RAM from ``address`` (0--55)."""
        return self.device.write_then_read(bytes([(DS1307_NVRAM + address) & 0xFF]), size)

    def write_nvram(self, address: int, data: bytes | int) -> None:
        """Write bytes, or a single byte value, to RAM at ``address`` (0--55)."""
        payload = bytes([data & 0xFF]) if isinstance(data, int) else bytes(data)
        self.device.write(bytes([(DS1307_NVRAM + address) & 0xFF]) + payload)