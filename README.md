# playerclock

Small building blocks for hobby hardware projects:

- `playerclock.timespan.TimeSpan` is a signed length of time in whole seconds,
  held in the signed 32-bit range.
- `playerclock.rtctime.DateTime` is a date and time from 2000 to 2099, with no
  time zone. It does arithmetic with `TimeSpan`, converts to and from Unix
  time, and formats with patterns such as `"DDD, DD MMM YYYY hh:mm:ss"`.
- `playerclock.ds1307.RTCDS1307` is a driver for the DS1307 real-time clock. It
  works through an `I2CDevice`.
- `playerclock.frames` encodes and decodes the 10-byte serial frames of the
  DFPlayer Mini MP3 module. `playerclock.dfplayer.DFPlayer` is a client that
  drives the module over a byte stream.

The package has no dependencies outside the standard library.

## Installation

```
pip install playerclock
```

To run the tests:

```
pip install "playerclock[test]"
pytest
```

## Dates and spans

```python
from playerclock.rtctime import DateTime, TimestampFormat
from playerclock.timespan import TimeSpan

dt = DateTime(2020, 4, 16, 18, 34, 56)
print(dt.to_string("DDD, DD MMM YYYY hh:mm:ss"))  # Thu, 16 Apr 2020 18:34:56
print(dt.to_string("hh:mm ap"))                   # 06:34 pm
print(dt.timestamp(TimestampFormat.DATE))         # 2020-04-16

later = dt + TimeSpan.from_parts(1, 2, 0, 0)
print((later - dt).total_seconds())               # 93600

assert DateTime.from_build_strings("Apr 16 2020", "18:34:56") == dt
assert DateTime.from_iso8601("2020-04-16T18:34:56") == dt
assert DateTime.from_unixtime(dt.unixtime()) == dt
```

`DateTime` accepts out-of-range fields such as 31 February. Call `is_valid()`
to check a value. `day_of_the_week()` returns 0 for Sunday through 6 for
Saturday. `secondstime()` counts seconds from 2000-01-01.

`TimeSpan` breaks a span into `days()`, `hours()`, `minutes()` and `seconds()`.
Division truncates toward zero, so the parts of a negative span are zero or
negative.

## DS1307 clock

`RTCDS1307` reads and writes the chip's registers through an `I2CDevice`. The
default `I2CDevice` is a register file that lives in memory. The first byte of
each write sets the register pointer, and the pointer wraps at the end of the
file. This makes the driver usable in tests as it stands. To use real
hardware, subclass `I2CDevice` and override `begin()`, `write(data)`,
`read(size)` and `write_then_read(data, size)` with calls to your platform's
I2C library.

```python
from playerclock.ds1307 import RTCDS1307, SqwPinMode, bcd2bin, bin2bcd
from playerclock.rtctime import DateTime

rtc = RTCDS1307()                      # or RTCDS1307(my_device)
if rtc.begin():
    rtc.adjust(DateTime(2021, 3, 4, 5, 6, 7))
    print(rtc.now().timestamp())       # 2021-03-04T05:06:07
    print(rtc.is_running())            # True
    rtc.write_sqw_pin_mode(SqwPinMode.SQUARE_WAVE_1HZ)
    rtc.write_nvram(0, b"\x01\x02")
    rtc.write_nvram(2, 0x03)
    print(rtc.read_nvram(0, 3))        # b'\x01\x02\x03'

assert bin2bcd(59) == 0x59 and bcd2bin(0x59) == 59
```

`read_sqw_pin_mode()` raises `ValueError` if the control register holds a bit
pattern that matches no `SqwPinMode`.

## DFPlayer Mini

### Frames

```python
from playerclock.frames import FrameReader, MessageType, encode_frame, interpret

frame = encode_frame(0x06, 20, ack=False)   # set volume to 20
reader = FrameReader()
for byte in encode_frame(0x43, 20, ack=False):
    reply = reader.feed(byte)
print(reply)                                # (67, 20)
message = interpret(*reply)
assert message.type is MessageType.FEEDBACK
```

`FrameReader.feed` skips bytes that come before a frame header. It raises
`FrameError` for a bad version, length or end byte, or for a checksum
mismatch, and then starts over. `interpret` returns `None` for an
acknowledgement (command `0x41`).

### Client

`DFPlayer` needs a stream with `write(data)` and a non-blocking `read(size)`
that returns `b""` when no byte is waiting. A serial port opened with a read
timeout of zero meets this need.

```python
from playerclock.dfplayer import DFPlayer, PlayerTimeout
from playerclock.frames import Device, Equalizer

player = DFPlayer(port, ack=True, timeout=500)   # timeout in milliseconds
if player.begin():
    player.volume(20)
    player.eq(Equalizer.ROCK)
    player.play(1)
    try:
        print(player.read_file_counts(Device.SD))
    except PlayerTimeout:
        print("no answer")
```

In acknowledgement mode, which is the default, each command waits until the
previous one has been acknowledged. Without it, each command is followed by a
10 ms pause. Query methods such as `read_state()`, `read_volume()` and
`read_folder_counts()` do the following:

- return the reported value;
- return `None` when a different kind of event answered;
- raise `PlayerTimeout` when nothing answered in time.

Events the player sends on its own can be picked up with `available()`. After
that, `read_type()`, `read()` and `read_command()` give the event's details.

## What this package does not do

- It opens no serial ports and no I2C buses. You supply the stream or the
  `I2CDevice` subclass.
- It has no command-line tool.
- It drives only the DS1307 clock chip.