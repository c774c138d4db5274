"""Date/time tools, a DS1307 clock driver and a DFPlayer Mini protocol client."""

__version__ = "0.1.0"

__all__ = ["timespan", "rtctime", "ds1307", "frames", "dfplayer"]