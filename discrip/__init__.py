"""discrip: rip DVD / Blu-ray / UHD discs into named MKV files."""

__version__ = "0.1.0"
