"""MakeMKV command-line integration."""

from discrip.makemkv.info import normalize_disc_target, parse_duration, parse_info, parse_info_file
from discrip.makemkv.runner import MakeMkv, MakeMkvError
