"""
Fileops Adapter - Task channel on flat files under the radio directory.
"""

from taskradio.adapters.fileops.adapter import OsFileopsChannel, generate_exid
from taskradio.adapters.fileops.bootstrap import BootstrapResult, bootstrap_radio_dir
from taskradio.adapters.fileops.paths import RadioPaths, get_radio_paths, get_radio_root


__all__ = [
    "BootstrapResult",
    "OsFileopsChannel",
    "RadioPaths",
    "bootstrap_radio_dir",
    "generate_exid",
    "get_radio_paths",
    "get_radio_root",
]
