"""
This is an example for reading the three kinds of Open Ephys files with oeformat
"""

import sys

import numpy as np

import oeformat
from oeformat.units import continuous_to_quantity


# a folder written by the Open Ephys GUI
dirname = sys.argv[1] if len(sys.argv) > 1 else "."

channels = oeformat.decode_folder(dirname)
for name, (data, timestamps, info) in channels.items():
    sig = continuous_to_quantity(data, info["header"])
    print(name, data.shape, sig[:5], "unresolved timestamps:", np.ma.count_masked(timestamps))
    for diagnostic in info["diagnostics"]:
        print("   ", diagnostic)

data, timestamps, info = oeformat.decode(f"{dirname}/all_channels.events")
print("events", data.size, "channels", np.unique(data))
