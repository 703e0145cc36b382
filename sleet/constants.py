"""Bit layout of a Sleet ID.

From most to least significant: 1 unused sign bit, 41 bits of milliseconds since ``EPOCH``,
5 bits of data center, 5 bits of machine, 12 bits of sequence.
"""

SEQUENCE_BITS = 12
MACHINE_BITS = 5
DATA_CENTER_BITS = 5
TIMESTAMP_BITS = 41

MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1           # 4095
MAX_MACHINE_ID = (1 << MACHINE_BITS) - 1          # 31
MAX_DATA_CENTER_ID = (1 << DATA_CENTER_BITS) - 1  # 31
MAX_TIMESTAMP = (1 << TIMESTAMP_BITS) - 1

MACHINE_SHIFT = SEQUENCE_BITS
DATA_CENTER_SHIFT = SEQUENCE_BITS + MACHINE_BITS
TIMESTAMP_SHIFT = DATA_CENTER_SHIFT + DATA_CENTER_BITS

# 2020-05-02 16:05:03 UTC. Never change this, existing IDs depend on it.
EPOCH = 1588435503000
