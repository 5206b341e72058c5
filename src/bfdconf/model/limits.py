"""BFD configuration limits and defaults.

Interval limits are expressed in milliseconds (the unit accepted by
the configuration keywords); instances store intervals in microseconds.
"""

# Instance name (strictly shorter than this)
BFD_INAME_MAX = 32

# Desired Min TX interval (ms)
BFD_MINTX_MIN = 10
BFD_MINTX_MAX = 4294967        # UINT32_MAX / 1000
BFD_MINTX_MAX_SENSIBLE = 1000
BFD_MINTX_DEFAULT = 10

# Required Min RX interval (ms)
BFD_MINRX_MIN = 10
BFD_MINRX_MAX = 4294967
BFD_MINRX_MAX_SENSIBLE = 1000
BFD_MINRX_DEFAULT = 10

# Idle TX interval, used while the session is down (ms)
BFD_IDLETX_MIN = 1000
BFD_IDLETX_MAX = 4294967
BFD_IDLETX_MAX_SENSIBLE = 10000
BFD_IDLETX_DEFAULT = 1000

# Detection time multiplier
BFD_MULTIPLIER_MIN = 1
BFD_MULTIPLIER_MAX = 10
BFD_MULTIPLIER_DEFAULT = 5

# TTL / hop limit of outgoing control packets
BFD_TTL_MAX = 255
BFD_TTL_UNSET = 0
BFD_CONTROL_TTL = 255          # IPv4 default
BFD_CONTROL_HOPLIMIT = 64      # IPv6 default

# Maximum hops accepted on received packets
BFD_MAX_HOPS_UNLIMITED = -1
BFD_MAX_HOPS_DEFAULT = 0

# Weight of a tracked BFD instance in a VRRP instance priority
VRRP_TRACK_WEIGHT_MIN = -253
VRRP_TRACK_WEIGHT_MAX = 253

USEC_PER_MSEC = 1000
