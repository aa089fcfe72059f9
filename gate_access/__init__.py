"""Campus gate access backend: face match, in/out state, hostel pass gating and audit trail."""

__version__ = "1.0.0"
