"""Clean Shipper releases off decommissioned clusters."""

__version__ = "0.1.0"
