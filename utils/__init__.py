"""
Utility modules for the slot monitor application.
"""

from .date_converter import extract_header_date, is_past_slot, resolve_slot_date, tokyo_now

__all__ = ['extract_header_date', 'is_past_slot', 'resolve_slot_date', 'tokyo_now']
