"""
Configuration and data models for the slot monitor.
"""
