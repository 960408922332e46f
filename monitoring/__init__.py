"""
Monitoring Module

Contains all monitoring-related functionality including:
- Browser automation and pagination over the reservation table
- Availability detection from page snapshots
- LINE notifications
"""
