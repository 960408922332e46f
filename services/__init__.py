"""
Long-running services (the monitoring daemon loop).
"""
