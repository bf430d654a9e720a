"""
Infrastructure layer: transports and credential sources
"""
